"""
ejecta - detach a project from its build-tooling template package.

Copies the template's hidden build configuration into the project tree,
merges its manifest metadata, and removes the template dependency.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import (
    DestinationConflict,
    DirtyWorkingTree,
    EjectaError,
    IOFailure,
    ManifestError,
    MaterializeError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "EjectaError",
    "DirtyWorkingTree",
    "DestinationConflict",
    "IOFailure",
    "MaterializeError",
    "ManifestError",
]
