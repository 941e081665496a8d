"""Core ejecta functionality: error taxonomy shared by the eject pipeline and the CLI."""

from .errors import (
    ConfigError,
    DestinationConflict,
    DirtyWorkingTree,
    EjectaError,
    ErrorContext,
    FootprintRemovalFailure,
    IOFailure,
    ManifestError,
    MaterializeError,
    PreflightError,
)

__all__ = [
    "EjectaError",
    "ErrorContext",
    "PreflightError",
    "DirtyWorkingTree",
    "DestinationConflict",
    "IOFailure",
    "MaterializeError",
    "ManifestError",
    "FootprintRemovalFailure",
    "ConfigError",
]
