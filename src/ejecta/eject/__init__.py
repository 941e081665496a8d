"""
Ejection pipeline.

Detaches a project from its build-tooling template package:

1. Confirm with the user and check the git tree is clean
2. Plan the template folders to copy, refusing to overwrite anything
3. Copy the files, stripping eject-only regions
4. Merge the template's dependencies and tool configuration into package.json
5. Remove the template package and reinstall dependencies

Usage:
    ejecta              # Eject the project in the current directory
    ejecta --yes        # Skip the confirmation prompt
"""

from .config import (
    EjectionConfig,
    EjectionContext,
    EjectionMarkersConfig,
    build_context,
    load_ejection_config,
)
from .filesystem import FileSystem, LocalFileSystem
from .footprint import FootprintDescriptor, remove_footprint
from .jest_config import create_jest_config, root_dir_resolver
from .manifest import ManifestDocument, MergeReport, load_manifest, merge_manifest, write_manifest
from .markers import EjectRules, MarkerRule, strip_markers
from .materializer import MaterializeResult, materialize
from .planner import EjectionPlan, TemplateFileEntry, plan_ejection, scan_template_folders
from .runner import EjectionResult, EjectionRunner, EjectionState

__all__ = [
    # Config
    "EjectionConfig",
    "EjectionContext",
    "EjectionMarkersConfig",
    "build_context",
    "load_ejection_config",
    # Filesystem
    "FileSystem",
    "LocalFileSystem",
    # Markers
    "EjectRules",
    "MarkerRule",
    "strip_markers",
    # Planning and materialization
    "TemplateFileEntry",
    "EjectionPlan",
    "scan_template_folders",
    "plan_ejection",
    "MaterializeResult",
    "materialize",
    # Manifest
    "ManifestDocument",
    "MergeReport",
    "load_manifest",
    "merge_manifest",
    "write_manifest",
    "create_jest_config",
    "root_dir_resolver",
    # Footprint
    "FootprintDescriptor",
    "remove_footprint",
    # Runner
    "EjectionRunner",
    "EjectionResult",
    "EjectionState",
]
