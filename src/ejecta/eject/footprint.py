"""
Removal of the template package from the ejected project.

Best effort: once the configuration is ejected the template package is dead
weight, but leaving it behind does not break the project.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ejecta.core.errors import FootprintRemovalFailure

from .filesystem import FileSystem
from .manifest import ManifestDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FootprintDescriptor:
    """
    What the template package installed into the project.

    The installed directory is the template root the run read its files
    from, not node_modules/<package_name>. An aliased install or a
    --template root may live under a different directory name.

    Attributes:
        package_name: Name from the template's package.json
        installed_package_directory: Installed copy of the template package
        executable_names: Executable links registered by the package
    """

    package_name: str
    installed_package_directory: Path
    executable_names: frozenset[str]

    @classmethod
    def from_manifest(cls, manifest: ManifestDocument, template_root: Path) -> FootprintDescriptor:
        """Derive the footprint from the template's own package.json."""
        return cls(
            package_name=manifest.name,
            installed_package_directory=template_root,
            executable_names=frozenset(manifest.executable_names),
        )


def is_nested_in(path: Path, root: Path) -> bool:
    """Check whether path is strictly inside root once both are resolved."""
    resolved = path.resolve()
    resolved_root = root.resolve()
    return resolved != resolved_root and resolved.is_relative_to(resolved_root)


def _remove(fs: FileSystem, path: Path) -> None:
    try:
        fs.remove(path)
    except OSError as e:
        raise FootprintRemovalFailure(f"Cannot remove {path}: {e}") from e


def remove_footprint(
    fs: FileSystem,
    descriptor: FootprintDescriptor,
    destination_root: Path,
    bin_dir: str = "node_modules/.bin",
) -> bool:
    """
    Remove the template's executable links and installed directory.

    Nothing is removed unless the installed package lives inside the project;
    a template run from elsewhere is not ours to delete. Failures are logged
    and ignored.

    Args:
        fs: Filesystem to remove from
        descriptor: Footprint of the template package
        destination_root: Root of the ejected project
        bin_dir: Project-relative directory holding executable links

    Returns:
        True when the removal step ran, False when it was not applicable
    """
    package_dir = descriptor.installed_package_directory
    if not is_nested_in(package_dir, destination_root):
        logger.info(
            "Template package %s at %s is outside the project; leaving it in place",
            descriptor.package_name,
            package_dir,
        )
        return False

    links_dir = destination_root.joinpath(*PurePosixPath(bin_dir).parts)
    try:
        for name in sorted(descriptor.executable_names):
            _remove(fs, links_dir / name)
            logger.debug("Removed executable link %s", name)
        _remove(fs, package_dir)
        logger.debug("Removed %s from %s", descriptor.package_name, package_dir)
    except FootprintRemovalFailure as e:
        logger.warning(
            "Could not fully remove the template package %s: %s", descriptor.package_name, e
        )

    return True
