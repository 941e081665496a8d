"""
Ejection planning.

Enumerates the template entries to eject and turns them into an
``EjectionPlan``: the directories and files to create in the project, checked
up front so that nothing in the project is ever overwritten.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ejecta.core.errors import DestinationConflict

from .filesystem import FileSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateFileEntry:
    """
    One template path the planner must account for.

    Attributes:
        relative_path: POSIX path relative to the template root
        is_directory: Whether the entry is a directory to create
        skip_on_eject: Whether the entry is excluded from the plan
    """

    relative_path: str
    is_directory: bool = False
    skip_on_eject: bool = False


@dataclass(frozen=True)
class EjectionPlan:
    """
    Directories and files to create, as paths relative to both roots.

    Directories are ordered so that every parent precedes its children.
    """

    directories: tuple[str, ...]
    files: tuple[str, ...]

    @property
    def paths(self) -> tuple[str, ...]:
        """All planned paths, directories first."""
        return self.directories + self.files


def _depth(relative_path: str) -> int:
    return len(PurePosixPath(relative_path).parts)


def _resolve(root: Path, relative_path: str) -> Path:
    return root.joinpath(*PurePosixPath(relative_path).parts)


def scan_template_folders(
    fs: FileSystem,
    template_root: Path,
    folders: Sequence[str],
    skip: Iterable[str] = (),
) -> list[TemplateFileEntry]:
    """
    Enumerate the template entries for a fixed set of folders.

    Each folder yields a directory entry followed by one entry per regular
    file directly inside it. Subdirectories are not descended into; list
    them as folders of their own.

    Args:
        fs: Filesystem to read the template from
        template_root: Root of the installed template package
        folders: Template-relative folder paths, e.g. ``config/jest``
        skip: Template-relative file paths to leave out of the project

    Returns:
        Entries in folder order, files sorted by name
    """
    skipped = {str(PurePosixPath(path)) for path in skip}
    entries: list[TemplateFileEntry] = []

    for folder in folders:
        folder_posix = PurePosixPath(folder)
        entries.append(TemplateFileEntry(str(folder_posix), is_directory=True))

        for child in fs.list_dir(_resolve(template_root, str(folder_posix))):
            if not fs.is_file(child):
                continue
            relative = str(folder_posix / child.name)
            entries.append(TemplateFileEntry(relative, skip_on_eject=relative in skipped))

    logger.debug("Enumerated %d template entries from %s", len(entries), template_root)
    return entries


def plan_ejection(
    fs: FileSystem,
    destination_root: Path,
    entries: Iterable[TemplateFileEntry],
) -> EjectionPlan:
    """
    Build the ejection plan and verify nothing in it exists yet.

    Ancestor directories of planned files are added when they are neither
    enumerated nor present in the project.

    Args:
        fs: Filesystem to check the project against
        destination_root: Root of the project being ejected
        entries: Template entries from an enumeration step

    Returns:
        The plan, directories ordered parents first

    Raises:
        DestinationConflict: Listing every planned path that already exists
    """
    directories: list[str] = []
    files: list[str] = []

    for entry in entries:
        if entry.skip_on_eject:
            logger.debug("Skipping %s (excluded from ejection)", entry.relative_path)
            continue
        target = directories if entry.is_directory else files
        if entry.relative_path not in target:
            target.append(entry.relative_path)

    for file in files:
        for parent in PurePosixPath(file).parents:
            parent_path = str(parent)
            if parent_path == "." or parent_path in directories:
                continue
            if not fs.exists(_resolve(destination_root, parent_path)):
                directories.append(parent_path)

    # Stable sort keeps enumeration order among siblings
    directories.sort(key=_depth)

    conflicts = [
        path
        for path in [*directories, *files]
        if fs.exists(_resolve(destination_root, path))
    ]
    if conflicts:
        raise DestinationConflict(conflicts)

    return EjectionPlan(directories=tuple(directories), files=tuple(files))


def destination_path(root: Path, relative_path: str) -> Path:
    """Map a plan path onto a concrete root directory."""
    return _resolve(root, relative_path)
