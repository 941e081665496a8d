"""
File materialization - writes an ejection plan into the project tree.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ejecta.core.errors import MaterializeError

from .filesystem import FileSystem
from .markers import EjectRules
from .planner import EjectionPlan, destination_path

logger = logging.getLogger(__name__)

FileObserver = Callable[[str], None]


@dataclass
class MaterializeResult:
    """
    Outcome of writing a plan.

    Attributes:
        directories: Directories created, in creation order
        written: Files written to the project
        skipped: Files dropped because of a skip sentinel
    """

    directories: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def materialize(
    fs: FileSystem,
    plan: EjectionPlan,
    source_root: Path,
    destination_root: Path,
    rules: EjectRules | None = None,
    observer: FileObserver | None = None,
) -> MaterializeResult:
    """
    Create the planned directories and copy the planned files.

    Each file is read from the template, passed through the eject rules, and
    written to the same relative path in the project. Files carrying a skip
    sentinel are not written.

    Args:
        fs: Filesystem to read from and write to
        plan: Plan produced by ``plan_ejection``
        source_root: Root of the template package
        destination_root: Root of the project
        rules: Eject rules (defaults to the standard markers)
        observer: Called with the relative path of each written file

    Returns:
        MaterializeResult listing what was created

    Raises:
        MaterializeError: On the first read or write failure; earlier writes
            are left in place
    """
    rules = rules or EjectRules()
    result = MaterializeResult()

    for directory in plan.directories:
        target = destination_path(destination_root, directory)
        try:
            fs.make_dir(target)
        except OSError as e:
            raise MaterializeError(f"Cannot create directory {target}: {e}") from e
        result.directories.append(directory)

    for file in plan.files:
        source = destination_path(source_root, file)
        target = destination_path(destination_root, file)

        try:
            content = fs.read_text(source)
        except (OSError, UnicodeDecodeError) as e:
            raise MaterializeError(f"Cannot read template file {source}: {e}") from e

        rendered = rules.render(content)
        if rendered is None:
            logger.debug("Skipping %s (marked for removal on eject)", file)
            result.skipped.append(file)
            continue

        try:
            fs.write_text(target, rendered)
        except OSError as e:
            raise MaterializeError(f"Cannot write {target}: {e}") from e

        logger.debug("Wrote %s", target)
        result.written.append(file)
        if observer is not None:
            observer(file)

    return result
