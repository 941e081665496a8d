"""
Filesystem access for the eject pipeline.

Every step that touches disk goes through a ``FileSystem`` so the pipeline
can be driven against a real tree or an in-memory one in tests.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class FileSystem(Protocol):
    """Minimal file operations needed to eject a template."""

    def exists(self, path: Path) -> bool:
        """Check whether a file or directory exists (symlinks included)."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check whether path is a regular file."""
        ...

    def list_dir(self, path: Path) -> list[Path]:
        """List the direct children of a directory."""
        ...

    def make_dir(self, path: Path) -> None:
        """Create a single directory; the parent must exist."""
        ...

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file."""
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write a UTF-8 text file, replacing any previous content."""
        ...

    def remove(self, path: Path) -> None:
        """Remove a file, link, or directory tree. Missing paths are ignored."""
        ...


# =============================================================================
# Local Filesystem
# =============================================================================


class LocalFileSystem:
    """``FileSystem`` backed by the real disk."""

    def exists(self, path: Path) -> bool:
        return path.exists() or path.is_symlink()

    def is_file(self, path: Path) -> bool:
        # lstat semantics: a symlink to a file is not copied as a file
        return path.is_file() and not path.is_symlink()

    def list_dir(self, path: Path) -> list[Path]:
        return sorted(path.iterdir())

    def make_dir(self, path: Path) -> None:
        path.mkdir()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def remove(self, path: Path) -> None:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
        else:
            logger.debug("Nothing to remove at %s", path)
