"""
Error types for ejection preflight checks, file operations, and manifests.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class EjectaError(Exception):
    """Base exception for all ejecta errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class PreflightError(EjectaError):
    """
    Raised before any mutation when ejection is not safe to start.

    Carries every offending path so the user can fix all of them in one go.
    """

    summary = "Ejection cannot proceed"
    hint = ""

    def __init__(self, paths: list[str] | tuple[str, ...]):
        self.paths = tuple(paths)
        lines = [f"{self.summary}:", ""]
        lines.extend(f"  {path}" for path in self.paths)
        if self.hint:
            lines.extend(["", self.hint])
        super().__init__("\n".join(lines))


class DirtyWorkingTree(PreflightError):
    """
    Raised when the git working tree has pending changes.

    Examples:
    - Untracked files
    - Unstaged or staged modifications
    """

    summary = "This git repository has untracked files or uncommitted changes"
    hint = "Remove untracked files, stash or commit any changes, and try again."


class DestinationConflict(PreflightError):
    """
    Raised when a planned directory or file already exists in the project.

    Ejection never overwrites existing project files.
    """

    summary = "The following paths already exist in the project"
    hint = "Remove or rename them, and try again."


class IOFailure(EjectaError):
    """
    Raised when reading or writing fails after preflight.

    Not rolled back: the project may be partially ejected and should be
    restored through version control.
    """

    pass


class MaterializeError(IOFailure):
    """
    Raised when a template file cannot be copied into the project.

    Examples:
    - Unreadable template file
    - Unwritable destination directory
    """

    pass


class ManifestError(IOFailure):
    """
    Raised when a manifest document cannot be read, parsed, or written.

    Examples:
    - Missing package.json
    - Malformed JSON in babelrc or eslintrc
    """

    pass


class FootprintRemovalFailure(EjectaError):
    """Raised internally when the template package cannot be removed; always swallowed."""

    pass


class ConfigError(EjectaError):
    """Raised when eject.toml exists but cannot be parsed."""

    pass


@dataclass
class ErrorContext:
    """
    Location of the document an error refers to.

    Attributes:
        file: Path to the offending file
        key: Optional key inside a structured document
    """

    file: Path
    key: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "package.json (key: dependencies)"
        """
        if self.key:
            return f"{self.file} (key: {self.key})"
        return str(self.file)


def make_manifest_error(message: str, file: Path, key: str | None = None) -> ManifestError:
    """
    Helper to create a ManifestError with context.

    Args:
        message: Error description
        file: Manifest path
        key: Optional key inside the manifest

    Returns:
        ManifestError with context attached
    """
    return ManifestError(message, ErrorContext(file=file, key=key))
