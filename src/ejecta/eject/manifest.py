"""
package.json handling for ejection.

Reads the template and project manifests, merges the template's build
dependencies and tool configuration into the project manifest, and writes
it back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ejecta.core.errors import make_manifest_error

from .filesystem import FileSystem

logger = logging.getLogger(__name__)

JEST_KEY = "jest"
BABEL_KEY = "babel"
ESLINT_KEY = "eslintConfig"


@dataclass
class ManifestDocument:
    """
    A package.json document.

    Typed accessors cover the fields ejection reads or changes; every other
    field is kept as-is in ``data``.
    """

    data: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return str(self.data.get("name", ""))

    @property
    def dependencies(self) -> dict[str, str]:
        return self._mapping("dependencies")

    @property
    def dev_dependencies(self) -> dict[str, str]:
        return self._mapping("devDependencies")

    @property
    def optional_dependencies(self) -> dict[str, str]:
        return self._mapping("optionalDependencies")

    @property
    def executable_names(self) -> list[str]:
        """
        Names of the executables the package registers.

        A string ``bin`` installs one executable named after the package,
        without its scope.
        """
        bin_field = self.data.get("bin")
        if isinstance(bin_field, str):
            return [self.name.rsplit("/", 1)[-1]] if self.name else []
        if isinstance(bin_field, dict):
            return list(bin_field)
        return []

    def _mapping(self, key: str) -> dict[str, str]:
        value = self.data.get(key)
        return value if isinstance(value, dict) else {}

    def remove_dependency(self, name: str) -> list[str]:
        """
        Drop a package from ``dependencies`` and ``devDependencies``.

        Returns:
            The keys the package was removed from; empty when it was absent
        """
        removed = []
        for key in ("devDependencies", "dependencies"):
            mapping = self.data.get(key)
            if isinstance(mapping, dict) and name in mapping:
                del mapping[name]
                removed.append(key)
        return removed

    def set_dependency(self, name: str, version: str) -> None:
        """Add or replace a runtime dependency."""
        if not isinstance(self.data.get("dependencies"), dict):
            self.data["dependencies"] = {}
        self.data["dependencies"][name] = version

    def dumps(self) -> str:
        """Serialize with two-space indentation and a trailing newline."""
        return json.dumps(self.data, indent=2, ensure_ascii=False) + "\n"


@dataclass
class MergeReport:
    """
    What ``merge_manifest`` changed.

    Attributes:
        package_name: Name of the template package the merge removed
        removed_from: Dependency maps the template package was removed from
        copied: Dependencies copied from the template, name to version
        injected: Configuration keys written into the manifest
    """

    package_name: str = ""
    removed_from: list[str] = field(default_factory=list)
    copied: dict[str, str] = field(default_factory=dict)
    injected: list[str] = field(default_factory=list)


def load_json_document(fs: FileSystem, path: Path) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        ManifestError: If the file is unreadable or not valid JSON
    """
    try:
        text = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise make_manifest_error(f"Cannot read file: {e}", path) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise make_manifest_error(f"Invalid JSON at line {e.lineno}: {e.msg}", path) from e


def load_manifest(fs: FileSystem, path: Path) -> ManifestDocument:
    """
    Load a package.json file.

    Raises:
        ManifestError: If the file is unreadable, invalid, or not an object
    """
    data = load_json_document(fs, path)
    if not isinstance(data, dict):
        raise make_manifest_error("Manifest must be a JSON object", path)
    return ManifestDocument(data)


def write_manifest(fs: FileSystem, path: Path, manifest: ManifestDocument) -> None:
    """
    Write a manifest back to disk.

    Raises:
        ManifestError: If the file cannot be written
    """
    try:
        fs.write_text(path, manifest.dumps())
    except OSError as e:
        raise make_manifest_error(f"Cannot write file: {e}", path) from e


def merge_manifest(
    target: ManifestDocument,
    template: ManifestDocument,
    jest_config: Any,
    babel_config: Any,
    eslint_config: Any,
) -> MergeReport:
    """
    Merge the template's build setup into the project manifest in place.

    Steps:
    1. Remove the template package from the project's dependency maps
    2. Copy the template's non-optional dependencies, template versions win
    3. Set the Jest configuration
    4. Set the Babel and ESLint configuration, copied verbatim

    No other field of the project manifest is touched.

    Args:
        target: Project manifest, modified in place
        template: Template package manifest, read only
        jest_config: Prepared Jest configuration block
        babel_config: Parsed template ``babelrc``
        eslint_config: Parsed template ``eslintrc``

    Returns:
        MergeReport describing the changes
    """
    report = MergeReport(package_name=template.name)

    report.removed_from = target.remove_dependency(template.name)
    for key in report.removed_from:
        logger.info("Removed %s from %s", template.name, key)

    optional = template.optional_dependencies
    for name, version in template.dependencies.items():
        # Optional dependencies end up in dependencies after install
        if name in optional or name == template.name:
            continue
        target.set_dependency(name, version)
        report.copied[name] = version

    injected = ((JEST_KEY, jest_config), (BABEL_KEY, babel_config), (ESLINT_KEY, eslint_config))
    for key, value in injected:
        target.data[key] = value
        report.injected.append(key)

    return report
