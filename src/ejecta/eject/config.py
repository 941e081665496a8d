"""
Ejection configuration models.

Parses the optional [ejection] section from the template package's
eject.toml and provides typed configuration for the eject pipeline.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ejecta.core.errors import ConfigError, ErrorContext

from .markers import DEFAULT_MARKER_RULES, DEFAULT_SKIP_SENTINELS, EjectRules, MarkerRule

CONFIG_FILENAME = "eject.toml"


class MarkerRuleConfig(BaseModel):
    """A begin/end marker pair."""

    model_config = ConfigDict(frozen=True)

    begin: str
    end: str


class EjectionMarkersConfig(BaseModel):
    """Annotations recognized in template files."""

    regions: list[MarkerRuleConfig] = Field(
        default_factory=lambda: [
            MarkerRuleConfig(begin=rule.begin, end=rule.end) for rule in DEFAULT_MARKER_RULES
        ]
    )
    skip_sentinels: list[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_SENTINELS))

    def to_rules(self) -> EjectRules:
        """Build the rule set applied to template files."""
        return EjectRules(
            regions=tuple(MarkerRule(begin=r.begin, end=r.end) for r in self.regions),
            skip_sentinels=tuple(self.skip_sentinels),
        )


class EjectionConfig(BaseModel):
    """Complete ejection configuration."""

    template_package: str = "react-scripts"
    folders: list[str] = Field(default_factory=lambda: ["config", "config/jest", "scripts"])
    skip: list[str] = Field(default_factory=list)
    manifest_file: str = "package.json"
    babel_config_file: str = "babelrc"
    eslint_config_file: str = "eslintrc"
    bin_dir: str = "node_modules/.bin"
    yarn_lockfile: str = "yarn.lock"
    root_dir_token: str = "<rootDir>"
    setup_tests_file: str = "src/setupTests.js"
    markers: EjectionMarkersConfig = Field(default_factory=EjectionMarkersConfig)

    def default_template_root(self, project_root: Path) -> Path:
        """Where the template package is installed inside a project."""
        return project_root / "node_modules" / self.template_package


class EjectionContext(BaseModel):
    """
    Everything one ejection run needs to know about its environment.

    Built once by the caller so the pipeline never reads the working
    directory or other process state on its own.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    project_root: Path
    template_root: Path
    config: EjectionConfig = Field(default_factory=EjectionConfig)

    @property
    def project_manifest_path(self) -> Path:
        return self.project_root / self.config.manifest_file

    @property
    def template_manifest_path(self) -> Path:
        return self.template_root / self.config.manifest_file

    @property
    def babel_config_path(self) -> Path:
        return self.template_root / self.config.babel_config_file

    @property
    def eslint_config_path(self) -> Path:
        return self.template_root / self.config.eslint_config_file


def load_ejection_config(toml_path: Path) -> EjectionConfig:
    """
    Load ejection configuration from eject.toml.

    Args:
        toml_path: Path to eject.toml file

    Returns:
        EjectionConfig with parsed values or defaults

    Raises:
        ConfigError: If the file is not valid TOML or has invalid values
    """
    if not toml_path.exists():
        return EjectionConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=toml_path)) from e

    ejection_data: dict[str, Any] = data.get("ejection", {})

    if not ejection_data:
        return EjectionConfig()

    try:
        return EjectionConfig.model_validate(ejection_data)
    except ValidationError as e:
        raise ConfigError(str(e), ErrorContext(file=toml_path, key="ejection")) from e


def build_context(
    project_root: Path,
    template_root: Path | None = None,
    config: EjectionConfig | None = None,
) -> EjectionContext:
    """
    Resolve the roots and configuration for a run.

    When no template root is given the template is looked up in the project's
    node_modules using the default package name, then its eject.toml (if any)
    is loaded.
    """
    project_root = project_root.resolve()
    if template_root is None:
        template_root = EjectionConfig().default_template_root(project_root)
    template_root = template_root.resolve()

    if config is None:
        config = load_ejection_config(template_root / CONFIG_FILENAME)

    return EjectionContext(project_root=project_root, template_root=template_root, config=config)
