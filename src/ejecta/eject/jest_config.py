"""
Jest configuration block written into the ejected package.json.
"""

from __future__ import annotations

import posixpath
from collections.abc import Callable
from typing import Any

PathResolver = Callable[[str], str]

ROOT_DIR_TOKEN = "<rootDir>"


def root_dir_resolver(token: str = ROOT_DIR_TOKEN) -> PathResolver:
    """Resolve template-relative paths against Jest's project root placeholder."""

    def resolve(relative_path: str) -> str:
        return posixpath.join(token, relative_path)

    return resolve


def create_jest_config(
    resolve: PathResolver,
    root_dir: str | None = None,
    is_ejecting: bool = True,
    setup_tests: str | None = None,
) -> dict[str, Any]:
    """
    Build the Jest configuration for a project.

    Args:
        resolve: Maps a template-relative path to the path Jest should use
        root_dir: Explicit ``rootDir`` value, omitted when None
        is_ejecting: Use the project's own babel-jest instead of the template's
            transform wrapper
        setup_tests: Project-relative test setup file, when the project has one

    Returns:
        JSON-serializable Jest configuration
    """
    config: dict[str, Any] = {
        "collectCoverageFrom": ["src/**/*.{js,jsx}"],
        "setupFiles": [resolve("config/polyfills.js")],
        "testMatch": [
            "<rootDir>/src/**/__tests__/**/*.js?(x)",
            "<rootDir>/src/**/?(*.)(spec|test).js?(x)",
        ],
        "testEnvironment": "node",
        "testURL": "http://localhost",
        "transform": {
            "^.+\\.(js|jsx)$": (
                "<rootDir>/node_modules/babel-jest"
                if is_ejecting
                else resolve("config/jest/babelTransform.js")
            ),
            "^.+\\.css$": resolve("config/jest/cssTransform.js"),
            "^(?!.*\\.(js|jsx|css|json)$)": resolve("config/jest/fileTransform.js"),
        },
        "transformIgnorePatterns": ["[/\\\\]node_modules[/\\\\].+\\.(js|jsx)$"],
        "moduleNameMapper": {"^react-native$": "react-native-web"},
        "moduleFileExtensions": ["web.js", "js", "json", "web.jsx", "jsx", "node"],
    }
    if setup_tests:
        config["setupTestFrameworkScriptFile"] = posixpath.join(ROOT_DIR_TOKEN, setup_tests)
    if root_dir:
        config["rootDir"] = root_dir
    return config
