"""Shared pytest fixtures for ejecta tests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from textwrap import dedent

import pytest

# =============================================================================
# In-memory filesystem
# =============================================================================


class InMemoryFileSystem:
    """``FileSystem`` that keeps a whole tree in dictionaries."""

    def __init__(self, root: Path = Path("/mem")):
        self.root = root
        self.dirs: set[Path] = {root, *root.parents}
        self.files: dict[Path, str] = {}
        self.fail_writes: set[Path] = set()
        self.fail_removes: set[Path] = set()

    def add_file(self, path: Path, content: str) -> None:
        """Create a file and any missing parent directories."""
        self.dirs.update(path.parents)
        self.files[path] = content

    def add_dir(self, path: Path) -> None:
        self.dirs.update({path, *path.parents})

    def exists(self, path: Path) -> bool:
        return path in self.dirs or path in self.files

    def is_file(self, path: Path) -> bool:
        return path in self.files

    def list_dir(self, path: Path) -> list[Path]:
        if path not in self.dirs:
            raise FileNotFoundError(path)
        children = {p for p in (*self.dirs, *self.files) if p.parent == path and p != path}
        return sorted(children)

    def make_dir(self, path: Path) -> None:
        if self.exists(path):
            raise FileExistsError(path)
        if path.parent not in self.dirs:
            raise FileNotFoundError(path.parent)
        self.dirs.add(path)

    def read_text(self, path: Path) -> str:
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def write_text(self, path: Path, content: str) -> None:
        if path in self.fail_writes:
            raise PermissionError(path)
        if path.parent not in self.dirs:
            raise FileNotFoundError(path.parent)
        self.files[path] = content

    def remove(self, path: Path) -> None:
        if path in self.fail_removes:
            raise PermissionError(path)
        self.files = {p: c for p, c in self.files.items() if p != path and path not in p.parents}
        self.dirs = {p for p in self.dirs if p != path and path not in p.parents}


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    """Return an empty in-memory filesystem rooted at /mem."""
    return InMemoryFileSystem()


# =============================================================================
# Template and project trees
# =============================================================================

TEMPLATE_MANIFEST = {
    "name": "react-scripts",
    "version": "1.0.0",
    "bin": {"react-scripts": "./bin/react-scripts.js"},
    "dependencies": {
        "babel-core": "6.24.1",
        "eslint": "3.19.0",
        "fsevents": "1.1.1",
        "webpack": "2.6.1",
    },
    "optionalDependencies": {"fsevents": "1.1.1"},
}

PROJECT_MANIFEST = {
    "name": "my-app",
    "version": "0.1.0",
    "private": True,
    "dependencies": {"react": "^15.5.4", "webpack": "1.0.0"},
    "devDependencies": {"react-scripts": "1.0.0"},
    "scripts": {"start": "react-scripts start", "deploy": "gh-pages -d build"},
}

BABELRC = {"presets": ["react-app"]}
ESLINTRC = {"extends": "react-app"}

ENV_JS = dedent("""\
    'use strict';

    // @remove-on-eject-begin
    const templateOnly = require('../utils/templateOnly');
    // @remove-on-eject-end
    module.exports = {};
""")

ENV_JS_EJECTED = "'use strict';\n\nmodule.exports = {};\n"

BABEL_TRANSFORM_JS = dedent("""\
    // @remove-file-on-eject
    'use strict';

    module.exports = require('babel-jest').createTransformer();
""")


@dataclass
class EjectFixture:
    """Roots of a scaffolded project and its installed template."""

    project_root: Path
    template_root: Path

    def read_manifest(self) -> dict:
        return json.loads((self.project_root / "package.json").read_text())


def write_template(template_root: Path) -> None:
    """Lay out a minimal template package on disk."""
    files = {
        "config/env.js": ENV_JS,
        "config/paths.js": "module.exports = { appSrc: 'src' };\n",
        "config/jest/babelTransform.js": BABEL_TRANSFORM_JS,
        "config/jest/cssTransform.js": "module.exports = { process: () => '' };\n",
        "config/jest/fileTransform.js": "module.exports = { process: () => '' };   \n\n\n",
        "scripts/start.js": "'use strict';\nrequire('../config/env');\n",
        "scripts/utils/createJestConfig.js": "module.exports = () => ({});\n",
        "bin/react-scripts.js": "#!/usr/bin/env node\n",
        "package.json": json.dumps(TEMPLATE_MANIFEST, indent=2) + "\n",
        "babelrc": json.dumps(BABELRC),
        "eslintrc": json.dumps(ESLINTRC),
    }
    for relative, content in files.items():
        path = template_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def ejectable_project(tmp_path: Path) -> EjectFixture:
    """Create a scaffolded project with the template installed in node_modules."""
    project_root = tmp_path / "my-app"
    template_root = project_root / "node_modules" / "react-scripts"
    write_template(template_root)

    (project_root / "package.json").write_text(json.dumps(PROJECT_MANIFEST, indent=2) + "\n")
    (project_root / "src").mkdir()
    (project_root / "src" / "index.js").write_text("console.log('hi');\n")

    bin_dir = project_root / "node_modules" / ".bin"
    bin_dir.mkdir(parents=True)
    (bin_dir / "react-scripts").write_text("#!/bin/sh\n")
    (bin_dir / "eslint").write_text("#!/bin/sh\n")

    return EjectFixture(project_root=project_root, template_root=template_root)
