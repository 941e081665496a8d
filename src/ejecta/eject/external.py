"""
Adapters for the external commands ejection relies on.

- git status: is the working tree clean?
- yarn / npm: reinstall dependencies after the manifest changed
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def get_git_status(project_root: Path) -> str:
    """
    Return ``git status --porcelain`` output, stripped.

    Anything that prevents git from answering (no git binary, not a
    repository) counts as a clean tree and yields an empty string.
    """
    try:
        result = subprocess.run(
            ["git", "status", "--porcelain"],
            cwd=project_root,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("git status unavailable, treating tree as clean: %s", e)
        return ""
    return result.stdout.strip()


def install_command(project_root: Path, yarn_lockfile: str = "yarn.lock") -> list[str]:
    """Pick yarn when the project has a yarn lockfile, npm otherwise."""
    if (project_root / yarn_lockfile).exists():
        return ["yarnpkg"]
    return ["npm", "install"]


def run_install(project_root: Path, yarn_lockfile: str = "yarn.lock") -> int:
    """
    Install the project's dependencies with inherited stdio.

    Returns:
        The installer's exit code; 127 when the installer cannot be started
    """
    command = install_command(project_root, yarn_lockfile)
    logger.info("Running %s in %s", " ".join(command), project_root)
    try:
        return subprocess.run(command, cwd=project_root, check=False).returncode
    except OSError as e:
        logger.error("Could not run %s: %s", command[0], e)
        return 127
