"""
Ejection runner - orchestrates the eject process.

The EjectionRunner walks a project through confirmation, preflight checks,
file materialization, manifest merge, footprint removal, and dependency
install. External decisions and commands are injected so a run can be
driven without a terminal, git, or a package manager.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any

from ejecta.core.errors import DirtyWorkingTree, EjectaError, IOFailure, PreflightError

from .config import EjectionContext
from .external import get_git_status, run_install
from .filesystem import FileSystem, LocalFileSystem
from .footprint import FootprintDescriptor, remove_footprint
from .jest_config import create_jest_config, root_dir_resolver
from .manifest import (
    ManifestDocument,
    MergeReport,
    load_json_document,
    load_manifest,
    merge_manifest,
    write_manifest,
)
from .materializer import FileObserver, materialize
from .planner import plan_ejection, scan_template_folders

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[], bool]
GitStatusFn = Callable[[Path], str]
InstallFn = Callable[[Path], int]


class EjectionState(str, Enum):
    """Stages of an ejection run."""

    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CHECKING_REPO_CLEANLINESS = "checking_repo_cleanliness"
    PLANNING = "planning"
    MATERIALIZING = "materializing"
    MERGING_MANIFEST = "merging_manifest"
    REMOVING_FOOTPRINT = "removing_footprint"
    INVOKING_INSTALL = "invoking_install"
    DONE = "done"
    ABORTED = "aborted"
    FAILED = "failed"


def _count(n: int, noun: str) -> str:
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"


class EjectionResult:
    """
    Result of an ejection run.

    Tracks the states visited, files written, and any errors or warnings.
    """

    def __init__(self):
        self.state: EjectionState = EjectionState.AWAITING_CONFIRMATION
        self.history: list[EjectionState] = [self.state]
        self.declined: bool = False
        self.directories: list[str] = []
        self.files: list[str] = []
        self.skipped: list[str] = []
        self.merge: MergeReport | None = None
        self.footprint_removed: bool = False
        self.install_returncode: int | None = None
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.error: EjectaError | None = None

    def transition(self, state: EjectionState) -> None:
        """Move to the next state."""
        logger.debug("Ejection state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def fail(self, state: EjectionState, error: EjectaError) -> None:
        """Stop the run in a terminal state because of an error."""
        self.error = error
        self.errors.append(str(error))
        self.transition(state)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    @property
    def success(self) -> bool:
        """Check if ejection ran to completion."""
        return self.state == EjectionState.DONE

    @property
    def exit_code(self) -> int:
        """Process exit code: 0 when done or declined, 1 otherwise."""
        if self.success or self.declined:
            return 0
        return 1

    def summary(self) -> str:
        """Get a summary of the ejection result."""
        if self.declined:
            return "Eject aborted"
        if self.success:
            return f"Ejected {_count(len(self.files), 'file')}"
        return f"Ejection {self.state.value} with {_count(len(self.errors), 'error')}"


class EjectionRunner:
    """
    Orchestrates the ejection process.

    Each stage completes before the next starts. Preflight failures leave
    the project untouched; failures after preflight are not rolled back.
    """

    def __init__(
        self,
        context: EjectionContext,
        *,
        confirm: ConfirmFn,
        git_status: GitStatusFn = get_git_status,
        install: InstallFn | None = None,
        fs: FileSystem | None = None,
        observer: FileObserver | None = None,
    ):
        """
        Initialize the ejection runner.

        Args:
            context: Project and template roots plus configuration
            confirm: Asks the user whether to proceed
            git_status: Returns porcelain status for the project, empty if clean
            install: Installs dependencies, returning an exit code
            fs: Filesystem to operate on (defaults to the local disk)
            observer: Called with each file written into the project
        """
        self.context = context
        self.config = context.config
        self.confirm = confirm
        self.git_status = git_status
        self.install = install or (lambda root: run_install(root, self.config.yarn_lockfile))
        self.fs = fs or LocalFileSystem()
        self.observer = observer

    def run(self) -> EjectionResult:
        """
        Run the ejection process.

        Returns:
            EjectionResult with the final state and everything that was done
        """
        result = EjectionResult()
        project_root = self.context.project_root
        template_root = self.context.template_root

        if not self.confirm():
            result.declined = True
            result.transition(EjectionState.ABORTED)
            return result

        result.transition(EjectionState.CHECKING_REPO_CLEANLINESS)
        status = self.git_status(project_root)
        if status:
            result.fail(EjectionState.ABORTED, DirtyWorkingTree(status.splitlines()))
            return result

        result.transition(EjectionState.PLANNING)
        try:
            entries = scan_template_folders(
                self.fs, template_root, self.config.folders, skip=self.config.skip
            )
            plan = plan_ejection(self.fs, project_root, entries)
            # Everything the merge needs is read before the first write
            documents = self._load_documents()
            jest_config = self._prepare_jest_config()
        except (PreflightError, IOFailure) as e:
            result.fail(EjectionState.ABORTED, e)
            return result
        except OSError as e:
            result.fail(EjectionState.ABORTED, IOFailure(f"Cannot read template: {e}"))
            return result

        try:
            result.transition(EjectionState.MATERIALIZING)
            written = materialize(
                self.fs,
                plan,
                template_root,
                project_root,
                rules=self.config.markers.to_rules(),
                observer=self.observer,
            )
            result.directories = written.directories
            result.files = written.written
            result.skipped = written.skipped

            result.transition(EjectionState.MERGING_MANIFEST)
            result.merge = merge_manifest(
                documents.project,
                documents.template,
                jest_config,
                documents.babel,
                documents.eslint,
            )
            write_manifest(self.fs, self.context.project_manifest_path, documents.project)
        except IOFailure as e:
            result.fail(EjectionState.FAILED, e)
            return result

        result.transition(EjectionState.REMOVING_FOOTPRINT)
        descriptor = FootprintDescriptor.from_manifest(documents.template, template_root)
        result.footprint_removed = remove_footprint(
            self.fs, descriptor, project_root, self.config.bin_dir
        )

        result.transition(EjectionState.INVOKING_INSTALL)
        result.install_returncode = self.install(project_root)
        if result.install_returncode != 0:
            result.add_warning(
                f"Dependency install exited with code {result.install_returncode}"
            )

        result.transition(EjectionState.DONE)
        return result

    def _load_documents(self) -> _ManifestInputs:
        """Read the manifests and tool configuration documents for the merge."""
        return _ManifestInputs(
            template=load_manifest(self.fs, self.context.template_manifest_path),
            project=load_manifest(self.fs, self.context.project_manifest_path),
            babel=load_json_document(self.fs, self.context.babel_config_path),
            eslint=load_json_document(self.fs, self.context.eslint_config_path),
        )

    def _prepare_jest_config(self) -> dict[str, Any]:
        setup_tests = self.config.setup_tests_file
        has_setup_tests = self.fs.exists(
            self.context.project_root.joinpath(*PurePosixPath(setup_tests).parts)
        )
        return create_jest_config(
            root_dir_resolver(self.config.root_dir_token),
            is_ejecting=True,
            setup_tests=setup_tests if has_setup_tests else None,
        )


@dataclass
class _ManifestInputs:
    template: ManifestDocument
    project: ManifestDocument
    babel: Any
    eslint: Any
