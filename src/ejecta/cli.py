"""
ejecta command line interface.

A single command that ejects the project in the current directory:

    ejecta                      # Prompt, then eject
    ejecta --yes                # Eject without prompting
    ejecta -p ./app -t ./tpl    # Explicit project and template roots
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ejecta._version import get_version
from ejecta.core.errors import ConfigError, PreflightError
from ejecta.eject import EjectionResult, EjectionRunner, EjectionState, build_context
from ejecta.eject.external import get_git_status, install_command, run_install

app = typer.Typer(
    help="Copy a template's build configuration into your project and drop the template.",
    add_completion=False,
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

CONFIRM_MESSAGE = "Are you sure you want to eject? This action is permanent."


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"ejecta version {get_version()}")
        typer.echo(f"  Python: {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    log_level = "DEBUG" if verbose else os.getenv("EJECTA_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _report_preflight(error: PreflightError) -> None:
    err_console.print(f"[red]{escape(error.summary)}:[/red]")
    err_console.print("")
    for path in error.paths:
        err_console.print(f"  {escape(path)}")
    if error.hint:
        err_console.print("")
        err_console.print(escape(error.hint))


def _report_success(result: EjectionResult) -> None:
    merge = result.merge
    console.print("")
    console.print("[cyan]Updating the dependencies[/cyan]")
    if merge is not None:
        for key in merge.removed_from:
            console.print(f"  Removing [cyan]{escape(merge.package_name)}[/cyan] from {key}")
        for name in merge.copied:
            console.print(f"  Adding [cyan]{escape(name)}[/cyan] to dependencies")
        console.print("")
        console.print("[cyan]Configuring package.json[/cyan]")
        for key in merge.injected:
            console.print(f"  Adding [cyan]{key}[/cyan] configuration")

    for warning in result.warnings:
        err_console.print(f"[yellow]Warning: {escape(warning)}[/yellow]")

    console.print("")
    console.print("[green]Ejected successfully![/green]")


@app.command()
def eject(
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."),
        "--project",
        "-p",
        help="Project directory (default: current directory)",
    ),
    template_dir: Path | None = typer.Option(  # noqa: B008
        None,
        "--template",
        "-t",
        help="Installed template package (default: node_modules/react-scripts)",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the confirmation prompt",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable debug logging",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """
    Eject the project from its build-tooling template.

    Copies the template's config/ and scripts/ folders into the project,
    merges its dependencies and Jest, Babel and ESLint settings into
    package.json, removes the template package, and reinstalls dependencies.
    This cannot be undone.
    """
    _configure_logging(verbose)

    try:
        context = build_context(project_dir, template_dir)
    except ConfigError as e:
        err_console.print(f"[red]Invalid eject configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    def confirm() -> bool:
        return yes or typer.confirm(CONFIRM_MESSAGE, default=False)

    announced = False

    def observer(relative_path: str) -> None:
        nonlocal announced
        if not announced:
            console.print("")
            console.print(f"[cyan]Copying files into {escape(str(context.project_root))}[/cyan]")
            announced = True
        console.print(f"  Adding [cyan]{escape(relative_path)}[/cyan] to the project")

    def install(root: Path) -> int:
        command = install_command(root, context.config.yarn_lockfile)
        console.print(f"[cyan]Running {escape(' '.join(command))}...[/cyan]")
        return run_install(root, context.config.yarn_lockfile)

    runner = EjectionRunner(
        context,
        confirm=confirm,
        git_status=get_git_status,
        install=install,
        observer=observer,
    )
    result = runner.run()

    if result.declined:
        console.print("[cyan]Close one! Eject aborted.[/cyan]")
        return

    if isinstance(result.error, PreflightError):
        _report_preflight(result.error)
    elif result.state in (EjectionState.ABORTED, EjectionState.FAILED):
        err_console.print(f"[red]{escape(result.summary())}:[/red]")
        for error in result.errors:
            err_console.print(f"  {escape(error)}")
        if result.state == EjectionState.FAILED:
            err_console.print("")
            err_console.print(
                "The project may be partially ejected. Restore it with git and try again."
            )
    else:
        _report_success(result)

    raise typer.Exit(code=result.exit_code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
