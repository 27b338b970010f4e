"""
boilerhatch.cli - Command Line Interface
========================================

This module provides the command-line interface for boilerhatch using Typer.
The app has a single command, so it runs directly without a subcommand:

    $ boilerhatch my-app
    $ boilerhatch --name=my-app

``--name`` takes precedence over the positional argument. If neither gives
a non-empty name the command fails with a usage error (exit status 2).

Exit Status
-----------
0    project created
1    a required stage failed, or the configuration file is invalid
2    usage error (missing or invalid project name)
130  interrupted; the partial project directory is left in place

See Also
--------
- generator.py: The creation pipeline
- config.py: Settings read from the environment or ``--config``
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import tomli
import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from boilerhatch import __version__
from boilerhatch.config import Settings
from boilerhatch.generator import create_project
from boilerhatch.models import ProjectRequest


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="boilerhatch",
    help="Bootstrap a new Electron + React project from the boilerplate template.",
    rich_markup_mode="rich",
    add_completion=False,
)

# Console for rich output
console = Console()


# =============================================================================
# Callbacks and Helpers
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]boilerhatch[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Electron + React project bootstrapper[/]",
            border_style="green",
        ))
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """
    Route the package's log records through a RichHandler on stderr.

    Only the ``boilerhatch`` logger is configured, so embedding
    applications keep control of the root logger.
    """
    logger = logging.getLogger("boilerhatch")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def resolve_project_name(positional: str | None, option: str | None) -> str:
    """
    Pick the project name from ``--name`` or the positional argument.

    Raises
    ------
    typer.BadParameter
        If neither resolves to a non-empty string.
    """
    name = option if option is not None else positional
    if name is None or not name.strip():
        raise typer.BadParameter(
            "A project name is required, e.g. 'boilerhatch my-app'.",
            param_hint="'NAME' / '--name'",
        )
    return name.strip()


def load_settings(config_file: Path | None) -> Settings:
    """Read settings from ``config_file`` or the environment, exiting on error."""
    try:
        if config_file is not None:
            return Settings.from_toml(config_file)
        return Settings()
    except (OSError, tomli.TOMLDecodeError, ValidationError) as e:
        rprint(f"[red]Error:[/] Invalid configuration: {e}")
        raise typer.Exit(1)


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def create(
    name: Annotated[
        str | None,
        typer.Argument(
            help="Name of the project to create",
            show_default=False,
        ),
    ] = None,
    name_option: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Name of the project to create (overrides NAME)",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create the project in (default: current directory)",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="TOML file with boilerhatch settings",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Create a new project from the React Electron boilerplate.

    Downloads the template into [cyan]./NAME[/], sets the name and version
    in its package.json, and tells you how to install and start it.

    [bold]Examples:[/]

        boilerhatch my-app

        boilerhatch --name=my-app --output ~/code
    """
    configure_logging(verbose)

    project_name = resolve_project_name(name, name_option)

    try:
        request = ProjectRequest(name=project_name, output_dir=output_dir or Path.cwd())
    except ValidationError as e:
        message = "; ".join(err["msg"] for err in e.errors())
        raise typer.BadParameter(message, param_hint="'NAME' / '--name'") from e

    settings = load_settings(config_file)

    try:
        result = create_project(request, settings)
    except KeyboardInterrupt:
        rprint("\n[yellow]Interrupted.[/]")
        if request.output_path.exists():
            rprint(f"[dim]Partial project left at {request.output_path}[/]")
        raise typer.Exit(130)

    if not result.success:
        for error in result.errors:
            rprint(f"[bold red]Error:[/] {error}")
        raise typer.Exit(1)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
