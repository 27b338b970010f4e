"""
boilerhatch.generator - Project Creation Pipeline
=================================================

This module drives project creation. It runs four stages in order, each
awaited to completion before the next starts:

    1. Locate     - confirm the template repository exists (advisory)
    2. Initialize - create the project directory (create-only)
    3. Fetch      - stream the template tarball into it
    4. Configure  - rewrite package.json, then detect a package manager

Failure Policy
--------------
- Stage 1 failing is reported as a warning and creation continues.
- Stage 2, 3 or 4 failing stops the pipeline; the error is recorded in the
  result and no later stage runs.
- Nothing is rolled back. A partially populated directory is left in place
  so the user can inspect it and delete it by hand.

The output path is computed once from the :class:`ProjectRequest` and passed
to every stage explicitly.

Usage Example
-------------
>>> from pathlib import Path
>>> from boilerhatch.generator import create_project
>>> from boilerhatch.models import ProjectRequest
>>>
>>> result = create_project(ProjectRequest(name="demo", output_dir=Path.cwd()))
>>> result.instruction
'Run `yarn && yarn start` inside of "demo" to start the app'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from rich.console import Console
from rich.panel import Panel

from boilerhatch.config import Settings
from boilerhatch.exceptions import (
    BoilerhatchError,
    DirectoryError,
    DirectoryExistsError,
    DownloadError,
    ManifestError,
    RepositoryNotFoundError,
)
from boilerhatch.fetcher import fetch_and_extract
from boilerhatch.locator import locate_repository
from boilerhatch.manifest import configure_manifest
from boilerhatch.models import ManifestPatch, PackageManager, ProjectRequest
from boilerhatch.package_manager import detect_package_manager, install_instruction


if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx


logger = logging.getLogger(__name__)

# Console for rich output
console = Console()

T = TypeVar("T")


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class GenerationResult:
    """
    Outcome of a project creation run.

    Attributes
    ----------
    success : bool
        True when stages 2-4 all completed.

    project_path : Path
        Absolute path of the project directory (may be partial on failure).

    files_extracted : list[str]
        Relative paths written by the fetch stage.

    package_manager : PackageManager | None
        Detected package manager, None if none responded.

    instruction : str | None
        The final "run this" line; only set on success.

    warnings : list[str]
        Non-fatal problems (failed repository lookup, no package manager).

    errors : list[str]
        The error that stopped the pipeline, if any.
    """

    success: bool
    project_path: Path
    files_extracted: list[str] = field(default_factory=list)
    package_manager: PackageManager | None = None
    instruction: str | None = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# =============================================================================
# Stage 2: Directory Initialization
# =============================================================================


def initialize_directory(path: Path) -> Path:
    """
    Create the project directory, one level only.

    Parameters
    ----------
    path : Path
        Absolute path that must not exist yet. Its parent must exist.

    Returns
    -------
    Path
        The created directory.

    Raises
    ------
    DirectoryExistsError
        If anything (file, directory, symlink) is already at ``path``. The
        filesystem is not modified.
    DirectoryError
        If the parent is missing or the directory cannot be created.
    """
    if path.exists() or path.is_symlink():
        raise DirectoryExistsError(path)

    try:
        path.mkdir()
    except FileExistsError as e:
        raise DirectoryExistsError(path) from e
    except FileNotFoundError as e:
        raise DirectoryError(path, f"Parent directory '{path.parent}' does not exist.") from e
    except OSError as e:
        raise DirectoryError(path, f"Could not create '{path}': {e}") from e

    return path


# =============================================================================
# Stage Reporting
# =============================================================================


def _run_stage(
    label: str,
    action: Callable[[], T],
    *,
    verbose: bool,
    advisory: bool = False,
) -> T:
    """
    Run one stage behind a spinner and print a success or failure mark.

    Pipeline errors are re-raised after the mark is printed.
    """
    if not verbose:
        return action()

    try:
        with console.status(f"[bold]{label}...[/]"):
            value = action()
    except BoilerhatchError as e:
        mark = "[yellow]⚠[/]" if advisory else "[red]✗[/]"
        console.print(f"  {mark} {label}: {e}")
        raise

    console.print(f"  [green]✓[/] {label}")
    return value


# =============================================================================
# Main Generation Function
# =============================================================================


def create_project(
    request: ProjectRequest,
    settings: Settings | None = None,
    *,
    verbose: bool = True,
    client: httpx.Client | None = None,
    locate: Callable[..., dict[str, Any]] | None = None,
    fetch: Callable[..., list[str]] | None = None,
    configure: Callable[[ManifestPatch, Path], dict[str, Any]] | None = None,
    detect: Callable[..., PackageManager | None] | None = None,
) -> GenerationResult:
    """
    Create a new project from the template repository.

    Parameters
    ----------
    request : ProjectRequest
        Name and parent directory of the new project.

    settings : Settings | None
        Template source, timeouts and probe order. Defaults to the
        environment.

    verbose : bool, default=True
        If True, display progress information to the console.

    client : httpx.Client | None
        HTTP client shared by the locate and fetch stages.

    locate, fetch, configure, detect : Callable | None
        Stage implementations; default to :func:`locate_repository`,
        :func:`fetch_and_extract`, :func:`configure_manifest` and
        :func:`detect_package_manager`.

    Returns
    -------
    GenerationResult
        ``success`` is False when stage 2, 3 or 4 failed; the cause is in
        ``errors``.

    Raises
    ------
    KeyboardInterrupt
        Propagated unchanged; the partial directory stays on disk.
    """
    settings = settings or Settings()
    locate = locate or locate_repository
    fetch = fetch or fetch_and_extract
    configure = configure or configure_manifest
    detect = detect or detect_package_manager

    reference = settings.repository()
    project_path = request.output_path
    patch = ManifestPatch.from_request(request)

    result = GenerationResult(success=False, project_path=project_path)

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold blue]Creating project:[/] [green]{request.name}[/]\n"
                f"[dim]Template: {reference.full_name}@{reference.branch}[/]",
                title="[bold]boilerhatch[/]",
                border_style="blue",
            )
        )
        console.print()

    # Step 1: Locate the template repository (advisory)
    try:
        metadata = _run_stage(
            "Searching for repository",
            lambda: locate(reference, settings, client=client),
            verbose=verbose,
            advisory=True,
        )
        logger.debug(
            "Found %s (default branch: %s)",
            metadata.get("full_name", reference.full_name),
            metadata.get("default_branch", "unknown"),
        )
    except RepositoryNotFoundError as e:
        logger.warning("%s; continuing", e)
        result.warnings.append(str(e))

    # Step 2: Create the project directory
    try:
        _run_stage(
            "Creating directory",
            lambda: initialize_directory(project_path),
            verbose=verbose,
        )
    except DirectoryError as e:
        result.errors.append(str(e))
        return result

    # Step 3: Download and extract the template
    try:
        files = _run_stage(
            "Downloading template",
            lambda: fetch(reference.archive_url, project_path, settings, client=client),
            verbose=verbose,
        )
        result.files_extracted.extend(files)
    except DownloadError as e:
        result.errors.append(str(e))
        _report_partial(project_path, verbose=verbose)
        return result

    # Step 4: Configure package.json
    try:
        _run_stage(
            "Configuring project",
            lambda: configure(patch, project_path),
            verbose=verbose,
        )
    except ManifestError as e:
        result.errors.append(str(e))
        _report_partial(project_path, verbose=verbose)
        return result

    manager = detect(
        request.output_dir,
        settings.package_managers,
        timeout=settings.probe_timeout_seconds,
        verbose=verbose,
    )
    if manager is None:
        result.warnings.append("No available package manager")

    result.package_manager = manager
    result.instruction = install_instruction(manager, request.name)
    result.success = True

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold green]✨ Project created successfully![/]\n\n"
                f"[dim]Location:[/] {project_path}\n\n"
                f"{result.instruction}",
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

    return result


def _report_partial(project_path: Path, *, verbose: bool) -> None:
    logger.info("Leaving partial project at %s", project_path)
    if verbose:
        console.print(f"[dim]Partial project left at {project_path}; remove it before retrying.[/]")
