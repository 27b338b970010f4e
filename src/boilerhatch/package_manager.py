"""
boilerhatch.package_manager - Package Manager Detection
=======================================================

Finds which JavaScript package manager is installed by running
``<name> -v`` for each candidate in order. The first one that answers is
used; later candidates are not probed. Detection is advisory: it only
changes the instruction printed at the end.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from boilerhatch.models import PackageManager


logger = logging.getLogger(__name__)

console = Console()

DEFAULT_CANDIDATES: tuple[PackageManager, ...] = (PackageManager.YARN, PackageManager.NPM)


def probe(manager: PackageManager, cwd: Path, timeout: float = 10.0) -> bool:
    """
    Return True if ``manager -v`` runs successfully in ``cwd``.

    Notes
    -----
    The executable is resolved with ``shutil.which`` first so that Windows
    shims such as ``npm.cmd`` are found. Any failure to start, non-zero
    exit, or timeout counts as "not installed".
    """
    executable = shutil.which(manager.value)
    if executable is None:
        logger.debug("%s not found on PATH", manager.value)
        return False

    try:
        subprocess.run(
            [executable, "-v"],
            cwd=cwd,
            capture_output=True,
            check=True,
            timeout=timeout,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
        logger.debug("Probe of %s failed: %s", manager.value, e)
        return False

    return True


def detect_package_manager(
    cwd: Path,
    candidates: Sequence[PackageManager] = DEFAULT_CANDIDATES,
    *,
    timeout: float = 10.0,
    verbose: bool = True,
) -> PackageManager | None:
    """
    Pick the first installed package manager from ``candidates``.

    Parameters
    ----------
    cwd : Path
        Directory the probes run in.

    candidates : Sequence[PackageManager]
        Probe order.

    timeout : float
        Per-probe timeout in seconds.

    verbose : bool, default=True
        Print the install hint when nothing is found.

    Returns
    -------
    PackageManager | None
        The detected manager, or None when no candidate responds. A warning
        is logged (and printed when ``verbose``) in that case.
    """
    for manager in candidates:
        if probe(manager, cwd, timeout=timeout):
            logger.debug("Using %s", manager.value)
            return manager

    names = ", ".join(m.value for m in candidates) or "none configured"
    logger.warning("No available package manager (tried: %s)", names)

    if verbose:
        hints = "\n".join(f"  Install {m.value}: {m.install_url}" for m in candidates)
        console.print(f"[bold red]No available package manager![/]\n[red]{hints}[/]")

    return None


def install_instruction(manager: PackageManager | None, project_name: str) -> str:
    """
    Final line shown to the user.

    Falls back to npm's command when nothing was detected.

    Examples
    --------
    >>> install_instruction(PackageManager.YARN, "demo")
    'Run `yarn && yarn start` inside of "demo" to start the app'
    """
    command = (manager or PackageManager.NPM).run_command
    return f'Run `{command}` inside of "{project_name}" to start the app'
