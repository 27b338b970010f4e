"""
boilerhatch - Electron + React Project Bootstrapper
===================================================

A CLI tool that creates a new project from the React-Electron-Boilerplate
template: it checks the template repository exists, creates the project
directory, streams the template tarball into it, and rewrites the new
project's package.json.

Quick Start
-----------
```bash
pip install boilerhatch

boilerhatch my-app
cd my-app && yarn && yarn start
```

Example
-------
>>> from pathlib import Path
>>> from boilerhatch import ProjectRequest, create_project
>>> result = create_project(ProjectRequest(name="my-app", output_dir=Path.cwd()))
>>> result.success
True

Architecture
------------
The package is organized into these main modules:

- ``cli``: Typer-based command line interface
- ``generator``: The four-stage creation pipeline
- ``locator``: GitHub repository lookup
- ``fetcher``: Streaming tarball download and extraction
- ``manifest``: package.json rewriting
- ``package_manager``: yarn/npm detection
- ``config``: Settings from the environment or a TOML file
- ``models``: Pydantic models for requests and template sources

License
-------
MIT License - see LICENSE file for details.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "Technical-1"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from boilerhatch.config import Settings
from boilerhatch.generator import GenerationResult, create_project
from boilerhatch.models import ManifestPatch, PackageManager, ProjectRequest


__all__ = [
    "GenerationResult",
    "ManifestPatch",
    "PackageManager",
    "ProjectRequest",
    "Settings",
    "__author__",
    "__version__",
    "create_project",
]
