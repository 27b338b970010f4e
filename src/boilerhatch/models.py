"""
boilerhatch.models - Pydantic Models for Project Creation
=========================================================

This module defines the data models passed between the stages of the
boilerhatch pipeline. All of them are frozen: a model is built once at the
edge (CLI input or settings) and then only read.

Architecture Notes
------------------
The models map onto the pipeline stages:

    ProjectRequest        (CLI input: name + output directory)
    RepositoryReference   (static template source: owner/repo/branch)
    ManifestPatch         (fields overwritten in package.json)
    PackageManager        (enum: yarn, npm)

Usage Example
-------------
>>> from pathlib import Path
>>> from boilerhatch.models import ProjectRequest, ManifestPatch
>>> request = ProjectRequest(name="demo", output_dir=Path("/work"))
>>> request.output_path
PosixPath('/work/demo')
>>> ManifestPatch.from_request(request).as_dict()
{'name': 'demo', 'version': '0.1.0'}
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Constants
# =============================================================================

DEFAULT_OWNER = "MitchPierias"
DEFAULT_REPO = "React-Electron-Boilerplate"
DEFAULT_BRANCH = "master"

# Version written into every new manifest
DEFAULT_VERSION = "0.1.0"

# npm refuses package names longer than this
MAX_NAME_LENGTH = 214

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


# =============================================================================
# Enumerations
# =============================================================================

class PackageManager(str, Enum):
    """
    Package managers boilerhatch knows how to recommend.

    The value is also the executable probed during detection.

    Examples
    --------
    >>> PackageManager.YARN.run_command
    'yarn && yarn start'
    """

    YARN = "yarn"
    NPM = "npm"

    @property
    def run_command(self) -> str:
        """Install-and-start command sequence for the scaffolded project."""
        commands = {
            PackageManager.YARN: "yarn && yarn start",
            PackageManager.NPM: "npm install && npm start",
        }
        return commands[self]

    @property
    def install_url(self) -> str:
        """Where to get this package manager."""
        urls = {
            PackageManager.YARN: "https://yarnpkg.com/lang/en/docs/install",
            PackageManager.NPM: "https://www.npmjs.com/get-npm",
        }
        return urls[self]


# =============================================================================
# Request Model
# =============================================================================

class ProjectRequest(BaseModel):
    """
    A request to create one new project.

    Attributes
    ----------
    name : str
        Project name. Used verbatim as the directory name and as the
        manifest ``name`` field, so it must be filesystem-safe.

    output_dir : Path
        Existing directory the project directory is created in. Always
        passed explicitly; the model never reads the process working
        directory.

    Examples
    --------
    >>> ProjectRequest(name="  my-app ", output_dir=Path("/tmp")).name
    'my-app'
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(
        description="Project name (directory and package.json name)",
        min_length=1,
        max_length=MAX_NAME_LENGTH,
    )]
    output_dir: Path = Field(
        description="Directory the project directory is created in",
    )

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: object) -> object:
        """
        Strip whitespace and reject names that are not a single safe path segment.

        Raises
        ------
        ValueError
            If the name is empty, ``.``/``..``, or contains characters other
            than letters, digits, dots, hyphens and underscores.
        """
        if not isinstance(v, str):
            return v

        v = v.strip()
        if not v:
            msg = "Project name must not be empty."
            raise ValueError(msg)

        if v in {".", ".."} or not _NAME_PATTERN.match(v):
            msg = (
                f"Invalid project name '{v}'. Names may contain only letters, "
                "numbers, dots, hyphens, and underscores."
            )
            raise ValueError(msg)

        return v

    @field_validator("output_dir")
    @classmethod
    def resolve_output_dir(cls, v: Path) -> Path:
        """Make the output directory absolute."""
        return v.expanduser().resolve()

    @property
    def output_path(self) -> Path:
        """
        Full path of the directory to create.

        Returns
        -------
        Path
            output_dir / name
        """
        return self.output_dir / self.name


# =============================================================================
# Template Source
# =============================================================================

class RepositoryReference(BaseModel):
    """
    Location of the template repository on GitHub.

    This is static configuration (see :class:`boilerhatch.config.Settings`),
    never user input from the command line.
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(default=DEFAULT_OWNER, min_length=1)
    repo: str = Field(default=DEFAULT_REPO, min_length=1)
    branch: str = Field(default=DEFAULT_BRANCH, min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def api_url(self) -> str:
        """Repository metadata endpoint."""
        return f"https://api.github.com/repos/{self.owner}/{self.repo}"

    @property
    def archive_url(self) -> str:
        """
        Tarball of the branch head.

        codeload wraps every entry in a single ``<repo>-<branch>/`` folder.
        """
        return f"https://codeload.github.com/{self.owner}/{self.repo}/tar.gz/{self.branch}"


# =============================================================================
# Manifest Patch
# =============================================================================

class ManifestPatch(BaseModel):
    """
    Fields overwritten in the extracted ``package.json``.

    Applied as a shallow overlay: every other key of the manifest is kept
    exactly as it was.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    version: str = Field(default=DEFAULT_VERSION, min_length=1)

    @classmethod
    def from_request(cls, request: ProjectRequest) -> ManifestPatch:
        return cls(name=request.name)

    def as_dict(self) -> dict[str, str]:
        """Return the overlay in manifest key order (name, then version)."""
        return {"name": self.name, "version": self.version}
