"""
boilerhatch.config - Runtime Settings
=====================================

Settings are read from the environment (prefix ``BOILERHATCH_``) by
pydantic-settings, and may additionally come from a TOML file passed with
``--config``. Values given explicitly (TOML file or keyword arguments) win
over the environment.

Example TOML file::

    template_owner = "MitchPierias"
    template_repo = "React-Electron-Boilerplate"
    template_branch = "master"
    http_timeout_seconds = 15
    package_managers = ["npm", "yarn"]
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from boilerhatch.models import (
    DEFAULT_BRANCH,
    DEFAULT_OWNER,
    DEFAULT_REPO,
    PackageManager,
    RepositoryReference,
)


class Settings(BaseSettings):
    """
    Configuration shared by every pipeline stage.

    Attributes
    ----------
    template_owner, template_repo, template_branch : str
        Where the template lives on GitHub.

    github_token : str | None
        Optional token for the metadata API. Read from
        ``BOILERHATCH_GITHUB_TOKEN``, ``GITHUB_TOKEN`` or ``GH_TOKEN``.

    http_timeout_seconds : float
        Timeout applied to the metadata lookup and the archive download.

    probe_timeout_seconds : float
        Timeout for each ``<package-manager> -v`` probe.

    package_managers : list[PackageManager]
        Probe order for package-manager detection; first hit wins.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOILERHATCH_",
        populate_by_name=True,
        extra="ignore",
    )

    template_owner: str = Field(default=DEFAULT_OWNER, min_length=1)
    template_repo: str = Field(default=DEFAULT_REPO, min_length=1)
    template_branch: str = Field(default=DEFAULT_BRANCH, min_length=1)

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("BOILERHATCH_GITHUB_TOKEN", "GITHUB_TOKEN", "GH_TOKEN"),
    )

    http_timeout_seconds: float = Field(default=30.0, gt=0)
    probe_timeout_seconds: float = Field(default=10.0, gt=0)

    package_managers: list[PackageManager] = Field(
        default_factory=lambda: [PackageManager.YARN, PackageManager.NPM],
    )

    @field_validator("github_token")
    @classmethod
    def blank_token_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    def repository(self) -> RepositoryReference:
        """Build the template reference from the configured owner/repo/branch."""
        return RepositoryReference(
            owner=self.template_owner,
            repo=self.template_repo,
            branch=self.template_branch,
        )

    def auth_headers(self) -> dict[str, str]:
        """Authorization header only when a token is configured."""
        return {"Authorization": f"Bearer {self.github_token}"} if self.github_token else {}

    @classmethod
    def from_toml(cls, path: Path) -> Settings:
        """
        Load settings from a TOML file, falling back to the environment.

        Parameters
        ----------
        path : Path
            Path to the TOML configuration file.

        Raises
        ------
        FileNotFoundError
            If the config file doesn't exist.
        tomli.TOMLDecodeError
            If the file is not valid TOML.
        ValidationError
            If the file has invalid values.
        """
        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

        return cls(**data)
