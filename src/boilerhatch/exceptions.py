"""
boilerhatch.exceptions - Pipeline Error Types
=============================================

One exception family per pipeline stage:

    BoilerhatchError
    ├── RepositoryNotFoundError   (stage 1: locate)
    │   └── RepositoryLookupError (API unreachable, auth, rate limit)
    ├── DirectoryError            (stage 2: initialize)
    │   └── DirectoryExistsError
    ├── DownloadError             (stage 3: fetch)
    └── ManifestError             (stage 4: configure)

Callers that only care about "the repository could not be confirmed" catch
``RepositoryNotFoundError``; the lookup subclass keeps the message honest
about why.
"""

from __future__ import annotations

from pathlib import Path


class BoilerhatchError(Exception):
    """Base class for every error raised by the boilerhatch pipeline."""


class RepositoryNotFoundError(BoilerhatchError):
    """The template repository does not exist on the remote host."""

    def __init__(self, full_name: str, message: str | None = None) -> None:
        self.full_name = full_name
        super().__init__(message or f"Repository '{full_name}' could not be found")


class RepositoryLookupError(RepositoryNotFoundError):
    """The metadata lookup itself failed (network, auth, rate limit)."""


class DirectoryError(BoilerhatchError):
    """The project directory could not be created."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class DirectoryExistsError(DirectoryError):
    """The project path is already present on disk."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            path,
            f"Directory '{path}' already exists. "
            "Use a different name or remove the existing directory.",
        )


class DownloadError(BoilerhatchError):
    """Downloading or extracting the template archive failed."""


class ManifestError(BoilerhatchError):
    """The project manifest could not be read, parsed or written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)
