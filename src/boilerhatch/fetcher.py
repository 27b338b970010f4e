"""
boilerhatch.fetcher - Template Archive Download and Extraction
==============================================================

Streams the template tarball from codeload and unpacks it into the project
directory without ever holding the whole archive on disk or in memory:

    httpx response.iter_bytes()
        -> _ChunkReader (file object over the byte iterator)
        -> tarfile.open(mode="r|gz")  (stream mode, forward-only)
        -> extractall(filter="data")

Code-hosting tarballs wrap every entry in one ``<repo>-<branch>/`` folder,
so exactly one leading path component is stripped from each entry.

The operation is complete only once tarfile has read the end-of-archive
marker, not when the HTTP response finishes.
"""

from __future__ import annotations

import io
import logging
import tarfile
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

import httpx

from boilerhatch.config import Settings
from boilerhatch.exceptions import DownloadError


logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


# =============================================================================
# Streaming Adapter
# =============================================================================

class _ChunkReader(io.RawIOBase):
    """Read-only file object over an iterator of byte chunks."""

    def __init__(self, chunks: Iterator[bytes]) -> None:
        super().__init__()
        self._chunks = chunks
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0

        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


# =============================================================================
# Path Stripping
# =============================================================================

def strip_components(name: str, count: int = 1) -> str | None:
    """
    Drop ``count`` leading components from an archive member path.

    Parameters
    ----------
    name : str
        Member name as stored in the archive (always ``/``-separated).

    count : int, default=1
        Number of leading components to remove.

    Returns
    -------
    str | None
        The remaining relative path, or None if nothing is left (the
        wrapper directory itself).

    Examples
    --------
    >>> strip_components("React-Electron-Boilerplate-master/src/index.js")
    'src/index.js'
    >>> strip_components("React-Electron-Boilerplate-master/") is None
    True
    """
    parts = [p for p in PurePosixPath(name).parts if p not in {"", "."}]
    if len(parts) <= count:
        return None
    return "/".join(parts[count:])


def _stripped_members(
    archive: tarfile.TarFile,
    written: list[str],
) -> Iterator[tarfile.TarInfo]:
    """Yield archive members renamed with their wrapper folder removed."""
    for member in archive:
        stripped = strip_components(member.name)
        if stripped is None:
            continue

        changes: dict[str, str] = {"name": stripped}
        if member.islnk():
            # Hard-link targets are archive paths too
            link_target = strip_components(member.linkname)
            if link_target is None:
                continue
            changes["linkname"] = link_target

        if not member.isdir():
            written.append(stripped)
        yield member.replace(**changes, deep=False)


# =============================================================================
# Download + Extract
# =============================================================================

def fetch_and_extract(
    archive_url: str,
    dest_path: Path,
    settings: Settings | None = None,
    *,
    client: httpx.Client | None = None,
) -> list[str]:
    """
    Stream a ``.tar.gz`` from ``archive_url`` and extract it into ``dest_path``.

    Parameters
    ----------
    archive_url : str
        URL serving a gzip-compressed tar stream.

    dest_path : Path
        Existing directory to extract into.

    settings : Settings | None
        Supplies the download timeout.

    client : httpx.Client | None
        Client to use; one is created (and closed) when omitted.

    Returns
    -------
    list[str]
        Relative paths of the files written, in archive order.

    Raises
    ------
    DownloadError
        On any network error, non-200 status, corrupt or unsupported
        archive content, or write failure.
    """
    settings = settings or Settings()
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.http_timeout_seconds, follow_redirects=True)

    written: list[str] = []
    logger.debug("Streaming %s into %s", archive_url, dest_path)

    try:
        with client.stream("GET", archive_url) as response:
            if response.status_code != 200:
                raise DownloadError(
                    f"Download failed with status {response.status_code} for {archive_url}"
                )

            reader = io.BufferedReader(
                _ChunkReader(response.iter_bytes(chunk_size=CHUNK_SIZE)),
                buffer_size=CHUNK_SIZE,
            )
            with tarfile.open(fileobj=reader, mode="r|gz") as archive:
                archive.extractall(
                    dest_path,
                    members=_stripped_members(archive, written),
                    filter="data",
                )

    except httpx.HTTPError as e:
        raise DownloadError(f"Network error while downloading template: {e}") from e
    except tarfile.TarError as e:
        raise DownloadError(f"Template archive could not be extracted: {e}") from e
    except (OSError, EOFError) as e:
        raise DownloadError(f"Failed to write template files: {e}") from e
    finally:
        if owns_client:
            client.close()

    logger.debug("Extracted %d files", len(written))
    return written
