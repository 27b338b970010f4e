"""
Tests for boilerhatch.fetcher
=============================

Test Organization
-----------------
- TestStripComponents: Tests for member path stripping
- TestFetchAndExtract: Tests for streaming download + extraction
"""

import io
import random
import tarfile
from pathlib import Path

import httpx
import pytest

from boilerhatch.exceptions import DownloadError
from boilerhatch.fetcher import fetch_and_extract, strip_components


ARCHIVE_URL = "https://codeload.github.com/acme/starter/tar.gz/master"
TEMPLATE_PREFIX = "React-Electron-Boilerplate-master"


def serve(payload: bytes, status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=payload)

    return handler


# =============================================================================
# Path Stripping Tests
# =============================================================================

class TestStripComponents:
    """Tests for strip_components."""

    def test_strips_one_component(self) -> None:
        assert strip_components("repo-master/src/index.js") == "src/index.js"

    def test_top_level_entry_is_dropped(self) -> None:
        assert strip_components("repo-master/") is None
        assert strip_components("repo-master") is None

    def test_leading_dot_segment_ignored(self) -> None:
        assert strip_components("./repo-master/package.json") == "package.json"

    def test_strip_more_components(self) -> None:
        assert strip_components("a/b/c.txt", count=2) == "c.txt"


# =============================================================================
# Download + Extract Tests
# =============================================================================

class TestFetchAndExtract:
    """Tests for fetch_and_extract."""

    def test_strips_wrapper_folder(
        self, output_dir: Path, make_tarball, mock_client
    ) -> None:
        payload = make_tarball({
            "package.json": b'{"name": "template"}',
            "src/index.js": b"console.log(1);\n",
            "src/nested/deep.txt": b"deep",
        })

        written = fetch_and_extract(
            ARCHIVE_URL, output_dir, client=mock_client(serve(payload))
        )

        assert written == ["package.json", "src/index.js", "src/nested/deep.txt"]
        assert (output_dir / "package.json").read_bytes() == b'{"name": "template"}'
        assert (output_dir / "src" / "index.js").exists()
        assert (output_dir / "src" / "nested" / "deep.txt").read_text() == "deep"
        assert not (output_dir / TEMPLATE_PREFIX).exists()

    def test_only_first_component_removed(
        self, output_dir: Path, make_tarball, mock_client
    ) -> None:
        payload = make_tarball({"inner/inner/file.txt": b"x"}, prefix="inner")

        fetch_and_extract(ARCHIVE_URL, output_dir, client=mock_client(serve(payload)))

        assert (output_dir / "inner" / "inner" / "file.txt").exists()

    def test_non_200_status(self, output_dir: Path, mock_client) -> None:
        with pytest.raises(DownloadError, match="404"):
            fetch_and_extract(
                ARCHIVE_URL, output_dir, client=mock_client(serve(b"Not Found", status=404))
            )

        assert list(output_dir.iterdir()) == []

    def test_network_error(self, output_dir: Path, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(DownloadError, match="Network error"):
            fetch_and_extract(ARCHIVE_URL, output_dir, client=mock_client(handler))

    def test_not_a_tarball(self, output_dir: Path, mock_client) -> None:
        with pytest.raises(DownloadError, match="could not be extracted"):
            fetch_and_extract(
                ARCHIVE_URL, output_dir, client=mock_client(serve(b"definitely not gzip"))
            )

    def test_truncated_stream(self, output_dir: Path, make_tarball, mock_client) -> None:
        noise = random.Random(0).randbytes(200_000)
        payload = make_tarball({"big.bin": noise})

        with pytest.raises(DownloadError):
            fetch_and_extract(
                ARCHIVE_URL,
                output_dir,
                client=mock_client(serve(payload[: len(payload) // 2])),
            )

    def test_path_traversal_rejected(self, output_dir: Path, mock_client) -> None:
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
            info = tarfile.TarInfo(f"{TEMPLATE_PREFIX}/../../evil.txt")
            info.size = 4
            archive.addfile(info, io.BytesIO(b"evil"))

        with pytest.raises(DownloadError):
            fetch_and_extract(
                ARCHIVE_URL, output_dir, client=mock_client(serve(buffer.getvalue()))
            )

        assert not (output_dir.parent / "evil.txt").exists()

    def test_destination_is_a_file(self, tmp_path: Path, make_tarball, mock_client) -> None:
        payload = make_tarball({"package.json": b"{}"})

        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(DownloadError):
            fetch_and_extract(ARCHIVE_URL, blocker, client=mock_client(serve(payload)))
