"""
pytest configuration and shared fixtures for boilerhatch tests.

Fixtures
--------
clean_env : None
    Removes boilerhatch and GitHub variables from the environment (autouse).

output_dir : Path
    A temporary directory projects are created in.

make_tarball : Callable
    Builds an in-memory ``.tar.gz`` shaped like a codeload tarball.

mock_client : Callable
    Builds an ``httpx.Client`` backed by ``httpx.MockTransport``.

fake_fetch : Callable
    A fetch stage stub that writes ``index.js`` and ``package.json``.
"""

import io
import json
import tarfile
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest


TEMPLATE_PREFIX = "React-Electron-Boilerplate-master"

_ENV_VARS = (
    "BOILERHATCH_TEMPLATE_OWNER",
    "BOILERHATCH_TEMPLATE_REPO",
    "BOILERHATCH_TEMPLATE_BRANCH",
    "BOILERHATCH_GITHUB_TOKEN",
    "BOILERHATCH_HTTP_TIMEOUT_SECONDS",
    "BOILERHATCH_PROBE_TIMEOUT_SECONDS",
    "BOILERHATCH_PACKAGE_MANAGERS",
    "GITHUB_TOKEN",
    "GH_TOKEN",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of Settings()."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """
    Create a temporary directory for project creation tests.

    Returns
    -------
    Path
        Path to an empty, existing directory.
    """
    directory = tmp_path / "workspace"
    directory.mkdir()
    return directory


@pytest.fixture
def make_tarball() -> Callable[..., bytes]:
    """
    Return a builder for gzip tarballs wrapped in a single top-level folder.

    The builder takes a mapping of relative path -> content and an optional
    prefix, and returns the compressed bytes.
    """

    def _build(entries: dict[str, bytes], prefix: str = TEMPLATE_PREFIX) -> bytes:
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
            root = tarfile.TarInfo(f"{prefix}/")
            root.type = tarfile.DIRTYPE
            root.mode = 0o755
            archive.addfile(root)

            for name, data in entries.items():
                info = tarfile.TarInfo(f"{prefix}/{name}")
                info.size = len(data)
                info.mode = 0o644
                archive.addfile(info, io.BytesIO(data))
        return buffer.getvalue()

    return _build


@pytest.fixture
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """Return a factory for clients whose requests go to ``handler``."""

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _build


@pytest.fixture
def fake_fetch() -> Callable[..., list[str]]:
    """A fetch stage that "extracts" a two-file template."""

    def _fetch(archive_url: str, dest_path: Path, settings=None, *, client=None) -> list[str]:
        (dest_path / "index.js").write_text("console.log('hello');\n", encoding="utf-8")
        (dest_path / "package.json").write_text(
            json.dumps({"name": "template"}), encoding="utf-8"
        )
        return ["index.js", "package.json"]

    return _fetch

