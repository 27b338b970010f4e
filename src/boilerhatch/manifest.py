"""
boilerhatch.manifest - package.json Rewriting
=============================================

Overlays a :class:`ManifestPatch` onto the extracted project's
``package.json``. The manifest is treated strictly as JSON data: it is read,
shallow-merged, and written back. Keys not named in the patch keep their
values and their position.

The new content is written to a temporary sibling file and moved over the
original with ``os.replace``, so a failure never leaves a half-written
manifest behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from boilerhatch.exceptions import ManifestError
from boilerhatch.models import ManifestPatch


logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


def read_manifest(manifest_path: Path) -> dict[str, Any]:
    """
    Load and parse a manifest file.

    Raises
    ------
    ManifestError
        If the file is missing, unreadable, not valid JSON, or not a JSON
        object.
    """
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestError(manifest_path, f"No {manifest_path.name} found at {manifest_path.parent}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(manifest_path, f"Could not read {manifest_path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(manifest_path, f"Invalid JSON in {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(manifest_path, f"{manifest_path} does not contain a JSON object")

    return data


def write_manifest(manifest_path: Path, data: dict[str, Any]) -> None:
    """
    Serialize ``data`` to ``manifest_path`` atomically.

    Output uses two-space indentation and a trailing newline, the layout npm
    and yarn themselves write.
    """
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    tmp_path: Path | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{manifest_path.name}.",
            suffix=".tmp",
            dir=manifest_path.parent,
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, manifest_path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ManifestError(manifest_path, f"Could not write {manifest_path}: {e}") from e


def configure_manifest(patch: ManifestPatch, project_path: Path) -> dict[str, Any]:
    """
    Overwrite the name and version fields of ``project_path/package.json``.

    Parameters
    ----------
    patch : ManifestPatch
        Fields to overwrite.

    project_path : Path
        Root of the extracted project.

    Returns
    -------
    dict[str, Any]
        The manifest as written.

    Raises
    ------
    ManifestError
        If the manifest is missing, invalid, or cannot be written. The file
        on disk is untouched in that case.
    """
    manifest_path = project_path / MANIFEST_FILENAME
    manifest = read_manifest(manifest_path)

    merged = {**manifest, **patch.as_dict()}
    write_manifest(manifest_path, merged)

    logger.debug("Wrote %s with name=%s version=%s", manifest_path, patch.name, patch.version)
    return merged
