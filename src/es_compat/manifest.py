"""Read package.json manifests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from es_compat.errors import ManifestUnreadable
from es_compat.models import PackageManifest

log = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def read_manifest(directory: Path) -> PackageManifest:
    """Parse ``directory/package.json``.

    Raises ManifestUnreadable if the file is missing, is not valid JSON, or
    declares fields with unexpected types.
    """
    path = directory / MANIFEST_NAME
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestUnreadable(directory, e.strerror or str(e)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestUnreadable(directory, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestUnreadable(directory, "top-level value is not an object")

    try:
        manifest = PackageManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestUnreadable(directory, f"unexpected field types: {e.error_count()} error(s)") from e

    log.debug("Read manifest %s (%d deps, %d peer deps)",
              path, len(manifest.dependencies), len(manifest.peer_dependencies))
    return manifest
