"""Persist the marker after a successful patch."""

import json
import logging
from pathlib import Path

from ...constants import TOOL_NAME
from ...utils.now_iso import now_iso
from ..config.get_package_version import get_package_version
from ..errors import IoError
from ..install.Installation import Installation
from .Marker import Marker, MarkerHashes
from .marker_path import marker_path

logger = logging.getLogger(__name__)


def write_marker(install: Installation, hash_before: str, hash_after: str, *, now: str | None = None) -> Marker:
    """Write the marker, overwriting any previous one.

    Raises:
        IoError: If the file cannot be written
    """
    marker = Marker(
        tool=TOOL_NAME,
        version=get_package_version(),
        patchedAt=now or now_iso(),
        claudeVersion=install.version,
        hashes=MarkerHashes(original=hash_before, patched=hash_after),
    )
    path: Path = marker_path(install)
    try:
        path.write_text(json.dumps(marker.to_json_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        raise IoError(f"Failed to write marker {path}: {e}", paths=[path]) from e

    logger.info("Wrote marker %s", path)
    return marker
