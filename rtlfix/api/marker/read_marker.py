"""Read the marker and infer patched state."""

import json
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..install.Installation import Installation
from .Marker import Marker
from .marker_path import marker_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerStatus:
    patched: bool
    marker: Marker | None = None


def read_marker(install: Installation) -> MarkerStatus:
    """Patched state comes from the file's existence alone.

    A marker that exists but cannot be read or decoded still means patched;
    only its diagnostic content is lost.
    """
    path = marker_path(install)
    if not path.exists():
        return MarkerStatus(patched=False)

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return MarkerStatus(patched=True, marker=Marker.model_validate(raw))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Marker %s is unreadable, treating installation as patched: %s", path, e)
        return MarkerStatus(patched=True, marker=None)
