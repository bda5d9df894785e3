from pathlib import Path

from ...constants import MARKER_FILE
from ..install.Installation import Installation


def marker_path(install: Installation) -> Path:
    """Marker file lives in the resources directory next to app.asar."""
    return install.resources_dir / MARKER_FILE
