"""Paths of the backup pair and marker for an installation."""

from pathlib import Path
from typing import NamedTuple

from ...constants import BACKUP_SUFFIX
from ..install.Installation import Installation
from ..marker.marker_path import marker_path


class BackupPaths(NamedTuple):
    asar_backup: Path
    exe_backup: Path
    marker: Path


def backup_paths(install: Installation) -> BackupPaths:
    """Backups live next to the originals as <name>.bak."""
    return BackupPaths(
        asar_backup=install.asar_path.with_name(install.asar_path.name + BACKUP_SUFFIX),
        exe_backup=install.exe_path.with_name(install.exe_path.name + BACKUP_SUFFIX),
        marker=marker_path(install),
    )
