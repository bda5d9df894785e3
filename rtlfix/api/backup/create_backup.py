"""Create the backup pair before any modification."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from ..errors import IoError
from ..install.Installation import Installation
from .backup_paths import backup_paths
from .has_backups import has_backups

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupOutcome:
    skipped: bool
    asar_backup: Path
    exe_backup: Path


def create_backup(install: Installation) -> BackupOutcome:
    """Copy app.asar and the executable to their .bak siblings.

    Existing backups represent the true original and are never overwritten:
    if both exist the call returns a skipped outcome. A half-made backup is
    removed before the error is raised.

    Raises:
        IoError: If either copy fails
    """
    paths = backup_paths(install)

    if has_backups(install):
        logger.info("Backups already exist, reusing %s and %s", paths.asar_backup, paths.exe_backup)
        return BackupOutcome(skipped=True, asar_backup=paths.asar_backup, exe_backup=paths.exe_backup)

    made: list[Path] = []
    try:
        for source, target in ((install.asar_path, paths.asar_backup), (install.exe_path, paths.exe_backup)):
            shutil.copy2(source, target)
            made.append(target)
    except OSError as e:
        # Clean up partial backups, including a truncated copy of the failing file
        for partial in [*made, paths.asar_backup, paths.exe_backup]:
            try:
                partial.unlink()
            except FileNotFoundError:
                pass
            except OSError as cleanup_error:
                logger.error("Could not remove partial backup %s: %s", partial, cleanup_error)
        raise IoError(
            f"Failed to create backups: {e}",
            hint="Make sure Claude Desktop is not running and that you have write permission.",
            paths=[paths.asar_backup, paths.exe_backup],
        ) from e

    logger.info("Created backups %s and %s", paths.asar_backup, paths.exe_backup)
    return BackupOutcome(skipped=False, asar_backup=paths.asar_backup, exe_backup=paths.exe_backup)
