"""Restore app.asar and the executable from their backups."""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import MissingBackupError, RestoreError
from ..install.Installation import Installation
from .backup_paths import backup_paths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestoreOutcome:
    restored: list[Path] = field(default_factory=list)


def restore_backup(install: Installation) -> RestoreOutcome:
    """Copy both backups over the live files, then delete the backups and the marker.

    A failed copy is reported, not retried: the error names the files already
    restored and the ones whose backup must still be copied back.

    Raises:
        MissingBackupError: If either backup file is absent
        RestoreError: If copying back or cleaning up fails
    """
    paths = backup_paths(install)
    pairs = [(paths.asar_backup, install.asar_path), (paths.exe_backup, install.exe_path)]

    missing = [backup for backup, _ in pairs if not backup.is_file()]
    if missing:
        raise MissingBackupError(
            "Backup files not found, cannot restore. Expected: "
            + ", ".join(str(backup) for backup, _ in pairs),
            paths=missing,
        )

    restored: list[Path] = []
    for backup, live in pairs:
        try:
            shutil.copy2(backup, live)
        except OSError as e:
            pending = [target for _, target in pairs if target not in restored]
            logger.error("Restore of %s failed: %s (pending: %s)", live, e, pending)
            raise RestoreError(
                f"Failed to restore {live} from {backup}: {e}. "
                f"Still to restore: {', '.join(str(p) for p in pending)}",
                restored=restored,
                pending=pending,
            ) from e
        restored.append(live)
        logger.info("Restored %s from %s", live, backup)

    try:
        for backup, _ in pairs:
            backup.unlink()
        if paths.marker.exists():
            paths.marker.unlink()
    except OSError as e:
        raise RestoreError(
            f"Restored the original files but could not clean up backups or marker: {e}",
            restored=restored,
            pending=[],
            hint=f"Delete the leftover files by hand: {paths.asar_backup}, {paths.exe_backup}, {paths.marker}",
        ) from e

    return RestoreOutcome(restored=restored)
