"""Backup acquisition whose release path is a restore."""

import logging

from ..backup.create_backup import BackupOutcome, create_backup
from ..backup.restore_backup import RestoreOutcome, restore_backup
from ..errors import RtlfixError
from ..install.Installation import Installation

logger = logging.getLogger(__name__)


class BackupGuard:
    """Context manager around the mutating part of a patch.

    Entering creates (or reuses) the backup pair. Once armed, leaving the
    block by any exception restores the live files from the backups unless
    release() was called first. The restore result is kept on the guard so
    the caller can report the original error and a failed restore separately.
    """

    def __init__(self, install: Installation):
        self.install = install
        self.outcome: BackupOutcome | None = None
        self.armed = False
        self.released = False
        self.restored: RestoreOutcome | None = None
        self.restore_error: RtlfixError | None = None

    def __enter__(self) -> "BackupGuard":
        self.outcome = create_backup(self.install)
        return self

    def arm(self) -> None:
        """Live files are about to change; failures from here on restore."""
        self.armed = True

    def release(self) -> None:
        """Transaction succeeded; keep the backups and skip the restore."""
        self.released = True

    @property
    def rolled_back(self) -> bool:
        return self.restored is not None

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None or not self.armed or self.released:
            return False

        logger.warning("Patch failed after modifying live files (%s), restoring backups", exc_val)
        try:
            self.restored = restore_backup(self.install)
        except RtlfixError as e:
            self.restore_error = e
            logger.error("Rollback failed, manual recovery needed: %s", e)
        except OSError as e:
            self.restore_error = RtlfixError(f"Rollback failed: {e}")
            logger.error("Rollback failed, manual recovery needed: %s", e)
        else:
            logger.info("Rollback restored %s", ", ".join(str(p) for p in self.restored.restored))
        return False
