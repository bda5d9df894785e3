"""Backup API module - byte-faithful copies of app.asar and the executable."""

from .backup_paths import BackupPaths, backup_paths
from .create_backup import BackupOutcome, create_backup
from .has_backups import has_backups
from .restore_backup import RestoreOutcome, restore_backup

__all__ = [
    "BackupOutcome",
    "BackupPaths",
    "RestoreOutcome",
    "backup_paths",
    "create_backup",
    "has_backups",
    "restore_backup",
]
