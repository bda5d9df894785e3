from ..install.Installation import Installation
from .backup_paths import backup_paths


def has_backups(install: Installation) -> bool:
    """True only if both backup files are present."""
    paths = backup_paths(install)
    return paths.asar_backup.is_file() and paths.exe_backup.is_file()
