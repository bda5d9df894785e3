"""Error taxonomy for rtlfix.

Library functions raise these; the patch orchestrator catches them at its
boundary and turns them into outcomes. Each class carries a default
remediation hint that the CLI prints under the message.
"""

from pathlib import Path

from ..constants import BACKUP_SUFFIX


class RtlfixError(Exception):
    """Base class for all rtlfix failures."""

    kind = "error"
    hint = "Run 'rtlfix status' to inspect the installation."

    def __init__(self, message: str, hint: str | None = None, paths: list[Path] | None = None):
        super().__init__(message)
        self.message = message
        if hint is not None:
            self.hint = hint
        self.paths = [Path(p) for p in paths] if paths else []

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "message": self.message,
            "hint": self.hint,
            "paths": [str(p) for p in self.paths],
        }


class NotInstalledError(RtlfixError):
    kind = "not_installed"
    hint = "Install Claude Desktop from https://claude.ai/download, or set install.base_dir in the config."


class RunningError(RtlfixError):
    kind = "running"
    hint = "Close Claude Desktop completely (check the system tray too) and try again."


class LockedError(RtlfixError):
    kind = "locked"
    hint = "Close Claude Desktop and try again. You may also need to run this as Administrator."


class AlreadyPatchedError(RtlfixError):
    kind = "already_patched"
    hint = "Run 'rtlfix unpatch' first if you want to re-apply."


class AlreadyPatchedCodeError(RtlfixError):
    kind = "already_patched_code"
    hint = "The marker file is out of sync with the code. Reinstall Claude Desktop to get a clean state."


class IntegrityMismatchError(RtlfixError):
    kind = "integrity_mismatch"
    hint = "Claude Desktop may have been modified by another tool. Reinstall it to get a clean state."


class StructureChangedError(RtlfixError):
    kind = "structure_changed"
    hint = "Claude Desktop may have changed its internal structure. Check for an rtlfix update."


class MissingBackupError(RtlfixError):
    kind = "missing_backup"
    hint = "If Claude Desktop is broken, reinstall it."


class NotFoundError(RtlfixError):
    kind = "not_found"
    hint = "The executable may have been updated or modified by another tool. Reinstall Claude Desktop."


class AmbiguousMatchError(RtlfixError):
    kind = "ambiguous_match"
    hint = "The hash occurs more than once in the executable, so it is unsafe to patch. Please report this."


class FormatError(RtlfixError):
    kind = "format"
    hint = "The file does not have the expected layout. Reinstall Claude Desktop."


class IoError(RtlfixError):
    kind = "io"
    hint = "Check that the files exist, that Claude Desktop is closed and that you have write permission."


class RestoreError(IoError):
    """Copying backups back failed partway; pending files still need their backup."""

    kind = "restore"
    hint = "Copy the pending .bak files over the live files by hand, or reinstall Claude Desktop."

    def __init__(
        self,
        message: str,
        restored: list[Path] | None = None,
        pending: list[Path] | None = None,
        hint: str | None = None,
    ):
        self.restored = [Path(p) for p in restored or []]
        self.pending = [Path(p) for p in pending or []]
        if hint is None and self.pending:
            copies = "; ".join(f"{p}{BACKUP_SUFFIX} -> {p}" for p in self.pending)
            hint = f"Copy the pending backups over the live files by hand ({copies}), or reinstall Claude Desktop."
        super().__init__(message, hint=hint, paths=self.pending)
