"""Patch transaction engine.

The asar archive and the executable are treated as one unit: the hash
embedded in the executable must always match the archive header. Every
operation is a generator yielding ``(progress, message)`` and returning its
outcome, so commands drive it with ``yield from``.
"""

import logging
import shutil
import time
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Protocol

from ..asar.AsarTranscoder import AsarTranscoder
from ..backup.has_backups import has_backups
from ..backup.restore_backup import restore_backup
from ..config.RtlfixConfig import RtlfixConfig
from ..errors import (
    AlreadyPatchedCodeError,
    AlreadyPatchedError,
    FormatError,
    IntegrityMismatchError,
    IoError,
    LockedError,
    MissingBackupError,
    RestoreError,
    RtlfixError,
    RunningError,
    StructureChangedError,
)
from ..install.can_write import can_write
from ..install.find_install import find_install
from ..install.Installation import Installation
from ..install.is_app_running import is_app_running
from ..integrity.find_embedded_hash import find_embedded_hash
from ..integrity.header_hash import header_hash
from ..integrity.rewrite_embedded_hash import rewrite_embedded_hash
from ..marker.read_marker import read_marker
from ..marker.write_marker import write_marker
from ..payload.RtlPayload import RtlPayload
from .BackupGuard import BackupGuard
from .outcomes import PatchOutcome, StatusReport, UnpatchOutcome
from .PatchState import PatchState

logger = logging.getLogger(__name__)

Progress = Generator[tuple[float, str], None, PatchOutcome]


class Transcoder(Protocol):
    def extract_all(self, archive_path: Path, dest_dir: Path) -> None: ...

    def create_package(self, src_dir: Path, archive_path: Path) -> None: ...


class Payload(Protocol):
    def render(self) -> str: ...

    def is_patched(self, content: str) -> bool: ...


class Patcher:
    """Runs patch, unpatch and status against one Claude Desktop installation.

    Every collaborator that touches the outside world is injectable: the
    locator, the running-process query, the write probe, the archive
    transcoder and the payload source.
    """

    def __init__(
        self,
        config: RtlfixConfig | None = None,
        locator: Callable[[], Installation] | None = None,
        is_running: Callable[[], bool] | None = None,
        transcoder: Transcoder | None = None,
        payload: Payload | None = None,
        write_probe: Callable[[Path], bool] = can_write,
    ):
        self.config = config or RtlfixConfig()
        self.locator = locator or self._default_locator
        self.is_running = is_running or self._default_is_running
        self.transcoder = transcoder or AsarTranscoder()
        self.payload = payload or RtlPayload()
        self.write_probe = write_probe
        self.state = PatchState.IDLE

    def _default_locator(self) -> Installation:
        return find_install(self.config.install.base_dir, self.config.install.exe_name)

    def _default_is_running(self) -> bool:
        return is_app_running(self.config.install.process_name)

    def _enter(self, state: PatchState) -> None:
        logger.debug("Patch state %s -> %s", self.state.value, state.value)
        self.state = state

    def _scratch_dir(self, purpose: str) -> Path:
        return self.config.scratch_root / f"rtlfix-{purpose}-{time.time_ns()}"

    @staticmethod
    def _cleanup(scratch: Path) -> None:
        try:
            shutil.rmtree(scratch)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove scratch directory %s: %s", scratch, e)

    # ------------------------------------------------------------------
    # Shared checks
    # ------------------------------------------------------------------

    def _check_not_running(self) -> None:
        if self.is_running():
            raise RunningError("Claude Desktop is currently running.")

    def _check_writable(self, install: Installation) -> None:
        for path in (install.asar_path, install.exe_path):
            if not self.write_probe(path):
                raise LockedError(f"Cannot write to {path}. The file may be locked.", paths=[path])

    def _preflight(self, install: Installation) -> None:
        self._check_not_running()
        self._check_writable(install)
        marker = read_marker(install)
        if marker.patched:
            when = marker.marker.patched_at if marker.marker else "unknown"
            raise AlreadyPatchedError(f"Claude Desktop is already patched with the RTL fix (patched on: {when}).")

    def _inject(self, scratch: Path) -> None:
        target = scratch.joinpath(*self.config.patch.target_path.split("/"))
        if not target.is_file():
            raise StructureChangedError(
                f"{self.config.patch.target_path} not found inside app.asar.",
                paths=[target],
            )

        try:
            content = target.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatError(f"{self.config.patch.target_path} is not UTF-8 text: {e}", paths=[target]) from e
        if self.payload.is_patched(content):
            raise AlreadyPatchedCodeError(
                f"{self.config.patch.target_path} already contains RTL fix code, but no marker file was found."
            )

        payload = self.payload.render()
        comment = self.config.patch.trailing_comment
        if comment and comment in content:
            content = content.replace(comment, payload + "\n" + comment, 1)
        else:
            content += payload
        target.write_bytes(content.encode("utf-8"))

    # ------------------------------------------------------------------
    # Forward transaction
    # ------------------------------------------------------------------

    def patch(self) -> Progress:
        """Apply the RTL fix.

        Nothing is modified before the embedded hash is verified against the
        archive. From the repack on, any failure restores the backups before
        the outcome is returned.
        """
        self.state = PatchState.IDLE
        outcome = PatchOutcome()
        guard: BackupGuard | None = None
        scratch: Path | None = None

        try:
            yield (0.05, "Finding Claude Desktop installation...")
            install = self.locator()
            outcome.version = install.version
            self._enter(PatchState.LOCATED)
            logger.info("Patching Claude Desktop %s at %s", install.version, install.app_dir)

            yield (0.1, "Running safety checks...")
            self._preflight(install)
            self._enter(PatchState.PREFLIGHTED)

            yield (0.15, "Reading integrity hash from the executable...")
            old_hash = find_embedded_hash(install.exe_path)
            outcome.hash_before = old_hash
            self._enter(PatchState.HASH_READ)

            current = header_hash(install.asar_path)
            if current != old_hash:
                raise IntegrityMismatchError(
                    "Integrity mismatch: the hash in the executable doesn't match app.asar. "
                    f"EXE hash: {old_hash}, ASAR hash: {current}",
                    paths=[install.exe_path, install.asar_path],
                )
            self._enter(PatchState.HASH_VERIFIED)

            yield (0.25, "Creating backups...")
            guard = BackupGuard(install)
            with guard:
                outcome.backup_skipped = guard.outcome.skipped
                self._enter(PatchState.BACKED_UP)
                if guard.outcome.skipped:
                    outcome.warnings.append("Backups already exist (from a previous patch), using existing backups.")

                yield (0.35, "Extracting app.asar...")
                scratch = self._scratch_dir("patch")
                try:
                    self.transcoder.extract_all(install.asar_path, scratch)
                except RtlfixError:
                    raise
                except Exception as e:
                    raise IoError(f"Failed to extract app.asar: {e}", paths=[install.asar_path]) from e
                self._enter(PatchState.EXTRACTED)

                yield (0.5, "Injecting RTL fix...")
                self._inject(scratch)
                self._enter(PatchState.INJECTED)

                guard.arm()
                yield (0.65, "Repacking app.asar...")
                try:
                    self.transcoder.create_package(scratch, install.asar_path)
                except RtlfixError:
                    raise
                except Exception as e:
                    raise IoError(f"Failed to repack app.asar: {e}", paths=[install.asar_path]) from e

                size = install.asar_path.stat().st_size
                if size < self.config.patch.min_archive_size:
                    raise FormatError(
                        f"Repacked app.asar is suspiciously small ({size} bytes).",
                        paths=[install.asar_path],
                    )
                self._enter(PatchState.REPACKED)

                yield (0.8, "Updating integrity hash...")
                new_hash = header_hash(install.asar_path)
                rewrite_embedded_hash(install.exe_path, old_hash, new_hash)
                outcome.hash_after = new_hash
                self._enter(PatchState.REHASHED_HASH_PATCHED)

                yield (0.9, "Writing marker...")
                write_marker(install, old_hash, new_hash)
                self._enter(PatchState.MARKED)
                guard.release()

            self._enter(PatchState.DONE)
            logger.info("Patched Claude Desktop %s: %s -> %s", install.version, old_hash, new_hash)
            yield (1.0, "Complete")
        except RtlfixError as e:
            outcome.error = e
        except OSError as e:
            outcome.error = IoError(str(e))
        except Exception as e:
            logger.exception("Unexpected error while patching")
            outcome.error = RtlfixError(f"Unexpected error: {e}")
        finally:
            if scratch is not None:
                self._cleanup(scratch)

        if outcome.error is not None:
            logger.error("Patch failed in state %s: %s", self.state.value, outcome.error)
            if guard is not None and guard.rolled_back:
                outcome.rolled_back = True
                self._enter(PatchState.ROLLED_BACK)
            elif guard is not None and guard.restore_error is not None:
                outcome.restore_error = guard.restore_error

        outcome.state = self.state
        return outcome

    # ------------------------------------------------------------------
    # Reverse transaction
    # ------------------------------------------------------------------

    def unpatch(self) -> Generator[tuple[float, str], None, UnpatchOutcome]:
        """Restore the original files from the backups."""
        outcome = UnpatchOutcome()
        try:
            yield (0.1, "Finding Claude Desktop installation...")
            install = self.locator()
            outcome.version = install.version

            yield (0.3, "Running safety checks...")
            self._check_not_running()

            if not has_backups(install):
                if not read_marker(install).patched:
                    raise MissingBackupError(
                        "Claude Desktop is not patched, nothing to unpatch.",
                        hint="Run 'rtlfix patch' to apply the RTL fix.",
                    )
                raise MissingBackupError(
                    "No backup files found, cannot restore. The backup files may have been deleted.",
                    hint="Reinstall Claude Desktop to get a clean state.",
                )

            self._check_writable(install)

            yield (0.6, "Restoring original files from backup...")
            restored = restore_backup(install)
            outcome.restored = restored.restored
            logger.info("Unpatched Claude Desktop %s", install.version)
            yield (1.0, "Complete")
        except RtlfixError as e:
            outcome.error = e
            if isinstance(e, RestoreError):
                outcome.restored = e.restored
        except OSError as e:
            outcome.error = IoError(str(e))
        except Exception as e:
            logger.exception("Unexpected error while unpatching")
            outcome.error = RtlfixError(f"Unexpected error: {e}")

        if outcome.error is not None:
            logger.error("Unpatch failed: %s", outcome.error)
        return outcome

    # ------------------------------------------------------------------
    # Read-only projection
    # ------------------------------------------------------------------

    def _code_patched(self, install: Installation) -> bool | None:
        """Whether the live archive holds the payload; None if it cannot be checked."""
        scratch = self._scratch_dir("status")
        try:
            self.transcoder.extract_all(install.asar_path, scratch)
            target = scratch.joinpath(*self.config.patch.target_path.split("/"))
            if not target.is_file():
                return False
            return self.payload.is_patched(target.read_text(encoding="utf-8", errors="replace"))
        except Exception as e:
            logger.warning("Code-level patch check failed: %s", e)
            return None
        finally:
            self._cleanup(scratch)

    def status(self) -> Generator[tuple[float, str], None, StatusReport]:
        """Report marker, backups, running state and the code-level check."""
        report = StatusReport()
        try:
            yield (0.1, "Finding Claude Desktop installation...")
            install = self.locator()
        except RtlfixError as e:
            report.error = e
            return report
        except Exception as e:
            logger.exception("Unexpected error while locating Claude Desktop")
            report.error = RtlfixError(f"Unexpected error: {e}")
            return report

        report.version = install.version
        report.all_versions = list(install.all_versions)
        report.paths = install.paths()

        yield (0.3, "Reading marker and backups...")
        marker = read_marker(install)
        report.patched = marker.patched
        report.marker = marker.marker
        report.backups_exist = has_backups(install)
        if marker.patched and marker.marker is None:
            report.warnings.append("Marker file exists but could not be read.")

        yield (0.5, "Checking whether Claude Desktop is running...")
        report.running = self.is_running()

        yield (0.7, "Checking injected code...")
        report.code_patched = self._code_patched(install)
        if not report.in_sync:
            report.warnings.append("Marker and code state are out of sync!")

        yield (1.0, "Complete")
        return report
