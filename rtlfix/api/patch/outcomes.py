"""Outcome values returned by the Patcher."""

from dataclasses import dataclass, field
from pathlib import Path

from ..errors import RtlfixError
from ..marker.Marker import Marker
from .PatchState import PatchState


@dataclass
class PatchOutcome:
    state: PatchState = PatchState.IDLE
    version: str = ""
    hash_before: str = ""
    hash_after: str = ""
    backup_skipped: bool = False
    rolled_back: bool = False
    error: RtlfixError | None = None
    restore_error: RtlfixError | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None and self.state is PatchState.DONE


@dataclass
class UnpatchOutcome:
    version: str = ""
    restored: list[Path] = field(default_factory=list)
    error: RtlfixError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class StatusReport:
    version: str = ""
    all_versions: list[str] = field(default_factory=list)
    running: bool = False
    patched: bool = False
    marker: Marker | None = None
    code_patched: bool | None = None
    backups_exist: bool = False
    paths: dict[str, str] = field(default_factory=dict)
    error: RtlfixError | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def in_sync(self) -> bool:
        """False when the code-level check disagrees with the marker."""
        return self.code_patched is None or self.code_patched == self.patched
