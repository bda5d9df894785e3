"""Patch API module - the patch, unpatch and status transactions."""

from .BackupGuard import BackupGuard
from .outcomes import PatchOutcome, StatusReport, UnpatchOutcome
from .Patcher import Patcher
from .PatchState import PatchState

__all__ = ["BackupGuard", "PatchOutcome", "PatchState", "Patcher", "StatusReport", "UnpatchOutcome"]
