"""States of the patch transaction."""

from enum import Enum


class PatchState(Enum):
    IDLE = "idle"
    LOCATED = "located"
    PREFLIGHTED = "preflighted"
    HASH_READ = "hash_read"
    HASH_VERIFIED = "hash_verified"
    BACKED_UP = "backed_up"
    EXTRACTED = "extracted"
    INJECTED = "injected"
    REPACKED = "repacked"
    REHASHED_HASH_PATCHED = "rehashed_hash_patched"
    MARKED = "marked"
    DONE = "done"
    ROLLED_BACK = "rolled_back"
