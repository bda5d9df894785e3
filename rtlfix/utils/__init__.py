"""rtlfix utility functions.

Each file in this package exports exactly one concern.
"""

from .logger import configure_logging, reset_logging
from .now_iso import now_iso

__all__ = ["configure_logging", "now_iso", "reset_logging"]
