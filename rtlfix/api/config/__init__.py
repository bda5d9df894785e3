"""Config API module."""

from .InstallConfig import InstallConfig
from .LogConfig import LogConfig
from .PatchConfig import PatchConfig
from .RtlfixConfig import RtlfixConfig

__all__ = ["InstallConfig", "LogConfig", "PatchConfig", "RtlfixConfig"]
