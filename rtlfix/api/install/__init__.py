"""Install API module - locating Claude Desktop and probing its state."""

from .can_write import can_write
from .find_install import find_install
from .Installation import Installation
from .is_app_running import is_app_running

__all__ = ["Installation", "can_write", "find_install", "is_app_running"]
