"""Marker API module - side-car record asserting the installation is patched."""

from .Marker import Marker, MarkerHashes
from .marker_path import marker_path
from .read_marker import MarkerStatus, read_marker
from .write_marker import write_marker

__all__ = ["Marker", "MarkerHashes", "MarkerStatus", "marker_path", "read_marker", "write_marker"]
