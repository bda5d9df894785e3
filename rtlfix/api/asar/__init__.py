"""Asar API module - Electron archive extraction and packing.

Layout: an 8-byte size pickle ``[4][header_pickle_size]``, then the header
pickle ``[payload_size][json_length][json][padding to 4]``, then the file
data. File offsets in the JSON header are decimal strings relative to the
end of the header pickle.
"""

from .AsarTranscoder import AsarTranscoder
from .create_package import create_package
from .extract_all import extract_all
from .read_header import read_header

__all__ = ["AsarTranscoder", "create_package", "extract_all", "read_header"]
