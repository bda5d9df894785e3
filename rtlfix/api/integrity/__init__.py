"""Integrity API module.

Bridges the asar header hash and the hash literal embedded in the executable.

Electron hashes only the header JSON string of the archive::

    offset 0-3    size pickle payload size (uint32 LE, always 4)
    offset 4-7    header pickle size (uint32 LE)
    offset 8-11   header pickle payload size (uint32 LE)
    offset 12-15  header string length (uint32 LE)
    offset 16+    header JSON string

The executable stores the digest in its ElectronAsar/Integrity resource as
``[{"file":"resources\\app.asar","alg":"SHA256","value":"<64 hex>"}]``.
"""

from .find_embedded_hash import EMBEDDED_HASH_MARKER, find_embedded_hash
from .header_hash import MAX_HEADER_SIZE, header_hash
from .rewrite_embedded_hash import rewrite_embedded_hash

__all__ = [
    "EMBEDDED_HASH_MARKER",
    "MAX_HEADER_SIZE",
    "find_embedded_hash",
    "header_hash",
    "rewrite_embedded_hash",
]
