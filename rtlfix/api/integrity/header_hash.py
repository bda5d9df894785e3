"""Compute the SHA-256 of an asar archive's header string."""

import hashlib
import struct
from pathlib import Path

from ..errors import FormatError, IoError

HEADER_PREFIX_SIZE = 16
HEADER_LENGTH_OFFSET = 12

# Real headers are a few MiB at most; anything larger is not an asar
MAX_HEADER_SIZE = 64 * 1024 * 1024


def header_hash(archive_path: Path) -> str:
    """Return the SHA-256 hex digest of the header string of archive_path.

    Only the 16-byte prefix and the declared header bytes are read; the file
    payload after the header does not affect the result.

    Raises:
        FormatError: If the declared length is zero or larger than MAX_HEADER_SIZE
        IoError: If the file cannot be read or is shorter than the prefix or the
            declared header
    """
    archive_path = Path(archive_path)
    try:
        with archive_path.open("rb") as fh:
            prefix = fh.read(HEADER_PREFIX_SIZE)
            if len(prefix) < HEADER_PREFIX_SIZE:
                raise IoError(
                    f"Archive is too short to hold a header ({len(prefix)} bytes): {archive_path}",
                    paths=[archive_path],
                )

            (length,) = struct.unpack_from("<I", prefix, HEADER_LENGTH_OFFSET)
            if length == 0 or length > MAX_HEADER_SIZE:
                raise FormatError(
                    f"Declared header length {length} is not plausible for an asar archive: {archive_path}",
                    paths=[archive_path],
                )

            header = fh.read(length)
    except OSError as e:
        raise IoError(f"Cannot read {archive_path}: {e}", paths=[archive_path]) from e

    if len(header) < length:
        raise IoError(
            f"Archive ends inside its header (declared {length} bytes, found {len(header)}): {archive_path}",
            paths=[archive_path],
        )

    return hashlib.sha256(header).hexdigest()
