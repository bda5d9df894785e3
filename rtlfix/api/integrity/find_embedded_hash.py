"""Read the asar integrity hash embedded in the executable."""

from pathlib import Path

from ..errors import FormatError, IoError, NotFoundError
from ._is_hash_value import _is_hash_value

# Text that precedes the hash literal inside the integrity JSON resource
EMBEDDED_HASH_MARKER = b'"alg":"SHA256","value":"'
HASH_LENGTH = 64


def find_embedded_hash(executable_path: Path) -> str:
    """Return the 64-character hash that follows EMBEDDED_HASH_MARKER.

    The executable is scanned as raw bytes rather than parsed as a PE file.

    Raises:
        NotFoundError: If the marker is absent
        FormatError: If the following 64 bytes are not lowercase hex
        IoError: If the file cannot be read
    """
    executable_path = Path(executable_path)
    try:
        data = executable_path.read_bytes()
    except OSError as e:
        raise IoError(f"Cannot read {executable_path}: {e}", paths=[executable_path]) from e

    idx = data.find(EMBEDDED_HASH_MARKER)
    if idx == -1:
        raise NotFoundError(f"Could not find the integrity hash in {executable_path}", paths=[executable_path])

    start = idx + len(EMBEDDED_HASH_MARKER)
    raw = data[start : start + HASH_LENGTH]
    if not _is_hash_value(raw):
        shown = raw.decode("ascii", errors="replace")
        raise FormatError(
            f"Found the integrity marker but the hash is invalid: {shown!r}",
            paths=[executable_path],
        )

    return raw.decode("ascii")
