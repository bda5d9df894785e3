"""Parse the JSON header of an asar archive."""

import json
import struct
from pathlib import Path
from typing import Any

from ..errors import FormatError, IoError

SIZE_PICKLE = struct.Struct("<II")  # payload size (4), header pickle size
HEADER_PICKLE = struct.Struct("<II")  # payload size, json length


def read_header(archive_path: Path) -> tuple[dict[str, Any], int]:
    """Return the decoded header and the offset where file data begins.

    Raises:
        FormatError: If the pickles or the JSON are malformed
        IoError: If the file cannot be read
    """
    archive_path = Path(archive_path)
    try:
        with archive_path.open("rb") as fh:
            prefix = fh.read(SIZE_PICKLE.size)
            if len(prefix) < SIZE_PICKLE.size:
                raise FormatError(f"Not an asar archive (too short): {archive_path}", paths=[archive_path])
            size_payload, header_size = SIZE_PICKLE.unpack(prefix)
            if size_payload != 4 or header_size < HEADER_PICKLE.size:
                raise FormatError(f"Not an asar archive (bad size pickle): {archive_path}", paths=[archive_path])

            header_pickle = fh.read(header_size)
    except OSError as e:
        raise IoError(f"Cannot read {archive_path}: {e}", paths=[archive_path]) from e

    if len(header_pickle) < header_size:
        raise FormatError(f"Archive ends inside its header: {archive_path}", paths=[archive_path])

    _payload_size, json_length = HEADER_PICKLE.unpack_from(header_pickle)
    if HEADER_PICKLE.size + json_length > header_size:
        raise FormatError(f"Header string overruns the header pickle: {archive_path}", paths=[archive_path])

    raw = header_pickle[HEADER_PICKLE.size : HEADER_PICKLE.size + json_length]
    try:
        header = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise FormatError(f"Archive header is not valid JSON: {e}", paths=[archive_path]) from e

    if not isinstance(header, dict) or not isinstance(header.get("files"), dict):
        raise FormatError(f"Archive header has no files table: {archive_path}", paths=[archive_path])

    return header, SIZE_PICKLE.size + header_size
