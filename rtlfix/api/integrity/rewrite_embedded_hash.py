"""Replace the embedded integrity hash in the executable."""

import logging
from pathlib import Path

from ..errors import AmbiguousMatchError, FormatError, IoError, NotFoundError
from ._is_hash_value import _is_hash_value

logger = logging.getLogger(__name__)


def rewrite_embedded_hash(executable_path: Path, old: str, new: str) -> None:
    """Overwrite the single occurrence of old with new, in place.

    The file keeps its size; only the 64 hash bytes are written.

    Raises:
        FormatError: If old or new is not a 64-character lowercase hex digest
        NotFoundError: If old does not occur in the file
        AmbiguousMatchError: If old occurs more than once
        IoError: If the file cannot be read or written
    """
    if old == new:
        logger.debug("Embedded hash already %s, nothing to rewrite", new)
        return

    if not _is_hash_value(old) or not _is_hash_value(new):
        raise FormatError(f"Invalid hash format: old={old!r} new={new!r}")

    executable_path = Path(executable_path)
    old_bytes = old.encode("ascii")

    try:
        data = executable_path.read_bytes()
    except OSError as e:
        raise IoError(f"Cannot read {executable_path}: {e}", paths=[executable_path]) from e

    idx = data.find(old_bytes)
    if idx == -1:
        raise NotFoundError(
            f"Could not find the old hash in {executable_path}. "
            "The executable may have been modified by another tool or updated.",
            paths=[executable_path],
        )

    second = data.find(old_bytes, idx + 1)
    if second != -1:
        raise AmbiguousMatchError(
            f"Old hash appears more than once in {executable_path} (offsets {idx} and {second})",
            paths=[executable_path],
        )

    try:
        with executable_path.open("r+b") as fh:
            fh.seek(idx)
            fh.write(new.encode("ascii"))
    except OSError as e:
        raise IoError(f"Cannot write {executable_path}: {e}", paths=[executable_path]) from e

    logger.info("Rewrote embedded hash at offset %d in %s", idx, executable_path)
