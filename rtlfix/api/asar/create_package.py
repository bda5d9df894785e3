"""Pack a directory tree into an asar archive."""

import hashlib
import json
import logging
import os
import stat
import struct
from pathlib import Path
from typing import Any

from ..errors import FormatError, IoError

logger = logging.getLogger(__name__)

BLOCK_SIZE = 4 * 1024 * 1024
U32 = struct.Struct("<I")


def _file_integrity(path: Path) -> dict[str, Any]:
    """Whole-file and per-block SHA-256, as Electron checks for packed files."""
    whole = hashlib.sha256()
    blocks: list[str] = []
    with path.open("rb") as fh:
        while True:
            block = fh.read(BLOCK_SIZE)
            if not block:
                break
            whole.update(block)
            blocks.append(hashlib.sha256(block).hexdigest())
    if not blocks:
        blocks.append(hashlib.sha256(b"").hexdigest())
    return {"algorithm": "SHA256", "hash": whole.hexdigest(), "blockSize": BLOCK_SIZE, "blocks": blocks}


def _link_target(link: Path, root: Path) -> str:
    """Link target relative to the (resolved) archive root, with forward slashes."""
    target = os.path.relpath(os.path.realpath(link), root)
    if target == os.curdir or target == os.pardir or target.startswith(os.pardir + os.sep):
        raise FormatError(f"Link {link} points outside {root}", paths=[link])
    return target.replace(os.sep, "/")


def _build_tree(directory: Path, root: Path, files: list[Path], offset: list[int]) -> dict[str, Any]:
    entries: dict[str, Any] = {}
    for child in sorted(directory.iterdir(), key=lambda p: p.name):
        if child.is_symlink():
            entries[child.name] = {"link": _link_target(child, root)}
        elif child.is_dir():
            entries[child.name] = {"files": _build_tree(child, root, files, offset)}
        else:
            size = child.stat().st_size
            node: dict[str, Any] = {"size": size, "offset": str(offset[0]), "integrity": _file_integrity(child)}
            if os.name != "nt" and child.stat().st_mode & stat.S_IXUSR:
                node["executable"] = True
            entries[child.name] = node
            files.append(child)
            offset[0] += size
    return entries


def _pickle_header(header: dict[str, Any]) -> bytes:
    raw = json.dumps(header, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    padding = (4 - len(raw) % 4) % 4
    payload = U32.pack(len(raw)) + raw + b"\x00" * padding
    header_pickle = U32.pack(len(payload)) + payload
    return U32.pack(4) + U32.pack(len(header_pickle)) + header_pickle


def create_package(src_dir: Path, archive_path: Path) -> None:
    """Write src_dir as an asar archive at archive_path.

    Entries are sorted by name so the same tree always gives the same bytes.
    The archive is written to a sibling temporary file and then moved over
    archive_path.

    Raises:
        FormatError: If a symlink in src_dir points outside it
        IoError: If reading the tree or writing the archive fails
    """
    src_dir = Path(src_dir)
    archive_path = Path(archive_path)
    temp_path = archive_path.with_name(archive_path.name + ".tmp")

    try:
        files: list[Path] = []
        root = Path(os.path.realpath(src_dir))
        header = {"files": _build_tree(src_dir, root, files, [0])}
        with temp_path.open("wb") as out:
            out.write(_pickle_header(header))
            for path in files:
                with path.open("rb") as fh:
                    while chunk := fh.read(BLOCK_SIZE):
                        out.write(chunk)
        temp_path.replace(archive_path)
    except OSError as e:
        try:
            temp_path.unlink()
        except FileNotFoundError:
            pass
        raise IoError(f"Failed to write archive {archive_path}: {e}", paths=[archive_path]) from e

    logger.info("Packed %d files from %s into %s", len(files), src_dir, archive_path)
