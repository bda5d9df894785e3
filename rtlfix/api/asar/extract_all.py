"""Extract every entry of an asar archive to a directory."""

import logging
import os
import shutil
import stat
from collections.abc import Iterator
from pathlib import Path, PurePosixPath
from typing import Any

from ..errors import FormatError, IoError
from .read_header import read_header

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 2 * 1024 * 1024


def _walk(files: dict[str, Any], prefix: PurePosixPath) -> Iterator[tuple[PurePosixPath, dict[str, Any]]]:
    for name, node in files.items():
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise FormatError(f"Unsafe entry name in archive: {name!r}")
        path = prefix / name
        yield path, node
        if "files" in node:
            yield from _walk(node["files"], path)


def _copy_range(src, dest: Path, offset: int, size: int) -> None:
    src.seek(offset)
    remaining = size
    with dest.open("wb") as out:
        while remaining > 0:
            chunk = src.read(min(COPY_CHUNK_SIZE, remaining))
            if not chunk:
                raise FormatError(f"Archive data ends before {dest.name} is complete")
            out.write(chunk)
            remaining -= len(chunk)


def _link_source(dest_dir: Path, rel: PurePosixPath, link: Any) -> Path:
    """Resolve a header link, which is relative to the archive root."""
    if not isinstance(link, str) or not link:
        raise FormatError(f"Link entry {rel} has no target")
    parts = PurePosixPath(link.replace("\\", "/")).parts
    if not parts or PurePosixPath(link).is_absolute() or ".." in parts or ":" in parts[0]:
        raise FormatError(f"Link {rel} -> {link} points outside the archive")
    return dest_dir.joinpath(*parts)


def _make_link(source: Path, target: Path, rel: PurePosixPath) -> None:
    """Symlink target to source; copy source instead where symlinks are not allowed."""
    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        os.symlink(os.path.relpath(source, target.parent), target, target_is_directory=source.is_dir())
        return
    except OSError as e:
        logger.warning("Cannot create symlink %s, copying its target instead: %s", rel, e)
    if source.is_dir():
        shutil.copytree(source, target)
    else:
        shutil.copy2(source, target)


def extract_all(archive_path: Path, dest_dir: Path) -> None:
    """Extract archive_path into dest_dir.

    Entries flagged "unpacked" are copied from the sibling ``<archive>.unpacked``
    directory. Links are created once every file is in place, as symlinks
    relative to their own directory, or as copies of their target where the
    platform refuses symlinks.

    Raises:
        FormatError: If the header is malformed or an entry points outside dest_dir
        IoError: If reading or writing fails
    """
    archive_path = Path(archive_path)
    dest_dir = Path(dest_dir)
    header, data_offset = read_header(archive_path)
    unpacked_root = archive_path.with_name(archive_path.name + ".unpacked")
    links: list[tuple[PurePosixPath, Path, Path]] = []

    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        with archive_path.open("rb") as src:
            for rel, node in _walk(header["files"], PurePosixPath()):
                target = dest_dir.joinpath(*rel.parts)
                if "files" in node:
                    target.mkdir(parents=True, exist_ok=True)
                elif "link" in node:
                    links.append((rel, _link_source(dest_dir, rel, node["link"]), target))
                elif node.get("unpacked"):
                    target.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(unpacked_root.joinpath(*rel.parts), target)
                else:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    try:
                        offset = int(node.get("offset", "0"))
                        size = int(node["size"])
                    except (KeyError, TypeError, ValueError) as e:
                        raise FormatError(f"Entry {rel} has no usable offset/size", paths=[archive_path]) from e
                    _copy_range(src, target, data_offset + offset, size)
                    if node.get("executable"):
                        target.chmod(target.stat().st_mode | stat.S_IXUSR)
        for rel, source, target in links:
            _make_link(source, target, rel)
    except OSError as e:
        raise IoError(f"Failed to extract {archive_path}: {e}", paths=[archive_path, dest_dir]) from e
