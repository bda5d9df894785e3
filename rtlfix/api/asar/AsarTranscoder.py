"""Default archive transcoder used by the patch orchestrator."""

from pathlib import Path

from .create_package import create_package
from .extract_all import extract_all


class AsarTranscoder:
    """Extracts and packs asar archives with the pure-Python codec."""

    def extract_all(self, archive_path: Path, dest_dir: Path) -> None:
        extract_all(archive_path, dest_dir)

    def create_package(self, src_dir: Path, archive_path: Path) -> None:
        create_package(src_dir, archive_path)
