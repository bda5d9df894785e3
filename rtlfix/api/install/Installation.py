"""Resolved Claude Desktop installation."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Installation:
    """On-disk location of one Claude Desktop version.

    Resolved fresh for every command; never cached across runs.
    """

    version: str
    app_dir: Path
    resources_dir: Path
    asar_path: Path
    exe_path: Path
    all_versions: list[str] = field(default_factory=list)

    def paths(self) -> dict[str, str]:
        return {
            "app_dir": str(self.app_dir),
            "asar": str(self.asar_path),
            "exe": str(self.exe_path),
        }
