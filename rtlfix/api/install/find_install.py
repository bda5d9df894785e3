"""Locate the newest Claude Desktop installation."""

import os
import re
from pathlib import Path

from ..errors import NotInstalledError
from .Installation import Installation

APP_DIR_PATTERN = re.compile(r"^app-(\d+)\.(\d+)\.(\d+)$")


def _default_base_dir() -> Path:
    local_app_data = os.environ.get("LOCALAPPDATA")
    if local_app_data:
        return Path(local_app_data) / "AnthropicClaude"
    return Path(os.environ.get("USERPROFILE", "")) / "AppData" / "Local" / "AnthropicClaude"


def find_install(base_dir: str | Path | None = None, exe_name: str = "claude.exe") -> Installation:
    """Find the newest app-X.Y.Z directory under base_dir.

    Args:
        base_dir: Directory holding the versioned app folders; defaults to
            %LOCALAPPDATA%/AnthropicClaude
        exe_name: Launcher executable expected inside the app folder

    Raises:
        NotInstalledError: If the base directory, a version folder, app.asar or
            the executable is missing
    """
    base = Path(base_dir) if base_dir is not None else _default_base_dir()

    if not base.is_dir():
        raise NotInstalledError(
            f"Claude Desktop is not installed. Expected directory: {base}",
            paths=[base],
        )

    versions: list[tuple[tuple[int, int, int], Path]] = []
    for entry in base.iterdir():
        match = APP_DIR_PATTERN.match(entry.name)
        if match and entry.is_dir():
            versions.append(((int(match[1]), int(match[2]), int(match[3])), entry))

    if not versions:
        raise NotInstalledError(
            f"No Claude Desktop versions found in {base} (expected directories like app-1.1.2321)",
            paths=[base],
        )

    versions.sort(key=lambda item: item[0], reverse=True)
    app_dir = versions[0][1]
    resources_dir = app_dir / "resources"
    asar_path = resources_dir / "app.asar"
    exe_path = app_dir / exe_name

    missing = [p for p in (asar_path, exe_path) if not p.is_file()]
    if missing:
        listing = ", ".join(str(p) for p in missing)
        raise NotInstalledError(
            f"Claude Desktop {app_dir.name} is incomplete, missing: {listing}",
            hint="Reinstall Claude Desktop.",
            paths=missing,
        )

    return Installation(
        version=app_dir.name.removeprefix("app-"),
        app_dir=app_dir,
        resources_dir=resources_dir,
        asar_path=asar_path,
        exe_path=exe_path,
        all_versions=[path.name.removeprefix("app-") for _, path in versions],
    )
