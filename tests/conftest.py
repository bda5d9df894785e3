"""Shared pytest configuration and fixtures for all tests."""

import json
import shutil
from pathlib import Path

import pytest

from rtlfix.api.asar.AsarTranscoder import AsarTranscoder
from rtlfix.api.asar.create_package import create_package
from rtlfix.api.config.RtlfixConfig import RtlfixConfig
from rtlfix.api.install.find_install import find_install
from rtlfix.api.install.Installation import Installation
from rtlfix.api.integrity.header_hash import header_hash
from rtlfix.api.patch.Patcher import Patcher
from rtlfix.utils.logger import reset_logging


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external processes")
    for domain in ("asar", "backup", "cli", "config", "install", "integrity", "marker", "patch", "payload"):
        config.addinivalue_line("markers", f"{domain}: tests for the rtlfix.api.{domain} domain")


def pytest_collection_modifyitems(config, items):
    """Automatically apply markers based on test file location."""
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Installation Helpers
# =============================================================================

TRAILING_COMMENT = "//# sourceMappingURL=mainView.js.map"

MAIN_VIEW_JS = (
    '"use strict";\n'
    'const { contextBridge, ipcRenderer } = require("electron");\n'
    'contextBridge.exposeInMainWorld("claude", { send: (m) => ipcRenderer.send("msg", m) });\n'
    f"{TRAILING_COMMENT}\n"
)

EXE_PREFIX = b"MZ\x90\x00\x03\x00\x00\x00" + b"\x00" * 120 + b"This program cannot be run in DOS mode.\r\n"
EXE_SUFFIX = b"\x00" * 64 + b"\xde\xad\xbe\xef" * 32


def integrity_resource(hash_value: str) -> bytes:
    """The ElectronAsar/Integrity JSON as it appears inside the executable."""
    return b'[{"file":"resources\\\\app.asar","alg":"SHA256","value":"' + hash_value.encode("ascii") + b'"}]'


def build_install(
    base: Path,
    version: str = "1.2.3",
    main_view: str | None = MAIN_VIEW_JS,
    exe_hash: str | None = None,
    exe_extra: bytes = b"",
) -> Installation:
    """Create a fake Claude Desktop app-<version> directory under base.

    The archive holds .vite/build/mainView.js (unless main_view is None),
    a package.json and enough binary data to pass the minimum size check.
    The executable embeds the archive's header hash unless exe_hash is given.
    """
    src = base.parent / f"src-{version}"
    (src / "assets").mkdir(parents=True)
    (src / "package.json").write_text(json.dumps({"name": "claude", "version": version}))
    (src / "assets" / "icon.bin").write_bytes(bytes(range(256)) * 8)
    if main_view is not None:
        (src / ".vite" / "build").mkdir(parents=True)
        (src / ".vite" / "build" / "mainView.js").write_bytes(main_view.encode("utf-8"))

    app_dir = base / f"app-{version}"
    resources = app_dir / "resources"
    resources.mkdir(parents=True)
    create_package(src, resources / "app.asar")
    shutil.rmtree(src)

    value = exe_hash if exe_hash is not None else header_hash(resources / "app.asar")
    (app_dir / "claude.exe").write_bytes(EXE_PREFIX + integrity_resource(value) + exe_extra + EXE_SUFFIX)
    return find_install(base)


class FailingRepack(AsarTranscoder):
    """Truncates the archive then fails, like a disk filling up mid-write."""

    def create_package(self, src_dir, archive_path):
        archive_path.write_bytes(b"\x04\x00\x00\x00")
        raise RuntimeError("disk full")


class FailingExtract(AsarTranscoder):
    def extract_all(self, archive_path, dest_dir):
        raise RuntimeError("corrupt archive")


def drive(gen):
    """Run a Patcher generator to completion and return its outcome."""
    while True:
        try:
            next(gen)
        except StopIteration as stop:
            return stop.value


def run_cmd(cmd_func, *args, **kwargs):
    """Execute a cmd function and return the result with progress_callback executed."""
    result = cmd_func(*args, **kwargs)
    list(result.progress_callback(result))
    return result


def snapshot(install: Installation) -> dict[str, bytes]:
    """Bytes of the live archive and executable."""
    return {"asar": install.asar_path.read_bytes(), "exe": install.exe_path.read_bytes()}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def rtlfix_home(tmp_path: Path, monkeypatch) -> Path:
    """Point RTLFIX_HOME at a temporary directory and reset logging afterwards."""
    home = tmp_path / ".rtlfix"
    monkeypatch.setenv("RTLFIX_HOME", str(home))
    yield home
    reset_logging()


@pytest.fixture
def install_base(tmp_path: Path) -> Path:
    base = tmp_path / "AnthropicClaude"
    base.mkdir()
    return base


@pytest.fixture
def install(install_base: Path) -> Installation:
    """A clean, unpatched installation with a coherent embedded hash."""
    return build_install(install_base)


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return scratch


@pytest.fixture
def rtlfix_config(install_base: Path, scratch_root: Path) -> RtlfixConfig:
    return RtlfixConfig(
        install={"base_dir": str(install_base)},
        patch={"scratch_dir": str(scratch_root)},
    )


@pytest.fixture
def patcher(rtlfix_config: RtlfixConfig, install: Installation) -> Patcher:  # noqa: ARG001
    """Patcher against the fake installation with Claude Desktop not running."""
    return Patcher(rtlfix_config, is_running=lambda: False)


@pytest.fixture
def config_file(rtlfix_home: Path, rtlfix_config: RtlfixConfig) -> Path:
    """Write rtlfix_config to RTLFIX_HOME/config.json for commands that load it."""
    rtlfix_home.mkdir(parents=True, exist_ok=True)
    path = rtlfix_home / "config.json"
    path.write_text(rtlfix_config.model_dump_json(exclude_none=True))
    return path
