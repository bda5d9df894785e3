"""Unit tests for rtlfix.api.install."""

import errno
import subprocess
from pathlib import Path

import pytest

from rtlfix.api.errors import NotInstalledError
from rtlfix.api.install import can_write, find_install, is_app_running
from tests.conftest import build_install

pytestmark = pytest.mark.install


def _fake_app(base: Path, name: str) -> Path:
    app_dir = base / name
    (app_dir / "resources").mkdir(parents=True)
    (app_dir / "resources" / "app.asar").write_bytes(b"asar")
    (app_dir / "claude.exe").write_bytes(b"MZ")
    return app_dir


def test_find_install_resolves_paths(install_base):
    install = build_install(install_base, version="1.2.3")

    assert install.version == "1.2.3"
    assert install.app_dir == install_base / "app-1.2.3"
    assert install.resources_dir == install.app_dir / "resources"
    assert install.asar_path == install.resources_dir / "app.asar"
    assert install.exe_path == install.app_dir / "claude.exe"
    assert install.paths() == {
        "app_dir": str(install.app_dir),
        "asar": str(install.asar_path),
        "exe": str(install.exe_path),
    }


def test_find_install_picks_newest_numerically(install_base):
    """1.10.0 is newer than 1.9.9 even though it sorts first as text."""
    for name in ("app-1.9.9", "app-1.10.0", "app-0.20.1"):
        _fake_app(install_base, name)
    (install_base / "packages").mkdir()
    (install_base / "app-latest").mkdir()

    install = find_install(install_base)

    assert install.version == "1.10.0"
    assert install.all_versions == ["1.10.0", "1.9.9", "0.20.1"]


def test_find_install_missing_base(tmp_path):
    with pytest.raises(NotInstalledError, match="not installed"):
        find_install(tmp_path / "nowhere")


def test_find_install_no_versions(install_base):
    (install_base / "Update.exe").write_bytes(b"MZ")

    with pytest.raises(NotInstalledError, match="No Claude Desktop versions"):
        find_install(install_base)


def test_find_install_incomplete_version(install_base):
    app_dir = _fake_app(install_base, "app-2.0.0")
    (app_dir / "claude.exe").unlink()

    with pytest.raises(NotInstalledError, match="incomplete") as exc_info:
        find_install(install_base)
    assert exc_info.value.paths == [app_dir / "claude.exe"]


def test_find_install_defaults_to_localappdata(tmp_path, monkeypatch):
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
    _fake_app(tmp_path / "AnthropicClaude", "app-1.0.0")

    assert find_install().version == "1.0.0"


def test_find_install_custom_exe_name(install_base):
    app_dir = _fake_app(install_base, "app-1.0.0")
    (app_dir / "Claude").write_bytes(b"\x7fELF")

    assert find_install(install_base, exe_name="Claude").exe_path == app_dir / "Claude"


def test_can_write_true_for_writable_file(tmp_path):
    path = tmp_path / "file.bin"
    path.write_bytes(b"data")

    assert can_write(path) is True
    assert path.read_bytes() == b"data"


def test_can_write_false_when_permission_denied(tmp_path, monkeypatch):
    path = tmp_path / "locked.bin"
    path.write_bytes(b"data")

    real_open = Path.open

    def denied(self, *args, **kwargs):
        if self == path:
            raise PermissionError(errno.EACCES, "Permission denied", str(self))
        return real_open(self, *args, **kwargs)

    monkeypatch.setattr(Path, "open", denied)

    assert can_write(path) is False


def test_can_write_false_when_busy(tmp_path, monkeypatch):
    path = tmp_path / "busy.bin"
    path.write_bytes(b"data")

    real_open = Path.open

    def busy(self, *args, **kwargs):
        if self == path:
            raise OSError(errno.EBUSY, "Device or resource busy", str(self))
        return real_open(self, *args, **kwargs)

    monkeypatch.setattr(Path, "open", busy)

    assert can_write(path) is False


def test_can_write_propagates_other_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        can_write(tmp_path / "missing.bin")


def test_is_app_running_uses_exit_status(monkeypatch):
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setattr(
        subprocess, "run", lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, stdout="1234\n", stderr="")
    )

    assert is_app_running("claude.exe") is True


def test_is_app_running_windows_tasklist(monkeypatch):
    monkeypatch.setattr("sys.platform", "win32")
    output = "INFO: No tasks are running which match the specified criteria.\n"
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, stdout=output))

    assert is_app_running("claude.exe") is False


def test_is_app_running_probe_failure_is_not_running(monkeypatch):
    def missing(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", missing)

    assert is_app_running("claude.exe") is False
