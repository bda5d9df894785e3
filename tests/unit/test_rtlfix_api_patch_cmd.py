"""Unit tests for rtlfix.api.patch cmd_patch, cmd_unpatch and cmd_status.

Requirements Satisfied:

- Every command output validates against its registered schema
- A failed rollback names the live files still waiting for their backup
- A broken config file yields a config error instead of an exception
"""

import importlib
import shutil

import pytest

from rtlfix.api.errors import RestoreError
from rtlfix.api.patch import Patcher
from rtlfix.api.patch.cmd_patch import cmd_patch
from rtlfix.api.patch.cmd_status import cmd_status
from rtlfix.api.patch.cmd_unpatch import cmd_unpatch
from rtlfix.api.validate_output import validate_output
from tests.conftest import FailingRepack, run_cmd

pytestmark = pytest.mark.patch

patcher_module = importlib.import_module("rtlfix.api.patch.Patcher")


@pytest.fixture
def not_running(monkeypatch):
    """Commands built from the config probe the real process list; pretend it is empty."""
    monkeypatch.setattr(patcher_module, "is_app_running", lambda process_name: False)


def test_cmd_patch_success(patcher, install):
    result = run_cmd(cmd_patch, patcher)

    assert result.success is True
    assert result.result == "RTL fix applied to Claude Desktop v1.2.3"
    assert result.output["errors"] == []
    assert result.output["state"] == "done"
    assert result.output["error_kind"] == ""
    assert len(result.output["hash_after"]) == 64
    assert validate_output(cmd_patch, result.output) == result.output


def test_cmd_patch_rolled_back_hint(rtlfix_config, install):
    patcher = Patcher(rtlfix_config, is_running=lambda: False, transcoder=FailingRepack())

    result = run_cmd(cmd_patch, patcher)

    assert result.success is False
    assert result.output["rolled_back"] is True
    assert result.output["state"] == "rolled_back"
    assert result.output["hint"].startswith("Original files have been restored from backup.")
    assert result.result.startswith("Failed to patch: Failed to repack app.asar")


def test_cmd_patch_restore_failure_needs_manual_recovery(rtlfix_config, install, monkeypatch):
    def broken_restore(_install):
        raise RestoreError("Failed to restore app.asar", pending=[install.asar_path])

    monkeypatch.setattr(importlib.import_module("rtlfix.api.patch.BackupGuard"), "restore_backup", broken_restore)
    patcher = Patcher(rtlfix_config, is_running=lambda: False, transcoder=FailingRepack())

    result = run_cmd(cmd_patch, patcher)

    assert result.success is False
    assert len(result.output["errors"]) == 2
    assert result.output["restore_error"] == "Failed to restore app.asar"
    assert result.output["hint"].startswith("Manual recovery needed")
    assert result.output["pending"] == [str(install.asar_path)]
    assert f"{install.asar_path}.bak -> {install.asar_path}" in result.output["hint"]
    assert validate_output(cmd_patch, result.output) == result.output


def test_cmd_patch_running(rtlfix_config, install):
    result = run_cmd(cmd_patch, Patcher(rtlfix_config, is_running=lambda: True))

    assert result.success is False
    assert result.output["error_kind"] == "running"
    assert "Close Claude Desktop" in result.output["hint"]


def test_cmd_patch_from_config(config_file, install, not_running, rtlfix_home):
    result = run_cmd(cmd_patch)

    assert result.success is True
    log_text = (rtlfix_home / "rtlfix.log").read_text()
    assert "Patched Claude Desktop 1.2.3" in log_text


def test_cmd_patch_bad_config(rtlfix_home):
    rtlfix_home.mkdir()
    (rtlfix_home / "config.json").write_text("{broken")

    result = run_cmd(cmd_patch)

    assert result.success is False
    assert result.output["error_kind"] == "config"
    assert result.result.startswith("Failed to load configuration")
    assert validate_output(cmd_patch, result.output)["state"] == "idle"
    assert result.output["rolled_back"] is False
    assert result.output["pending"] == []


def test_cmd_unpatch_success(patcher, install):
    run_cmd(cmd_patch, patcher)

    result = run_cmd(cmd_unpatch, patcher)

    assert result.success is True
    assert result.output["restored"] == [str(install.asar_path), str(install.exe_path)]
    assert result.output["pending"] == []
    assert validate_output(cmd_unpatch, result.output) == result.output


def test_cmd_unpatch_reports_pending_files(patcher, install, monkeypatch):
    run_cmd(cmd_patch, patcher)
    real_copy = shutil.copy2

    def fail_on_exe(src, dst, *args, **kwargs):
        if dst == install.exe_path:
            raise OSError("disk error")
        return real_copy(src, dst, *args, **kwargs)

    monkeypatch.setattr(shutil, "copy2", fail_on_exe)

    result = run_cmd(cmd_unpatch, patcher)

    assert result.success is False
    assert result.output["error_kind"] == "restore"
    assert result.output["restored"] == [str(install.asar_path)]
    assert result.output["pending"] == [str(install.exe_path)]
    assert str(install.exe_path) in result.output["errors"][0]
    assert f"{install.exe_path}.bak -> {install.exe_path}" in result.output["hint"]
    assert validate_output(cmd_unpatch, result.output) == result.output


def test_cmd_unpatch_not_patched(patcher):
    result = run_cmd(cmd_unpatch, patcher)

    assert result.success is False
    assert result.output["error_kind"] == "missing_backup"
    assert result.result == "Failed to unpatch: Claude Desktop is not patched, nothing to unpatch."


def test_cmd_unpatch_bad_config(rtlfix_home):
    rtlfix_home.mkdir()
    (rtlfix_home / "config.json").write_text('{"log": {"level": "LOUD"}}')

    result = run_cmd(cmd_unpatch)

    assert result.success is False
    assert result.output["error_kind"] == "config"
    assert "log.level" in result.output["errors"][0]


def test_cmd_status_unpatched(patcher, install):
    result = run_cmd(cmd_status, patcher)

    assert result.success is True
    assert result.result == "Claude Desktop v1.2.3 is not patched"
    assert result.output["patch_info"] is None
    assert result.output["code_patched"] is False
    assert result.output["paths"]["asar"] == str(install.asar_path)
    assert validate_output(cmd_status, result.output) == result.output


def test_cmd_status_patched(patcher):
    run_cmd(cmd_patch, patcher)

    result = run_cmd(cmd_status, patcher)

    assert result.result == "Claude Desktop v1.2.3 is patched"
    assert result.output["patch_info"]["claudeVersion"] == "1.2.3"
    assert result.output["backups_exist"] is True
    assert result.output["warnings"] == []


def test_cmd_status_not_installed(config_file, not_running):
    result = run_cmd(cmd_status)

    assert result.success is False
    assert result.output["error_kind"] == "not_installed"
    assert result.output["hint"]
