"""Tests for resolving the inspector script, interpreter and timeout."""

import sys
from pathlib import Path

import pytest

from drive_hygiene import config
from drive_hygiene.config import (
    DEFAULT_TIMEOUT_SECONDS,
    SCRIPT_NAME,
    InspectorConfig,
    find_inspector_script,
    find_powershell,
)
from drive_hygiene.errors import InspectorNotFound


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in (config.ENV_SCRIPT, config.ENV_POWERSHELL, config.ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def script(tmp_path) -> Path:
    path = tmp_path / "tools" / SCRIPT_NAME
    path.parent.mkdir()
    path.write_text("param([switch]$JsonOutput)\n")
    return path


def test_explicit_script_path(monkeypatch, script):
    monkeypatch.setenv(config.ENV_SCRIPT, str(script))
    assert find_inspector_script() == script


def test_explicit_script_path_must_exist(monkeypatch, tmp_path):
    monkeypatch.setenv(config.ENV_SCRIPT, str(tmp_path / "missing.ps1"))
    assert find_inspector_script() is None


def test_script_found_in_working_directory(tmp_path):
    (tmp_path / SCRIPT_NAME).write_text("")
    assert find_inspector_script().resolve() == (tmp_path / SCRIPT_NAME).resolve()


def test_explicit_interpreter(monkeypatch):
    monkeypatch.setenv(config.ENV_POWERSHELL, sys.executable)
    assert find_powershell() is not None


def test_explicit_interpreter_must_exist(monkeypatch, tmp_path):
    monkeypatch.setenv(config.ENV_POWERSHELL, str(tmp_path / "nope"))
    assert find_powershell() is None


def test_from_env_builds_config(monkeypatch, script):
    monkeypatch.setenv(config.ENV_SCRIPT, str(script))
    monkeypatch.setenv(config.ENV_POWERSHELL, sys.executable)
    monkeypatch.setenv(config.ENV_TIMEOUT, "45")

    cfg = InspectorConfig.from_env()

    assert cfg.script_path == script
    assert cfg.timeout_seconds == 45.0


def test_default_timeout(monkeypatch, script):
    monkeypatch.setenv(config.ENV_SCRIPT, str(script))
    monkeypatch.setenv(config.ENV_POWERSHELL, sys.executable)
    assert InspectorConfig.from_env().timeout_seconds == DEFAULT_TIMEOUT_SECONDS


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_timeout_rejected(monkeypatch, script, raw):
    monkeypatch.setenv(config.ENV_SCRIPT, str(script))
    monkeypatch.setenv(config.ENV_POWERSHELL, sys.executable)
    monkeypatch.setenv(config.ENV_TIMEOUT, raw)

    with pytest.raises(ValueError):
        InspectorConfig.from_env()


def test_missing_script_raises(monkeypatch):
    monkeypatch.setattr(config, "find_inspector_script", lambda: None)

    with pytest.raises(InspectorNotFound) as excinfo:
        InspectorConfig.from_env()

    assert isinstance(excinfo.value, FileNotFoundError)
    assert SCRIPT_NAME in str(excinfo.value)


def test_missing_interpreter_raises(monkeypatch, script):
    monkeypatch.setenv(config.ENV_SCRIPT, str(script))
    monkeypatch.setattr(config, "find_powershell", lambda: None)

    with pytest.raises(InspectorNotFound):
        InspectorConfig.from_env()
