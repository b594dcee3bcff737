"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from insomnia_store.settings import StoreSettings, default_data_dir, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INSOMNIA_MCP_APP_DATA_DIR", raising=False)
    settings = StoreSettings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.project_id is None
    assert settings.port == 3847
    assert settings.resolve_data_dir() == default_data_dir()


def test_insomnia_app_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("INSOMNIA_APP_DATA_DIR", str(tmp_path))
    assert StoreSettings(_env_file=None).resolve_data_dir() == tmp_path


def test_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INSOMNIA_MCP_PROJECT_ID", "proj_team")
    monkeypatch.setenv("INSOMNIA_MCP_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("INSOMNIA_MCP_PORT", "9000")

    settings = StoreSettings(_env_file=None)

    assert settings.project_id == "proj_team"
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000


def test_default_data_dir_per_platform(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    monkeypatch.setattr("sys.platform", "darwin")
    assert default_data_dir() == tmp_path / "Library" / "Application Support" / "Insomnia"
    monkeypatch.setattr("sys.platform", "win32")
    assert default_data_dir() == tmp_path / "AppData" / "Roaming" / "Insomnia"
    monkeypatch.setattr("sys.platform", "linux")
    assert default_data_dir() == tmp_path / ".config" / "Insomnia"


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("INSOMNIA_MCP_PROJECT_ID", "proj_changed")
    assert get_settings() is first

    get_settings.cache_clear()
    assert get_settings().project_id == "proj_changed"
