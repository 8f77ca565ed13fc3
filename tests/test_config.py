"""Tests for oaslint.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pytest

from oaslint.config import (
    _atomic_write,
    get_config_dir,
    get_data_dir,
    global_config_path,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
)
from oaslint.exceptions import ConfigError
from oaslint.models import FetchConfig, GlobalConfig, OutputConfig


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("oaslint.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "oaslint"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("oaslint.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "oaslint"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("oaslint.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_data_dir() == tmp_path / ".local" / "share" / "oaslint"

    def test_fallback_dirs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("oaslint.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".oaslint"
        assert get_data_dir() == tmp_path / ".oaslint" / "data"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_and_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "sub" / "config.json"
        _atomic_write(target, '{"a": 1}\n')
        assert target.read_text() == '{"a": 1}\n'
        assert [p.name for p in target.parent.iterdir()] == ["config.json"]

    def test_failure_keeps_old_content(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        target = tmp_path / "config.json"
        target.write_text("old")

        def _fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", _fail)
        with pytest.raises(OSError, match="disk full"):
            _atomic_write(target, "new")
        assert target.read_text() == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["config.json"]


# ---------------------------------------------------------------------------
# Global and project config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        assert load_global_config() == GlobalConfig()

    def test_round_trip(self, isolated_config: Path) -> None:
        config = GlobalConfig(
            fetch=FetchConfig(timeout=5, verify_ssl=False),
            output=OutputConfig(format="json"),
        )
        save_global_config(config)
        assert global_config_path().is_file()
        assert load_global_config() == config

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        global_config_path().write_text("{broken", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_invalid_value_raises(self, isolated_config: Path) -> None:
        _write_json(global_config_path(), {"fetch": {"timeout": -1}})
        with pytest.raises(ConfigError):
            load_global_config()


class TestProjectConfig:
    def test_none_when_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "oaslint.json", {"fetch": {"timeout": 3}})
        assert load_project_config() == {"fetch": {"timeout": 3}}

    def test_non_object_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "oaslint.json", ["fetch"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config() == GlobalConfig()

    def test_layers_in_order(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        save_global_config(GlobalConfig(fetch=FetchConfig(timeout=10, verify_ssl=False)))
        assert resolve_config().fetch.timeout == 10

        _write_json(isolated_config / "oaslint.json", {"fetch": {"timeout": 20}})
        config = resolve_config()
        assert config.fetch.timeout == 20
        # Keys the project file does not set keep the user-level value.
        assert config.fetch.verify_ssl is False

        monkeypatch.setenv("OASLINT_TIMEOUT", "40")
        assert resolve_config().fetch.timeout == 40

        assert resolve_config(cli_timeout=50).fetch.timeout == 50

    def test_format_precedence(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(isolated_config / "oaslint.json", {"output": {"format": "plain"}})
        assert resolve_config().output.format == "plain"
        monkeypatch.setenv("OASLINT_FORMAT", "rich")
        assert resolve_config().output.format == "rich"
        assert resolve_config(cli_format="json").output.format == "json"

    def test_bad_env_timeout(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OASLINT_TIMEOUT", "soon")
        with pytest.raises(ConfigError, match="OASLINT_TIMEOUT"):
            resolve_config()

    def test_bad_env_format(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OASLINT_FORMAT", "xml")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
