"""Tests for config: paths, preferences file, normalization, env overrides."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from ccnotify.core.config import (
    DEFAULT_TOAST_APP_ID,
    ConfigError,
    Paths,
    Preferences,
    load_config,
    load_preferences,
    preferences_path,
    save_preferences,
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for var in ("CC_NOTIFY_MODE", "CC_NOTIFY_TOAST_APP_ID", "LOCALAPPDATA"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def _paths(tmp_path: Path) -> Paths:
    return Paths(
        codex=tmp_path / ".codex" / "config.toml",
        claude=tmp_path / ".claude" / "settings.json",
        preferences=tmp_path / "prefs" / "settings.json",
    )


class TestPaths:
    def test_home_based_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv("LOCALAPPDATA", raising=False)
        paths = Paths()
        assert paths.codex == tmp_path / ".codex" / "config.toml"
        assert paths.claude == tmp_path / ".claude" / "settings.json"
        assert paths.preferences == tmp_path / ".cc-notify" / "settings.json"

    def test_local_app_data_preferred(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "Local"))
        assert preferences_path() == tmp_path / "Local" / "cc-notify" / "settings.json"

    def test_for_tool(self, tmp_path):
        paths = _paths(tmp_path)
        assert paths.for_tool("codex") == paths.codex
        assert paths.for_tool("claude") == paths.claude


class TestPreferencesDefaults:
    def test_defaults(self):
        p = Preferences()
        assert p.enabled is True
        assert p.mode == "auto"
        assert p.content == "summary"
        assert p.include_dir is True
        assert p.include_model is False
        assert p.toast_app_id == DEFAULT_TOAST_APP_ID
        assert p.setup_done is False


class TestNormalize:
    def test_invalid_modes_reset(self):
        p = Preferences(mode="banner", content="everything").normalize()
        assert p.mode == "auto"
        assert p.content == "summary"

    def test_legacy_app_id_replaced(self):
        assert Preferences(toast_app_id="Windows PowerShell").normalize().toast_app_id == DEFAULT_TOAST_APP_ID
        assert Preferences(toast_app_id="  ").normalize().toast_app_id == DEFAULT_TOAST_APP_ID

    def test_custom_app_id_kept(self):
        assert Preferences(toast_app_id="My.App").normalize().toast_app_id == "My.App"

    def test_unconfigured_fields_get_defaults(self):
        p = Preferences(include_dir=False, include_model=True, fields_configured=False).normalize()
        assert p.include_dir is True
        assert p.include_model is False
        assert p.fields_configured is True

    def test_wrong_types_tolerated(self):
        p = Preferences(mode=3, toast_app_id=None).normalize()
        assert p.mode == "auto"
        assert p.toast_app_id == DEFAULT_TOAST_APP_ID


class TestToolPrefs:
    def test_global_values(self):
        assert Preferences(mode="popup").tool_prefs("codex") == (True, "popup", "summary")

    def test_overrides(self):
        p = Preferences(claude_enabled=False, claude_mode="toast", claude_content="full")
        assert p.tool_prefs("claude") == (False, "toast", "full")
        assert p.tool_prefs("codex") == (True, "auto", "summary")

    def test_unknown_source_uses_global(self):
        assert Preferences(codex_enabled=False).tool_prefs("other") == (True, "auto", "summary")


class TestPreferencesFile:
    def test_missing_file(self, tmp_path):
        prefs, exists = load_preferences(tmp_path / "nope.json")
        assert exists is False
        assert prefs == Preferences()

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "sub" / "settings.json"
        save_preferences(path, Preferences(mode="popup", include_model=True, setup_done=True))
        prefs, exists = load_preferences(path)
        assert exists is True
        assert prefs.mode == "popup"
        assert prefs.include_model is True
        assert prefs.setup_done is True

    def test_unset_overrides_not_written(self, tmp_path):
        path = tmp_path / "settings.json"
        save_preferences(path, Preferences(codex_mode="toast"))
        data = json.loads(path.read_text())
        assert data["codex_mode"] == "toast"
        assert "claude_mode" not in data
        assert "codex_enabled" not in data

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"mode": "toast", "approval_timeout": 60}))
        prefs, _ = load_preferences(path)
        assert prefs.mode == "toast"

    def test_bom_accepted(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("\ufeff" + json.dumps({"content": "full"}), encoding="utf-8")
        prefs, _ = load_preferences(path)
        assert prefs.content == "full"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{broken")
        with pytest.raises(ConfigError, match="parse preferences"):
            load_preferences(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_bytes(b'{"mode": "caf\xe9"}')
        with pytest.raises(ConfigError, match="parse preferences"):
            load_preferences(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            load_preferences(path)


class TestLoadConfig:
    def test_defaults_without_file(self, clean_env):
        config = load_config(paths=_paths(clean_env))
        assert config.prefs_exist is False
        assert config.prefs.mode == "auto"

    def test_file_values(self, clean_env):
        paths = _paths(clean_env)
        save_preferences(paths.preferences, Preferences(mode="popup"))
        config = load_config(verbose=True, paths=paths)
        assert config.prefs_exist is True
        assert config.prefs.mode == "popup"
        assert config.verbose is True

    def test_env_overrides_file(self, clean_env, monkeypatch):
        paths = _paths(clean_env)
        save_preferences(paths.preferences, Preferences(mode="popup"))
        monkeypatch.setenv("CC_NOTIFY_MODE", " TOAST ")
        monkeypatch.setenv("CC_NOTIFY_TOAST_APP_ID", "Custom.App")
        config = load_config(paths=paths)
        assert config.prefs.mode == "toast"
        assert config.prefs.toast_app_id == "Custom.App"

    def test_invalid_env_mode_falls_back(self, clean_env, monkeypatch):
        monkeypatch.setenv("CC_NOTIFY_MODE", "loud")
        assert load_config(paths=_paths(clean_env)).prefs.mode == "auto"

    def test_dotenv_file(self, clean_env):
        (clean_env / ".env").write_text("CC_NOTIFY_MODE=popup\n")
        with patch.dict(os.environ):
            config = load_config(paths=_paths(clean_env))
        assert config.prefs.mode == "popup"
