"""Configuration: config file paths, notification preferences, env overrides."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

NOTIFY_MODES = ("auto", "toast", "popup")
CONTENT_MODES = ("summary", "full", "complete")

DEFAULT_TOAST_APP_ID = "cc-notify.desktop"
# App ids written by older releases; both render toasts under the wrong name.
LEGACY_TOAST_APP_IDS = ("Windows PowerShell", "codex-notified.desktop")

TOOLS = ("codex", "claude")


class ConfigError(ValueError):
    pass


def codex_config_path() -> Path:
    return Path.home() / ".codex" / "config.toml"


def claude_settings_path() -> Path:
    return Path.home() / ".claude" / "settings.json"


def preferences_path() -> Path:
    if local_app_data := os.getenv("LOCALAPPDATA", "").strip():
        return Path(local_app_data) / "cc-notify" / "settings.json"
    return Path.home() / ".cc-notify" / "settings.json"


@dataclass
class Paths:
    codex: Path = field(default_factory=codex_config_path)
    claude: Path = field(default_factory=claude_settings_path)
    preferences: Path = field(default_factory=preferences_path)

    def for_tool(self, tool: str) -> Path:
        return self.codex if tool == "codex" else self.claude


@dataclass
class Preferences:
    enabled: bool = True
    persist: bool = True
    mode: str = "auto"
    content: str = "summary"
    include_dir: bool = True
    include_model: bool = False
    include_event: bool = False
    fields_configured: bool = True
    toast_app_id: str = DEFAULT_TOAST_APP_ID
    setup_done: bool = False
    # per-tool overrides; None / "" = use the global value
    codex_enabled: bool | None = None
    codex_mode: str = ""
    codex_content: str = ""
    claude_enabled: bool | None = None
    claude_mode: str = ""
    claude_content: str = ""

    def tool_prefs(self, source: str) -> tuple[bool, str, str]:
        """Effective ``(enabled, mode, content)`` for *source* ("codex" or "claude")."""
        enabled, mode, content = self.enabled, self.mode, self.content
        if source not in TOOLS:
            return enabled, mode, content
        override = getattr(self, f"{source}_enabled")
        if override is not None:
            enabled = override
        mode = getattr(self, f"{source}_mode") or mode
        content = getattr(self, f"{source}_content") or content
        return enabled, mode, content

    def normalize(self) -> Preferences:
        default = Preferences()
        if self.mode not in NOTIFY_MODES:
            self.mode = default.mode
        if self.content not in CONTENT_MODES:
            self.content = default.content
        app_id = self.toast_app_id if isinstance(self.toast_app_id, str) else ""
        if not app_id.strip() or app_id in LEGACY_TOAST_APP_IDS:
            self.toast_app_id = default.toast_app_id
        if not self.fields_configured:
            self.include_dir = default.include_dir
            self.include_model = default.include_model
            self.include_event = default.include_event
            self.fields_configured = True
        return self

    def to_dict(self) -> dict:
        data = asdict(self)
        for tool in TOOLS:
            for key in (f"{tool}_enabled", f"{tool}_mode", f"{tool}_content"):
                if data[key] in (None, ""):
                    del data[key]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Preferences:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def load_preferences(path: Path) -> tuple[Preferences, bool]:
    """Read preferences from *path*; returns ``(prefs, exists)``."""
    if not path.exists():
        return Preferences(), False
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"parse preferences: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("parse preferences: expected an object")
    try:
        prefs = Preferences.from_dict(data)
    except TypeError as e:
        raise ConfigError(f"parse preferences: {e}") from e
    return prefs.normalize(), True


def save_preferences(path: Path, prefs: Preferences) -> None:
    prefs.normalize()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(prefs.to_dict(), indent=2) + "\n", encoding="utf-8")


@dataclass
class Config:
    paths: Paths = field(default_factory=Paths)
    prefs: Preferences = field(default_factory=Preferences)
    prefs_exist: bool = False
    verbose: bool = False


def load_config(verbose: bool = False, paths: Paths | None = None) -> Config:
    """Load config with priority: env > .env > preferences file > defaults."""
    load_dotenv(find_dotenv(usecwd=True))

    config = Config(paths=paths or Paths(), verbose=verbose)
    config.prefs, config.prefs_exist = load_preferences(config.paths.preferences)

    if env_mode := os.getenv("CC_NOTIFY_MODE", "").strip().lower():
        config.prefs.mode = env_mode
    if env_app_id := os.getenv("CC_NOTIFY_TOAST_APP_ID", "").strip():
        config.prefs.toast_app_id = env_app_id
    config.prefs.normalize()

    return config
