"""Config patchers: register/unregister cc-notify in Codex and Claude Code config files."""

from .claude import (
    CLAUDE_HOOK_EVENTS,
    HOOK_MARKER,
    build_notify_command,
    remove_hook,
    upsert_hook,
)
from .codex import find_top_level_notify, remove_notify, render_notify_line, upsert_notify
from .errors import (
    InvalidCommandError,
    MalformedSettingsError,
    PatchError,
    UnterminatedAssignmentError,
)

__all__ = [
    "CLAUDE_HOOK_EVENTS",
    "HOOK_MARKER",
    "InvalidCommandError",
    "MalformedSettingsError",
    "PatchError",
    "UnterminatedAssignmentError",
    "build_notify_command",
    "find_top_level_notify",
    "remove_hook",
    "remove_notify",
    "render_notify_line",
    "upsert_hook",
    "upsert_notify",
]
