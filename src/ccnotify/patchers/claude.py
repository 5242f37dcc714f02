"""Claude Code settings.json: register or remove our ``Stop``/``Notification`` hooks.

The settings object is loaded as a plain dict so keys we do not know about
are written back as they came in.
"""

from __future__ import annotations

import json

from .errors import MalformedSettingsError

HOOK_MARKER = "cc-notify"
CLAUDE_HOOK_EVENTS = ("Stop", "Notification")


def build_notify_command(exe_path: str) -> str:
    # Claude passes hook context as JSON on stdin
    return f"{exe_path} notify --claude"


def is_our_hook(entry: dict) -> bool:
    command = entry.get("command", "")
    return isinstance(command, str) and HOOK_MARKER in command


def parse_settings(content: str) -> dict:
    content = content.strip()
    if not content:
        return {}
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedSettingsError(f"parse claude settings: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedSettingsError("parse claude settings: top level is not an object")
    return data


def serialize_settings(data: dict) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def _get_hooks(data: dict) -> dict:
    hooks = data.get("hooks")
    if hooks is None:
        return {}
    if not isinstance(hooks, dict):
        raise MalformedSettingsError("parse hooks: expected an object")
    return hooks


def _get_matchers(hooks: dict, event: str) -> list[dict]:
    matchers = hooks.get(event)
    if matchers is None:
        return []
    if not isinstance(matchers, list) or not all(isinstance(m, dict) for m in matchers):
        raise MalformedSettingsError(f"parse hook event {event}: expected a list of objects")
    for m in matchers:
        entries = m.get("hooks")
        if entries is not None and (
            not isinstance(entries, list) or not all(isinstance(h, dict) for h in entries)
        ):
            raise MalformedSettingsError(f"parse hook event {event}: bad hooks list")
    return matchers


def remove_our_hooks(matchers: list[dict]) -> tuple[list[dict], bool]:
    """Strip our entries; drop a group only if that leaves it empty."""
    changed = False
    result: list[dict] = []
    for group in matchers:
        entries = group.get("hooks") or []
        kept = [h for h in entries if not is_our_hook(h)]
        if len(kept) != len(entries):
            changed = True
            if kept:
                result.append({**group, "hooks": kept})
        else:
            result.append(group)
    return result, changed


def upsert_hook(content: str, exe_path: str) -> tuple[str, bool]:
    """Register ``<exe_path> notify --claude`` on each hook event.

    Always reports a change: a fresh registration is appended after any
    previous one of ours has been stripped.
    """
    data = parse_settings(content)
    hooks = _get_hooks(data)
    command = build_notify_command(exe_path)

    for event in CLAUDE_HOOK_EVENTS:
        matchers, _ = remove_our_hooks(_get_matchers(hooks, event))
        matchers.append({"matcher": "", "hooks": [{"type": "command", "command": command}]})
        hooks[event] = matchers

    data["hooks"] = hooks
    return serialize_settings(data), True


def remove_hook(content: str) -> tuple[str, bool]:
    """Remove our hook entries; empty events and an empty ``hooks`` key go too."""
    data = parse_settings(content)
    hooks = _get_hooks(data)

    any_changed = False
    for event in CLAUDE_HOOK_EVENTS:
        matchers, removed = remove_our_hooks(_get_matchers(hooks, event))
        if not removed:
            continue
        any_changed = True
        if matchers:
            hooks[event] = matchers
        else:
            del hooks[event]

    if not any_changed:
        return content, False

    if hooks:
        data["hooks"] = hooks
    else:
        del data["hooks"]
    return serialize_settings(data), True
