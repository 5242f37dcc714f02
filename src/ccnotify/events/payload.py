"""Event payloads: Codex notify JSON and Claude Code hook stdin."""

from __future__ import annotations

import json
from dataclasses import dataclass

TURN_COMPLETE = "agent-turn-complete"
TURN_PAUSED = "agent-turn-paused"


class PayloadError(ValueError):
    pass


@dataclass
class Payload:
    type: str
    summary: str = ""
    last_assistant_message: str = ""
    cwd: str = ""
    model: str = ""
    transcript_path: str = ""


def _str(data: dict, key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def parse_payload(raw: str) -> Payload:
    """Parse a Codex notify payload (hyphenated keys)."""
    raw = raw.lstrip("\ufeff").strip()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PayloadError(f"parse notify payload: {e}") from e
    if not isinstance(data, dict):
        raise PayloadError("parse notify payload: expected an object")

    payload = Payload(
        type=_str(data, "type"),
        summary=_str(data, "summary"),
        last_assistant_message=_str(data, "last-assistant-message"),
        cwd=_str(data, "cwd"),
        model=_str(data, "model"),
        transcript_path=_str(data, "transcript-path"),
    )
    if not payload.type.strip():
        raise PayloadError("parse notify payload: missing type")
    return payload


def payload_from_claude_hook(raw: str) -> Payload:
    """Convert Claude Code hook stdin JSON into a Codex-style payload.

    ``Stop`` hooks become a completed turn. ``Notification`` hooks carry a
    ``message`` (permission prompts, idle input) and become a paused turn.
    """
    raw = raw.lstrip("\ufeff").strip()
    if not raw:
        raise PayloadError("empty claude hook input")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PayloadError(f"parse claude hook input: {e}") from e
    if not isinstance(data, dict):
        raise PayloadError("parse claude hook input: expected an object")

    hook = _str(data, "hook_event_name") or _str(data, "hook_type")
    message = _str(data, "message").strip()

    payload = Payload(
        type=TURN_COMPLETE,
        cwd=_str(data, "cwd"),
        model=_str(data, "model"),
        transcript_path=_str(data, "transcript_path"),
    )
    if hook == "Notification" and message:
        payload.type = TURN_PAUSED
        payload.summary = message
    elif session_id := _str(data, "session_id"):
        payload.summary = f"Claude Code session {session_id} completed"
    return payload
