"""Turn a payload into a notification title and body."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath, PureWindowsPath

from ..core.utils import truncate
from .payload import TURN_COMPLETE, TURN_PAUSED, Payload

TITLES = {
    TURN_COMPLETE: "Codex Task Complete",
    TURN_PAUSED: "Codex Needs Input",
}

MAX_BODY_CHARS = 300


@dataclass
class RenderOptions:
    content_mode: str = "summary"  # summary | full | complete
    include_dir: bool = True
    include_model: bool = False
    include_event: bool = False


def _default_body(event_type: str) -> str:
    return "Waiting for your approval" if event_type == TURN_PAUSED else "Task completed"


def _first_non_empty(*values: str) -> str:
    for value in values:
        if value.strip():
            return value.strip()
    return ""


def clean_text(value: str) -> str:
    """Collapse whitespace per line, trim, and cap the length."""
    lines = value.replace("\r\n", "\n").split("\n")
    result = "\n".join(" ".join(line.split()) for line in lines).strip()
    return truncate(result, MAX_BODY_CHARS) or "Task completed"


def _dir_name(cwd: str) -> str:
    cwd = cwd.strip()
    if not cwd:
        return ""
    # payloads from Windows hosts carry backslash paths
    name = PureWindowsPath(cwd).name if "\\" in cwd else PurePath(cwd).name
    return name.strip()


def render_notification(
    payload: Payload, options: RenderOptions | None = None
) -> tuple[str, str] | None:
    """Return ``(title, body)``, or None for event types we do not announce."""
    options = options or RenderOptions()
    title = TITLES.get(payload.type)
    if title is None:
        return None

    default = _default_body(payload.type)
    if options.content_mode == "complete":
        body = "waiting for approval" if payload.type == TURN_PAUSED else "complete"
    elif options.content_mode == "full":
        body = _first_non_empty(payload.last_assistant_message, payload.summary, default)
    else:
        body = _first_non_empty(payload.summary, payload.last_assistant_message, default)
    body = clean_text(body)

    if options.include_dir and (name := _dir_name(payload.cwd)):
        body += f"\nDir: {name}"
    if options.include_model and payload.model.strip():
        body += f"\nModel: {payload.model.strip()}"
    if options.include_event:
        body += f"\nEvent: {payload.type}"
    return title, body
