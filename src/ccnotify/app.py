"""Notify dispatch: payload -> preferences -> rendered text -> notifier."""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path

from .core.config import Config, Preferences
from .events import RenderOptions, parse_payload, payload_from_claude_hook, render_notification
from .events.payload import Payload, PayloadError
from .notifier import Notifier, create_notifier

logger = logging.getLogger(__name__)

DEFAULT_TEST_TITLE = "Codex Notification Test"
DEFAULT_TEST_BODY = "cc-notify is ready"
DEFAULT_TOAST_TITLE = "Codex Toast Test"
DEFAULT_TOAST_BODY = "toast mode test from cc-notify"

SAMPLE_PAYLOAD = Payload(
    type="agent-turn-complete",
    summary="Sample summary: work completed.",
    last_assistant_message="Sample full answer: all requested changes are finished.",
    cwd="C:\\sample\\project",
    model="gpt-5",
)


def resolve_payload_text(args: tuple[str, ...] | list[str]) -> str:
    """Codex passes the payload as argv; ``--file``/``--b64`` are for manual runs."""
    if not args:
        raise PayloadError("notify payload argument is required")
    if args[0] == "--file":
        if len(args) < 2:
            raise PayloadError("notify --file requires a path argument")
        try:
            return Path(args[1]).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            raise PayloadError(f"read notify payload file: {e}") from e
    if args[0] == "--b64":
        if len(args) < 2:
            raise PayloadError("notify --b64 requires a base64 payload argument")
        try:
            return base64.b64decode(args[1].strip(), validate=True).decode("utf-8").strip()
        except (binascii.Error, UnicodeDecodeError) as e:
            raise PayloadError(f"decode notify base64 payload: {e}") from e
    return " ".join(args).strip()


def render_options(prefs: Preferences, content: str) -> RenderOptions:
    return RenderOptions(
        content_mode=content,
        include_dir=prefs.include_dir,
        include_model=prefs.include_model,
        include_event=prefs.include_event,
    )


def handle_notify(
    config: Config, raw: str, source: str = "codex", notifier: Notifier | None = None
) -> str:
    """Send the notification for one event; returns a status line for the CLI."""
    if source == "claude":
        payload = payload_from_claude_hook(raw)
    else:
        payload = parse_payload(raw)

    enabled, mode, content = config.prefs.tool_prefs(source)
    if not enabled:
        return f"notifications disabled for {source}"

    rendered = render_notification(payload, render_options(config.prefs, content))
    if rendered is None:
        return f"ignored event type: {payload.type}"
    title, body = rendered

    service = notifier or create_notifier(mode, config.prefs.toast_app_id)
    logger.debug("notifying via %s: %r", type(service).__name__, title)
    service.notify(title, body)
    return f"notification sent: {payload.type} ({source})"


def send_preview(prefs: Preferences, source: str = "", notifier: Notifier | None = None) -> None:
    """Send the sample notification with the effective settings of *source*."""
    _, mode, content = prefs.tool_prefs(source)
    title, body = render_notification(SAMPLE_PAYLOAD, render_options(prefs, content))
    service = notifier or create_notifier(mode, prefs.toast_app_id)
    service.notify(title, body)
