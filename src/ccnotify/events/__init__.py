"""Events: parse host payloads and render notification text."""

from .payload import (
    TURN_COMPLETE,
    TURN_PAUSED,
    Payload,
    PayloadError,
    parse_payload,
    payload_from_claude_hook,
)
from .render import RenderOptions, clean_text, render_notification

__all__ = [
    "TURN_COMPLETE",
    "TURN_PAUSED",
    "Payload",
    "PayloadError",
    "RenderOptions",
    "clean_text",
    "parse_payload",
    "payload_from_claude_hook",
    "render_notification",
]
