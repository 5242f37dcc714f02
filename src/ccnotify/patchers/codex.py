"""Codex config.toml: insert, replace or remove the top-level ``notify`` key.

Only the ``notify`` assignment is touched; every other line is written back
verbatim. A replaced multi-line array is always collapsed to one line.
"""

from __future__ import annotations

from .errors import InvalidCommandError, UnterminatedAssignmentError
from .scanner import (
    detect_newline,
    first_table_index,
    join_lines,
    split_bom,
    split_lines,
    trim_leading_blank_lines,
)
from .state import AssignmentState

NOTIFY_KEY = "notify"

_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
}


def quote_toml_string(value: str) -> str:
    return '"' + "".join(_TOML_ESCAPES.get(ch, ch) for ch in value) + '"'


def render_notify_line(command_parts: list[str]) -> str:
    return f"{NOTIFY_KEY} = [{', '.join(quote_toml_string(p) for p in command_parts)}]"


def is_notify_assignment_start(line: str) -> bool:
    trimmed = line.lstrip(" \t")
    if not trimmed or trimmed.startswith("#"):
        return False

    key_end = 0
    while key_end < len(trimmed) and trimmed[key_end] not in " \t=":
        key_end += 1
    if trimmed[:key_end] != NOTIFY_KEY:
        return False
    return trimmed[key_end:].lstrip(" \t").startswith("=")


def _after_equals(line: str) -> str:
    _, sep, rest = line.partition("=")
    return rest if sep else ""


def find_top_level_notify(root_lines: list[str]) -> tuple[int, int] | None:
    """Return the ``(start, end)`` span of the notify assignment, end exclusive."""
    for i, line in enumerate(root_lines):
        if not is_notify_assignment_start(line):
            continue

        state = AssignmentState()
        state.scan(_after_equals(line))
        end = i + 1
        while state.needs_continuation() and end < len(root_lines):
            state.scan(root_lines[end])
            end += 1
        if state.needs_continuation():
            raise UnterminatedAssignmentError("unterminated top-level notify assignment")
        return i, end
    return None


def upsert_notify(content: str, command_parts: list[str]) -> tuple[str, bool]:
    """Insert or replace the top-level notify assignment.

    Returns ``(content, changed)``. When the existing line already matches,
    the original content comes back untouched with ``changed=False``.
    """
    if not command_parts:
        raise InvalidCommandError("notify command cannot be empty")

    bom, content = split_bom(content)
    newline = detect_newline(content)
    lines = split_lines(content)
    notify_line = render_notify_line(command_parts)

    if not lines:
        return bom + notify_line + newline, True

    first_table = first_table_index(lines)
    span = find_top_level_notify(lines[:first_table])

    if span is not None:
        start, end = span
        if end - start == 1 and lines[start].strip() == notify_line:
            return bom + content, False
        updated = lines[:start] + [notify_line] + lines[end:]
        return bom + join_lines(updated, newline), True

    if first_table == 0:
        # document opens with a table header: keep a blank line before it
        return bom + join_lines([notify_line, ""] + lines, newline), True

    updated = lines[:first_table] + [notify_line] + lines[first_table:]
    return bom + join_lines(updated, newline), True


def remove_notify(content: str) -> tuple[str, bool]:
    """Remove the top-level notify assignment if present."""
    bom, content = split_bom(content)
    newline = detect_newline(content)
    lines = split_lines(content)
    if not lines:
        return bom + content, False

    span = find_top_level_notify(lines[: first_table_index(lines)])
    if span is None:
        return bom + content, False

    start, end = span
    updated = trim_leading_blank_lines(lines[:start] + lines[end:])
    return bom + join_lines(updated, newline), True
