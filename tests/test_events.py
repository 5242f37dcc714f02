"""Tests for event payload parsing and notification rendering."""

import json

import pytest

from ccnotify.events import (
    Payload,
    PayloadError,
    RenderOptions,
    parse_payload,
    payload_from_claude_hook,
    render_notification,
)
from ccnotify.events.render import clean_text


class TestParsePayload:
    def test_hyphenated_keys(self):
        raw = json.dumps(
            {
                "type": "agent-turn-complete",
                "summary": "done",
                "last-assistant-message": "all done",
                "cwd": "/work/app",
                "model": "gpt-5",
                "transcript-path": "/tmp/t.jsonl",
            }
        )
        p = parse_payload(raw)
        assert p == Payload(
            type="agent-turn-complete",
            summary="done",
            last_assistant_message="all done",
            cwd="/work/app",
            model="gpt-5",
            transcript_path="/tmp/t.jsonl",
        )

    def test_bom_and_whitespace(self):
        assert parse_payload('\ufeff  {"type": "x"}\n').type == "x"

    def test_non_string_fields_ignored(self):
        p = parse_payload('{"type": "agent-turn-complete", "summary": 5}')
        assert p.summary == ""

    def test_invalid_json(self):
        with pytest.raises(PayloadError, match="parse notify payload"):
            parse_payload("{")

    def test_missing_type(self):
        with pytest.raises(PayloadError, match="missing type"):
            parse_payload('{"summary": "x"}')

    def test_not_an_object(self):
        with pytest.raises(PayloadError):
            parse_payload('["agent-turn-complete"]')


class TestClaudeHookPayload:
    def test_stop_hook(self):
        raw = json.dumps({"hook_event_name": "Stop", "session_id": "abc", "cwd": "/w/p"})
        p = payload_from_claude_hook(raw)
        assert p.type == "agent-turn-complete"
        assert p.summary == "Claude Code session abc completed"
        assert p.cwd == "/w/p"

    def test_without_session_id(self):
        p = payload_from_claude_hook('{"hook_event_name": "Stop"}')
        assert p.type == "agent-turn-complete"
        assert p.summary == ""

    def test_notification_hook_is_paused(self):
        raw = json.dumps(
            {"hook_event_name": "Notification", "message": "Claude needs your permission to use Bash"}
        )
        p = payload_from_claude_hook(raw)
        assert p.type == "agent-turn-paused"
        assert p.summary == "Claude needs your permission to use Bash"

    def test_legacy_hook_type_key(self):
        p = payload_from_claude_hook('{"hook_type": "Notification", "message": "waiting"}')
        assert p.type == "agent-turn-paused"

    def test_notification_without_message(self):
        p = payload_from_claude_hook('{"hook_event_name": "Notification", "session_id": "s1"}')
        assert p.type == "agent-turn-complete"

    def test_transcript_and_model_copied(self):
        p = payload_from_claude_hook('{"transcript_path": "/t.jsonl", "model": "opus"}')
        assert p.transcript_path == "/t.jsonl"
        assert p.model == "opus"

    def test_empty_input(self):
        with pytest.raises(PayloadError, match="empty claude hook input"):
            payload_from_claude_hook("  \n")

    def test_invalid_json(self):
        with pytest.raises(PayloadError, match="parse claude hook input"):
            payload_from_claude_hook("nope")


class TestCleanText:
    def test_collapses_whitespace_per_line(self):
        assert clean_text("  a   b \r\n  c\t d  ") == "a b\nc d"

    def test_empty_becomes_default(self):
        assert clean_text("   ") == "Task completed"

    def test_long_text_capped(self):
        result = clean_text("x" * 500)
        assert len(result) == 300
        assert result.endswith("...")


class TestRenderNotification:
    def _payload(self, **kw):
        base = {"type": "agent-turn-complete", "summary": "short", "last_assistant_message": "long answer"}
        base.update(kw)
        return Payload(**base)

    def test_titles(self):
        assert render_notification(self._payload())[0] == "Codex Task Complete"
        assert render_notification(self._payload(type="agent-turn-paused"))[0] == "Codex Needs Input"

    def test_unknown_type_ignored(self):
        assert render_notification(self._payload(type="session-start")) is None

    def test_summary_mode(self):
        _, body = render_notification(self._payload(), RenderOptions(include_dir=False))
        assert body == "short"

    def test_summary_falls_back_to_message(self):
        _, body = render_notification(self._payload(summary=" "), RenderOptions(include_dir=False))
        assert body == "long answer"

    def test_full_mode(self):
        opts = RenderOptions(content_mode="full", include_dir=False)
        assert render_notification(self._payload(), opts)[1] == "long answer"

    def test_complete_mode(self):
        opts = RenderOptions(content_mode="complete", include_dir=False)
        assert render_notification(self._payload(), opts)[1] == "complete"
        paused = self._payload(type="agent-turn-paused")
        assert render_notification(paused, opts)[1] == "waiting for approval"

    def test_default_bodies(self):
        opts = RenderOptions(include_dir=False)
        empty = Payload(type="agent-turn-complete")
        assert render_notification(empty, opts)[1] == "Task completed"
        assert render_notification(Payload(type="agent-turn-paused"), opts)[1] == "Waiting for your approval"

    def test_dir_trailer(self):
        _, body = render_notification(self._payload(cwd="/home/me/project/"))
        assert body == "short\nDir: project"

    def test_windows_dir(self):
        _, body = render_notification(self._payload(cwd="C:\\src\\my-app"))
        assert body.endswith("\nDir: my-app")

    def test_all_trailers(self):
        opts = RenderOptions(include_model=True, include_event=True)
        _, body = render_notification(self._payload(cwd="/w/app", model="gpt-5"), opts)
        assert body == "short\nDir: app\nModel: gpt-5\nEvent: agent-turn-complete"

    def test_no_model_no_trailer(self):
        _, body = render_notification(self._payload(), RenderOptions(include_dir=False, include_model=True))
        assert "Model:" not in body
