"""Notification backends, one per desktop platform."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from collections.abc import Callable
from typing import Protocol

from ..core.config import DEFAULT_TOAST_APP_ID, LEGACY_TOAST_APP_IDS
from .scripts import build_popup_script, build_toast_script, powershell_args

logger = logging.getLogger(__name__)

Runner = Callable[[list[str]], None]


class NotifyError(RuntimeError):
    pass


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None: ...


def run_command(argv: list[str]) -> None:
    """Run *argv*; raise NotifyError with its output on a non-zero exit."""
    logger.debug("running %s", argv[0])
    try:
        r = subprocess.run(argv, capture_output=True, text=True, timeout=30)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise NotifyError(str(e)) from e
    if r.returncode != 0:
        output = (r.stdout + r.stderr).strip()
        raise NotifyError(output or f"{argv[0]} exited with status {r.returncode}")


class NoopNotifier:
    def notify(self, title: str, body: str) -> None:
        logger.debug("no notification backend available, dropping %r", title)


class WindowsNotifier:
    """Toast via WinRT, popup via WScript.Shell; ``auto`` tries toast then popup."""

    def __init__(
        self,
        mode: str = "auto",
        app_id: str = DEFAULT_TOAST_APP_ID,
        shell: str = "powershell.exe",
        runner: Runner = run_command,
    ) -> None:
        app_id = app_id.strip()
        if not app_id or app_id in LEGACY_TOAST_APP_IDS:
            app_id = DEFAULT_TOAST_APP_ID
        self.mode = mode.strip().lower() if mode.strip().lower() in ("toast", "popup") else "auto"
        self.app_id = app_id
        self.shell = shell
        self.runner = runner

    def _run(self, script: str) -> None:
        self.runner([self.shell, *powershell_args(script)])

    def notify(self, title: str, body: str) -> None:
        if self.mode == "toast":
            try:
                self._run(build_toast_script(title, body, self.app_id))
            except NotifyError as e:
                raise NotifyError(f"send windows notification (toast): {e}") from e
            return
        if self.mode == "popup":
            try:
                self._run(build_popup_script(title, body))
            except NotifyError as e:
                raise NotifyError(f"send windows notification (popup): {e}") from e
            return

        try:
            self._run(build_toast_script(title, body, self.app_id))
        except NotifyError as toast_err:
            logger.debug("toast failed, falling back to popup: %s", toast_err)
            try:
                self._run(build_popup_script(title, body))
            except NotifyError as popup_err:
                raise NotifyError(
                    f"send windows notification: toast failed: {toast_err}; "
                    f"popup fallback failed: {popup_err}"
                ) from popup_err


def _applescript_quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class MacNotifier:
    def __init__(self, runner: Runner = run_command) -> None:
        self.runner = runner

    def notify(self, title: str, body: str) -> None:
        script = f"display notification {_applescript_quote(body)} with title {_applescript_quote(title)}"
        self.runner(["osascript", "-e", script])


class LinuxNotifier:
    def __init__(self, binary: str = "notify-send", runner: Runner = run_command) -> None:
        self.binary = binary
        self.runner = runner

    def notify(self, title: str, body: str) -> None:
        self.runner([self.binary, "--app-name=cc-notify", title, body])


def create_notifier(
    mode: str = "auto", toast_app_id: str = DEFAULT_TOAST_APP_ID, platform: str | None = None
) -> Notifier:
    """Pick the backend for *platform* (defaults to ``sys.platform``)."""
    platform = platform or sys.platform
    if platform == "win32":
        return WindowsNotifier(mode=mode, app_id=toast_app_id)
    if platform == "darwin":
        return MacNotifier()
    if notify_send := shutil.which("notify-send"):
        return LinuxNotifier(binary=notify_send)
    return NoopNotifier()
