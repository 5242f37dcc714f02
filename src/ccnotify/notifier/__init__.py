"""Notifier: desktop toast/popup delivery."""

from .backends import (
    LinuxNotifier,
    MacNotifier,
    NoopNotifier,
    Notifier,
    NotifyError,
    WindowsNotifier,
    create_notifier,
    run_command,
)

__all__ = [
    "LinuxNotifier",
    "MacNotifier",
    "NoopNotifier",
    "Notifier",
    "NotifyError",
    "WindowsNotifier",
    "create_notifier",
    "run_command",
]
