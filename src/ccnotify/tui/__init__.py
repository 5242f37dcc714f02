"""Public API for the cc-notify TUI package."""

from .settings import apply_action, menu_items, run_settings_tui

__all__ = ["apply_action", "menu_items", "run_settings_tui"]
