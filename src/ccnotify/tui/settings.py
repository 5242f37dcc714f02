"""Interactive settings menu shown when cc-notify runs without arguments.

Three tabs: Default holds the global preferences, Codex and Claude Code hold
per-tool overrides that fall back to Default when unset.
"""

from __future__ import annotations

from collections.abc import Callable

from prompt_toolkit import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import HSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from ..core.config import CONTENT_MODES, NOTIFY_MODES, Preferences
from ..notifier import NotifyError

TABS = ("default", "codex", "claude")
TAB_NAMES = {"default": "Default", "codex": "Codex", "claude": "Claude Code"}
TOOL_FILES = {"codex": "~/.codex/config.toml", "claude": "~/.claude/settings.json"}

MODE_HINTS = {
    "auto": "toast first, popup fallback",
    "toast": "system notification",
    "popup": "popup dialog",
}
CONTENT_HINTS = {
    "summary": "short summary",
    "full": "full assistant message",
    "complete": "minimal text",
}

_TOGGLES = ("enabled", "include_dir", "include_model", "include_event")


def _next(options, current):
    i = options.index(current) if current in options else -1
    return options[(i + 1) % len(options)]


def _on_off(value: bool) -> str:
    return "on" if value else "off"


def _override(value: str) -> str:
    return value or "inherit"


def _tool_enabled(value: bool | None, global_enabled: bool) -> str:
    if value is None:
        return f"inherit ({_on_off(global_enabled)})"
    return _on_off(value)


def menu_items(prefs: Preferences, tab: str = "default") -> list[tuple[str, str]]:
    """``(key, label)`` rows of *tab* for the current preferences."""
    if tab in TOOL_FILES:
        name = TAB_NAMES[tab]
        enabled = _tool_enabled(getattr(prefs, f"{tab}_enabled"), prefs.enabled)
        mode = _override(getattr(prefs, f"{tab}_mode"))
        content = _override(getattr(prefs, f"{tab}_content"))
        return [
            (f"{tab}_enabled", f"{name + ' notifications':<28}{enabled}"),
            (f"{tab}_mode", f"{name + ' mode':<28}{mode}"),
            (f"{tab}_content", f"{name + ' content':<28}{content}"),
            (f"install_{tab}", f"{'Install ' + name + ' hook':<28}{TOOL_FILES[tab]}"),
            (f"preview_{tab}", f"Send {name} preview"),
            ("exit", "Exit"),
        ]
    return [
        ("enabled", f"Notifications        {_on_off(prefs.enabled)}"),
        ("mode", f"Notification mode    {prefs.mode}  ({MODE_HINTS[prefs.mode]})"),
        ("content", f"Content mode         {prefs.content}  ({CONTENT_HINTS[prefs.content]})"),
        ("include_dir", f"Include directory    {_on_off(prefs.include_dir)}"),
        ("include_model", f"Include model        {_on_off(prefs.include_model)}"),
        ("include_event", f"Include event type   {_on_off(prefs.include_event)}"),
        ("preview", "Send preview notification"),
        ("exit", "Exit"),
    ]


def apply_action(prefs: Preferences, key: str) -> bool:
    """Mutate *prefs* for a menu row; returns True if a setting changed.

    Tool overrides cycle through "inherit" (None or "") before the explicit
    values.
    """
    if key in _TOGGLES:
        setattr(prefs, key, not getattr(prefs, key))
        prefs.fields_configured = True
        return True
    if key == "mode":
        prefs.mode = _next(NOTIFY_MODES, prefs.mode)
        return True
    if key == "content":
        prefs.content = _next(CONTENT_MODES, prefs.content)
        return True

    tool, _, setting = key.partition("_")
    if tool not in TOOL_FILES:
        return False
    if setting == "enabled":
        setattr(prefs, key, _next((None, False, True), getattr(prefs, key)))
        return True
    if setting == "mode":
        setattr(prefs, key, _next(("",) + NOTIFY_MODES, getattr(prefs, key)))
        return True
    if setting == "content":
        setattr(prefs, key, _next(("",) + CONTENT_MODES, getattr(prefs, key)))
        return True
    return False


def run_settings_tui(
    prefs: Preferences,
    save: Callable[[Preferences], None],
    preview: Callable[[Preferences, str], None],
    install: Callable[[str], str] | None = None,
) -> None:
    """Arrow keys move, left/right switch tabs, enter changes the row.

    Every change is saved. *preview* gets the tool name ("" on the Default
    tab); *install* gets the tool name and returns a status line.
    """
    tab = [0]
    selected = [0]
    status = [""]

    def _items():
        return menu_items(prefs, TABS[tab[0]])

    def _get_text():
        lines = [("bold", " cc-notify settings\n\n ")]
        for i, name in enumerate(TABS):
            label = TAB_NAMES[name]
            lines.append(("reverse" if i == tab[0] else "", f" {label} "))
            lines.append(("", " "))
        lines.append(("", "\n\n"))
        for i, (_, label) in enumerate(_items()):
            sel = i == selected[0]
            marker = ">" if sel else " "
            lines.append(("bold" if sel else "", f" {marker} {label}\n"))
        if status[0]:
            lines.append(("", f"\n {status[0]}\n"))
        lines.append(("dim", "\n ←/→ tab  ↑/↓ navigate  enter change  esc exit"))
        return lines

    def _switch(step: int):
        tab[0] = (tab[0] + step) % len(TABS)
        selected[0] = 0
        status[0] = ""

    kb = KeyBindings()

    @kb.add("up")
    @kb.add("k")
    def _up(event):
        selected[0] = max(0, selected[0] - 1)

    @kb.add("down")
    @kb.add("j")
    def _down(event):
        selected[0] = min(len(_items()) - 1, selected[0] + 1)

    @kb.add("right")
    @kb.add("l")
    @kb.add("tab")
    def _next_tab(event):
        _switch(1)

    @kb.add("left")
    @kb.add("h")
    @kb.add("s-tab")
    def _prev_tab(event):
        _switch(-1)

    @kb.add("enter")
    @kb.add("space")
    def _select(event):
        key = _items()[selected[0]][0]
        if key == "exit":
            event.app.exit()
            return
        if key == "preview" or key.startswith("preview_"):
            tool = key.partition("_")[2]
            try:
                preview(prefs, tool)
                status[0] = "preview sent"
            except (NotifyError, OSError) as e:
                status[0] = f"preview failed: {e}"
            return
        if key.startswith("install_"):
            if install is None:
                return
            try:
                status[0] = install(key.partition("_")[2])
            except (OSError, ValueError) as e:
                status[0] = f"install failed: {e}"
            return
        if apply_action(prefs, key):
            try:
                save(prefs)
                status[0] = "saved"
            except OSError as e:
                status[0] = f"save failed: {e}"

    @kb.add("escape")
    @kb.add("q")
    @kb.add("c-c")
    def _cancel(event):
        event.app.exit()

    layout = Layout(HSplit([Window(FormattedTextControl(_get_text))]))
    app: Application = Application(layout=layout, key_bindings=kb, full_screen=False)
    app.run()
