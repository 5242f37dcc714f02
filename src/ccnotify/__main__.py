"""CLI entry point: install/uninstall hooks, handle events, interactive settings."""

from __future__ import annotations

import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from .app import (
    DEFAULT_TEST_BODY,
    DEFAULT_TEST_TITLE,
    DEFAULT_TOAST_BODY,
    DEFAULT_TOAST_TITLE,
    handle_notify,
    resolve_payload_text,
    send_preview,
)
from .core.config import ConfigError, Paths, load_config, save_preferences
from .events import PayloadError
from .installer import InstallError, InstallResult, install, uninstall
from .notifier import NotifyError, create_notifier
from .patchers import PatchError

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

VERSION = "v0.1.0"

# Errors we report as "error: ..." instead of a traceback.
EXPECTED_ERRORS = (
    PatchError,
    InstallError,
    ConfigError,
    PayloadError,
    NotifyError,
    OSError,
    UnicodeError,
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def _fail(e: Exception) -> None:
    err_console.print(f"error: {e}", style="bold", markup=False)
    sys.exit(1)


def _print_results(results: list[InstallResult]) -> None:
    for r in results:
        if r.action == "failed":
            err_console.print(f"  {r.message}", style="bold", markup=False)
        else:
            console.print(r.message, markup=False)


# ── Interactive ─────────────────────────────────────────────────────


def _print_banner() -> None:
    console.print()
    console.print(f"  [bold cyan]cc-notify[/bold cyan] [dim]{VERSION}[/dim]")
    console.print("  desktop notifications for Codex CLI & Claude Code", style="dim")
    console.print()


def _install_status(tool: str, paths: Paths) -> str:
    return "; ".join(r.message for r in install(tool, paths=paths))


def _run_interactive(verbose: bool) -> None:
    config = load_config(verbose=verbose)
    prefs_path = config.paths.preferences

    if not config.prefs_exist or not config.prefs.setup_done:
        _print_banner()
        console.print("  First launch detected. Auto-configuring hooks...")
        console.print()
        _print_results(install("", paths=config.paths))
        config.prefs.setup_done = True
        try:
            save_preferences(prefs_path, config.prefs)
        except OSError as e:
            err_console.print(f"  note: save setup state failed: {e}", style="bold", markup=False)

    if sys.stdin.isatty() and sys.stdout.isatty():
        from .tui import run_settings_tui

        run_settings_tui(
            config.prefs,
            save=lambda p: save_preferences(prefs_path, p),
            preview=send_preview,
            install=lambda tool: _install_status(tool, config.paths),
        )
        return

    prefs = config.prefs
    console.print(f"settings: {prefs_path}", style="dim")
    console.print(f"  enabled  {prefs.enabled}")
    console.print(f"  mode     {prefs.mode}")
    console.print(f"  content  {prefs.content}")
    console.print(
        f"  fields   dir={prefs.include_dir} model={prefs.include_model} event={prefs.include_event}"
    )


# ── CLI commands ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr")
@click.version_option(VERSION, prog_name="cc-notify")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """cc-notify: desktop notifications for Codex CLI & Claude Code."""
    _setup_logging(verbose)
    ctx.obj = {"verbose": verbose}
    if ctx.invoked_subcommand is None:
        try:
            _run_interactive(verbose)
        except EXPECTED_ERRORS as e:
            _fail(e)


@cli.command("install")
@click.argument("target", required=False, default="")
def install_cmd(target: str):
    """Register hooks (codex, claude, or both if omitted)."""
    try:
        _print_results(install(target))
    except EXPECTED_ERRORS as e:
        _fail(e)


@cli.command("uninstall")
@click.argument("target", required=False, default="")
def uninstall_cmd(target: str):
    """Remove hooks (codex, claude, or both if omitted)."""
    try:
        _print_results(uninstall(target))
    except EXPECTED_ERRORS as e:
        _fail(e)


@cli.command(
    "notify",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def notify_cmd(ctx: click.Context, args: tuple[str, ...]):
    """Handle an event: <json>, --file <path>, --b64 <base64>, or --claude (stdin)."""
    try:
        if args and args[0] == "--claude":
            source, raw = "claude", sys.stdin.read()
        else:
            source, raw = "codex", resolve_payload_text(args)
        config = load_config(verbose=ctx.obj["verbose"])
        console.print(handle_notify(config, raw, source), markup=False)
    except EXPECTED_ERRORS as e:
        _fail(e)


@cli.command("test-notify")
@click.argument("title", required=False, default="")
@click.argument("body", required=False, default="")
@click.pass_context
def test_notify_cmd(ctx: click.Context, title: str, body: str):
    """Send a test notification with the configured mode."""
    try:
        config = load_config(verbose=ctx.obj["verbose"])
        service = create_notifier(config.prefs.mode, config.prefs.toast_app_id)
        service.notify(title.strip() or DEFAULT_TEST_TITLE, body.strip() or DEFAULT_TEST_BODY)
    except EXPECTED_ERRORS as e:
        _fail(e)


@cli.command("test-toast")
@click.argument("title", required=False, default="")
@click.argument("body", required=False, default="")
@click.pass_context
def test_toast_cmd(ctx: click.Context, title: str, body: str):
    """Force toast mode to check the toast app id."""
    try:
        config = load_config(verbose=ctx.obj["verbose"])
        app_id = config.prefs.toast_app_id
        service = create_notifier("toast", app_id)
        try:
            service.notify(title.strip() or DEFAULT_TOAST_TITLE, body.strip() or DEFAULT_TOAST_BODY)
        except NotifyError as e:
            raise NotifyError(f"toast test failed (app id: {app_id}): {e}") from e
        console.print(
            f"toast test sent (app id: {app_id}). "
            "If no banner appears, check the notification center."
        )
    except EXPECTED_ERRORS as e:
        _fail(e)


@cli.command("help")
@click.pass_context
def help_cmd(ctx: click.Context):
    """Show this help."""
    console.print(ctx.parent.get_help() if ctx.parent else ctx.get_help(), markup=False)


# ── Entry point ─────────────────────────────────────────────────────


def should_pause(platform: str, args: list[str], no_pause: str, is_tty: bool) -> bool:
    """Keep a double-clicked console window open on Windows."""
    if platform != "win32" or args:
        return False
    if no_pause.strip() == "1":
        return False
    return is_tty


def _maybe_pause(args: list[str]) -> None:
    if should_pause(sys.platform, args, os.getenv("CC_NOTIFY_NO_PAUSE", ""), sys.stdin.isatty()):
        console.print()
        console.print("Press Enter to exit...")
        try:
            input()
        except EOFError:
            pass


def main():
    """Console script entry point; may pause before the window closes."""
    args = sys.argv[1:]
    try:
        cli(prog_name="cc-notify")
    finally:
        _maybe_pause(args)


if __name__ == "__main__":
    main()
