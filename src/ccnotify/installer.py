"""Install/uninstall: read a tool's config, patch it, write it back if changed."""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .core.config import TOOLS, Paths
from .core.utils import atomic_write_text, file_lock, read_text
from .patchers import HOOK_MARKER, remove_hook, remove_notify, upsert_hook, upsert_notify

logger = logging.getLogger(__name__)

TARGETS = ("codex", "claude", "all", "")


class InstallError(RuntimeError):
    pass


@dataclass
class InstallResult:
    tool: str
    path: Path
    action: str  # installed | unchanged | removed | absent | missing | failed
    error: str = ""

    @property
    def message(self) -> str:
        if self.error:
            return f"{self.tool}: {self.error}"
        return {
            "installed": {
                "codex": f"codex: installed notify command in {self.path}",
                "claude": f"claude: installed hook in {self.path}",
            },
            "unchanged": {
                "codex": "codex: notify command already configured",
                "claude": "claude: hook already configured",
            },
            "removed": {
                "codex": f"codex: removed notify command from {self.path}",
                "claude": f"claude: removed hook from {self.path}",
            },
            "absent": {
                "codex": "codex: notify command not configured",
                "claude": "claude: hook not configured",
            },
            "missing": {
                "codex": "codex: config file not found, nothing to uninstall",
                "claude": "claude: settings file not found, nothing to uninstall",
            },
        }[self.action][self.tool]


def resolve_executable(argv0: str | None = None) -> str:
    """Absolute path of the cc-notify launcher to register as the hook command."""
    argv0 = argv0 if argv0 is not None else sys.argv[0]
    candidate = Path(argv0)
    if HOOK_MARKER in candidate.name:
        return str(candidate.resolve())
    if found := shutil.which("cc-notify"):
        return str(Path(found).resolve())
    return str(candidate.resolve())


def _tools_for(target: str) -> tuple[str, ...]:
    target = (target or "").strip().lower()
    if target not in TARGETS:
        raise InstallError(f"unknown target: {target} (use codex, claude, or leave empty for both)")
    return TOOLS if target in ("", "all") else (target,)


def _patch_file(path: Path, patch: Callable[[str], tuple[str, bool]], create: bool) -> str:
    if create:
        path.parent.mkdir(parents=True, exist_ok=True)
    elif not path.exists():
        # nothing to uninstall: leave the tool's directory alone
        return "missing"

    with file_lock(path):
        content = read_text(path)
        if content is None:
            if not create:
                return "missing"
            content = ""
        updated, changed = patch(content)
        if not changed:
            logger.debug("%s unchanged", path)
            return "unchanged"
        atomic_write_text(path, updated)
        logger.debug("wrote %s (%d bytes)", path, len(updated))
        return "changed"


def install_tool(tool: str, exe_path: str, paths: Paths) -> InstallResult:
    path = paths.for_tool(tool)
    if tool == "codex":
        outcome = _patch_file(path, lambda c: upsert_notify(c, [exe_path, "notify"]), create=True)
    else:
        outcome = _patch_file(path, lambda c: upsert_hook(c, exe_path), create=True)
    return InstallResult(tool, path, "installed" if outcome == "changed" else "unchanged")


def uninstall_tool(tool: str, paths: Paths) -> InstallResult:
    path = paths.for_tool(tool)
    patch = remove_notify if tool == "codex" else remove_hook
    outcome = _patch_file(path, patch, create=False)
    action = {"changed": "removed", "unchanged": "absent", "missing": "missing"}[outcome]
    return InstallResult(tool, path, action)


def _run(
    tools: tuple[str, ...], paths: Paths, step: Callable[[str], InstallResult]
) -> list[InstallResult]:
    if len(tools) == 1:
        return [step(tools[0])]

    # "all": one tool failing must not stop the other
    results = []
    for tool in tools:
        try:
            results.append(step(tool))
        except (OSError, ValueError) as e:
            logger.warning("%s: %s", tool, e)
            results.append(InstallResult(tool, paths.for_tool(tool), "failed", error=str(e)))
    return results


def install(
    target: str = "", exe_path: str | None = None, paths: Paths | None = None
) -> list[InstallResult]:
    """Register cc-notify with Codex, Claude Code, or both."""
    tools = _tools_for(target)
    paths = paths or Paths()
    exe_path = exe_path or resolve_executable()
    if not Path(exe_path).is_absolute():
        exe_path = str(Path(exe_path).resolve())
    return _run(tools, paths, lambda tool: install_tool(tool, exe_path, paths))


def uninstall(target: str = "", paths: Paths | None = None) -> list[InstallResult]:
    """Remove cc-notify from Codex, Claude Code, or both."""
    tools = _tools_for(target)
    paths = paths or Paths()
    return _run(tools, paths, lambda tool: uninstall_tool(tool, paths))
