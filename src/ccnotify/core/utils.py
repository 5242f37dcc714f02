"""File helpers: locked read-modify-write, atomic writes, text truncation."""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

if sys.platform == "win32":
    import msvcrt
else:
    import fcntl

# bytes that are not valid UTF-8 survive a read/write round trip unchanged
TEXT_ERRORS = "surrogateescape"


@contextmanager
def file_lock(path: Path) -> Iterator[None]:
    """Hold an exclusive advisory lock on ``<path>.lock`` for the block.

    The parent directory must already exist.
    """
    lock_path = path.with_name(path.name + ".lock")
    with open(lock_path, "a+") as fp:
        if sys.platform == "win32":
            fp.seek(0)
            msvcrt.locking(fp.fileno(), msvcrt.LK_LOCK, 1)
        else:
            fcntl.flock(fp.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            if sys.platform == "win32":
                fp.seek(0)
                msvcrt.locking(fp.fileno(), msvcrt.LK_UNLCK, 1)
            else:
                fcntl.flock(fp.fileno(), fcntl.LOCK_UN)


def read_text(path: Path) -> str | None:
    """Return file text, or None if the file does not exist."""
    try:
        # newline="" keeps \r\n so the patchers can detect it
        with open(path, encoding="utf-8", errors=TEXT_ERRORS, newline="") as fp:
            return fp.read()
    except FileNotFoundError:
        return None


def atomic_write_text(path: Path, text: str) -> None:
    """Write via a sibling temp file and replace, never leaving a partial file.

    An existing file keeps its permission bits.
    """
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8", errors=TEXT_ERRORS, newline="") as fp:
            fp.write(text)
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except (OSError, ValueError):
        tmp.unlink(missing_ok=True)
        raise


def truncate(text: str, max_chars: int) -> str:
    """Truncate to *max_chars* characters, ending with '...' when cut."""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3] + "..."
