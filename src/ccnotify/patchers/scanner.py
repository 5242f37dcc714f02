"""Line helpers: BOM split, newline detection, split/join, first table index."""

from __future__ import annotations

UTF8_BOM = "\xef\xbb\xbf"  # raw bytes decoded as latin-1
BOM_CHAR = "\ufeff"


def split_bom(content: str) -> tuple[str, str]:
    """Return ``(bom, rest)``; *bom* is re-prepended to every output."""
    for bom in (UTF8_BOM, BOM_CHAR):
        if content.startswith(bom):
            return bom, content[len(bom) :]
    return "", content


def detect_newline(content: str) -> str:
    return "\r\n" if "\r\n" in content else "\n"


def split_lines(content: str) -> list[str]:
    normalized = content.replace("\r\n", "\n")
    if normalized.endswith("\n"):
        normalized = normalized[:-1]
    if normalized == "":
        return []
    return normalized.split("\n")


def join_lines(lines: list[str], newline: str) -> str:
    if not lines:
        return ""
    return newline.join(lines) + newline


def first_table_index(lines: list[str]) -> int:
    """Index of the first ``[table]`` header, or ``len(lines)`` if there is none.

    Root-level keys may only appear before this index.
    """
    for i, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        if trimmed.startswith("["):
            return i
    return len(lines)


def trim_leading_blank_lines(lines: list[str]) -> list[str]:
    i = 0
    while i < len(lines) and not lines[i].strip():
        i += 1
    return lines[i:]
