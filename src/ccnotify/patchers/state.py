"""Tracks whether a TOML value spanning several lines has closed yet."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AssignmentState:
    in_string: bool = False
    escape: bool = False
    bracket_depth: int = 0

    def scan(self, line: str) -> None:
        for ch in line:
            if self.in_string:
                if self.escape:
                    self.escape = False
                elif ch == "\\":
                    self.escape = True
                elif ch == '"':
                    self.in_string = False
                continue

            if ch == '"':
                self.in_string = True
            elif ch == "#":
                return  # rest of the line is a comment
            elif ch == "[":
                self.bracket_depth += 1
            elif ch == "]" and self.bracket_depth > 0:
                self.bracket_depth -= 1

    def needs_continuation(self) -> bool:
        return self.in_string or self.bracket_depth > 0
