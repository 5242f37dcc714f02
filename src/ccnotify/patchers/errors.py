"""Patch errors: raised instead of returning partial content."""

from __future__ import annotations


class PatchError(ValueError):
    """Base class for config patching failures. Callers must not write anything."""


class InvalidCommandError(PatchError):
    pass


class UnterminatedAssignmentError(PatchError):
    pass


class MalformedSettingsError(PatchError):
    pass
