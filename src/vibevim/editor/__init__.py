"""Cursor & motion engine, editor state and the ``:`` command interpreter."""

from .state import NO_PENDING, Cursor, Mode, PendingAction, PendingKind
from .editor import Editor
from .commands import CommandOutcome, execute_command

__all__ = [
    "CommandOutcome",
    "Cursor",
    "Editor",
    "Mode",
    "NO_PENDING",
    "PendingAction",
    "PendingKind",
    "execute_command",
]
