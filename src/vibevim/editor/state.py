"""Cursor, mode and pending-key state owned by the editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(slots=True)
class Cursor:
    """Zero-based ``(line, column)`` position inside the current buffer."""

    line: int = 0
    column: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.column)


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"
    SEARCH = "search"

    def as_str(self) -> str:
        return self.name

    @property
    def allows_end_column(self) -> bool:
        """Insert mode may place the cursor one past the last character."""

        return self is Mode.INSERT


class PendingKind(Enum):
    NONE = "none"
    AWAITING_SECOND_G = "awaiting_second_g"
    AWAITING_SECOND_D = "awaiting_second_d"
    AWAITING_REPLACEMENT_CHAR = "awaiting_replacement_char"
    AWAITING_CHORD = "awaiting_chord"


@dataclass(frozen=True, slots=True)
class PendingAction:
    """First half of a two-key sequence waiting for its second key."""

    kind: PendingKind = PendingKind.NONE
    context: Optional[str] = None
    action: Optional[str] = None

    @property
    def is_armed(self) -> bool:
        return self.kind is not PendingKind.NONE

    @classmethod
    def for_chord(cls, context: str, action: str) -> "PendingAction":
        """Pick the named variant for the stock chords, the generic one otherwise."""

        if context == "normal" and action == "move_to_first_line":
            kind = PendingKind.AWAITING_SECOND_G
        elif context == "normal" and action == "delete_current_line":
            kind = PendingKind.AWAITING_SECOND_D
        else:
            kind = PendingKind.AWAITING_CHORD
        return cls(kind=kind, context=context, action=action)

    @classmethod
    def replacement(cls) -> "PendingAction":
        return cls(
            kind=PendingKind.AWAITING_REPLACEMENT_CHAR,
            context="normal",
            action="replace_char",
        )


NO_PENDING = PendingAction()


__all__ = ["Cursor", "Mode", "NO_PENDING", "PendingAction", "PendingKind"]
