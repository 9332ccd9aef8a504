"""Dataclasses describing physical keys, bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional

MODIFIER_ORDER = ("ctrl", "alt", "shift", "super")
CHORD_FORBIDDEN_MODIFIERS = frozenset({"ctrl", "alt", "super"})

NAMED_KEYS = frozenset(
    {
        "Enter",
        "Backspace",
        "Tab",
        "Esc",
        "Left",
        "Right",
        "Up",
        "Down",
        *(f"F{number}" for number in range(1, 13)),
    }
)


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    unknown = values.difference(MODIFIER_ORDER)
    if unknown:
        raise ValueError(f"unknown modifiers: {sorted(unknown)}")
    return tuple(m for m in MODIFIER_ORDER if m in values)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press: a character or named key plus modifiers."""

    code: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("key code cannot be empty")
        if len(self.code) > 1 and self.code not in NAMED_KEYS:
            raise ValueError(f"unknown key '{self.code}'")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def char(cls, ch: str, *modifiers: str) -> "KeyStroke":
        return cls(code=ch, modifiers=tuple(modifiers))

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    @property
    def text(self) -> Optional[str]:
        """Printable text this key would insert, if any."""

        if not self.is_char or not self.code.isprintable():
            return None
        if CHORD_FORBIDDEN_MODIFIERS.intersection(self.modifiers):
            return None
        return self.code

    @property
    def token(self) -> str:
        code = "Space" if self.code == " " else self.code
        if self.modifiers:
            prefix = "+".join(m.capitalize() for m in self.modifiers)
            return f"{prefix}+{code}"
        return code

    def matches(self, key: "KeyStroke") -> bool:
        return key.code == self.code and key.modifiers == self.modifiers

    def matches_allow_shift(self, key: "KeyStroke") -> bool:
        """Second-key match: letter case ignored, no ctrl/alt/super on either side."""

        if key.code != self.code and key.code.lower() != self.code.lower():
            return False
        if CHORD_FORBIDDEN_MODIFIERS.intersection(key.modifiers):
            return False
        return not CHORD_FORBIDDEN_MODIFIERS.intersection(self.modifiers)


@dataclass(frozen=True, slots=True)
class Binding:
    """A single key or an ordered two-key chord."""

    first: KeyStroke
    second: Optional[KeyStroke] = None

    @property
    def is_chord(self) -> bool:
        return self.second is not None

    def matches_first_key(self, key: KeyStroke) -> bool:
        return self.first.matches(key)

    def matches_second_key(self, key: KeyStroke) -> bool:
        if self.second is None:
            return False
        return self.second.matches_allow_shift(key)

    @property
    def key_signature(self) -> str:
        if self.second is None:
            return self.first.token
        return f"{self.first.token} {self.second.token}"


ContextKeybinds = Dict[str, List[Binding]]
KeybindMap = Dict[str, ContextKeybinds]


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    telemetry_name: str | None = None
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    @property
    def context(self) -> str:
        return self.id.partition(".")[0]

    @property
    def name(self) -> str:
        return self.id.partition(".")[2]

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


def action_id(context: str, name: str) -> str:
    return f"{context}.{name}"


__all__ = [
    "ActionRef",
    "Binding",
    "ContextKeybinds",
    "KeyStroke",
    "KeybindMap",
    "NAMED_KEYS",
    "action_id",
]
