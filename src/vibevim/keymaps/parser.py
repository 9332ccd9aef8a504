"""Parse binding strings such as ``"h"``, ``"Ctrl+w w"`` or ``"Space e"``."""

from __future__ import annotations

from typing import Optional

from .models import Binding, KeyStroke

_MODIFIER_ALIASES = {
    "Ctrl": "ctrl",
    "Control": "ctrl",
    "Shift": "shift",
    "Alt": "alt",
    "Super": "super",
    "Meta": "super",
}

_KEY_ALIASES = {
    "Enter": "Enter",
    "Return": "Enter",
    "Backspace": "Backspace",
    "Tab": "Tab",
    "Esc": "Esc",
    "Escape": "Esc",
    "Left": "Left",
    "Right": "Right",
    "Up": "Up",
    "Down": "Down",
    "Space": " ",
}


def _parse_code(part: str) -> Optional[str]:
    if part in _KEY_ALIASES:
        return _KEY_ALIASES[part]
    if len(part) == 1:
        return part
    if part.startswith("F") and part[1:].isdigit():
        number = int(part[1:])
        if 1 <= number <= 12:
            return f"F{number}"
    return None


def parse_key(text: str) -> Optional[KeyStroke]:
    """Parse one key token; ``None`` when it is not understood."""

    text = text.strip()
    if not text:
        return None
    # a lone "+" is the plus key, "Ctrl++" is ctrl plus the plus key
    if text == "+":
        parts = ["+"]
    elif text.endswith("++"):
        parts = [p.strip() for p in text[:-2].split("+")] + ["+"]
    else:
        parts = [p.strip() for p in text.split("+")]

    modifiers = []
    for part in parts[:-1]:
        modifier = _MODIFIER_ALIASES.get(part)
        if modifier is None:
            return None
        modifiers.append(modifier)

    code = _parse_code(parts[-1])
    if code is None:
        return None
    return KeyStroke(code=code, modifiers=tuple(modifiers))


def parse_binding(text: str) -> Optional[Binding]:
    """Parse ``"<key>"`` or ``"<key> <key>"``; ``None`` for anything else."""

    parts = text.split()
    if len(parts) == 1:
        key = parse_key(parts[0])
        return Binding(key) if key else None
    if len(parts) == 2:
        first = parse_key(parts[0])
        second = parse_key(parts[1])
        if first is None or second is None:
            return None
        return Binding(first, second)
    return None


def require_binding(text: str) -> Binding:
    binding = parse_binding(text)
    if binding is None:
        raise ValueError(f"invalid binding string {text!r}")
    return binding


__all__ = ["parse_binding", "parse_key", "require_binding"]
