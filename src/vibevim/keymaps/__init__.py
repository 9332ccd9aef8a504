"""Keybind table: key models, binding parser, defaults and resolution."""

from .models import ActionRef, Binding, KeybindMap, KeyStroke, action_id
from .parser import parse_binding, parse_key, require_binding
from .registry import KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .loader import apply_user_keybinds, load_user_keybinds, parse_keybind_payload
from .defaults import default_keybinds, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeybindMap",
    "KeyStroke",
    "action_id",
    "parse_binding",
    "parse_key",
    "require_binding",
    "KeymapRegistry",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "apply_user_keybinds",
    "load_user_keybinds",
    "parse_keybind_payload",
    "default_keybinds",
    "load_default_keymaps",
]
