"""Built-in keymaps that seed each context with the stock editor behaviour."""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Tuple

from .models import ActionRef, Binding, KeybindMap, action_id
from .parser import require_binding
from .registry import KeymapRegistry

# (context, action, binding strings) in lookup order
DEFAULT_KEYBINDS: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = (
    ("global", "toggle_sidebar", ("Space e", "Space E")),
    ("global", "focus_explorer_toggle", ("Ctrl+w w",)),
    ("global", "enter_command_mode", (":",)),
    ("explorer", "refresh", ("r", "R", "F5")),
    ("explorer", "open_enter", ("Enter", "l", "Right")),
    ("normal", "move_left", ("h", "Left")),
    ("normal", "move_down", ("j", "Down")),
    ("normal", "move_up", ("k", "Up")),
    ("normal", "move_right", ("l", "Right")),
    ("normal", "move_word_forward", ("w",)),
    ("normal", "move_word_backward", ("b",)),
    ("normal", "move_to_end_of_word", ("e",)),
    ("normal", "move_word_forward_W", ("W",)),
    ("normal", "move_word_backward_B", ("B",)),
    ("normal", "move_to_end_of_word_E", ("E",)),
    ("normal", "move_to_line_start", ("0",)),
    ("normal", "move_to_line_end", ("$",)),
    ("normal", "move_to_first_non_blank", ("^",)),
    ("normal", "move_to_last_line", ("G",)),
    ("normal", "move_paragraph_prev", ("{",)),
    ("normal", "move_paragraph_next", ("}",)),
    ("normal", "move_to_first_line", ("g g",)),
    ("normal", "enter_insert_mode", ("i",)),
    ("normal", "enter_insert_mode_append", ("a",)),
    ("normal", "enter_insert_mode_end", ("A",)),
    ("normal", "enter_insert_mode_start", ("I",)),
    ("normal", "open_line_below", ("o",)),
    ("normal", "open_line_above", ("O",)),
    ("normal", "delete_char_at_cursor", ("x",)),
    ("normal", "delete_to_end_of_line", ("D",)),
    ("normal", "join_lines", ("J",)),
    ("normal", "delete_current_line", ("d d",)),
    ("normal", "replace_char", ("r",)),
    ("normal", "enter_command_mode", (":",)),
    ("normal", "enter_search_mode", ("/",)),
    ("normal", "repeat_search_forward", ("n",)),
    ("normal", "repeat_search_backward", ("N",)),
    ("normal", "return_to_normal", ("Ctrl+c",)),
    ("insert", "enter_normal_mode", ("Esc",)),
    ("insert", "backspace", ("Backspace",)),
    ("insert", "insert_newline", ("Enter",)),
    ("insert", "return_to_normal", ("Ctrl+c",)),
    ("insert", "move_left", ("Left",)),
    ("insert", "move_right", ("Right",)),
    ("insert", "move_up", ("Up",)),
    ("insert", "move_down", ("Down",)),
    ("insert", "insert_tab", ("Tab",)),
    ("command", "cancel", ("Esc", "Ctrl+c")),
    ("command", "execute", ("Enter",)),
    ("command", "backspace", ("Backspace",)),
    ("search", "cancel", ("Esc", "Ctrl+c")),
    ("search", "search_forward", ("Enter",)),
    ("search", "backspace", ("Backspace",)),
)


def default_keybinds() -> KeybindMap:
    """Build a fresh ``context -> action -> bindings`` map of the defaults."""

    keybinds: KeybindMap = {}
    for context, action, keys in DEFAULT_KEYBINDS:
        keybinds.setdefault(context, {})[action] = [require_binding(k) for k in keys]
    return keybinds


def _summary(handler: Callable[..., object]) -> str:
    lines = (handler.__doc__ or "").strip().splitlines()
    return lines[0] if lines else ""


def default_actions() -> Tuple[ActionRef, ...]:
    """One ``ActionRef`` per built-in handler, qualified by context."""

    from vibevim.actions import ACTION_TABLES

    return tuple(
        ActionRef(
            id=action_id(context, name),
            handler=handler,
            description=_summary(handler),
        )
        for context, table in ACTION_TABLES.items()
        for name, handler in table.items()
    )


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    overrides: Mapping[str, Mapping[str, Iterable[Binding]]] | None = None,
) -> None:
    """Register built-in actions and bindings, then lay ``overrides`` on top."""

    for action in default_actions():
        registry.register_action(action, replace=replace)

    for context, actions in default_keybinds().items():
        for name, bindings in actions.items():
            registry.set_bindings(context, name, bindings)

    if overrides:
        registry.merge(overrides)


__all__ = [
    "DEFAULT_KEYBINDS",
    "default_actions",
    "default_keybinds",
    "load_default_keymaps",
]
