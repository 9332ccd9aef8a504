"""Insert-mode actions."""

from __future__ import annotations

from typing import Dict

from .core import ActionHandler, editor_action, return_to_normal

INSERT_ACTIONS: Dict[str, ActionHandler] = {
    "enter_normal_mode": return_to_normal,
    "return_to_normal": return_to_normal,
    "backspace": editor_action("backspace", "Delete character before cursor"),
    "insert_newline": editor_action("insert_newline", "Split line at cursor"),
    "insert_tab": editor_action("insert_tab", "Insert spaces up to the tab width"),
    "move_left": editor_action("move_left", "Cursor one column left"),
    "move_right": editor_action("move_right", "Cursor one column right"),
    "move_up": editor_action("move_up", "Cursor one line up"),
    "move_down": editor_action("move_down", "Cursor one line down"),
}

__all__ = ["INSERT_ACTIONS"]
