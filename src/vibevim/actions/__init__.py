"""Keymap action handlers, one table per keybind context."""

from typing import Dict

from .app import EXPLORER_ACTIONS, GLOBAL_ACTIONS
from .command import COMMAND_ACTIONS, SEARCH_ACTIONS, submit_command_line, submit_search
from .core import ActionHandler, editor_action, return_to_normal
from .insert import INSERT_ACTIONS
from .normal import NORMAL_ACTIONS

ACTION_TABLES: Dict[str, Dict[str, ActionHandler]] = {
    "global": GLOBAL_ACTIONS,
    "explorer": EXPLORER_ACTIONS,
    "normal": NORMAL_ACTIONS,
    "insert": INSERT_ACTIONS,
    "command": COMMAND_ACTIONS,
    "search": SEARCH_ACTIONS,
}

__all__ = [
    "ACTION_TABLES",
    "ActionHandler",
    "COMMAND_ACTIONS",
    "EXPLORER_ACTIONS",
    "GLOBAL_ACTIONS",
    "INSERT_ACTIONS",
    "NORMAL_ACTIONS",
    "SEARCH_ACTIONS",
    "editor_action",
    "return_to_normal",
    "submit_command_line",
    "submit_search",
]
