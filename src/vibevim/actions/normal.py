"""Normal-mode actions: motions, insert entry and line edits."""

from __future__ import annotations

from typing import Dict

from vibevim.editor import PendingAction
from vibevim.keymaps.resolver import ResolutionMatch
from vibevim.modes.base_mode import ModeContext, ModeResult

from .core import ActionHandler, editor_action, enter_command_mode, return_to_normal


def replace_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Replace the character under the cursor with the next key typed."""

    del match
    context.editor.pending = PendingAction.replacement()
    return ModeResult(consumed=True, status="pending", message="replace_char")


def enter_search_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Open the ``/`` search prompt."""

    del match
    context.editor.enter_search_mode()
    return ModeResult(consumed=True, message="enter_search")


def repeat_search_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Jump to the next match of the last search."""

    del match
    found = context.editor.repeat_search_forward()
    return ModeResult(consumed=True, status="found" if found else "not_found")


def repeat_search_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Jump to the previous match of the last search."""

    del match
    found = context.editor.repeat_search_backward()
    return ModeResult(consumed=True, status="found" if found else "not_found")


NORMAL_ACTIONS: Dict[str, ActionHandler] = {
    "move_left": editor_action("move_left", "Cursor one column left"),
    "move_down": editor_action("move_down", "Cursor one line down"),
    "move_up": editor_action("move_up", "Cursor one line up"),
    "move_right": editor_action("move_right", "Cursor one column right"),
    "move_word_forward": editor_action("move_word_forward", "Start of next word"),
    "move_word_backward": editor_action("move_word_backward", "Start of previous word"),
    "move_to_end_of_word": editor_action("move_to_end_of_word", "End of word"),
    "move_word_forward_W": editor_action("move_word_forward", "Start of next WORD"),
    "move_word_backward_B": editor_action(
        "move_word_backward", "Start of previous WORD"
    ),
    "move_to_end_of_word_E": editor_action("move_to_end_of_word", "End of WORD"),
    "move_to_line_start": editor_action("move_to_line_start", "Column 0"),
    "move_to_line_end": editor_action("move_to_line_end", "End of line"),
    "move_to_first_non_blank": editor_action(
        "move_to_first_non_blank", "First non-blank character"
    ),
    "move_to_first_line": editor_action("move_to_first_line", "First line"),
    "move_to_last_line": editor_action("move_to_last_line", "Last line"),
    "move_paragraph_prev": editor_action("move_paragraph_prev", "Previous blank line"),
    "move_paragraph_next": editor_action("move_paragraph_next", "Next blank line"),
    "enter_insert_mode": editor_action("enter_insert_mode", "Insert before cursor"),
    "enter_insert_mode_append": editor_action(
        "enter_insert_mode_append", "Insert after cursor"
    ),
    "enter_insert_mode_end": editor_action(
        "enter_insert_mode_end", "Insert at end of line"
    ),
    "enter_insert_mode_start": editor_action(
        "enter_insert_mode_start", "Insert at start of line"
    ),
    "open_line_below": editor_action("open_line_below", "Open a line below"),
    "open_line_above": editor_action("open_line_above", "Open a line above"),
    "delete_char_at_cursor": editor_action(
        "delete_char_at_cursor", "Delete character under cursor"
    ),
    "delete_to_end_of_line": editor_action(
        "delete_to_end_of_line", "Delete to end of line"
    ),
    "join_lines": editor_action("join_lines", "Join with next line"),
    "delete_current_line": editor_action("delete_current_line", "Delete line"),
    "replace_char": replace_char,
    "enter_command_mode": enter_command_mode,
    "enter_search_mode": enter_search_mode,
    "repeat_search_forward": repeat_search_forward,
    "repeat_search_backward": repeat_search_backward,
    "return_to_normal": return_to_normal,
}


__all__ = ["NORMAL_ACTIONS"]
