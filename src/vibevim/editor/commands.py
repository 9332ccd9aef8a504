"""Ex-style ``:`` command interpreter operating on an :class:`Editor`."""

from __future__ import annotations

from enum import Enum
from functools import partial
from typing import Callable, Dict, Optional

from vibevim.runtime import telemetry

from .editor import Editor

QUIT_REFUSED = "No write since last change (add ! to override)"


class CommandOutcome(Enum):
    """What a command asks of the host beyond the editor state changes."""

    NONE = "none"
    QUIT = "quit"
    FORCE_QUIT = "force_quit"
    TOGGLE_SIDEBAR = "toggle_sidebar"


CommandHandler = Callable[[Editor, str], CommandOutcome]

_QUIT_OUTCOMES = frozenset({CommandOutcome.QUIT, CommandOutcome.FORCE_QUIT})

# only these take an argument (the path to write to)
_PATH_COMMANDS = frozenset({"w", "write"})


def execute_command(editor: Editor, raw: Optional[str] = None) -> CommandOutcome:
    """Run ``raw`` (the command-line buffer by default) and return to Normal.

    Quit requests are checked against the current buffer here: a plain quit on
    a modified buffer is refused with a status message and reported as
    ``CommandOutcome.NONE``.
    """

    text = (editor.command_buffer if raw is None else raw).strip()
    name, _, arg = text.partition(" ")
    arg = arg.strip()

    with telemetry.span(
        "command::execute",
        logger_name="vibevim.editor.commands",
        component="command",
        metadata={"command": name},
    ) as handle:
        handler = _COMMAND_HANDLERS.get(name)
        if handler is None or (arg and name not in _PATH_COMMANDS):
            outcome = _unknown_command(editor, text)
        else:
            outcome = handler(editor, arg)
        if outcome is CommandOutcome.QUIT and editor.buffer.modified:
            editor.set_status(QUIT_REFUSED)
            outcome = CommandOutcome.NONE
        handle.add_metadata("outcome", outcome.value)

    editor.command_buffer = ""
    editor.enter_normal_mode()
    if outcome in _QUIT_OUTCOMES:
        editor.should_quit = True
    return outcome


def _unknown_command(editor: Editor, text: str) -> CommandOutcome:
    editor.set_status(f"Unknown command: {text}")
    return CommandOutcome.NONE


def _save(editor: Editor, path: str = "") -> bool:
    try:
        if path:
            editor.save_as(path)
        else:
            editor.save()
    except OSError as exc:
        editor.set_status(f"Error saving: {exc}")
        return False
    return True


def _handle_write(editor: Editor, arg: str) -> CommandOutcome:
    _save(editor, arg)
    return CommandOutcome.NONE


def _handle_quit(editor: Editor, arg: str, *, force: bool = False) -> CommandOutcome:
    del editor, arg
    return CommandOutcome.FORCE_QUIT if force else CommandOutcome.QUIT


def _handle_wq(editor: Editor, arg: str) -> CommandOutcome:
    del arg
    if not _save(editor):
        return CommandOutcome.NONE
    return CommandOutcome.QUIT


def _handle_explore(editor: Editor, arg: str) -> CommandOutcome:
    del editor, arg
    return CommandOutcome.TOGGLE_SIDEBAR


def _handle_buffer(editor: Editor, arg: str, *, forward: bool) -> CommandOutcome:
    del arg
    if forward:
        editor.next_buffer()
    else:
        editor.prev_buffer()
    return CommandOutcome.NONE


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _handle_write,
    "write": _handle_write,
    "q": _handle_quit,
    "quit": _handle_quit,
    "q!": partial(_handle_quit, force=True),
    "quit!": partial(_handle_quit, force=True),
    "wq": _handle_wq,
    "bn": partial(_handle_buffer, forward=True),
    "bnext": partial(_handle_buffer, forward=True),
    "bp": partial(_handle_buffer, forward=False),
    "bprev": partial(_handle_buffer, forward=False),
    "bprevious": partial(_handle_buffer, forward=False),
    "e.": _handle_explore,
    "Explore": _handle_explore,
    "Lexplore": _handle_explore,
}


__all__ = ["CommandOutcome", "QUIT_REFUSED", "execute_command"]
