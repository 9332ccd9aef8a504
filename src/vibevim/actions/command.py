"""Actions driving the ``:`` command line and the ``/`` search prompt."""

from __future__ import annotations

from typing import Dict

from vibevim.editor import CommandOutcome, execute_command
from vibevim.keymaps.resolver import ResolutionMatch
from vibevim.modes.base_mode import ModeContext, ModeResult
from vibevim.runtime import telemetry

from .core import ActionHandler

_WRITE_COMMANDS = frozenset({"w", "write", "wq"})


def submit_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Execute the typed ``:`` command."""

    del match
    editor = context.editor
    text = editor.command_buffer.strip()
    context.bus.emit("command.submit", text)
    telemetry.record_event(
        "command.submit", data={"command": text}, logger_name="vibevim.modes"
    )

    outcome = execute_command(editor)

    if text.partition(" ")[0] in _WRITE_COMMANDS:
        context.bus.emit(
            "command.write",
            {
                "path": str(editor.buffer.file_path or ""),
                "ok": not editor.buffer.modified,
                "status": editor.status_message,
            },
        )
    if outcome is CommandOutcome.TOGGLE_SIDEBAR:
        context.bus.emit("app.toggle_sidebar", {"context": "command", "command": text})
        return ModeResult(consumed=True, status="host", message=text)
    if outcome is not CommandOutcome.NONE:
        context.bus.emit(
            "command.quit", {"force": outcome is CommandOutcome.FORCE_QUIT}
        )
        return ModeResult(consumed=True, status="command_quit", message=text)
    return ModeResult(consumed=True, status="command_submit", message=text)


def submit_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Search forward for the typed pattern and return to Normal."""

    del match
    editor = context.editor
    pattern = editor.command_buffer
    context.bus.emit("search.submit", pattern)
    found = editor.search_forward()
    editor.command_buffer = ""
    editor.enter_normal_mode()
    return ModeResult(
        consumed=True, status="found" if found else "not_found", message=pattern
    )


def cancel_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Discard the typed text and return to Normal."""

    del match
    context.editor.command_buffer = ""
    context.editor.enter_normal_mode()
    return ModeResult(consumed=True, message="command_cancel")


def backspace_command_line(
    context: ModeContext, match: ResolutionMatch
) -> ModeResult:
    """Delete the last typed character; on an empty line return to Normal."""

    del match
    editor = context.editor
    if not editor.command_buffer:
        editor.enter_normal_mode()
        return ModeResult(consumed=True, message="command_cancel")
    editor.command_buffer = editor.command_buffer[:-1]
    return ModeResult(consumed=True, status="editing")


COMMAND_ACTIONS: Dict[str, ActionHandler] = {
    "cancel": cancel_command_line,
    "execute": submit_command_line,
    "backspace": backspace_command_line,
}

SEARCH_ACTIONS: Dict[str, ActionHandler] = {
    "cancel": cancel_command_line,
    "search_forward": submit_search,
    "backspace": backspace_command_line,
}


__all__ = [
    "COMMAND_ACTIONS",
    "SEARCH_ACTIONS",
    "backspace_command_line",
    "cancel_command_line",
    "submit_command_line",
    "submit_search",
]
