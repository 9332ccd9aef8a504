"""Core action plumbing shared by every context."""

from __future__ import annotations

from typing import Callable, Optional

from vibevim.keymaps.resolver import ResolutionMatch
from vibevim.modes.base_mode import ModeContext, ModeResult

ActionHandler = Callable[[ModeContext, ResolutionMatch], Optional[ModeResult]]


def editor_action(method: str, description: str = "") -> ActionHandler:
    """Wrap a no-argument ``Editor`` method as a keymap action."""

    def handler(context: ModeContext, match: ResolutionMatch) -> ModeResult:
        del match
        getattr(context.editor, method)()
        return ModeResult(consumed=True, message=method)

    handler.__name__ = method
    handler.__qualname__ = method
    handler.__doc__ = description or None
    return handler


def return_to_normal(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Leave the current mode for Normal."""

    del match
    context.editor.enter_normal_mode()
    return ModeResult(consumed=True, message="return_to_normal")


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Open the ``:`` command line."""

    del match
    context.editor.enter_command_mode()
    return ModeResult(consumed=True, message="enter_command")


__all__ = [
    "ActionHandler",
    "editor_action",
    "enter_command_mode",
    "return_to_normal",
]
