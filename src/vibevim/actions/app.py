"""Global and explorer actions the host application carries out.

The core has no sidebar or file tree; these actions publish an
``app.<action>`` event on the mode bus and leave the rest to the host.
"""

from __future__ import annotations

from typing import Dict

from vibevim.keymaps.resolver import ResolutionMatch
from vibevim.modes.base_mode import ModeContext, ModeResult

from .core import ActionHandler, enter_command_mode


def _publish(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    context.bus.emit(
        f"app.{match.action}",
        {"context": match.context, "binding": match.binding.key_signature},
    )
    return ModeResult(consumed=True, status="host", message=match.action)


def toggle_sidebar(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Show or hide the explorer sidebar."""

    return _publish(context, match)


def focus_explorer_toggle(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Move focus between the editor and the explorer."""

    return _publish(context, match)


def refresh(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Reload the explorer listing."""

    return _publish(context, match)


def open_enter(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Open the selected explorer entry."""

    return _publish(context, match)


GLOBAL_ACTIONS: Dict[str, ActionHandler] = {
    "toggle_sidebar": toggle_sidebar,
    "focus_explorer_toggle": focus_explorer_toggle,
    "enter_command_mode": enter_command_mode,
}

EXPLORER_ACTIONS: Dict[str, ActionHandler] = {
    "refresh": refresh,
    "open_enter": open_enter,
}


__all__ = ["EXPLORER_ACTIONS", "GLOBAL_ACTIONS"]
