"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from vibevim.keymaps.registry import KeymapRegistry
from vibevim.keymaps.resolver import KeymapResolver, ResolutionMatch
from vibevim.runtime import telemetry

from .base_mode import ModeContext, ModeResult


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def require_keymap_registry(context: ModeContext) -> KeymapRegistry:
    registry = context.extras.get("keymap_registry")
    if not isinstance(registry, KeymapRegistry):
        raise RuntimeError("ModeContext.extras missing 'keymap_registry'")
    return registry


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Run the handler registered for ``match``.

    A binding may name an action that has no handler (a typo in the user's
    keybinds file); the key is then consumed without effect.
    """

    registry = require_keymap_registry(context)
    action = registry.find_action(match.context, match.action)
    if action is None:
        telemetry.record_event(
            "keymaps.unknown_action",
            level="warning",
            data={"context": match.context, "action": match.action},
            logger_name="vibevim.keymaps",
        )
        return ModeResult(consumed=True, status="noop", message=match.action)

    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding": match.binding.key_signature, "action": action.id},
    ):
        outcome = action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True, message=action.id)


__all__ = [
    "execute_match",
    "require_keymap_registry",
    "require_keymap_resolver",
]
