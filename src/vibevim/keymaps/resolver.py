"""Keymap resolution over one context with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from vibevim.runtime.telemetry import span

from .models import Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Binding that fired together with the action it belongs to."""

    context: str
    action: str
    binding: Binding


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver.

    ``match`` means the action should run now, ``pending`` means ``key`` was
    the first key of a chord of ``match.action`` and ``miss`` means the key is
    unbound in the context.
    """

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None

    @property
    def starts_chord(self) -> bool:
        return self.status == "pending"


MISS = ResolutionResult(status="miss")


class KeymapResolver:
    """Resolves single keys and chord completions against a registry."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        context: str,
        key: KeyStroke,
        *,
        pending_action: Optional[str] = None,
    ) -> ResolutionResult:
        """Resolve ``key`` in ``context``.

        With ``pending_action`` set only the second keys of that action's
        chords are considered; otherwise actions are scanned in table order
        and the first binding whose first key matches wins.
        """

        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"context": context, "key": key.token},
        ) as handle:
            if pending_action is not None:
                result = self._complete_chord(context, pending_action, key)
            else:
                result = self._scan(context, key)
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("action", result.match.action)
            return result

    def resolve_chord_completion(
        self, context: str, action: str, key: KeyStroke
    ) -> ResolutionResult:
        return self.resolve(context, key, pending_action=action)

    def _complete_chord(
        self, context: str, action: str, key: KeyStroke
    ) -> ResolutionResult:
        for binding in self._registry.bindings_for(context, action):
            if binding.matches_second_key(key):
                return ResolutionResult(
                    status="match",
                    match=ResolutionMatch(context, action, binding),
                )
        return MISS

    def _scan(self, context: str, key: KeyStroke) -> ResolutionResult:
        for action, binding in self._registry.iter_context(context):
            if not binding.matches_first_key(key):
                continue
            status: Literal["match", "pending"] = (
                "pending" if binding.is_chord else "match"
            )
            return ResolutionResult(
                status=status, match=ResolutionMatch(context, action, binding)
            )
        return MISS


__all__ = [
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
]
