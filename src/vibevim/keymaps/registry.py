"""Keymap registry holding the keybind table and the action handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from vibevim.runtime.telemetry import span

from .models import ActionRef, Binding, KeybindMap, action_id


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    contexts: tuple[str, ...]


class KeymapRegistry:
    """Owns ``context -> action -> bindings`` plus the callable for each action."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._keybinds: KeybindMap = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    # ------------------------------------------------------------------
    # actions

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def get_action(self, context: str, name: str) -> ActionRef:
        qualified = action_id(context, name)
        try:
            return self._actions[qualified]
        except KeyError as exc:
            raise KeyError(f"Action '{qualified}' is not registered") from exc

    def find_action(self, context: str, name: str) -> Optional[ActionRef]:
        return self._actions.get(action_id(context, name))

    # ------------------------------------------------------------------
    # bindings

    def set_bindings(
        self, context: str, action: str, bindings: Sequence[Binding]
    ) -> None:
        """Replace every binding of ``action`` in ``context``."""

        with span(
            "keymaps::set_bindings",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"context": context, "action": action, "count": len(bindings)},
        ):
            self._keybinds.setdefault(context, {})[action] = list(bindings)
            self._touch_bindings()

    def add_binding(self, context: str, action: str, binding: Binding) -> None:
        self._keybinds.setdefault(context, {}).setdefault(action, []).append(binding)
        self._touch_bindings()

    def remove_action_bindings(self, context: str, action: str) -> bool:
        bucket = self._keybinds.get(context)
        if not bucket or action not in bucket:
            return False
        del bucket[action]
        self._touch_bindings()
        return True

    def bindings_for(self, context: str, action: str) -> tuple[Binding, ...]:
        return tuple(self._keybinds.get(context, {}).get(action, ()))

    def iter_context(self, context: str) -> Iterator[Tuple[str, Binding]]:
        """Yield ``(action, binding)`` pairs in table order."""

        for action, bindings in self._keybinds.get(context, {}).items():
            for binding in bindings:
                yield action, binding

    def merge(self, overrides: Mapping[str, Mapping[str, Iterable[Binding]]]) -> None:
        """Lay ``overrides`` over the table, replacing whole actions."""

        with span(
            "keymaps::merge",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"contexts": ",".join(overrides)},
        ):
            for context, actions in overrides.items():
                bucket = self._keybinds.setdefault(context, {})
                for action, bindings in actions.items():
                    bucket[action] = list(bindings)
            self._touch_bindings()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=sum(
                len(bindings)
                for actions in self._keybinds.values()
                for bindings in actions.values()
            ),
            contexts=tuple(sorted(self._keybinds)),
        )

    def _touch_bindings(self) -> None:
        self._revision += 1


__all__ = [
    "KeymapRegistry",
    "RegistryStats",
]
