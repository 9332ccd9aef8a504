"""Mode manager dispatching key events to the mode the editor is in."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional, Type

from vibevim.editor import Editor, Mode as EditorMode
from vibevim.keymaps.defaults import load_default_keymaps
from vibevim.keymaps.loader import apply_user_keybinds
from vibevim.keymaps.registry import KeymapRegistry
from vibevim.keymaps.resolver import KeymapResolver
from vibevim.runtime import telemetry
from vibevim.runtime.config import EngineConfig

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .command_mode import CommandMode, SearchMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode

_ENTRY_POINTS: Dict[str, Callable[[Editor], None]] = {
    EditorMode.NORMAL.value: Editor.enter_normal_mode,
    EditorMode.INSERT.value: Editor.enter_insert_mode,
    EditorMode.COMMAND.value: Editor.enter_command_mode,
    EditorMode.SEARCH.value: Editor.enter_search_mode,
}


class ModeManager:
    """Owns the registered modes and routes keys by ``Editor.mode``.

    Actions change the editor's mode directly; after every key the manager
    compares the editor's mode with the one it dispatched to and runs the
    ``on_exit``/``on_enter`` hooks for the transition.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self.logger = telemetry.get_logger("vibevim.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vibevim.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="vibevim.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def editor(self) -> Editor:
        return self.context.editor

    @property
    def bus(self) -> ModeBus:
        return self.context.bus

    @property
    def active_name(self) -> str:
        return self.editor.mode.value

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self.active_name)

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        return mode

    def switch_mode(self, name: str) -> None:
        """Move the editor into ``name`` through its regular entry point."""

        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_name
        if previous == name:
            return
        _ENTRY_POINTS[name](self.editor)
        self._transition(previous)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError(f"No mode registered for '{self.active_name}'")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.token, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(mode, result)

    def _after_mode_result(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.switch_to and result.switch_to != self.active_name:
            self.switch_mode(result.switch_to)
            return result
        if self.active_name != mode.name:
            result.switch_to = self.active_name
            self._transition(mode.name)
        return result

    def _transition(self, previous: str) -> None:
        current = self.active_name
        old = self._modes.get(previous)
        if old is not None:
            old.on_exit(current)
        new = self._modes.get(current)
        if new is not None:
            new.on_enter(previous)
        telemetry.record_event(
            "mode.switch", data={"from": previous, "mode": current}
        )
        self.bus.emit("mode.switch", {"from": previous, "to": current})


def create_default_manager(
    editor: Editor | None = None,
    *,
    config: EngineConfig | None = None,
    bus: ModeBus | None = None,
    load_user: bool = True,
    keybinds_path: Path | str | None = None,
) -> ModeManager:
    """Build an editor, load default and user keymaps and register all modes."""

    config = config or EngineConfig.from_env()
    if editor is None:
        editor = Editor(
            tab_width=config.tab_width, viewport_height=config.viewport_height
        )
    context = ModeContext(editor=editor, bus=bus or ModeBus())
    manager = ModeManager(context)
    if load_user:
        apply_user_keybinds(
            manager.keymap_registry, keybinds_path or config.keybinds_path
        )
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(CommandMode)
    manager.register_mode(SearchMode)
    return manager


__all__ = ["ModeManager", "create_default_manager"]
