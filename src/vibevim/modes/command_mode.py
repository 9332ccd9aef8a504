"""Command-line (``:``) and search (``/``) modes sharing one input buffer."""

from __future__ import annotations

from vibevim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver


class CommandLineMode(Mode):
    """Edits ``Editor.command_buffer``; bound keys run the context's actions."""

    name = "command_line"
    prompt = ""

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"vibevim.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.bus.emit(f"{self.name}.start", self.prompt)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.bus.emit(f"{self.name}.end", self.editor.command_buffer)

    @property
    def current_text(self) -> str:
        return self.editor.command_buffer

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, key)
        if result.status == "match" and result.match:
            return execute_match(self.context, result.match)

        if key.text is not None:
            self.editor.command_buffer += key.text
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss", message="unhandled")


class CommandMode(CommandLineMode):
    name = "command"
    prompt = ":"


class SearchMode(CommandLineMode):
    name = "search"
    prompt = "/"


__all__ = ["CommandLineMode", "CommandMode", "SearchMode"]
