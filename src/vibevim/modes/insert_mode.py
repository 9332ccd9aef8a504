"""Insert mode: bound keys run actions, other printable keys are typed."""

from __future__ import annotations

from vibevim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver


class InsertMode(Mode):
    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vibevim.modes.insert")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, key)
        # chords only arm in Normal mode, so a chord's first key is typed here
        if result.status == "match" and result.match:
            return execute_match(self.context, result.match)

        if key.text is not None:
            self.editor.insert_char(key.text)
            return ModeResult(consumed=True, status="insert")

        return ModeResult(consumed=False, status="miss")
