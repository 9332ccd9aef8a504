"""Normal mode: motions, edits and the two-key chord machinery."""

from __future__ import annotations

from vibevim.editor import PendingAction, PendingKind
from vibevim.keymaps.resolver import ResolutionResult
from vibevim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver

# lookup order for keys typed in Normal mode
NORMAL_CONTEXTS = ("normal", "global")


class NormalMode(Mode):
    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vibevim.modes.normal")
        self._resolver = require_keymap_resolver(context)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.editor.clear_pending()

    def handle_key(self, key: KeyInput) -> ModeResult:
        editor = self.editor
        editor.clear_status()

        pending = editor.pending
        if pending.is_armed:
            editor.clear_pending()
            if pending.kind is PendingKind.AWAITING_REPLACEMENT_CHAR:
                if key.text is not None:
                    editor.replace_char_at_cursor(key.text)
                    return ModeResult(consumed=True, status="replace")
            elif pending.context is not None and pending.action is not None:
                result = self._resolver.resolve(
                    pending.context, key, pending_action=pending.action
                )
                if result.status == "match" and result.match:
                    return execute_match(self.context, result.match)
            # the chord is broken; the key is handled on its own below
            self.logger.debug("pending %s cleared by %s", pending.kind.value, key.token)

        for context_name in NORMAL_CONTEXTS:
            result = self._resolver.resolve(context_name, key)
            if result.status != "miss":
                return self._dispatch(result)

        return ModeResult(consumed=False, status="miss")

    def _dispatch(self, result: ResolutionResult) -> ModeResult:
        match = result.match
        assert match is not None
        if result.starts_chord:
            self.editor.pending = PendingAction.for_chord(match.context, match.action)
            return ModeResult(
                consumed=True, status="pending", message=match.binding.key_signature
            )
        return execute_match(self.context, match)
