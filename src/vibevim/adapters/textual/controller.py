"""Minimal Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from vibevim.editor import Editor, Mode as EditorMode
from vibevim.keymaps.models import CHORD_FORBIDDEN_MODIFIERS, KeyStroke
from vibevim.modes import ModeResult
from vibevim.modes.mode_manager import ModeManager

_TEXTUAL_NAMED_KEYS = {
    "escape": "Esc",
    "enter": "Enter",
    "return": "Enter",
    "backspace": "Backspace",
    "tab": "Tab",
    "left": "Left",
    "right": "Right",
    "up": "Up",
    "down": "Down",
    "space": " ",
}

_TEXTUAL_MODIFIERS = {
    "ctrl": "ctrl",
    "alt": "alt",
    "meta": "alt",
    "shift": "shift",
    "super": "super",
}

_PROMPTS = {EditorMode.COMMAND: ":", EditorMode.SEARCH: "/"}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def translate_textual_key(
    key: str, character: Optional[str] = None
) -> Optional[KeyStroke]:
    """Turn a Textual key name (``"ctrl+w"``, ``"escape"``, ``"f5"``) into a key.

    Printable characters win over the key name and carry no ``shift``, so
    ``"G"`` arrives as the character ``G`` exactly like the keybind table
    spells it. Keys the editor has no name for yield ``None``.
    """

    parts = key.split("+") if key != "+" else ["+"]
    base = parts[-1]
    modifiers = []
    for part in parts[:-1]:
        modifier = _TEXTUAL_MODIFIERS.get(part.lower())
        if modifier is None:
            return None
        modifiers.append(modifier)

    if (
        character
        and len(character) == 1
        and character.isprintable()
        and not CHORD_FORBIDDEN_MODIFIERS.intersection(modifiers)
    ):
        return KeyStroke(code=character)

    lowered = base.lower()
    if lowered in _TEXTUAL_NAMED_KEYS:
        code = _TEXTUAL_NAMED_KEYS[lowered]
    elif len(base) == 1:
        code = base
    elif lowered[:1] == "f" and lowered[1:].isdigit() and 1 <= int(lowered[1:]) <= 12:
        code = f"F{int(lowered[1:])}"
    else:
        return None
    return KeyStroke(code=code, modifiers=tuple(modifiers))


@dataclass(frozen=True, slots=True)
class EditorView:
    """What the host needs to draw the text area for one frame."""

    lines: Tuple[str, ...]
    first_line: int
    cursor: Tuple[int, int]
    mode: str
    buffer_name: str
    modified: bool


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[EditorView], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualVimAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    EVENTS = (
        "mode.switch",
        "command.start",
        "command.end",
        "command.submit",
        "command.write",
        "command.quit",
        "search.start",
        "search.end",
        "search.submit",
        "app.toggle_sidebar",
        "app.focus_explorer_toggle",
        "app.refresh",
        "app.open_enter",
    )

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    @property
    def editor(self) -> Editor:
        return self.manager.editor

    @property
    def should_quit(self) -> bool:
        return self.editor.should_quit

    def set_viewport_height(self, height: int) -> None:
        """Record the rows available for text and scroll the cursor into view."""

        self.editor.adjust_viewport(height)
        self._refresh_view()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[ModeResult]:
        """Translate a Textual key event and dispatch it; ``None`` if unknown."""

        stroke = translate_textual_key(key, character)
        self._log_state("key ->", key=key, character=character, stroke=stroke)
        if stroke is None:
            return None
        return self.handle_key(stroke)

    def handle_key(self, key: KeyStroke) -> ModeResult:
        result = self.manager.handle_key(key)
        self.refresh()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def refresh(self) -> None:
        self._refresh_view()
        self._refresh_status()
        self._refresh_command_line()

    def _subscribe_events(self) -> None:
        bus = self.manager.bus
        for event in self.EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_view(self) -> None:
        editor = self.editor
        visible = editor.visible_range()
        snapshot = editor.buffer.snapshot()
        self.hooks.update_view(
            EditorView(
                lines=tuple(snapshot[visible.start : visible.stop]),
                first_line=visible.start,
                cursor=editor.cursor.as_tuple(),
                mode=editor.mode.as_str(),
                buffer_name=editor.buffer.filename() or "[No Name]",
                modified=editor.buffer.modified,
            )
        )

    def _refresh_status(self) -> None:
        editor = self.editor
        if editor.status_message:
            self.hooks.update_status(editor.status_message)
            return
        line, column = editor.cursor.as_tuple()
        flag = " [+]" if editor.buffer.modified else ""
        name = editor.buffer.filename() or "[No Name]"
        self.hooks.update_status(
            f"-- {editor.mode.as_str()} -- {name}{flag}  {line + 1}:{column + 1}"
        )

    def _refresh_command_line(self) -> None:
        editor = self.editor
        prompt = _PROMPTS.get(editor.mode)
        self.hooks.show_command(f"{prompt}{editor.command_buffer}" if prompt else "")

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        editor = self.editor
        return {
            "mode": editor.mode.as_str(),
            "cursor": editor.cursor.as_tuple(),
            "pending": editor.pending.kind.value,
            "command": editor.command_buffer,
            "buffer": editor.buffer.filename(),
        }


__all__ = [
    "EditorView",
    "TextualUIHooks",
    "TextualVimAdapter",
    "translate_textual_key",
]
