from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from vibevim.adapters.textual import (
    EditorView,
    TextualUIHooks,
    TextualVimAdapter,
    translate_textual_key,
)
from vibevim.adapters.textual.app import build_editor
from vibevim.buffer import TextStore
from vibevim.editor import Editor
from vibevim.keymaps import KeyStroke
from vibevim.modes.mode_manager import ModeManager, create_default_manager
from vibevim.runtime.config import EngineConfig


def make_manager(text: str = "") -> ModeManager:
    config = EngineConfig(keybinds_path=Path("/nonexistent/keybinds.json"))
    return create_default_manager(Editor(TextStore.from_text(text)), config=config)


def test_translate_named_and_modified_keys() -> None:
    assert translate_textual_key("escape", "\x1b") == KeyStroke("Esc")
    assert translate_textual_key("enter", "\r") == KeyStroke("Enter")
    assert translate_textual_key("space", " ") == KeyStroke(" ")
    assert translate_textual_key("f5") == KeyStroke("F5")
    assert translate_textual_key("ctrl+w", "\x17") == KeyStroke("w", ("ctrl",))
    assert translate_textual_key("shift+tab") == KeyStroke("Tab", ("shift",))


def test_translate_printable_characters_drop_shift() -> None:
    assert translate_textual_key("G", "G") == KeyStroke("G")
    assert translate_textual_key("shift+g", "G") == KeyStroke("G")
    assert translate_textual_key("colon", ":") == KeyStroke(":")


def test_translate_unknown_keys() -> None:
    assert translate_textual_key("pageup") is None
    assert translate_textual_key("hyper+x") is None


def test_adapter_updates_view_and_status() -> None:
    manager = make_manager("abc\ndef")
    views: List[EditorView] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_view=views.append,
        update_status=statuses.append,
    )
    adapter = TextualVimAdapter(manager, hooks)

    adapter.handle_textual_key("j", character="j")
    adapter.handle_textual_key("i", character="i")

    assert views[-1].cursor == (1, 0)
    assert views[-1].mode == "INSERT"
    assert views[-1].lines == ("abc", "def")
    assert statuses[-1].startswith("-- INSERT --")


def test_adapter_shows_command_line_and_relays_events() -> None:
    manager = make_manager("abc")
    command_lines: List[str] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_view=lambda view: None,
        show_command=command_lines.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualVimAdapter(manager, hooks)

    adapter.handle_textual_key("colon", character=":")
    adapter.handle_textual_key("q", character="q")
    assert command_lines[-1] == ":q"

    adapter.handle_textual_key("enter", character="\r")

    assert command_lines[-1] == ""
    assert ("command.submit", "q") in events
    assert adapter.should_quit is True


def test_adapter_status_prefers_editor_message() -> None:
    manager = make_manager("abc")
    statuses: List[str] = []
    adapter = TextualVimAdapter(
        manager, TextualUIHooks(update_view=lambda view: None, update_status=statuses.append)
    )

    for key, character in (("slash", "/"), ("z", "z"), ("enter", "\r")):
        adapter.handle_textual_key(key, character=character)

    assert statuses[-1] == "Pattern not found"


def test_adapter_viewport_height_limits_visible_lines() -> None:
    manager = make_manager("\n".join(f"line {i}" for i in range(20)))
    views: List[EditorView] = []
    adapter = TextualVimAdapter(manager, TextualUIHooks(update_view=views.append))

    adapter.set_viewport_height(5)
    adapter.handle_textual_key("G", character="G")

    assert views[-1].first_line == 15
    assert len(views[-1].lines) == 5
    assert views[-1].lines[-1] == "line 19"


def test_adapter_ignores_unknown_keys() -> None:
    manager = make_manager("abc")
    adapter = TextualVimAdapter(manager, TextualUIHooks(update_view=lambda view: None))

    assert adapter.handle_textual_key("pageup") is None


def test_adapter_emits_log_lines() -> None:
    manager = make_manager()
    logs: List[str] = []
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_view=lambda view: None,
        handle_event=lambda name, payload: events.append({"name": name}),
        log=logs.append,
    )
    adapter = TextualVimAdapter(manager, hooks)

    adapter.handle_textual_key("i", character="i")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
    assert {"name": "mode.switch"} in events


def test_build_editor_starts_new_file_bound_to_path(tmp_path: Path) -> None:
    target = tmp_path / "fresh.txt"
    config = EngineConfig(keybinds_path=tmp_path / "keybinds.json", tab_width=2)

    editor = build_editor(str(target), config)

    assert editor.buffer.is_empty()
    assert editor.buffer.modified is False
    assert editor.buffer.file_path == target
    assert editor.status_message == f"New file: {target}"
    assert editor.tab_width == 2


def test_build_editor_loads_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("alpha\nbeta", encoding="utf-8")

    editor = build_editor(str(target), EngineConfig(keybinds_path=tmp_path / "k.json"))

    assert editor.buffer.snapshot() == ("alpha", "beta")
    assert editor.status_message is None
