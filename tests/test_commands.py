from __future__ import annotations

from pathlib import Path

import pytest

from vibevim.buffer import TextStore
from vibevim.editor import CommandOutcome, Editor, Mode, execute_command
from vibevim.editor.commands import QUIT_REFUSED


def make_editor(text: str = "", path: Path | None = None) -> Editor:
    editor = Editor(TextStore.from_text(text, file_path=path))
    editor.enter_command_mode()
    return editor


def run(editor: Editor, command: str) -> CommandOutcome:
    editor.command_buffer = command
    return execute_command(editor)


def test_execute_always_returns_to_normal_and_clears_buffer() -> None:
    editor = make_editor()

    outcome = run(editor, "nonsense")

    assert outcome is CommandOutcome.NONE
    assert editor.mode is Mode.NORMAL
    assert editor.command_buffer == ""
    assert editor.status_message == "Unknown command: nonsense"


def test_empty_command_is_unknown() -> None:
    editor = make_editor()

    assert run(editor, "   ") is CommandOutcome.NONE
    assert editor.status_message == "Unknown command: "
    assert editor.mode is Mode.NORMAL
    assert editor.should_quit is False


@pytest.mark.parametrize("command", ["e.", "Explore", " Lexplore "])
def test_explore_commands_toggle_sidebar(command: str) -> None:
    editor = make_editor("abc")

    assert run(editor, command) is CommandOutcome.TOGGLE_SIDEBAR
    assert editor.status_message is None
    assert editor.mode is Mode.NORMAL
    assert editor.command_buffer == ""
    assert editor.should_quit is False


def test_quit_clean_buffer() -> None:
    editor = make_editor("abc")

    assert run(editor, " q ") is CommandOutcome.QUIT
    assert editor.should_quit is True


def test_quit_refused_when_modified() -> None:
    editor = make_editor("abc")
    editor.buffer.insert_char(0, 0, "x")

    outcome = run(editor, "quit")

    assert outcome is CommandOutcome.NONE
    assert editor.status_message == QUIT_REFUSED
    assert editor.should_quit is False


def test_force_quit_ignores_modifications() -> None:
    editor = make_editor("abc")
    editor.buffer.insert_char(0, 0, "x")

    assert run(editor, "q!") is CommandOutcome.FORCE_QUIT
    assert editor.should_quit is True


def test_write_reports_file_name(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    editor = make_editor("hello", path=target)
    editor.buffer.insert_char(0, 5, "!")

    run(editor, "w")

    assert target.read_text(encoding="utf-8") == "hello!"
    assert editor.status_message == '"out.txt" written'
    assert editor.buffer.modified is False


def test_write_without_path_reports_error() -> None:
    editor = make_editor("hello")

    run(editor, "write")

    assert editor.status_message is not None
    assert editor.status_message.startswith("Error saving: ")


def test_write_as_path(tmp_path: Path) -> None:
    target = tmp_path / "named file.txt"
    editor = make_editor("data")

    run(editor, f"w {target}")

    assert target.read_text(encoding="utf-8") == "data"
    assert editor.status_message == f'"{target}" written'
    assert editor.buffer.file_path == target


def test_wq_quits_only_after_successful_save(tmp_path: Path) -> None:
    editor = make_editor("x")
    editor.buffer.insert_char(0, 0, "y")

    assert run(editor, "wq") is CommandOutcome.NONE
    assert editor.should_quit is False
    assert editor.status_message is not None
    assert editor.status_message.startswith("Error saving: ")

    editor.buffer.file_path = tmp_path / "saved.txt"
    assert run(editor, "wq") is CommandOutcome.QUIT
    assert editor.should_quit is True


def test_quit_with_argument_is_unknown() -> None:
    editor = make_editor()

    assert run(editor, "q now") is CommandOutcome.NONE
    assert editor.status_message == "Unknown command: q now"


def test_buffer_switch_commands(tmp_path: Path) -> None:
    other = tmp_path / "b.txt"
    other.write_text("second", encoding="utf-8")
    editor = make_editor("first")
    editor.open_file_into_new_buffer(other)

    run(editor, "bn")
    assert editor.buffer.text == "first"

    run(editor, "bprevious")
    assert editor.buffer.text == "second"
