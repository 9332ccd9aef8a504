"""Editor state aggregate: open buffers, cursor, motions and edits."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from vibevim.buffer import TextStore
from vibevim.runtime import telemetry
from vibevim.runtime.config import DEFAULT_TAB_WIDTH, DEFAULT_VIEWPORT_HEIGHT

from .state import NO_PENDING, Cursor, Mode, PendingAction


class Editor:
    """Cursor & motion engine over a list of open ``TextStore`` buffers.

    Every mutator leaves the cursor inside the current buffer: Insert mode
    allows ``column == line_length``, every other mode clamps to the last
    character. Motions that change the cursor line keep it visible using the
    last viewport height reported by the host.
    """

    def __init__(
        self,
        buffer: Optional[TextStore] = None,
        *,
        tab_width: int = DEFAULT_TAB_WIDTH,
        viewport_height: int = DEFAULT_VIEWPORT_HEIGHT,
    ) -> None:
        self.buffers: List[TextStore] = [buffer if buffer is not None else TextStore()]
        self.current_buf = 0
        self.cursor = Cursor()
        self.mode = Mode.NORMAL
        self.viewport_offset = 0
        self.viewport_height = max(1, viewport_height)
        self.tab_width = tab_width
        self.command_buffer = ""
        self.status_message: Optional[str] = None
        self.pending: PendingAction = NO_PENDING
        self.last_search_pattern: Optional[str] = None
        self.should_quit = False
        self.logger = telemetry.get_logger("vibevim.editor")

    @classmethod
    def with_file(cls, path: Path | str, **kwargs: int) -> "Editor":
        """Open ``path``; raises ``OSError`` when it exists but cannot be read.

        A missing file gives an empty buffer that saves to ``path``.
        """

        return cls(TextStore.open(path), **kwargs)

    # ------------------------------------------------------------------
    # buffers

    @property
    def buffer(self) -> TextStore:
        return self.buffers[self.current_buf]

    def open_file_into_new_buffer(self, path: Path | str) -> None:
        store = TextStore.open(path)
        self.buffers.append(store)
        self.current_buf = len(self.buffers) - 1
        self.cursor = Cursor()
        self.viewport_offset = 0

    def next_buffer(self) -> None:
        if len(self.buffers) <= 1:
            return
        self.current_buf = (self.current_buf + 1) % len(self.buffers)
        self._clamp_cursor_to_buffer()
        self.viewport_offset = 0

    def prev_buffer(self) -> None:
        if len(self.buffers) <= 1:
            return
        self.current_buf = (self.current_buf - 1) % len(self.buffers)
        self._clamp_cursor_to_buffer()
        self.viewport_offset = 0

    # ------------------------------------------------------------------
    # clamping and viewport

    def max_col_for_line(self, line: int) -> int:
        length = self.buffer.line_length(line)
        if self.mode.allows_end_column:
            return length
        return max(0, length - 1)

    def clamp_cursor_col(self) -> None:
        self.cursor.column = min(self.cursor.column, self.max_col_for_line(self.cursor.line))

    def _clamp_cursor_to_buffer(self) -> None:
        self.cursor.line = min(self.cursor.line, self.buffer.line_count() - 1)
        self.clamp_cursor_col()

    def adjust_viewport(self, height: Optional[int] = None) -> None:
        """Shift ``viewport_offset`` minimally so the cursor line is visible."""

        if height is not None:
            self.viewport_height = max(1, height)
        height = self.viewport_height
        if self.cursor.line < self.viewport_offset:
            self.viewport_offset = self.cursor.line
        elif self.cursor.line >= self.viewport_offset + height:
            self.viewport_offset = self.cursor.line - height + 1

    def visible_range(self) -> range:
        end = min(self.buffer.line_count(), self.viewport_offset + self.viewport_height)
        return range(self.viewport_offset, end)

    # ------------------------------------------------------------------
    # basic motions

    def move_left(self) -> None:
        if self.cursor.column > 0:
            self.cursor.column -= 1

    def move_right(self) -> None:
        if self.cursor.column < self.max_col_for_line(self.cursor.line):
            self.cursor.column += 1

    def move_up(self) -> None:
        if self.cursor.line > 0:
            self.cursor.line -= 1
            self.clamp_cursor_col()
            self.adjust_viewport()

    def move_down(self) -> None:
        if self.cursor.line < self.buffer.line_count() - 1:
            self.cursor.line += 1
            self.clamp_cursor_col()
            self.adjust_viewport()

    def move_to_line_start(self) -> None:
        self.cursor.column = 0

    def move_to_line_end(self) -> None:
        self.cursor.column = self.max_col_for_line(self.cursor.line)

    def move_to_first_non_blank(self) -> None:
        chars = self._current_line()
        col = 0
        while col < len(chars) and chars[col].isspace():
            col += 1
        self.cursor.column = min(col, self.max_col_for_line(self.cursor.line))

    def move_to_first_line(self) -> None:
        self.cursor.line = 0
        self.clamp_cursor_col()
        self.adjust_viewport()

    def move_to_last_line(self) -> None:
        self.cursor.line = self.buffer.line_count() - 1
        self.clamp_cursor_col()
        self.adjust_viewport()

    # ------------------------------------------------------------------
    # word motions

    def move_word_forward(self) -> None:
        chars = self._current_line()
        col = self.cursor.column
        while col < len(chars) and not chars[col].isspace():
            col += 1
        while col < len(chars) and chars[col].isspace():
            col += 1

        if col >= len(chars) and self.cursor.line < self.buffer.line_count() - 1:
            self.cursor.line += 1
            self.cursor.column = 0
            self.adjust_viewport()
        else:
            self.cursor.column = min(col, self.max_col_for_line(self.cursor.line))

    def move_word_backward(self) -> None:
        if self.cursor.column == 0:
            if self.cursor.line > 0:
                self.cursor.line -= 1
                self.move_to_line_end()
                self.adjust_viewport()
            return

        chars = self._current_line()
        col = self.cursor.column - 1
        while col > 0 and chars[col].isspace():
            col -= 1
        while col > 0 and not chars[col - 1].isspace():
            col -= 1
        self.cursor.column = col

    def move_to_end_of_word(self) -> None:
        chars = self._current_line()
        col = _end_of_word(chars, self.cursor.column)

        if col >= len(chars) and self.cursor.line < self.buffer.line_count() - 1:
            # ran off this line; land on the end of the next line's first word
            self.cursor.line += 1
            self.adjust_viewport()
            next_col = _end_of_word(self._current_line(), 0)
            self.cursor.column = min(
                max(0, next_col - 1), self.max_col_for_line(self.cursor.line)
            )
        else:
            self.cursor.column = min(
                max(0, col - 1), self.max_col_for_line(self.cursor.line)
            )

    # ------------------------------------------------------------------
    # paragraph motions

    def is_line_blank(self, line: int) -> bool:
        text = self.buffer.line(line)
        return not text or text.isspace()

    def move_paragraph_prev(self) -> None:
        line = self.cursor.line
        while line > 0 and not self.is_line_blank(line):
            line -= 1
        self._jump_to_line_start(line)

    def move_paragraph_next(self) -> None:
        count = self.buffer.line_count()
        line = self.cursor.line + 1
        while line < count and not self.is_line_blank(line):
            line += 1
        self._jump_to_line_start(min(line, count - 1))

    def _jump_to_line_start(self, line: int) -> None:
        self.cursor.line = line
        self.cursor.column = 0
        self.clamp_cursor_col()
        self.adjust_viewport()

    # ------------------------------------------------------------------
    # mode entry

    def enter_insert_mode(self) -> None:
        self.mode = Mode.INSERT

    def enter_insert_mode_append(self) -> None:
        self.mode = Mode.INSERT
        self.move_right()

    def enter_insert_mode_end(self) -> None:
        self.mode = Mode.INSERT
        self.cursor.column = self.buffer.line_length(self.cursor.line)

    def enter_insert_mode_start(self) -> None:
        self.mode = Mode.INSERT
        self.cursor.column = 0

    def open_line_below(self) -> None:
        line = self.cursor.line
        self.buffer.insert_newline(line, self.buffer.line_length(line))
        self.cursor.line += 1
        self.cursor.column = 0
        self.adjust_viewport()
        self.mode = Mode.INSERT

    def open_line_above(self) -> None:
        self.buffer.insert_newline(self.cursor.line, 0)
        self.cursor.column = 0
        self.adjust_viewport()
        self.mode = Mode.INSERT

    def enter_normal_mode(self) -> None:
        self.clear_pending()
        self.mode = Mode.NORMAL
        self.clamp_cursor_col()

    def enter_command_mode(self) -> None:
        self.clear_pending()
        self.mode = Mode.COMMAND
        self.command_buffer = ""

    def enter_search_mode(self) -> None:
        self.clear_pending()
        self.mode = Mode.SEARCH
        self.command_buffer = ""

    def clear_pending(self) -> None:
        self.pending = NO_PENDING

    # ------------------------------------------------------------------
    # editing

    def insert_char(self, ch: str) -> None:
        if ch == "\n":
            self.insert_newline()
            return
        self.buffer.insert_char(self.cursor.line, self.cursor.column, ch)
        self.cursor.column += 1

    def insert_text(self, text: str) -> None:
        for ch in text:
            self.insert_char(ch)

    def insert_tab(self) -> None:
        self.insert_text(" " * self.tab_width)

    def insert_newline(self) -> None:
        self.buffer.insert_newline(self.cursor.line, self.cursor.column)
        self.cursor.line += 1
        self.cursor.column = 0
        self.adjust_viewport()

    def backspace(self) -> None:
        moved = self.buffer.delete_char_before(self.cursor.line, self.cursor.column)
        if moved is not None:
            self.cursor.line, self.cursor.column = moved
            self.adjust_viewport()

    def delete_char_at_cursor(self) -> None:
        self.buffer.delete_char(self.cursor.line, self.cursor.column)
        self.clamp_cursor_col()

    def replace_char_at_cursor(self, ch: str) -> None:
        line, col = self.cursor.line, self.cursor.column
        if col < self.buffer.line_length(line):
            self.buffer.delete_char(line, col)
            self.buffer.insert_char(line, col, ch)
        self.clamp_cursor_col()

    def delete_to_end_of_line(self) -> None:
        line = self.cursor.line
        while self.cursor.column < self.buffer.line_length(line):
            self.buffer.delete_char(line, self.cursor.column)
        self.clamp_cursor_col()

    def join_lines(self) -> None:
        line = self.cursor.line
        if line + 1 >= self.buffer.line_count():
            return
        length = self.buffer.line_length(line)
        self.buffer.insert_char(line, length, " ")
        self.buffer.delete_char(line, length + 1)
        self.cursor.column = length
        self.clamp_cursor_col()

    def delete_current_line(self) -> None:
        count = self.buffer.line_count()
        line = self.cursor.line
        was_last_line = line == count - 1
        while self.buffer.line_length(line) > 0:
            self.buffer.delete_char(line, 0)
        if line < count - 1:
            self.buffer.delete_char(line, 0)
        if was_last_line and line > 0:
            self.cursor.line = line - 1
        self.cursor.column = 0
        self.clamp_cursor_col()
        self.adjust_viewport()

    # ------------------------------------------------------------------
    # search

    def search_forward(self) -> bool:
        return self._search_with_command_buffer(forward=True)

    def search_backward(self) -> bool:
        return self._search_with_command_buffer(forward=False)

    def repeat_search_forward(self) -> bool:
        return self._repeat_search(forward=True)

    def repeat_search_backward(self) -> bool:
        return self._repeat_search(forward=False)

    def _search_with_command_buffer(self, *, forward: bool) -> bool:
        pattern = self.command_buffer
        if not pattern:
            self.set_status("No pattern")
            return False
        if not self._jump_to_match(pattern, forward=forward):
            return False
        self.last_search_pattern = pattern
        return True

    def _repeat_search(self, *, forward: bool) -> bool:
        if not self.last_search_pattern:
            self.set_status("No previous search")
            return False
        return self._jump_to_match(self.last_search_pattern, forward=forward)

    def _jump_to_match(self, pattern: str, *, forward: bool) -> bool:
        find = self.buffer.find_forward if forward else self.buffer.find_backward
        found = find(self.cursor.line, self.cursor.column, pattern, True)
        telemetry.record_event(
            "search",
            level="debug",
            data={"pattern": pattern, "forward": forward, "found": found is not None},
            logger_name="vibevim.editor",
        )
        if found is None:
            self.set_status("Pattern not found")
            return False
        self.cursor.line, self.cursor.column = found
        self.clamp_cursor_col()
        self.adjust_viewport()
        return True

    # ------------------------------------------------------------------
    # status and persistence

    def set_status(self, message: str) -> None:
        self.status_message = message

    def clear_status(self) -> None:
        self.status_message = None

    def save(self) -> None:
        """Save the current buffer; ``OSError`` propagates to the caller."""

        self.buffer.save()
        name = self.buffer.filename()
        if name:
            self.set_status(f'"{name}" written')
        else:
            self.set_status("File saved")

    def save_as(self, path: str) -> None:
        self.buffer.save_as(path)
        self.set_status(f'"{path}" written')

    # ------------------------------------------------------------------
    # helpers

    def _current_line(self) -> str:
        return self.buffer.line(self.cursor.line) or ""


def _end_of_word(chars: str, col: int) -> int:
    """Column one past the end of the word at or after ``col``."""

    while col < len(chars) and chars[col].isspace():
        col += 1
    while col < len(chars) and not chars[col].isspace():
        col += 1
    return col


__all__ = ["Editor"]
