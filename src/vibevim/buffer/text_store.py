"""Line-addressable text storage with literal search and file persistence."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from vibevim.runtime import telemetry

Position = Tuple[int, int]  # (line, column)

NEWLINE = "\n"


class MissingPathError(OSError):
    """Raised by ``TextStore.save`` when no file path is associated."""

    def __init__(self, message: str = "No file path associated with buffer") -> None:
        super().__init__(message)


class TextStore:
    """Editable character sequence addressed by ``(line, column)``.

    Text is kept as a list of lines without their terminators, so a store
    always has at least one (possibly empty) line and every line except the
    last is implicitly followed by ``"\\n"``. Any backing structure honouring
    the same contract could replace the list.
    """

    __slots__ = ("_lines", "file_path", "modified")

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        file_path: Optional[Path | str] = None,
    ) -> None:
        self._lines: List[str] = list(lines) if lines is not None else [""]
        if not self._lines:
            self._lines = [""]
        self.file_path: Optional[Path] = Path(file_path) if file_path else None
        self.modified = False

    # ------------------------------------------------------------------
    # construction

    @classmethod
    def from_text(
        cls, text: str, *, file_path: Optional[Path | str] = None
    ) -> "TextStore":
        return cls(text.split(NEWLINE), file_path=file_path)

    @classmethod
    def from_file(cls, path: Path | str) -> "TextStore":
        """Load ``path``; raises ``OSError`` or ``UnicodeDecodeError``."""

        with open(path, "r", encoding="utf-8", newline="") as handle:
            text = handle.read()
        return cls.from_text(text, file_path=path)

    @classmethod
    def open(cls, path: Path | str) -> "TextStore":
        """Like ``from_file`` but a missing file yields an empty store bound to it."""

        if not Path(path).exists():
            return cls(file_path=path)
        return cls.from_file(path)

    # ------------------------------------------------------------------
    # queries

    @property
    def text(self) -> str:
        return NEWLINE.join(self._lines)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def is_empty(self) -> bool:
        return len(self._lines) == 1 and not self._lines[0]

    def line(self, line: int) -> Optional[str]:
        if 0 <= line < len(self._lines):
            return self._lines[line]
        return None

    def line_length(self, line: int) -> int:
        if 0 <= line < len(self._lines):
            return len(self._lines[line])
        return 0

    def line_to_char(self, line: int) -> int:
        line = max(0, min(line, len(self._lines)))
        return sum(len(text) + 1 for text in self._lines[:line])

    def char_to_position(self, offset: int) -> Position:
        running = 0
        for index, text in enumerate(self._lines):
            if offset <= running + len(text):
                return (index, max(0, offset - running))
            running += len(text) + 1
        last = len(self._lines) - 1
        return (last, len(self._lines[last]))

    def filename(self) -> Optional[str]:
        if self.file_path is None or not self.file_path.name:
            return None
        return self.file_path.name

    # ------------------------------------------------------------------
    # mutation

    def insert_char(self, line: int, col: int, ch: str) -> None:
        if ch == NEWLINE:
            self.insert_newline(line, col)
            return
        current = self._lines[line]
        self._lines[line] = current[:col] + ch + current[col:]
        self.modified = True

    def insert_newline(self, line: int, col: int) -> None:
        current = self._lines[line]
        self._lines[line : line + 1] = [current[:col], current[col:]]
        self.modified = True

    def delete_char(self, line: int, col: int) -> None:
        length = self.line_length(line)
        if 0 <= line < len(self._lines) and 0 <= col < length:
            current = self._lines[line]
            self._lines[line] = current[:col] + current[col + 1 :]
            self.modified = True
        elif col == length and 0 <= line < len(self._lines) - 1:
            # removing the terminator joins the following line
            self._lines[line : line + 2] = [self._lines[line] + self._lines[line + 1]]
            self.modified = True

    def delete_char_before(self, line: int, col: int) -> Optional[Position]:
        if col > 0:
            self.delete_char(line, col - 1)
            return (line, col - 1)
        if line > 0:
            previous_length = self.line_length(line - 1)
            self.delete_char(line - 1, previous_length)
            return (line - 1, previous_length)
        return None

    # ------------------------------------------------------------------
    # search

    def find_forward(
        self, line: int, col: int, pattern: str, wrap: bool
    ) -> Optional[Position]:
        if not pattern:
            return None
        text = self.text
        origin = self.line_to_char(line) + col
        index = text.find(pattern, origin + 1)
        if index < 0 and wrap:
            index = text.find(pattern)
            if index > origin:
                index = -1
        if index < 0:
            return None
        return self.char_to_position(index)

    def find_backward(
        self, line: int, col: int, pattern: str, wrap: bool
    ) -> Optional[Position]:
        if not pattern:
            return None
        text = self.text
        origin = self.line_to_char(line) + col
        index = -1
        if origin > 0:
            index = text.rfind(pattern, 0, origin - 1 + len(pattern))
        if index < 0 and wrap:
            index = text.rfind(pattern)
            if index < origin:
                index = -1
        if index < 0:
            return None
        return self.char_to_position(index)

    # ------------------------------------------------------------------
    # persistence

    def save(self) -> None:
        if self.file_path is None:
            raise MissingPathError()
        with telemetry.span(
            "buffer::save",
            component="buffer",
            metadata={"path": str(self.file_path)},
        ):
            with open(self.file_path, "w", encoding="utf-8", newline="") as handle:
                handle.write(self.text)
        self.modified = False

    def save_as(self, path: Path | str) -> None:
        self.file_path = Path(path)
        self.save()


__all__ = ["MissingPathError", "Position", "TextStore"]
