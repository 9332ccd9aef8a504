"""Executable Textual app that hosts the editing core."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from vibevim.editor import Editor
from vibevim.modes.mode_manager import ModeManager, create_default_manager
from vibevim.runtime import telemetry
from vibevim.runtime.config import EngineConfig

from .controller import EditorView, TextualUIHooks, TextualVimAdapter

logger = telemetry.get_logger("vibevim.adapters.textual")

CURSOR_STYLE = "reverse"
GUTTER_STYLE = "dim"


def render_view(view: EditorView, *, show_cursor: bool = True) -> Text:
    """Draw the visible lines with a line-number gutter and a block cursor."""

    width = len(str(view.first_line + max(1, len(view.lines))))
    text = Text(no_wrap=True, overflow="crop")
    cursor_line, cursor_col = view.cursor
    for offset, line in enumerate(view.lines):
        number = view.first_line + offset
        if offset:
            text.append("\n")
        text.append(f"{number + 1:>{width}} ", style=GUTTER_STYLE)
        if show_cursor and number == cursor_line:
            text.append(line[:cursor_col])
            text.append(line[cursor_col : cursor_col + 1] or " ", style=CURSOR_STYLE)
            text.append(line[cursor_col + 1 :])
        else:
            text.append(line)
    return text


def build_editor(path: Optional[str], config: EngineConfig) -> Editor:
    """Open ``path`` (or nothing) the way the command line asks for it."""

    options = {"tab_width": config.tab_width, "viewport_height": config.viewport_height}
    if not path:
        return Editor(**options)
    try:
        editor = Editor.with_file(path, **options)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot open %s: %s", path, exc)
        editor = Editor(**options)
        editor.set_status(f"Cannot open {path}: {exc}")
        return editor
    if not Path(path).exists():
        editor.set_status(f"New file: {path}")
    return editor


class VibeVimApp(App[None]):
    """Minimal Textual UI embedding the editing core."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, manager: ModeManager) -> None:
        super().__init__()
        self.manager = manager
        self.adapter: TextualVimAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            show_command=self._show_command,
            handle_event=self._handle_event,
            log=logger.debug,
        )
        self.adapter = TextualVimAdapter(self.manager, hooks)

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.adapter and self._buffer_widget:
            self.adapter.set_viewport_height(max(1, self._buffer_widget.size.height))

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        result = self.adapter.handle_textual_key(event.key, character=event.character)
        if result is None:
            return
        event.stop()
        event.prevent_default()
        if self.adapter.should_quit:
            self.exit()

    def _update_view(self, view: EditorView) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_view(view))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(Text(status, no_wrap=True, overflow="ellipsis"))

    def _show_command(self, command: str) -> None:
        if self._command_widget:
            self._command_widget.update(Text(command, no_wrap=True))

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name.startswith("app."):
            # no explorer in this host; acknowledge the request
            self._update_status(f"{name[4:]}: not available")
        elif name == "command.write":
            logger.info("write %s", payload)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vibevim", description="Modal text editor in the terminal."
    )
    parser.add_argument("path", nargs="?", help="File to open (created on first save)")
    parser.add_argument(
        "--keybinds",
        default=None,
        help="Keybinds JSON file (default: $XDG_CONFIG_HOME/vibevim/keybinds.json)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Logging preset; VIBEVIM_LOG_* variables apply otherwise",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = EngineConfig.from_env()
    editor = build_editor(args.path, config)
    manager = create_default_manager(
        editor, config=config, keybinds_path=args.keybinds
    )
    app = VibeVimApp(manager)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
