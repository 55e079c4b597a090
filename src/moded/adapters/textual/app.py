"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.style import Style
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use moded.adapters.textual.app"
    ) from exc

from moded.buffer import OpenError, SaveError
from moded.config import EditorConfig
from moded.editor import Editor
from moded.runtime import telemetry
from moded.view import RenderedRow, StatusLine, ViewMirror
from moded.view.mirror import EMPTY_ROW_MARKER

from .controller import TextualEditorAdapter, TextualUIHooks

RICH_COLOURS = {
    "blue": "blue",
    "darkblue": "dark_blue",
    "red": "red",
    "purple": "magenta",
    "green": "green",
    "yellow": "yellow",
    "orange": "dark_orange",
}

SPECIAL_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
}

GUTTER_STYLE = Style(dim=True)
MATCH_STYLE = Style(bgcolor="yellow", color="black")
CURSOR_STYLE = Style(reverse=True)
STATUS_STYLE = Style(reverse=True)
COUNTER_STYLE = Style(bgcolor="blue", color="white", bold=True)


def render_row(row: RenderedRow, cursor_column: Optional[int] = None) -> Text:
    """Paint one document row: gutter, coloured spans, matches and cursor."""

    line = Text(f"{row.gutter} ", style=GUTTER_STYLE, end="")
    origin = len(line)
    for text, colour, attribute in row.spans:
        style = Style(
            color=RICH_COLOURS.get(colour or ""),
            bold=attribute == "bold" or None,
            italic=attribute == "italic" or None,
        )
        line.append(text, style=style)
    for start, end in row.matches:
        line.stylize(
            MATCH_STYLE, origin + row.char_offset(start), origin + row.char_offset(end)
        )
    if cursor_column is not None:
        offset = origin + row.char_offset(cursor_column)
        if offset >= len(line):
            line.append(" ")
        line.stylize(CURSOR_STYLE, offset, offset + 1)
    return line


def render_view(mirror: ViewMirror) -> Text:
    lines = []
    for index, row in enumerate(mirror.rows):
        column = mirror.cursor_column if index == mirror.cursor.screen_row else None
        lines.append(render_row(row, column))
    lines.extend(Text(EMPTY_ROW_MARKER, style=GUTTER_STYLE) for _ in range(mirror.filler))
    return Text("\n").join(lines)


def render_status(status: StatusLine, width: int) -> Text:
    left, counter = status.layout(width)
    line = Text(left, style=STATUS_STYLE, end="")
    line.append(counter, style=COUNTER_STYLE)
    return line


class EditorApp(App[None]):
    """Full-screen editor; the terminal is restored when the app unwinds."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		overflow: hidden;
	}

	#status-line {
		height: 1;
	}
	"""

    BINDINGS = [("ctrl+c", "quit", "Quit")]

    def __init__(self, editor: Editor) -> None:
        super().__init__()
        self.editor = editor
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        yield self._buffer_widget
        yield self._status_widget

    def on_mount(self) -> None:
        self.editor.resize(self.size.height, self.size.width)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.height, event.size.width)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()
        if self.adapter.quit_requested:
            self.exit()

    def _update_view(self, mirror: ViewMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_view(mirror))
        if self._status_widget:
            self._status_widget.update(render_status(mirror.status, self.size.width))

    def _handle_event(self, name: str, payload: object | None) -> None:
        telemetry.record_event(
            "app.bus", data={"name": name, "payload": payload}, logger_name="moded.app"
        )

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key == "ctrl+c":
            return None
        if key in SPECIAL_KEYS:
            return (SPECIAL_KEYS[key], None, ())
        if event.character and event.is_printable:
            return (event.character, event.character, ())
        return (key.upper(), None, ())


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return value


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="moded", description="A small modal terminal text editor."
    )
    parser.add_argument("path", nargs="?", default=None, help="File to open")
    parser.add_argument(
        "--no-highlight",
        action="store_true",
        help="Disable syntax highlighting",
    )
    parser.add_argument(
        "--history-size",
        type=_positive_int,
        default=None,
        help="Maximum number of undo steps kept",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset (default: production, logging to a file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = EditorConfig.from_env().override(
        history_size=args.history_size,
        highlight=False if args.no_highlight else None,
        log_preset=args.log_preset,
    )
    telemetry.configure(preset=config.log_preset)
    try:
        editor = Editor.open(args.path, config=config)
    except OpenError as exc:
        print(f"moded: {exc}", file=sys.stderr)
        return 1
    with telemetry.session(document=editor.buffer.name or "<unnamed>"):
        EditorApp(editor).run()
        try:
            editor.shutdown()
        except SaveError as exc:
            print(f"moded: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
