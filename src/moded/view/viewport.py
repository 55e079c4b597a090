"""Cursor and view-frame arithmetic.

The cursor lives in viewport-relative screen coordinates. Its column is
kept as a grapheme offset into the current row and exposed on screen
shifted right by the line-number gutter plus one separator column, so a
gutter that widens (say from 9 to 10 rows) never moves the cursor off the
character it was on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Tuple

from moded.buffer import Document, Row

Direction = Literal["up", "down", "left", "right"]

DEFAULT_HEIGHT = 24
DEFAULT_WIDTH = 80

_SEPARATOR = re.compile(r"\s|[(){}\[\]<>.,;:'\"!?+\-=*/\\|&%^$#@~`]")


def is_separator(char: str) -> bool:
    return bool(_SEPARATOR.match(char))


@dataclass(frozen=True, slots=True)
class CursorPosition:
    screen_row: int
    screen_column: int


@dataclass(slots=True)
class ViewFrame:
    """Half-open window ``[first_visible_row, first_visible_row + height)``.

    ``height`` counts every terminal row, the status line included.
    """

    first_visible_row: int = 0
    height: int = DEFAULT_HEIGHT

    @property
    def text_rows(self) -> int:
        return max(1, self.height - 1)

    @property
    def bottom(self) -> int:
        """Lowest screen row the cursor may occupy."""
        return self.text_rows - 1

    def rows(self, document_length: int) -> range:
        stop = min(self.first_visible_row + self.text_rows, document_length)
        return range(self.first_visible_row, stop)


class Viewport:
    """Moves the cursor over a document and scrolls the frame to follow it."""

    def __init__(
        self,
        document: Document,
        *,
        height: int = DEFAULT_HEIGHT,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        self.document = document
        self.frame = ViewFrame(height=height)
        self.width = width
        self.screen_row = 0
        self.column = 0

    @property
    def gutter_width(self) -> int:
        return len(str(len(self.document)))

    @property
    def text_origin(self) -> int:
        return self.gutter_width + 1

    @property
    def absolute_row(self) -> int:
        return self.frame.first_visible_row + self.screen_row

    @property
    def cursor(self) -> CursorPosition:
        return CursorPosition(self.screen_row, self.text_origin + self.column)

    def current_row(self) -> Row:
        row = self.document.get_row(self.absolute_row)
        return row if row is not None else Row()

    def position(self) -> Tuple[int, int]:
        """1-based current line and the document's line count."""
        return self.absolute_row + 1, len(self.document)

    def visible_rows(self) -> range:
        return self.frame.rows(len(self.document))

    def resize(self, height: int, width: int) -> None:
        self.frame.height = height
        self.width = width
        overflow = self.screen_row - self.frame.bottom
        if overflow > 0:
            self.frame.first_visible_row += overflow
            self.screen_row = self.frame.bottom

    def fit_to_document(self) -> None:
        """Pull the frame back after the document shrank.

        The frame never starts below ``len(document) - text_rows``; the cursor
        keeps its absolute row, or moves to the last row if that is gone.
        """

        length = len(self.document)
        target = min(self.absolute_row, length - 1)
        self.frame.first_visible_row = min(
            self.frame.first_visible_row, max(0, length - self.frame.text_rows)
        )
        self.screen_row = target - self.frame.first_visible_row
        self._clamp_column()

    def move(self, direction: Direction) -> bool:
        return {
            "up": self.up,
            "down": self.down,
            "left": self.left,
            "right": self.right,
        }[direction]()

    def up(self) -> bool:
        if self.screen_row > 0:
            self.screen_row -= 1
        elif self.frame.first_visible_row > 0:
            self.frame.first_visible_row -= 1
        else:
            return False
        self._clamp_column()
        return True

    def down(self) -> bool:
        if self.absolute_row + 1 >= len(self.document):
            return False
        if self.screen_row < self.frame.bottom:
            self.screen_row += 1
        else:
            self.frame.first_visible_row += 1
        self._clamp_column()
        return True

    def left(self) -> bool:
        if self.column > 0:
            self.column -= 1
            return True
        if not self.up():
            return False
        self.column = self.current_row().length
        return True

    def right(self) -> bool:
        if self.column < self.current_row().length:
            self.column += 1
            return True
        if not self.down():
            return False
        self.column = 0
        return True

    def goto_line(self, target: int) -> None:
        """Jump to absolute row ``target``.

        The result matches stepping up or down one row at a time: the cursor
        row moves until it reaches an edge, the frame scrolls for the rest,
        and the column is clamped by every row passed on the way.
        """

        last = len(self.document) - 1
        target = max(0, min(target, last))
        current = self.absolute_row
        delta = target - current
        if delta > 0:
            step = min(delta, max(0, self.frame.bottom - self.screen_row))
            self.screen_row += step
            self.frame.first_visible_row += delta - step
            passed = range(current + 1, target + 1)
        elif delta < 0:
            distance = -delta
            step = min(distance, self.screen_row)
            self.screen_row -= step
            self.frame.first_visible_row -= distance - step
            passed = range(target, current)
        else:
            return
        for index in passed:
            self.column = min(self.column, self.document.row_length(index))

    def place(self, row: int, column: int) -> None:
        self.goto_line(row)
        self.column = max(0, min(column, self.current_row().length))

    def line_start(self) -> None:
        self.column = 0

    def line_end(self) -> None:
        self.column = self.current_row().length

    def next_word(self) -> bool:
        graphemes = self.current_row().graphemes()
        index = self.column
        while index < len(graphemes) and not is_separator(graphemes[index]):
            index += 1
        while index < len(graphemes) and is_separator(graphemes[index]):
            index += 1
        if index < len(graphemes):
            self.column = index
            return True
        if self.down():
            self.column = 0
            return True
        self.column = len(graphemes)
        return False

    def prev_word(self) -> bool:
        graphemes = self.current_row().graphemes()
        index = self.column
        while index > 0 and is_separator(graphemes[index - 1]):
            index -= 1
        while index > 0 and not is_separator(graphemes[index - 1]):
            index -= 1
        if index < self.column and not is_separator(graphemes[index]):
            self.column = index
            return True
        if self.up():
            self.column = self.current_row().length
            return True
        self.column = 0
        return False

    def _clamp_column(self) -> None:
        self.column = min(self.column, self.current_row().length)


__all__ = [
    "CursorPosition",
    "Direction",
    "ViewFrame",
    "Viewport",
    "is_separator",
]
