"""Host-friendly snapshots of what the terminal should show."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import grapheme

from moded.buffer import Document
from moded.highlighting import Span, highlight

from .status import StatusLine
from .viewport import CursorPosition, Viewport

EMPTY_ROW_MARKER = "~"


@dataclass(frozen=True, slots=True)
class RenderedRow:
    """One visible document row: its gutter label and coloured spans."""

    number: int
    gutter: str
    text: str
    spans: Tuple[Span, ...] = ()
    matches: Tuple[Tuple[int, int], ...] = ()

    def char_offset(self, column: int) -> int:
        """Code point offset of grapheme ``column`` within ``text``."""

        return len(_grapheme_prefix(self.text, column))


@dataclass(slots=True)
class ViewMirror:
    rows: List[RenderedRow]
    filler: int
    cursor: CursorPosition
    cursor_column: int
    status: StatusLine
    gutter_width: int
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def cursor_row(self) -> Optional[RenderedRow]:
        if 0 <= self.cursor.screen_row < len(self.rows):
            return self.rows[self.cursor.screen_row]
        return None

    @property
    def text(self) -> str:
        lines = [f"{row.gutter} {row.text}" for row in self.rows]
        lines.extend(EMPTY_ROW_MARKER for _ in range(self.filler))
        return "\n".join(lines)


def build_mirror(
    viewport: Viewport,
    status: StatusLine,
    *,
    highlight_enabled: bool = True,
) -> ViewMirror:
    document = viewport.document
    visible = viewport.visible_rows()
    gutter_width = viewport.gutter_width
    coloured = _coloured_rows(document) if highlight_enabled else None

    rows: List[RenderedRow] = []
    for index in visible:
        row = document.get_row(index)
        text = row.content if row is not None else ""
        spans: Tuple[Span, ...]
        if coloured is not None:
            spans = tuple(coloured[index])
        else:
            spans = ((text, None, None),) if text else ()
        rows.append(
            RenderedRow(
                number=index + 1,
                gutter=str(index + 1).rjust(gutter_width),
                text=text,
                spans=spans,
                matches=row.matches if row is not None else (),
            )
        )

    return ViewMirror(
        rows=rows,
        filler=max(0, viewport.frame.text_rows - len(rows)),
        cursor=viewport.cursor,
        cursor_column=viewport.column,
        status=status,
        gutter_width=gutter_width,
        attributes={"file_name": document.file_name},
    )


def _coloured_rows(document: Document) -> Optional[List[List[Span]]]:
    _, extension = os.path.splitext(document.file_name)
    return highlight(extension.lstrip("."), document.lines())


def _grapheme_prefix(text: str, column: int) -> str:
    return grapheme.slice(text, 0, column)


__all__ = ["EMPTY_ROW_MARKER", "RenderedRow", "ViewMirror", "build_mirror"]
