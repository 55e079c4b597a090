"""Insert-mode edits: typing, backspace, newline and tab."""

from __future__ import annotations

from moded.keymaps import ResolutionMatch
from moded.modes.base_mode import ModeContext, ModeResult

TAB_TEXT = "  "


def type_text(context: ModeContext, text: str) -> ModeResult:
    viewport = context.viewport
    column = context.buffer.insert_text(viewport.absolute_row, viewport.column, text)
    if column is None:
        return ModeResult(consumed=True, status="blocked")
    viewport.column = column
    return ModeResult(consumed=True, status="inserted")


def insert_tab(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return type_text(context, TAB_TEXT)


def delete_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    viewport = context.viewport
    merged = viewport.column == 0 or viewport.current_row().length == 0
    column = context.buffer.delete_before(viewport.absolute_row, viewport.column)
    if column is None:
        return ModeResult(consumed=True, status="blocked")
    if merged:
        viewport.up()
        viewport.fit_to_document()
    viewport.column = column
    return ModeResult(consumed=True, status="deleted")


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    viewport = context.viewport
    column = context.buffer.split_line(viewport.absolute_row, viewport.column)
    if column is None:
        return ModeResult(consumed=True, status="blocked")
    viewport.down()
    viewport.column = column
    return ModeResult(consumed=True, status="split")


__all__ = ["TAB_TEXT", "type_text", "insert_tab", "delete_backward", "insert_newline"]
