"""Actions bound in Search mode."""

from __future__ import annotations

from moded.keymaps import ResolutionMatch
from moded.modes.base_mode import ModeContext, ModeResult
from moded.runtime import telemetry


def jump_to_next_match(context: ModeContext) -> bool:
    """Advance the search cursor and move the viewport onto the match."""

    found = context.search.advance()
    if found is None:
        return False
    row, column = found
    context.viewport.place(row, column)
    return True


def next_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if jump_to_next_match(context):
        current, total = context.search.counters
        return ModeResult(consumed=True, status="search_next", message=f"{current}/{total}")
    telemetry.record_event(
        "search.exhausted",
        data={"pattern": context.search.pattern, "total": context.search.total},
        logger_name="moded.search",
    )
    return ModeResult(consumed=True, switch_to="normal", status="search_done")


def insert_at_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to="insert", message="insert_at_match")


__all__ = ["jump_to_next_match", "next_match", "insert_at_match"]
