"""Cursor motions available in Normal and Insert mode."""

from __future__ import annotations

from moded.keymaps import ResolutionMatch
from moded.modes.base_mode import ModeContext, ModeResult
from moded.view import Direction


def _move(context: ModeContext, direction: Direction) -> ModeResult:
    moved = context.viewport.move(direction)
    return ModeResult(consumed=True, status="moved" if moved else "blocked")


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, "up")


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, "down")


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, "left")


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, "right")


__all__ = ["move_up", "move_down", "move_left", "move_right"]
