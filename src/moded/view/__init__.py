"""Viewport, cursor engine and render snapshots."""

from .viewport import CursorPosition, Direction, ViewFrame, Viewport, is_separator
from .status import StatusLine
from .mirror import RenderedRow, ViewMirror, build_mirror

__all__ = [
    "CursorPosition",
    "Direction",
    "ViewFrame",
    "Viewport",
    "is_separator",
    "StatusLine",
    "RenderedRow",
    "ViewMirror",
    "build_mirror",
]
