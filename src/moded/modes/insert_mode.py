"""Insert mode: printable keys go straight into the buffer."""

from __future__ import annotations

from moded.actions import edit as edit_actions

from .base_mode import KeyInput, Mode, ModeResult
from .keymap_helpers import printable_text


class InsertMode(Mode):
    name = "insert"
    label = "INSERT"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = printable_text(key)
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        return edit_actions.type_text(self.context, text)
