"""Command-line mode: accumulate a command, evaluate it on Enter."""

from __future__ import annotations

from typing import MutableMapping, Optional, cast

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import printable_text


def command_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    state.setdefault("length", 0)
    return state


def set_command_text(context: ModeContext, text: str) -> None:
    state = command_state(context)
    state["text"] = text
    state["length"] = len(text)


def command_text(context: ModeContext) -> str:
    return str(command_state(context)["text"])


class CommandMode(Mode):
    name = "command"
    label = "COMMAND"

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        if not command_text(self.context):
            set_command_text(self.context, ":")
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: Optional[str]) -> None:
        super().on_exit(next_mode)
        set_command_text(self.context, "")
        self.context.bus.emit("command.end", None)

    @property
    def current_command(self) -> str:
        return command_text(self.context)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = printable_text(key)
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        set_command_text(self.context, self.current_command + text)
        return ModeResult(consumed=True, status="editing")
