"""Minimal Textual adapter that wires the editor into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable, Optional

from moded.editor import Editor
from moded.modes import KeyInput, ModeResult
from moded.modes.command_mode import command_text
from moded.view import ViewMirror


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


BUS_EVENTS = (
    "command.start",
    "command.end",
    "command.submit",
    "command.search",
    "command.rename",
    "command.quit",
    "command.error",
    "mode.switch",
)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[ViewMirror], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges the editor and its bus events to a Textual-friendly surface."""

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        for event in BUS_EVENTS:
            editor.context.bus.subscribe(event, partial(self._handle_event, event))
        self.refresh()

    @property
    def quit_requested(self) -> bool:
        return self.editor.quit_requested

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.editor.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def resize(self, height: int, width: int) -> None:
        self.editor.resize(height, width)
        self.refresh()

    def refresh(self) -> None:
        self.hooks.update_view(self.editor.mirror())
        self.hooks.show_command(command_text(self.editor.context))

    def _after_mode_result(self, result: ModeResult) -> None:
        if result.consumed:
            self.hooks.update_status(result.message or result.status)
        self.refresh()

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if not isinstance(payload, str):
            return
        if name == "command.submit":
            self.hooks.update_status(f"command::{payload}")
        elif name == "command.error":
            self.hooks.update_status(payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        editor = self.editor
        state: Dict[str, object] = {
            "mode": editor.mode,
            "cursor": (editor.viewport.absolute_row, editor.viewport.column),
            "command": command_text(editor.context),
            "buffer": editor.buffer.name,
            "modified": editor.buffer.modified,
        }
        state.update((k, v) for k, v in fields.items() if v is not None)
        self.hooks.log(" ".join([prefix, *(f"{k}={v!r}" for k, v in state.items())]))


__all__ = ["BUS_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
