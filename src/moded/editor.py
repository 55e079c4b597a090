"""The editor session: one buffer, one viewport and the mode machine."""

from __future__ import annotations

from typing import Optional

from moded.buffer import Buffer, Document
from moded.config import EditorConfig
from moded.keymaps import KeymapRegistry, KeymapResolver
from moded.keymaps.defaults import load_default_keymaps
from moded.modes import (
    CommandMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
    SearchMode,
)
from moded.modes.command_mode import command_text
from moded.modes.mode_manager import ModeManager
from moded.runtime import telemetry
from moded.search import SearchState
from moded.view import StatusLine, ViewMirror, Viewport, build_mirror
from moded.view.viewport import DEFAULT_HEIGHT, DEFAULT_WIDTH

QUIT_STATUSES = {"quit", "force_quit"}


class Editor:
    """Dispatches keys to the active mode and answers render queries.

    Hosts feed ``handle_key`` one key at a time, repaint from ``mirror`` and
    stop once ``quit_requested`` turns true, then call ``shutdown`` to
    persist the document.
    """

    def __init__(
        self,
        buffer: Buffer,
        *,
        config: Optional[EditorConfig] = None,
        height: int = DEFAULT_HEIGHT,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffer = buffer
        self.viewport = Viewport(buffer.document, height=height, width=width)
        self.quit_requested = False
        self.discard_changes = False

        registry = KeymapRegistry(logger_name="moded.keymaps")
        load_default_keymaps(registry)
        resolver = KeymapResolver(registry, logger_name="moded.keymaps")
        self.context = ModeContext(
            buffer=buffer,
            viewport=self.viewport,
            search=SearchState(),
            bus=ModeBus(),
            extras={},
        )
        self.manager = ModeManager(
            self.context,
            keymap_registry=registry,
            keymap_resolver=resolver,
            load_defaults=False,
        )
        self.manager.register_mode(NormalMode)
        self.manager.register_mode(InsertMode)
        self.manager.register_mode(CommandMode)
        self.manager.register_mode(SearchMode)

    @classmethod
    def open(
        cls,
        path: Optional[str],
        *,
        config: Optional[EditorConfig] = None,
        height: int = DEFAULT_HEIGHT,
        width: int = DEFAULT_WIDTH,
    ) -> "Editor":
        config = config or EditorConfig()
        buffer = Buffer.open(path, history_size=config.history_size)
        return cls(buffer, config=config, height=height, width=width)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        file_name: str = "",
        config: Optional[EditorConfig] = None,
        height: int = DEFAULT_HEIGHT,
        width: int = DEFAULT_WIDTH,
    ) -> "Editor":
        config = config or EditorConfig()
        buffer = Buffer.from_text(
            text, file_name=file_name, history_size=config.history_size
        )
        return cls(buffer, config=config, height=height, width=width)

    @property
    def mode(self) -> str:
        active = self.manager.active_mode
        return active.name if active else ""

    @property
    def document(self) -> Document:
        return self.buffer.document

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.manager.handle_key(key)
        if result.status in QUIT_STATUSES:
            self.quit_requested = True
            self.discard_changes = result.status == "force_quit"
            telemetry.record_event(
                "editor.quit",
                data={"force": self.discard_changes, "modified": self.buffer.modified},
                logger_name="moded.editor",
            )
        return result

    def feed(self, *keys: str) -> ModeResult:
        """Dispatch plain keys; single characters also carry their text."""

        result = ModeResult(consumed=False)
        for key in keys:
            text = key if len(key) == 1 else None
            result = self.handle_key(KeyInput(key=key, text=text))
        return result

    def resize(self, height: int, width: int) -> None:
        self.viewport.resize(height, width)

    def status_line(self) -> StatusLine:
        active = self.manager.active_mode
        if self.mode == "search":
            current, total = self.context.search.counters
        else:
            current, total = self.viewport.position()
        return StatusLine(
            command=command_text(self.context),
            mode_label=active.label if active else "",
            current=current,
            total=total,
        )

    def mirror(self) -> ViewMirror:
        return build_mirror(
            self.viewport,
            self.status_line(),
            highlight_enabled=self.config.highlight,
        )

    def shutdown(self) -> bool:
        """Persist the document unless the session was force-quit.

        Returns whether anything was written; raises ``SaveError`` when the
        write fails.
        """

        if self.discard_changes:
            telemetry.record_event(
                "editor.discard",
                data={"modified": self.buffer.modified},
                logger_name="moded.editor",
            )
            return False
        return self.buffer.flush()


__all__ = ["Editor", "QUIT_STATUSES"]
