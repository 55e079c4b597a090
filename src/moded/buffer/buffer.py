"""High-level buffer façade combining the document and its undo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from moded.runtime import telemetry

from .document import OPEN_BRACE, Document, grapheme_count
from .history import DEFAULT_HISTORY_SIZE, History, HistoryNode


class SaveError(RuntimeError):
    """Raised when the document cannot be written back to disk."""

    def __init__(self, path: str, reason: OSError) -> None:
        super().__init__(f"Could not write '{path}': {reason}")
        self.path = path
        self.reason = reason


class Buffer:
    """Owns the single open document and records history for every edit.

    Positions are absolute ``(row, column)`` pairs with the column counted in
    graphemes. Every mutating call snapshots the rows it is about to touch
    before changing them; calls that would not change anything return
    ``None`` and leave the history alone.
    """

    def __init__(
        self,
        *,
        document: Optional[Document] = None,
        history: Optional[History] = None,
    ) -> None:
        self.document = document if document is not None else Document()
        self.history = history if history is not None else History()
        self.modified = False

    @classmethod
    def from_text(
        cls, text: str, *, file_name: str = "", history_size: int = DEFAULT_HISTORY_SIZE
    ) -> "Buffer":
        return cls(
            document=Document.from_text(text, file_name=file_name),
            history=History(history_size),
        )

    @classmethod
    def open(
        cls, path: Optional[str], *, history_size: int = DEFAULT_HISTORY_SIZE
    ) -> "Buffer":
        return cls(document=Document.open(path), history=History(history_size))

    @property
    def name(self) -> str:
        return self.document.file_name

    def rename(self, file_name: str) -> None:
        self.document.file_name = file_name

    def insert_text(self, row: int, column: int, text: str) -> Optional[int]:
        """Insert ``text`` before ``column`` and return the column after it.

        Text that joins the preceding grapheme (a combining mark, a ZWJ
        sequence) does not advance the column.
        """

        if not text or not self._editable(row, column):
            return None
        current = self.document.rows[row]
        after = grapheme_count(current.slice(0, column) + text)
        node = HistoryNode.create([current], range(row, row + 1))
        with Transaction(self, "insert", node):
            self.document.insert(row, column, text)
        return min(after, current.length)

    def delete_before(self, row: int, column: int) -> Optional[int]:
        if not self._editable(row, column):
            return None
        merges = column == 0 or self.document.row_length(row) == 0
        if merges and row == 0:
            return None
        if merges:
            node = HistoryNode.create(
                self.document.rows[row - 1 : row + 1], range(row - 1, row)
            )
        else:
            node = HistoryNode.create([self.document.rows[row]], range(row, row + 1))
        with Transaction(self, "delete", node):
            return self.document.delete_before(row, column)

    def split_line(self, row: int, column: int) -> Optional[int]:
        if not self._editable(row, column):
            return None
        current = self.document.rows[row]
        added = 1
        if column == current.length and current.content.strip().endswith(OPEN_BRACE):
            added = 2
        node = HistoryNode.create([current], range(row, row + 1 + added))
        with Transaction(self, "split", node):
            return self.document.split_line(row, column)

    def clear_row(self, row: int) -> bool:
        current = self.document.get_row(row)
        if current is None:
            return False
        node = HistoryNode.create([current], range(row, row + 1))
        with Transaction(self, "clear_row", node):
            return self.document.clear_row(row)

    def undo(self) -> Optional[HistoryNode]:
        """Restore the newest snapshot and return it, or ``None`` if empty."""

        node = self.history.pop()
        if node is None:
            return None
        with telemetry.span(
            "buffer::undo",
            logger_name="moded.buffer",
            component="buffer",
            metadata={"start": node.start, "rows": len(node.rows)},
        ):
            span_rows = node.altered_rows
            if len(span_rows) == len(node.rows):
                for index, snapshot in zip(span_rows, node.rows):
                    self.document.replace(index, snapshot)
            else:
                self.document.replace_range(span_rows.start, span_rows.stop, node.rows)
            self.modified = True
        return node

    def flush(self) -> bool:
        """Write the document if it was modified; return whether it was."""

        if not self.modified:
            return False
        if not self.name:
            telemetry.record_event(
                "buffer.save_skipped",
                level="warning",
                data={"reason": "unnamed"},
                logger_name="moded.buffer",
            )
            return False
        try:
            written = self.document.save()
        except OSError as exc:
            telemetry.record_event(
                "buffer.save_failed",
                level="error",
                data={"path": self.name, "reason": str(exc)},
                logger_name="moded.buffer",
            )
            raise SaveError(self.name, exc) from exc
        self.modified = False
        telemetry.record_event(
            "buffer.saved",
            data={"path": self.name, "bytes": written},
            logger_name="moded.buffer",
        )
        return True

    def _editable(self, row: int, column: int) -> bool:
        current = self.document.get_row(row)
        return current is not None and 0 <= column <= current.length


class Transaction(AbstractContextManager["Transaction"]):
    """Profiles one edit; its snapshot enters history only if the edit succeeds."""

    def __init__(self, buffer: Buffer, label: str, node: HistoryNode) -> None:
        self.buffer = buffer
        self.label = label
        self.node = node
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            logger_name="moded.buffer",
            component="buffer",
            metadata={"row": self.node.start, "buffer": self.buffer.name or "[No Name]"},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.history.push(self.node)
            self.buffer.modified = True
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "SaveError", "Transaction"]
