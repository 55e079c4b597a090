"""Document storage, edit transactions and undo history."""

from .buffer import Buffer, SaveError, Transaction
from .document import Document, OpenError, Row, RowOffset, grapheme_count
from .history import DEFAULT_HISTORY_SIZE, History, HistoryNode

__all__ = [
    "Buffer",
    "DEFAULT_HISTORY_SIZE",
    "Document",
    "History",
    "HistoryNode",
    "OpenError",
    "Row",
    "RowOffset",
    "SaveError",
    "Transaction",
    "grapheme_count",
]
