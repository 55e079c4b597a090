"""Bounded undo history of row snapshots."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, Iterator, Optional, Tuple

from .document import Row

DEFAULT_HISTORY_SIZE = 50


@dataclass(frozen=True, slots=True)
class HistoryNode:
    """Rows as they were before a mutation.

    ``altered_rows`` is the span the mutation leaves behind in the live
    document; undo swaps that span for ``rows``. For in-place edits both
    have the same length, a split grows the span and a merge shrinks it.
    """

    altered_rows: range
    rows: Tuple[Row, ...]

    @classmethod
    def create(cls, rows: Iterable[Row], altered_rows: range) -> "HistoryNode":
        return cls(altered_rows=altered_rows, rows=tuple(row.copy() for row in rows))

    @property
    def start(self) -> int:
        return self.altered_rows.start


class History:
    """Most-recent-first snapshot log with a fixed capacity."""

    def __init__(self, maximum_size: int = DEFAULT_HISTORY_SIZE) -> None:
        if maximum_size <= 0:
            raise ValueError("maximum_size must be positive")
        self._nodes: Deque[HistoryNode] = deque()
        self.maximum_size = maximum_size

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[HistoryNode]:
        return iter(self._nodes)

    def push(self, node: HistoryNode) -> None:
        if len(self._nodes) >= self.maximum_size:
            self._nodes.pop()
        self._nodes.appendleft(node)

    def pop(self) -> Optional[HistoryNode]:
        if not self._nodes:
            return None
        return self._nodes.popleft()

    def peek(self) -> Optional[HistoryNode]:
        return self._nodes[0] if self._nodes else None

    def clear(self) -> None:
        self._nodes.clear()
