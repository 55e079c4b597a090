"""Grapheme-aware line storage for the editor."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Literal, Optional, Sequence, Tuple

import grapheme

from moded.runtime import telemetry

MatchSpan = Tuple[int, int]  # (start_col, end_col) in graphemes

OPEN_BRACE = "{"
CLOSE_BRACE = "}"
BLOCK_INDENT = "  "


def grapheme_count(text: str) -> int:
    return grapheme.length(text)


class OpenError(RuntimeError):
    """Raised when an existing path cannot be read as UTF-8 text."""

    def __init__(self, path: str, reason: Exception) -> None:
        super().__init__(f"Could not open '{path}': {reason}")
        self.path = path
        self.reason = reason


@dataclass(slots=True)
class Row:
    """One line of text plus its length in graphemes."""

    content: str = ""
    length: int = field(default=0, compare=False)
    matches: Tuple[MatchSpan, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        self.length = grapheme_count(self.content)

    def set_content(self, content: str) -> None:
        self.content = content
        self.length = grapheme_count(content)

    def graphemes(self) -> List[str]:
        return list(grapheme.graphemes(self.content))

    def slice(self, start: int, end: Optional[int] = None) -> str:
        return grapheme.slice(self.content, start, end)

    def copy(self) -> "Row":
        return Row(self.content)

    def leading_whitespace(self) -> int:
        return len(self.content) - len(self.content.lstrip())


@dataclass(frozen=True, slots=True)
class RowOffset:
    """Where an edit lands inside a row: its start, its end, or an index."""

    kind: Literal["start", "at", "end"]
    index: int = 0

    @classmethod
    def classify(cls, row: Row, column: int) -> Optional["RowOffset"]:
        if column < 0 or column > row.length:
            return None
        if column == row.length:
            return cls("end", column)
        if column == 0:
            return cls("start", 0)
        return cls("at", column)


@dataclass(slots=True)
class Document:
    """Ordered rows plus the file name they were loaded from.

    A document always holds at least one row; out-of-range positions are
    reported as ``None``/``False`` and leave the rows untouched.
    """

    rows: List[Row] = field(default_factory=lambda: [Row()])
    file_name: str = ""

    def __post_init__(self) -> None:
        if not self.rows:
            self.rows = [Row()]

    @classmethod
    def from_text(cls, text: str, *, file_name: str = "") -> "Document":
        return cls(rows=[Row(line) for line in text.splitlines()], file_name=file_name)

    @classmethod
    def open(cls, path: Optional[str]) -> "Document":
        """Load ``path``; a missing path or file yields an empty document.

        Anything else that stops the file being read (a directory, missing
        permissions, bytes that are not UTF-8) raises ``OpenError``.
        """

        if not path:
            return cls()
        try:
            text = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            telemetry.record_event(
                "document.new_file", data={"path": path}, logger_name="moded.buffer"
            )
            return cls(file_name=path)
        except (OSError, UnicodeDecodeError) as exc:
            telemetry.record_event(
                "document.open_failed",
                level="error",
                data={"path": path, "reason": str(exc)},
                logger_name="moded.buffer",
            )
            raise OpenError(path, exc) from exc
        return cls.from_text(text, file_name=path)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def get_row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def row_length(self, index: int) -> int:
        row = self.get_row(index)
        return row.length if row else 0

    def lines(self) -> Sequence[str]:
        return tuple(row.content for row in self.rows)

    def to_text(self) -> str:
        return "\n".join(self.lines()) + "\n"

    def insert(self, index: int, column: int, char: str) -> bool:
        row = self.get_row(index)
        if row is None:
            return False
        offset = RowOffset.classify(row, column)
        if offset is None:
            return False
        if offset.kind == "start":
            row.set_content(char + row.content)
        elif offset.kind == "end":
            row.set_content(row.content + char)
        else:
            row.set_content(row.slice(0, offset.index) + char + row.slice(offset.index))
        return True

    def delete_before(self, index: int, column: int) -> Optional[int]:
        """Delete the grapheme before ``column`` and return the new column.

        At the start of a row the row is merged into the previous one and the
        previous row's original length is returned, which is where the seam
        sits. Returns ``None`` when nothing was deleted.
        """

        row = self.get_row(index)
        if row is None:
            return None
        offset = RowOffset.classify(row, column)
        if offset is None:
            return None
        if offset.kind == "start" or row.length == 0:
            if index == 0:
                return None
            previous = self.rows[index - 1]
            seam = previous.length
            previous.set_content(previous.content + row.content)
            del self.rows[index]
            return seam
        if offset.kind == "end":
            row.set_content(row.slice(0, row.length - 1))
        else:
            row.set_content(row.slice(0, offset.index - 1) + row.slice(offset.index))
        return column - 1

    def split_line(self, index: int, column: int) -> Optional[int]:
        """Break a row at ``column`` and return the cursor column on the new row."""

        row = self.get_row(index)
        if row is None:
            return None
        offset = RowOffset.classify(row, column)
        if offset is None:
            return None
        if offset.kind == "start":
            self.rows.insert(index, Row())
            return 0
        if offset.kind == "end":
            if row.content.strip().endswith(OPEN_BRACE):
                return self._open_block(index, row)
            self.rows.insert(index + 1, Row())
            return 0
        tail = row.slice(offset.index)
        row.set_content(row.slice(0, offset.index))
        self.rows.insert(index + 1, Row(tail))
        return 0

    def _open_block(self, index: int, row: Row) -> int:
        indent = row.leading_whitespace() // 2 * 2
        inner = " " * indent + BLOCK_INDENT
        self.rows.insert(index + 1, Row(inner))
        self.rows.insert(index + 2, Row(" " * indent + CLOSE_BRACE))
        return grapheme_count(inner)

    def replace(self, index: int, new_row: Row) -> bool:
        if self.get_row(index) is None:
            return False
        self.rows[index] = new_row.copy()
        return True

    def replace_range(self, start: int, stop: int, rows: Iterable[Row]) -> None:
        """Swap ``rows[start:stop]`` for copies of ``rows``."""

        self.rows[start:stop] = [row.copy() for row in rows]
        if not self.rows:
            self.rows = [Row()]

    def clear_row(self, index: int) -> bool:
        row = self.get_row(index)
        if row is None:
            return False
        row.set_content("")
        return True

    def clear_matches(self) -> None:
        for row in self.rows:
            row.matches = ()

    def save(self) -> int:
        """Write the rows to ``file_name`` and return the byte count."""

        data = self.to_text().encode("utf-8")
        Path(self.file_name).write_bytes(data)
        return len(data)
