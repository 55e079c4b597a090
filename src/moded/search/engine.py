"""Row-scoped regular expression search."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from moded.buffer import Document, grapheme_count
from moded.runtime import telemetry

Match = Tuple[int, int]  # (absolute_row, grapheme_column)


@dataclass(slots=True)
class SearchState:
    """Result of one search plus a cursor walking through it.

    ``index`` is ``-1`` until the first match has been visited.
    """

    pattern: str = ""
    matches: List[Match] = field(default_factory=list)
    index: int = -1

    @property
    def total(self) -> int:
        return len(self.matches)

    @property
    def current(self) -> int:
        return self.index + 1

    @property
    def counters(self) -> Tuple[int, int]:
        return self.current, self.total

    @property
    def current_match(self) -> Optional[Match]:
        if 0 <= self.index < len(self.matches):
            return self.matches[self.index]
        return None

    def advance(self) -> Optional[Match]:
        """Step to the next match, or return ``None`` once exhausted."""

        if self.index + 1 >= len(self.matches):
            self.index = len(self.matches)
            return None
        self.index += 1
        return self.matches[self.index]

    def reset(self) -> None:
        self.pattern = ""
        self.matches = []
        self.index = -1


def search_for(document: Document, pattern: str) -> SearchState:
    """Match ``pattern`` against every row independently.

    Matches never span rows and come back in row-major order. Empty
    matches are skipped. Each row caches the grapheme spans it matched so
    the renderer can mark them. An invalid pattern produces no matches.
    """

    state = SearchState(pattern=pattern)
    document.clear_matches()
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        telemetry.record_event(
            "search.invalid_pattern",
            level="warning",
            data={"pattern": pattern, "reason": str(exc)},
            logger_name="moded.search",
        )
        return state

    with telemetry.span(
        "search::scan",
        logger_name="moded.search",
        component="search",
        metadata={"pattern": pattern, "rows": len(document)},
    ) as handle:
        for index, row in enumerate(document):
            spans = []
            for found in compiled.finditer(row.content):
                if found.end() == found.start():
                    continue
                start = grapheme_count(row.content[: found.start()])
                end = grapheme_count(row.content[: found.end()])
                spans.append((start, end))
                state.matches.append((index, start))
            row.matches = tuple(spans)
        handle.add_metadata("total", state.total)
    return state


__all__ = ["Match", "SearchState", "search_for"]
