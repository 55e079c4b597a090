"""Search mode: walk the matches of the last ``/pattern`` command."""

from __future__ import annotations

from typing import Optional

from moded.search import SearchState

from .base_mode import Mode


class SearchMode(Mode):
    name = "search"
    label = "SEARCH"

    def on_exit(self, next_mode: Optional[str]) -> None:
        super().on_exit(next_mode)
        self.context.buffer.document.clear_matches()
        self.context.search = SearchState()
