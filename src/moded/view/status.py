"""Status line layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class StatusLine:
    """Pending command text, the mode label and a ``current/total`` counter.

    ``layout`` pads the command text so the mode label and the counter sit
    flush against the right edge; the counter is kept separate because hosts
    paint it in its own colour.
    """

    command: str
    mode_label: str
    current: int
    total: int

    @property
    def counter(self) -> str:
        return f"{self.current}/{self.total}"

    def layout(self, width: int) -> Tuple[str, str]:
        counter = f" {self.counter} "
        label = f" {self.mode_label} "
        room = max(0, width - len(counter) - len(label))
        command = self.command[-room:] if room else ""
        return f"{command.ljust(room)}{label}", counter

    def render(self, width: int) -> str:
        left, counter = self.layout(width)
        return left + counter


__all__ = ["StatusLine"]
