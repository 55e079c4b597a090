"""Normal mode: motions and entry points into the other modes."""

from __future__ import annotations

from .base_mode import Mode


class NormalMode(Mode):
    name = "normal"
    label = "NORMAL"
