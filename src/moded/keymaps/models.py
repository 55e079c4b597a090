"""Value types for keymaps: strokes, sequences, actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


def _require(value: str, message: str) -> None:
    if not value:
        raise ValueError(message)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key press; modifiers are upper-cased, de-duplicated and sorted."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require(self.key, "key cannot be empty")
        cleaned = {m.strip().upper() for m in self.modifiers} - {""}
        object.__setattr__(self, "modifiers", tuple(sorted(cleaned)))

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """``"CTRL+s"`` becomes ``KeyStroke("s", ("CTRL",))``; a lone ``+`` is a key."""

        *mods, key = text.split("+") if len(text) > 1 else [text]
        return cls(key=key, modifiers=tuple(mods))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("a key sequence needs at least one stroke")

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(strokes=tuple(KeyStroke.parse(key) for key in keys if key))

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A named editor verb, called as ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        _require(self.id, "action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for action '{self.id}' is not callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        for field_name in ("id", "mode", "action_id"):
            _require(getattr(self, field_name), f"binding {field_name} cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = ["ActionRef", "Binding", "KeySequence", "KeyStroke"]
