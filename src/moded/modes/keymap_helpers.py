"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from moded.keymaps import KeymapResolver

if TYPE_CHECKING:
    from .base_mode import KeyInput

PRINTABLE_EXCLUDED = {"\t", "\r", "\n", "\x1b", "\x7f", "\x08"}


def key_to_token(key: "KeyInput") -> str:
    if key.modifiers:
        modifiers = sorted(dict.fromkeys(m.upper() for m in key.modifiers))
        return "+".join(modifiers) + f"+{key.key}"
    return key.key


def printable_text(key: "KeyInput") -> str | None:
    """Return the text a key would type, or ``None`` for control keys."""

    text = key.text
    if not text or any(char in PRINTABLE_EXCLUDED for char in text):
        return None
    if not text.isprintable():
        return None
    return text


def require_keymap_resolver(extras: Mapping[str, object]) -> KeymapResolver:
    resolver = extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


__all__ = ["key_to_token", "printable_text", "require_keymap_resolver"]
