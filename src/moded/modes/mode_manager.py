"""The editor's mode state machine."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional, Tuple, Type

from moded.keymaps import KeymapRegistry, KeymapResolver
from moded.keymaps.defaults import load_default_keymaps
from moded.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

TRANSITION_LOG_SIZE = 32


@dataclass(frozen=True, slots=True)
class Transition:
    source: Optional[str]
    target: str
    key: Optional[str] = None


class ModeManager:
    """Holds one instance per registered mode and routes keys to the active one.

    The first registered mode becomes active. A ``ModeResult`` carrying
    ``switch_to`` moves the machine after the key has been handled; each
    move is published on the context bus as ``mode.switch`` and kept in a
    short transition log.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="moded.keymaps")
            if load_defaults:
                load_default_keymaps(keymap_registry)
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            keymap_registry, logger_name="moded.keymaps"
        )
        for key, value in (
            ("keymap_registry", self.keymap_registry),
            ("keymap_resolver", self.keymap_resolver),
            ("mode_manager", self),
        ):
            context.extras.setdefault(key, value)

        self._modes: Dict[str, Mode] = {}
        self._current: Optional[Mode] = None
        self._transitions: Deque[Transition] = deque(maxlen=TRANSITION_LOG_SIZE)

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._current

    @property
    def mode_names(self) -> Tuple[str, ...]:
        return tuple(self._modes)

    @property
    def transitions(self) -> Tuple[Transition, ...]:
        """Recent transitions, oldest first."""
        return tuple(self._transitions)

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        if mode_cls.name in self._modes:
            raise ValueError(f"Mode '{mode_cls.name}' already registered")
        mode = mode_cls(self.context)
        self._modes[mode.name] = mode
        if self._current is None:
            self._enter(mode, None)
        return mode

    def switch_mode(self, name: str, *, key: Optional[str] = None) -> None:
        try:
            target = self._modes[name]
        except KeyError:
            raise KeyError(f"Unknown mode '{name}'") from None
        previous = self._current
        if previous is target:
            return
        if previous is not None:
            previous.on_exit(name)
        self._enter(target, previous, key=key)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self._current
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            logger_name="moded.modes",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to, key=key.key)
        return result

    def _enter(
        self, mode: Mode, previous: Optional[Mode], *, key: Optional[str] = None
    ) -> None:
        source = previous.name if previous else None
        self._current = mode
        mode.on_enter(source)
        transition = Transition(source=source, target=mode.name, key=key)
        self._transitions.append(transition)
        if previous is None:
            return
        telemetry.record_event(
            "mode.switch",
            data={"mode": mode.name, "from": source, "key": key},
            logger_name="moded.modes",
        )
        self.context.bus.emit("mode.switch", transition)


__all__ = ["ModeManager", "Transition", "TRANSITION_LOG_SIZE"]
