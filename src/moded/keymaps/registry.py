"""Registry of editor actions and the key bindings that reach them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from moded.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Two bindings in one mode share a key signature."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"'{binding.key_signature}' in {binding.mode} mode is already bound "
            f"by '{existing.id}' (while adding '{binding.id}')"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Actions by id, bindings by id, and a ``(mode, signature)`` slot table.

    Every change to the bindings bumps ``revision()`` so resolvers know to
    rebuild their tries.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[Tuple[str, str], str] = {}
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"no action registered as '{action_id}'")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"no binding registered as '{binding_id}'")
        return binding

    def register_action(self, action: ActionRef) -> ActionRef:
        if action.id in self._actions:
            raise ValueError(f"action '{action.id}' is already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding) -> Binding:
        slot = (binding.mode, binding.key_signature)
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"binding '{binding.id}' points at unknown action '{binding.action_id}'"
                )
            if binding.id in self._bindings:
                raise ValueError(f"binding '{binding.id}' is already registered")
            if slot in self._slots:
                raise KeymapConflictError(binding, self._bindings[self._slots[slot]])

            self._bindings[binding.id] = binding
            self._slots[slot] = binding.id
            self._revision += 1
        return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            del self._slots[(binding.mode, binding.key_signature)]
            self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({mode for mode, _ in self._slots})),
        )


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
