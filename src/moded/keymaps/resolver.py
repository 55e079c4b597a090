"""Trie-based key sequence resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence, Tuple

from moded.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding_id: Optional[str] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of feeding typed tokens to one mode's trie.

    ``pending`` means the tokens are a strict prefix of at least one binding;
    ``next_expected`` then lists the tokens that would extend it.
    """

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


def _build_trie(bindings) -> TrieNode:
    root = TrieNode()
    for binding in bindings:
        node = root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, TrieNode())
        node.binding_id = binding.id
    return root


def _walk(root: TrieNode, tokens: Sequence[str]) -> Tuple[Optional[TrieNode], int]:
    node = root
    for depth, token in enumerate(tokens):
        child = node.children.get(token)
        if child is None:
            return None, depth
        node = child
    return node, len(tokens)


class KeymapResolver:
    """Walks a per-mode trie, rebuilt whenever the registry revision moves."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, Tuple[int, TrieNode]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        typed = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": " ".join(typed)},
        ) as handle:
            result = self._resolve(mode, typed)
            handle.add_metadata("status", result.status)
        return result

    def _resolve(self, mode: str, tokens: Tuple[str, ...]) -> ResolutionResult:
        node, consumed = _walk(self._trie(mode), tokens)
        if node is None:
            return ResolutionResult(status="miss", consumed=consumed)
        if node.binding_id is not None:
            binding = self._registry.get_binding(node.binding_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(
                    binding=binding,
                    action=self._registry.get_action(binding.action_id),
                ),
                consumed=consumed,
            )
        if node.children:
            return ResolutionResult(
                status="pending",
                consumed=consumed,
                next_expected=tuple(sorted(node.children)),
            )
        return ResolutionResult(status="miss", consumed=consumed)

    def _trie(self, mode: str) -> TrieNode:
        revision = self._registry.revision()
        cached = self._tries.get(mode)
        if cached is None or cached[0] != revision:
            cached = (revision, _build_trie(self._registry.iter_bindings(mode)))
            self._tries[mode] = cached
        return cached[1]


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
