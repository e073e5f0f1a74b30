"""Resolve typed key tokens against a per-mode prefix tree of bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence, Tuple

from .models import Action, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class _Node:
    binding: Optional[Binding] = None
    children: Dict[str, "_Node"] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: Action


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


def _build_tree(registry: KeymapRegistry, mode: str) -> _Node:
    root = _Node()
    for binding in registry.bindings(mode):
        node = root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, _Node())
        node.binding = binding
    return root


class KeymapResolver:
    """Looks up token sequences; trees are rebuilt when the registry changes."""

    def __init__(self, registry: KeymapRegistry) -> None:
        self.registry = registry
        self._trees: Dict[str, Tuple[int, _Node]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        """Classify ``tokens`` as a full match, a live prefix, or a miss.

        The registry keeps bound sequences prefix-free, so a node is either a
        binding or a branch.
        """

        node = self._tree(mode)
        for consumed, token in enumerate(tokens):
            child = node.children.get(token)
            if child is None:
                return ResolutionResult(status="miss", consumed=consumed)
            node = child

        if node.binding is not None:
            action = self.registry.action(node.binding.action_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(binding=node.binding, action=action),
                consumed=len(tokens),
            )
        if tokens and node.children:
            return ResolutionResult(
                status="pending",
                consumed=len(tokens),
                next_expected=tuple(sorted(node.children)),
            )
        return ResolutionResult(status="miss", consumed=len(tokens))

    def _tree(self, mode: str) -> _Node:
        cached = self._trees.get(mode)
        if cached is not None and cached[0] == self.registry.revision:
            return cached[1]
        root = _build_tree(self.registry, mode)
        self._trees[mode] = (self.registry.revision, root)
        return root


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
