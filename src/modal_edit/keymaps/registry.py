"""Keymap registry: actions by id, and bindings that never shadow each other."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from modal_edit.runtime.telemetry import span

from .models import Action, Binding


@dataclass(frozen=True, slots=True)
class RegistryStats:
    actions: int
    bindings: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding reuses or shadows a key sequence its mode already binds."""

    def __init__(self, binding: Binding, existing: Binding) -> None:
        super().__init__(
            f"Binding '{binding.id}' ({binding.mode}: {binding.signature}) "
            f"collides with '{existing.id}' ({existing.signature})"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Actions and bindings, indexed by ``(mode, signature)``.

    ``revision`` increases on every binding change so resolvers know when
    their cached tries are stale.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, Action] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_keys: Dict[Tuple[str, str], str] = {}
        self._logger_name = logger_name
        self.revision = 0

    def add_action(self, action: Action, *, replace: bool = False) -> Action:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def action(self, action_id: str) -> Action:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def bound_to(self, mode: str, signature: str) -> Optional[Binding]:
        binding_id = self._by_keys.get((mode, signature))
        return self._bindings[binding_id] if binding_id else None

    def bind(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it collides with.

        Two bindings in one mode collide when their key sequences are equal
        or one is a prefix of the other, since the shorter one would always
        fire first and the longer one could never be typed.
        """

        with span(
            "keymaps::bind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keys": binding.signature},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )
            collisions = self.collisions(binding)
            if collisions and not replace:
                raise KeymapConflictError(binding, collisions[0])
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for existing in collisions:
                self._drop(existing)
            if binding.id in self._bindings:
                self._drop(self._bindings[binding.id])
            self._bindings[binding.id] = binding
            self._by_keys[(binding.mode, binding.signature)] = binding.id
            self.revision += 1
            return binding

    def collisions(self, binding: Binding) -> List[Binding]:
        """Other bindings in ``binding.mode`` on the same keys or a prefix of them."""

        tokens = binding.sequence.tokens
        found: List[Binding] = []
        for other in self.bindings(binding.mode):
            if other.id == binding.id:
                continue
            shorter = min(len(tokens), len(other.sequence.tokens))
            if tokens[:shorter] == other.sequence.tokens[:shorter]:
                found.append(other)
        return found

    def unbind(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self.revision += 1
        return binding

    def bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding_id in sorted(self._bindings):
            binding = self._bindings[binding_id]
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            actions=len(self._actions),
            bindings=len(self._bindings),
            modes=tuple(sorted({mode for mode, _ in self._by_keys})),
        )

    def _drop(self, binding: Binding) -> None:
        del self._bindings[binding.id]
        self._by_keys.pop((binding.mode, binding.signature), None)


__all__ = ["KeymapRegistry", "KeymapConflictError", "RegistryStats"]
