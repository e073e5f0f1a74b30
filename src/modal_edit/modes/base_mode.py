"""Event types, results, and the keymap-driven base class for modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple, Union

from modal_edit.keymaps import ResolutionMatch
from modal_edit.runtime import telemetry

from .keymap_helpers import key_to_token, require_keymap_resolver
from .state import ModeState

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.commands import CommandRegistry
    from modal_edit.editor import Editor


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is the token used for keymap lookup (``"h"``, ``"ESC"``,
    ``"ENTER"``); ``text`` is the character the key would type, if any.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, char: str) -> "KeyInput":
        return cls(key=char, text=char)


@dataclass(frozen=True, slots=True)
class ResizeEvent:
    cols: int
    rows: int


InputEvent = Union[KeyInput, ResizeEvent]


@dataclass(slots=True)
class ModeResult:
    """Outcome of one event; ``switch_to`` is the next state, if any."""

    consumed: bool
    switch_to: Optional[ModeState] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting modes and hosts exchange signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can reach."""

    editor: "Editor"
    commands: "CommandRegistry"
    bus: ModeBus = field(default_factory=ModeBus)
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    """Base class for the handler behind one kind of ``ModeState``.

    Keys are first looked up in the keymap for ``name``. A key that no
    binding claims goes to ``fallback``. When a multi-key prefix is abandoned
    the current key is resolved again on its own, so it is never dropped.
    """

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger(f"modal_edit.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    def on_enter(self, previous: Optional[ModeState]) -> None:
        del previous
        self._pending.clear()

    def on_exit(self, next_state: Optional[ModeState]) -> None:
        del next_state
        self._pending.clear()

    def handle_key(self, state: ModeState, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(state, result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True, status="pending", message="awaiting_sequence"
            )

        abandoned_prefix = len(self._pending) > 1
        self._pending.clear()
        if abandoned_prefix:
            return self.handle_key(state, key)
        return self.fallback(state, key)

    def fallback(self, state: ModeState, key: KeyInput) -> ModeResult:
        del state, key
        return ModeResult(consumed=False, status="miss")

    def _execute_match(self, state: ModeState, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, state, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = [
    "InputEvent",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "ResizeEvent",
]
