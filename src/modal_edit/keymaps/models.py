"""Key strokes, sequences, and the bindings that map them to actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key press: a key name plus lower-case, sorted modifiers."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        cleaned = {m.strip().lower() for m in self.modifiers if m.strip()}
        object.__setattr__(self, "modifiers", tuple(sorted(cleaned)))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """``"ctrl+r"`` -> ``KeyStroke("r", ("ctrl",))``; a lone ``"+"`` is a key."""

        *modifiers, key = token.split("+") if token != "+" else ["+"]
        return cls(key=key, modifiers=tuple(modifiers))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @classmethod
    def from_strings(cls, *tokens: str) -> "KeySequence":
        return cls(strokes=tuple(KeyStroke.parse(t) for t in tokens if t))

    @classmethod
    def parse(cls, text: str) -> "KeySequence":
        """Whitespace-separated tokens, e.g. ``"g g"``."""

        return cls.from_strings(*text.split())

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    def __str__(self) -> str:
        return " ".join(self.tokens)


@dataclass(frozen=True, slots=True)
class Action:
    """Named handler that bindings refer to by id."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Action id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object) -> object:
        return self.handler(*args)


@dataclass(frozen=True, slots=True)
class Binding:
    """``sequence`` pressed in ``mode`` runs the action ``action_id``."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")

    @property
    def signature(self) -> str:
        return str(self.sequence)


__all__ = ["Action", "Binding", "KeySequence", "KeyStroke"]
