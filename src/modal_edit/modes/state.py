"""Mode states: a closed set of frozen values, one active at a time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True, slots=True)
class NormalState:
    name: ClassVar[str] = "normal"

    @property
    def label(self) -> str:
        return "NOR"


@dataclass(frozen=True, slots=True)
class CommandLineState:
    """Command line being typed after ``:``; carries its own text."""

    name: ClassVar[str] = "command"
    text: str = ""

    @property
    def label(self) -> str:
        return f"NOR :{self.text}"

    def append(self, text: str) -> "CommandLineState":
        return CommandLineState(self.text + text)

    def backspace(self) -> "CommandLineState":
        return CommandLineState(self.text[:-1])


@dataclass(frozen=True, slots=True)
class InsertState:
    name: ClassVar[str] = "insert"

    @property
    def label(self) -> str:
        return "INS"


ModeState = Union[NormalState, CommandLineState, InsertState]

NORMAL = NormalState()
INSERT = InsertState()

__all__ = [
    "ModeState",
    "NormalState",
    "CommandLineState",
    "InsertState",
    "NORMAL",
    "INSERT",
]
