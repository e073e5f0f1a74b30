"""Command-line command dispatch."""

from .registry import (
    UNRECOGNIZED,
    Command,
    CommandOutcome,
    CommandRegistry,
    SaveFileCommand,
    UnrecognizedCommand,
)

__all__ = [
    "Command",
    "CommandOutcome",
    "CommandRegistry",
    "SaveFileCommand",
    "UnrecognizedCommand",
    "UNRECOGNIZED",
]
