"""Exact-match registry of command-line commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Protocol

from modal_edit.buffer import BufferSaveError
from modal_edit.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.editor import Editor


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Result of running a command; never carries a mode change."""

    command: str
    status: str = "ok"
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class Command(Protocol):
    """A side-effecting action run with access to the editor."""

    name: str

    def execute(self, editor: "Editor", command: str) -> CommandOutcome:
        ...


class SaveFileCommand:
    """Write the active buffer back to its source path."""

    name = "save_file"

    def execute(self, editor: "Editor", command: str) -> CommandOutcome:
        buffer = editor.active_buffer
        try:
            path = buffer.save()
        except BufferSaveError as exc:
            telemetry.get_logger("modal_edit.commands").error(f"save failed: {exc}")
            return CommandOutcome(command=command, status="error", message=str(exc))
        telemetry.get_logger("modal_edit.commands").info(f"saved file {path}")
        return CommandOutcome(command=command, message=f'"{path}" written')


class UnrecognizedCommand:
    """Fallback for names nobody registered; does nothing but log."""

    name = "unrecognized"

    def execute(self, editor: "Editor", command: str) -> CommandOutcome:
        del editor
        telemetry.get_logger("modal_edit.commands").warning(
            f"unrecognized command {command!r}"
        )
        return CommandOutcome(
            command=command,
            status="unrecognized",
            message=f"Not an editor command: {command}",
        )


UNRECOGNIZED = UnrecognizedCommand()


class CommandRegistry:
    """Maps command strings to ``Command`` objects."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}

    @classmethod
    def with_default_bindings(cls) -> "CommandRegistry":
        registry = cls()
        # Submitting an empty command line saves the current buffer.
        registry.register("", SaveFileCommand())
        return registry

    def register(self, name: str, command: Command, *, replace: bool = False) -> None:
        if not replace and name in self._commands:
            raise ValueError(f"Command '{name}' already registered")
        self._commands[name] = command

    def unregister(self, name: str) -> Optional[Command]:
        return self._commands.pop(name, None)

    def lookup(self, name: str) -> Command:
        return self._commands.get(name, UNRECOGNIZED)

    def names(self) -> Iterator[str]:
        return iter(sorted(self._commands))

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def execute(self, name: str, editor: "Editor") -> CommandOutcome:
        command = self.lookup(name)
        with telemetry.span(
            "commands::execute",
            component="commands",
            metadata={"command": name, "kind": command.name},
        ):
            telemetry.record_event("command.issued", data={"command": name})
            return command.execute(editor, name)


__all__ = [
    "Command",
    "CommandOutcome",
    "CommandRegistry",
    "SaveFileCommand",
    "UnrecognizedCommand",
    "UNRECOGNIZED",
]
