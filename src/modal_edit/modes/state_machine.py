"""Mode state machine: routes each input event by the active state."""

from __future__ import annotations

from typing import Dict, Optional, Type

from modal_edit.commands import CommandRegistry
from modal_edit.editor import Editor
from modal_edit.keymaps import KeymapRegistry, KeymapResolver
from modal_edit.keymaps.defaults import load_default_keymaps
from modal_edit.runtime import telemetry

from .base_mode import (
    InputEvent,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    ResizeEvent,
)
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .state import NORMAL, CommandLineState, ModeState


class ModeStateMachine:
    """Owns the active ``ModeState`` and dispatches events one at a time.

    Key events go to the handler registered for the active state's kind;
    the returned ``switch_to`` (if any) becomes the new state. Resize events
    bypass the handlers and never touch the state.
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
        self.logger = telemetry.get_logger("modal_edit.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="modal_edit.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(self.keymap_registry)
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self._handlers: Dict[str, Mode] = {}
        self._state: ModeState = NORMAL

    @property
    def state(self) -> ModeState:
        return self._state

    @property
    def command_text(self) -> Optional[str]:
        if isinstance(self._state, CommandLineState):
            return self._state.text
        return None

    def register_mode(self, mode_cls: Type[Mode], /, **mode_kwargs: object) -> Mode:
        mode = mode_cls(self.context, **mode_kwargs)
        if mode.name in self._handlers:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._handlers[mode.name] = mode
        if mode.name == self._state.name:
            mode.on_enter(None)
        return mode

    def handle_event(self, event: InputEvent) -> ModeResult:
        if isinstance(event, ResizeEvent):
            return self.handle_resize(event)
        return self.handle_key(event)

    def handle_key(self, key: KeyInput) -> ModeResult:
        state = self._state
        handler = self._handlers.get(state.name)
        if handler is None:
            raise RuntimeError(f"No handler registered for mode '{state.name}'")
        with telemetry.span(
            f"mode::{state.name}",
            component=True,
            metadata={"key": key.key, "mode": state.name},
        ):
            result = handler.handle_key(state, key)
        if result.switch_to is not None:
            self.transition(result.switch_to)
        return result

    def handle_resize(self, event: ResizeEvent) -> ModeResult:
        self.context.editor.resize(event.cols, event.rows)
        return ModeResult(consumed=True, status="resize")

    def transition(self, new_state: ModeState) -> None:
        previous = self._state
        if new_state == previous:
            return
        if new_state.name not in self._handlers:
            raise KeyError(f"Unknown mode '{new_state.name}'")
        if new_state.name != previous.name:
            self._handlers[previous.name].on_exit(new_state)
            self._state = new_state
            self._handlers[new_state.name].on_enter(previous)
            self.context.bus.emit("mode.switch", new_state)
            telemetry.record_event("mode.switch", data={"mode": new_state.name})
        else:
            self._state = new_state
        if isinstance(new_state, CommandLineState):
            self.context.bus.emit("command.text", new_state.text)

    def status_text(self) -> str:
        return self.context.editor.status_text(self._state.label)


def create_default_machine(
    editor: Editor, *, commands: CommandRegistry | None = None
) -> ModeStateMachine:
    """Machine with the three standard modes and the default keymaps."""

    context = ModeContext(
        editor=editor,
        commands=commands or CommandRegistry.with_default_bindings(),
        bus=ModeBus(),
    )
    machine = ModeStateMachine(context)
    machine.register_mode(NormalMode)
    machine.register_mode(InsertMode)
    machine.register_mode(CommandMode)
    return machine


__all__ = ["ModeStateMachine", "create_default_machine"]
