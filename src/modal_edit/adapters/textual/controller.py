"""Adapter feeding host key/resize events into the mode state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from modal_edit.buffer.rope import terminator_length
from modal_edit.editor import ScreenPosition
from modal_edit.modes import KeyInput, ModeResult, ResizeEvent
from modal_edit.modes.state_machine import ModeStateMachine
from modal_edit.runtime import telemetry

# Host key names that map onto keymap tokens.
_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """Everything the host needs to paint one iteration."""

    lines: Tuple[str, ...]
    cursor: ScreenPosition
    status: str
    command_text: Optional[str]
    redraw: bool


@dataclass(slots=True)
class TextualUIHooks:
    render: Callable[[RenderFrame], None]
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges host input to ``ModeStateMachine`` and pushes frames back."""

    def __init__(
        self,
        machine: ModeStateMachine,
        hooks: TextualUIHooks,
        *,
        status_rows: Optional[int] = None,
    ) -> None:
        self.machine = machine
        self.hooks = hooks
        if status_rows is None:
            status_rows = machine.context.editor.config.status_rows
        self.status_rows = status_rows
        self.logger = telemetry.get_logger("modal_edit.adapters.textual")
        self._subscribe_events()
        self.refresh()

    @staticmethod
    def normalize_key(
        key: str, character: Optional[str] = None, modifiers: Iterable[str] = ()
    ) -> KeyInput:
        """Turn a host key name (and the char it types) into a ``KeyInput``."""

        mods = tuple(str(mod).upper() for mod in modifiers)
        named = _NAMED_KEYS.get(key)
        if named == "TAB":
            return KeyInput(key="TAB", modifiers=mods, text="\t")
        if named is not None:
            return KeyInput(key=named, modifiers=mods)
        if character and len(character) == 1 and character.isprintable():
            # Shift is already folded into the character.
            mods = tuple(mod for mod in mods if mod != "SHIFT")
            return KeyInput(key=character, modifiers=mods, text=character)
        return KeyInput(key=key if len(key) == 1 else key.upper(), modifiers=mods)

    def handle_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        event = self.normalize_key(key, character, modifiers)
        self._log_state("key ->", key=event.key, text=event.text)
        result = self.machine.handle_event(event)
        self._log_state("result <-", status=result.status, message=result.message)
        self.refresh()
        return result

    def handle_resize(self, cols: int, rows: int) -> ModeResult:
        text_rows = max(rows - self.status_rows, 0)
        result = self.machine.handle_event(ResizeEvent(cols=cols, rows=text_rows))
        self.refresh()
        return result

    def frame(self) -> RenderFrame:
        editor = self.machine.context.editor
        lines: List[str] = []
        for line in editor.visible_lines():
            lines.append(line[: len(line) - terminator_length(line)])
        return RenderFrame(
            lines=tuple(lines),
            cursor=editor.screen_position(),
            status=self.machine.status_text(),
            command_text=self.machine.command_text,
            redraw=editor.is_dirty(),
        )

    def refresh(self) -> None:
        self.hooks.render(self.frame())
        self.machine.context.editor.clean()

    def _subscribe_events(self) -> None:
        bus = self.machine.context.bus
        for event in (
            "mode.switch",
            "command.text",
            "command.submit",
            "command.result",
            "cursor.move",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        state = self.machine.state
        parts = [prefix, f"mode={state.name!r}"]
        parts.append(f"cursor={self.machine.context.editor.cursor_index()!r}")
        parts.extend(
            f"{key}={value!r}" for key, value in fields.items() if value is not None
        )
        line = " ".join(parts)
        self.logger.debug(line)
        self.hooks.log(line)


__all__ = ["RenderFrame", "TextualEditorAdapter", "TextualUIHooks"]
