"""Actions that edit and submit the command line."""

from __future__ import annotations

from modal_edit.keymaps import ResolutionMatch
from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.modes.state import NORMAL, CommandLineState, ModeState


def _command_state(state: ModeState) -> CommandLineState:
    if not isinstance(state, CommandLineState):
        raise TypeError(f"expected a command line state, got {state!r}")
    return state


def submit_command_line(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    """Run the typed command, then return to Normal whatever the outcome."""

    del match
    text = _command_state(state).text
    context.bus.emit("command.submit", text)
    outcome = context.commands.execute(text, context.editor)
    context.bus.emit("command.result", outcome)
    return ModeResult(
        consumed=True,
        switch_to=NORMAL,
        status=f"command_{outcome.status}",
        message=outcome.message,
    )


def backspace_command_line(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    """Drop the last typed char; on an empty line, leave command mode."""

    del context, match
    command = _command_state(state)
    if not command.text:
        return ModeResult(consumed=True, switch_to=NORMAL, message="command_cancel")
    return ModeResult(consumed=True, switch_to=command.backspace(), status="editing")


__all__ = ["submit_command_line", "backspace_command_line"]
