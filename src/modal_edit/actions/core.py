"""Mode-switching actions shared across modes."""

from __future__ import annotations

from modal_edit.keymaps import ResolutionMatch
from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.modes.state import INSERT, NORMAL, CommandLineState, ModeState


def enter_insert_mode(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del context, state, match
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def enter_command_mode(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del context, state, match
    return ModeResult(
        consumed=True, switch_to=CommandLineState(""), message="enter_command"
    )


def exit_to_normal_mode(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del context, match
    if isinstance(state, CommandLineState):
        return ModeResult(consumed=True, switch_to=NORMAL, message="command_cancel")
    return ModeResult(consumed=True, switch_to=NORMAL, message="exit_insert")


__all__ = ["enter_insert_mode", "enter_command_mode", "exit_to_normal_mode"]
