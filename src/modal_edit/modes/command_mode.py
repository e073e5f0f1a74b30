"""Command-line mode: collects text after ``:`` until submit or cancel."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeResult
from .keymap_helpers import printable_text
from .state import CommandLineState, ModeState


class CommandMode(Mode):
    name = "command"

    def fallback(self, state: ModeState, key: KeyInput) -> ModeResult:
        if not isinstance(state, CommandLineState):
            raise TypeError(f"command mode cannot handle state {state!r}")
        text = printable_text(key)
        if text is None:
            return ModeResult(consumed=False, status="miss")
        return ModeResult(
            consumed=True, switch_to=state.append(text), status="editing"
        )
