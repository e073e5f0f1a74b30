"""Insert mode: typed text goes straight into the active buffer."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeResult
from .keymap_helpers import printable_text
from .state import ModeState


class InsertMode(Mode):
    name = "insert"

    def fallback(self, state: ModeState, key: KeyInput) -> ModeResult:
        del state
        text = printable_text(key)
        if text is None:
            return ModeResult(consumed=False, status="miss")
        self.context.editor.insert_text(text)
        return ModeResult(consumed=True, status="inserted")
