"""Normal mode: motions, mode switches, and single-key edits."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeResult
from .state import ModeState


class NormalMode(Mode):
    name = "normal"

    def fallback(self, state: ModeState, key: KeyInput) -> ModeResult:
        del state
        self.logger.debug(f"normal mode ignored key {key.key!r}")
        return ModeResult(consumed=False, status="miss", message="unbound")
