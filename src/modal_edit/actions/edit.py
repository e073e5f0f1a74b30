"""Text mutations bound in Normal and Insert mode."""

from __future__ import annotations

from modal_edit.keymaps import ResolutionMatch
from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.modes.state import ModeState


def insert_newline(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del state, match
    context.editor.insert_text("\n")
    return ModeResult(consumed=True, status="inserted")


def delete_backward(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del state, match
    removed = context.editor.delete_backward()
    return ModeResult(consumed=True, status="deleted" if removed else "noop")


def delete_under_cursor(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del state, match
    removed = context.editor.delete_forward()
    return ModeResult(consumed=True, status="deleted" if removed else "noop")


__all__ = ["insert_newline", "delete_backward", "delete_under_cursor"]
