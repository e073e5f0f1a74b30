"""Cursor motions bound in Normal mode."""

from __future__ import annotations

from typing import Callable

from modal_edit.editor import Editor
from modal_edit.keymaps import ResolutionMatch
from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.modes.state import ModeState

Motion = Callable[[ModeContext, ModeState, ResolutionMatch], ModeResult]


def _apply(context: ModeContext, move: Callable[[Editor], None]) -> ModeResult:
    editor = context.editor
    before = editor.cursor_index()
    move(editor)
    context.bus.emit(
        "cursor.move", {"from": before, "to": editor.cursor_index()}
    )
    return ModeResult(consumed=True, status="motion")


def _delta(dx: int, dy: int) -> Motion:
    def motion(
        context: ModeContext, state: ModeState, match: ResolutionMatch
    ) -> ModeResult:
        del state, match
        return _apply(context, lambda editor: editor.move_cursor(dx, dy))

    return motion


move_left = _delta(-1, 0)
move_right = _delta(1, 0)
move_up = _delta(0, -1)
move_down = _delta(0, 1)


def line_start(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del state, match
    return _apply(context, Editor.move_to_line_start)


def line_end(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del state, match
    return _apply(context, Editor.move_to_line_end)


def buffer_start(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del state, match
    return _apply(context, Editor.move_to_buffer_start)


def buffer_end(
    context: ModeContext, state: ModeState, match: ResolutionMatch
) -> ModeResult:
    del state, match
    return _apply(context, Editor.move_to_buffer_end)


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "line_start",
    "line_end",
    "buffer_start",
    "buffer_end",
]
