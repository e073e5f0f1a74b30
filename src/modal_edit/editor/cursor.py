"""Cursor state and the motion rules that keep it inside the buffer."""

from __future__ import annotations

from dataclasses import dataclass

from modal_edit.buffer import TextBuffer


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


@dataclass(slots=True)
class Cursor:
    """Absolute char offset plus the column remembered for vertical moves.

    ``sticky_column`` is refreshed by horizontal motion only. Vertical motion
    clamps the *actual* column to the target line but keeps the remembered
    one, so passing through a short line does not lose the intended column.
    """

    char_index: int = 0
    sticky_column: int = 0

    def line(self, buffer: TextBuffer) -> int:
        line = buffer.char_to_line(self.char_index)
        return 0 if line is None else line

    def line_start(self, buffer: TextBuffer) -> int:
        start = buffer.line_to_char(self.line(buffer))
        return 0 if start is None else start

    def column(self, buffer: TextBuffer) -> int:
        return self.char_index - self.line_start(buffer)

    def clamp_to(self, buffer: TextBuffer) -> None:
        """Pull ``char_index`` back into ``[0, buffer.len_chars()]``."""

        self.char_index = _clamp(self.char_index, 0, buffer.len_chars())
        # Never rest between the CR and LF of a CRLF pair.
        start = self.line_start(buffer)
        length = buffer.line_length(self.line(buffer)) or 0
        self.char_index = _clamp(self.char_index, start, start + length)

    def move(self, buffer: TextBuffer, dx: int = 0, dy: int = 0) -> None:
        """Apply a vertical then a horizontal delta."""

        if dy:
            self._move_vertical(buffer, dy)
        if dx:
            self._move_horizontal(buffer, dx)

    def set_column(self, buffer: TextBuffer, column: int) -> None:
        """Horizontal jump to ``column`` on the current line (clamped)."""

        start = self.line_start(buffer)
        length = buffer.line_length(self.line(buffer)) or 0
        self.char_index = start + _clamp(column, 0, length)
        self.sticky_column = self.char_index - start

    def goto_line(self, buffer: TextBuffer, line: int) -> None:
        """Vertical jump to ``line`` (clamped), honouring the sticky column."""

        target = _clamp(line, 0, buffer.line_count() - 1)
        start = buffer.line_to_char(target) or 0
        length = buffer.line_length(target) or 0
        self.char_index = start + min(self.sticky_column, length)

    def _move_vertical(self, buffer: TextBuffer, dy: int) -> None:
        self.goto_line(buffer, self.line(buffer) + dy)

    def _move_horizontal(self, buffer: TextBuffer, dx: int) -> None:
        self.set_column(buffer, self.column(buffer) + dx)


__all__ = ["Cursor"]
