"""Visible window into a buffer and the buffer-to-screen mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple

from modal_edit.buffer import TextBuffer

from .cursor import Cursor


class Size(NamedTuple):
    rows: int
    cols: int


class ScreenPosition(NamedTuple):
    col: int
    row: int


@dataclass(slots=True)
class Viewport:
    size: Size = field(default_factory=lambda: Size(rows=24, cols=80))
    scroll_offset: int = 0

    def resize(self, size: Size) -> None:
        # Scroll correction is left to the editor.
        self.size = Size(rows=max(0, size.rows), cols=max(0, size.cols))

    def screen_position(self, buffer: TextBuffer, cursor: Cursor) -> ScreenPosition:
        line = cursor.line(buffer)
        return ScreenPosition(
            col=cursor.char_index - cursor.line_start(buffer),
            row=max(line - self.scroll_offset, 0),
        )

    def visible_lines(self, buffer: TextBuffer) -> List[str]:
        """Up to ``size.rows`` raw lines starting at ``scroll_offset``."""

        lines: List[str] = []
        for index in range(self.scroll_offset, self.scroll_offset + self.size.rows):
            line = buffer.get_line(index)
            if line is None:
                break
            lines.append(line)
        return lines

    def contains_line(self, line: int) -> bool:
        return self.scroll_offset <= line < self.scroll_offset + self.size.rows

    def scroll_to_line(self, line: int, *, margin: int = 0, line_count: int) -> bool:
        """Scroll the minimum amount that brings ``line`` into view.

        ``margin`` keeps that many extra lines visible around ``line`` when
        the window is tall enough. Returns ``True`` if the offset changed.
        """

        rows = self.size.rows
        if rows <= 0:
            return False
        margin = max(0, min(margin, (rows - 1) // 2))
        previous = self.scroll_offset
        if line - margin < self.scroll_offset:
            self.scroll_offset = line - margin
        elif line + margin >= self.scroll_offset + rows:
            self.scroll_offset = line + margin - rows + 1
        max_offset = max(line_count - rows, 0)
        self.scroll_offset = max(0, min(self.scroll_offset, max_offset, line))
        return self.scroll_offset != previous


__all__ = ["Size", "ScreenPosition", "Viewport"]
