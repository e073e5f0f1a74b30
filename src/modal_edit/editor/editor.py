"""Editor façade composing buffers, the cursor, and the viewport."""

from __future__ import annotations

import os
from typing import List, Optional, Sequence

from modal_edit.buffer import TextBuffer
from modal_edit.buffer.rope import count_breaks
from modal_edit.config import EditorConfig
from modal_edit.runtime import telemetry

from .cursor import Cursor
from .viewport import ScreenPosition, Size, Viewport


class Editor:
    """Owns every open buffer, the single cursor, and the viewport.

    The active buffer is tracked by index into ``buffers`` and resolved on
    demand. Every motion, mutation, resize, and buffer switch ends with
    ``_reveal_cursor`` so the cursor's line stays inside the viewport.
    ``needs_redraw`` is raised whenever the painted lines may be stale and
    lowered by the host through ``clean()``.
    """

    def __init__(
        self,
        size: Size,
        *,
        buffers: Optional[Sequence[TextBuffer]] = None,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffers: List[TextBuffer] = list(buffers or [TextBuffer()])
        self.active_index = 0
        self.cursor = Cursor()
        self.viewport = Viewport(size=size)
        self.needs_redraw = True
        self.logger = telemetry.get_logger("modal_edit.editor")
        self.logger.info(f"editor created with {len(self.buffers)} buffer(s)")

    @classmethod
    def from_path(
        cls,
        size: Size,
        path: str | os.PathLike[str],
        *,
        config: Optional[EditorConfig] = None,
    ) -> "Editor":
        return cls(size, buffers=[TextBuffer.load(path)], config=config)

    # -- buffers --------------------------------------------------------------

    @property
    def active_buffer(self) -> TextBuffer:
        return self.buffers[self.active_index]

    def open_buffer(self, source: TextBuffer | str | os.PathLike[str]) -> int:
        """Append a buffer (loading it when given a path) and make it active."""

        buffer = source if isinstance(source, TextBuffer) else TextBuffer.load(source)
        self.buffers.append(buffer)
        index = len(self.buffers) - 1
        self.switch_buffer(index)
        return index

    def switch_buffer(self, index: int) -> None:
        if not 0 <= index < len(self.buffers):
            raise IndexError(f"No buffer at index {index}")
        self.active_index = index
        self.cursor.clamp_to(self.active_buffer)
        self.viewport.scroll_offset = 0
        self.needs_redraw = True
        self._reveal_cursor()
        telemetry.record_event(
            "editor.switch_buffer",
            data={"index": index, "buffer": self.active_buffer.name},
        )

    # -- motion ---------------------------------------------------------------

    def move_cursor(self, dx: int = 0, dy: int = 0) -> None:
        buffer = self.active_buffer
        self.cursor.move(buffer, dx, dy)
        self.logger.debug(
            f"cursor moved x: {dx}, y: {dy}, to index: {self.cursor.char_index}"
        )
        self._reveal_cursor()

    def move_to_line_start(self) -> None:
        self.cursor.set_column(self.active_buffer, 0)
        self._reveal_cursor()

    def move_to_line_end(self) -> None:
        buffer = self.active_buffer
        self.cursor.set_column(buffer, buffer.line_length(self.cursor_line()) or 0)
        self._reveal_cursor()

    def move_to_line(self, line: int) -> None:
        self.cursor.goto_line(self.active_buffer, line)
        self._reveal_cursor()

    def move_to_buffer_start(self) -> None:
        self.move_to_line(0)

    def move_to_buffer_end(self) -> None:
        self.move_to_line(self.active_buffer.line_count() - 1)

    # -- mutation -------------------------------------------------------------

    def insert_char(self, char: str) -> None:
        self.insert_text(char)

    def insert_text(self, text: str) -> None:
        if not text:
            return
        buffer = self.active_buffer
        index = self.cursor.char_index
        # A "\r" next to a "\n" reads as one CRLF break, so keep the two apart.
        if text.startswith("\n") and buffer.char_at(index - 1) == "\r":
            text = "\r" + text[1:]
        if text.endswith("\r") and buffer.char_at(index) == "\n":
            text = text[:-1] + "\n"
        self.logger.debug(f"inserted {text!r} at index {index}")
        buffer.insert(index, text)
        self.cursor.char_index = index + len(text)
        self.cursor.sticky_column = self.cursor.column(buffer)
        self.needs_redraw = True
        self._reveal_cursor()

    def delete_backward(self) -> str:
        """Delete the char before the cursor; a CRLF pair goes as one unit."""

        buffer = self.active_buffer
        index = self.cursor.char_index
        if index == 0:
            return ""
        count = 2 if buffer.slice(index - 2, index) == "\r\n" else 1
        removed = buffer.delete(index - count, count)
        self._keep_lines_apart(index - len(removed), removed)
        self.cursor.char_index = index - len(removed)
        self.cursor.sticky_column = self.cursor.column(buffer)
        self.needs_redraw = True
        self._reveal_cursor()
        return removed

    def delete_forward(self) -> str:
        """Delete the char under the cursor without joining lines."""

        buffer = self.active_buffer
        if self.cursor.column(buffer) >= (buffer.line_length(self.cursor_line()) or 0):
            return ""
        removed = buffer.delete(self.cursor.char_index, 1)
        self._keep_lines_apart(self.cursor.char_index, removed)
        self.cursor.clamp_to(buffer)
        self.needs_redraw = True
        self._reveal_cursor()
        return removed

    def _keep_lines_apart(self, index: int, removed: str) -> None:
        """Split a CRLF pair that a deletion inside one line just formed.

        Removing the only text between a "\\r" and a "\\n" would merge two
        breaks into one; the "\\n" becomes a second "\\r" instead.
        """

        buffer = self.active_buffer
        if count_breaks(removed) or buffer.slice(index - 1, index + 1) != "\r\n":
            return
        buffer.delete(index, 1)
        buffer.insert(index, "\r")

    # -- viewport -------------------------------------------------------------

    def resize(self, cols: int, rows: int) -> None:
        self.viewport.resize(Size(rows=rows, cols=cols))
        self.needs_redraw = True
        self._reveal_cursor()
        telemetry.record_event("editor.resize", data={"cols": cols, "rows": rows})

    def visible_lines(self) -> List[str]:
        return self.viewport.visible_lines(self.active_buffer)

    def screen_position(self) -> ScreenPosition:
        return self.viewport.screen_position(self.active_buffer, self.cursor)

    def cursor_line(self) -> int:
        return self.cursor.line(self.active_buffer)

    def cursor_index(self) -> int:
        return self.cursor.char_index

    def status_text(self, mode_label: str) -> str:
        position = self.screen_position()
        return (
            f" {mode_label} index: {self.cursor.char_index}, x: {position.col}, "
            f"y: {position.row}, line: {self.cursor_line()}"
        )

    def is_dirty(self) -> bool:
        return self.needs_redraw

    def clean(self) -> None:
        self.needs_redraw = False

    def _reveal_cursor(self) -> None:
        if self.viewport.scroll_to_line(
            self.cursor_line(),
            margin=self.config.scroll_margin,
            line_count=self.active_buffer.line_count(),
        ):
            self.needs_redraw = True


__all__ = ["Editor"]
