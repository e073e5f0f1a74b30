from __future__ import annotations

from modal_edit.buffer import TextBuffer
from modal_edit.config import EditorConfig
from modal_edit.editor import Cursor, Editor, ScreenPosition, Size, Viewport


def numbered_lines(count: int) -> str:
    return "".join(f"line{i}\n" for i in range(count))


def test_screen_position_row_saturates_at_zero() -> None:
    buffer = TextBuffer(numbered_lines(10))
    viewport = Viewport(size=Size(rows=5, cols=80), scroll_offset=3)
    cursor = Cursor(char_index=buffer.line_to_char(1) or 0)

    assert viewport.screen_position(buffer, cursor) == ScreenPosition(col=0, row=0)


def test_screen_position_is_relative_to_scroll() -> None:
    buffer = TextBuffer(numbered_lines(10))
    viewport = Viewport(size=Size(rows=5, cols=80), scroll_offset=3)
    cursor = Cursor(char_index=(buffer.line_to_char(5) or 0) + 2)

    assert viewport.screen_position(buffer, cursor) == ScreenPosition(col=2, row=2)


def test_visible_lines_window() -> None:
    buffer = TextBuffer(numbered_lines(10))
    viewport = Viewport(size=Size(rows=3, cols=80), scroll_offset=2)

    assert viewport.visible_lines(buffer) == ["line2\n", "line3\n", "line4\n"]


def test_visible_lines_stop_at_buffer_end() -> None:
    buffer = TextBuffer("a\nb")
    viewport = Viewport(size=Size(rows=5, cols=80))

    assert viewport.visible_lines(buffer) == ["a\n", "b"]


def test_scroll_to_line_is_minimal() -> None:
    viewport = Viewport(size=Size(rows=5, cols=80))

    assert viewport.scroll_to_line(7, line_count=20) is True
    assert viewport.scroll_offset == 3
    assert viewport.scroll_to_line(3, line_count=20) is False
    assert viewport.scroll_to_line(0, line_count=20) is True
    assert viewport.scroll_offset == 0


def test_scroll_to_line_keeps_margin() -> None:
    viewport = Viewport(size=Size(rows=5, cols=80))

    viewport.scroll_to_line(4, margin=1, line_count=20)

    assert viewport.scroll_offset == 1
    assert viewport.contains_line(5)


def test_scroll_with_zero_rows_is_noop() -> None:
    viewport = Viewport(size=Size(rows=0, cols=80), scroll_offset=2)

    assert viewport.scroll_to_line(10, line_count=20) is False
    assert viewport.visible_lines(TextBuffer("a")) == []


def test_editor_scrolls_to_follow_cursor() -> None:
    editor = Editor(Size(rows=10, cols=40), buffers=[TextBuffer(numbered_lines(50))])
    editor.clean()

    for _ in range(15):
        editor.move_cursor(dy=1)

    assert editor.cursor_line() == 15
    assert editor.viewport.scroll_offset == 6
    assert editor.screen_position() == ScreenPosition(col=0, row=9)
    assert editor.is_dirty() is True


def test_editor_scroll_margin_from_config() -> None:
    editor = Editor(
        Size(rows=10, cols=40),
        buffers=[TextBuffer(numbered_lines(50))],
        config=EditorConfig(scroll_margin=2),
    )

    editor.move_to_line(8)

    assert editor.viewport.scroll_offset == 1
    assert editor.screen_position().row == 7


def test_resize_keeps_cursor_visible() -> None:
    editor = Editor(Size(rows=10, cols=40), buffers=[TextBuffer(numbered_lines(50))])
    editor.move_to_line(15)
    index = editor.cursor_index()
    editor.clean()

    editor.resize(cols=20, rows=4)

    assert editor.viewport.size == Size(rows=4, cols=20)
    assert editor.viewport.scroll_offset == 12
    assert editor.screen_position().row == 3
    assert editor.cursor_index() == index
    assert editor.is_dirty() is True


def test_motion_inside_window_does_not_request_redraw() -> None:
    editor = Editor(Size(rows=10, cols=40), buffers=[TextBuffer(numbered_lines(5))])
    editor.clean()

    editor.move_cursor(dy=1)

    assert editor.is_dirty() is False


def test_status_text_format() -> None:
    editor = Editor(Size(rows=10, cols=40), buffers=[TextBuffer("hello\nworld")])
    editor.move_cursor(dx=2, dy=1)

    assert editor.status_text("NOR") == " NOR index: 8, x: 2, y: 1, line: 1"
