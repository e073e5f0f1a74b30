from __future__ import annotations

from typing import List

from modal_edit.adapters.textual import (
    RenderFrame,
    TextualEditorAdapter,
    TextualUIHooks,
)
from modal_edit.buffer import TextBuffer
from modal_edit.commands import CommandOutcome
from modal_edit.editor import Editor, ScreenPosition, Size
from modal_edit.modes import INSERT, KeyInput
from modal_edit.modes.state_machine import create_default_machine


def make_adapter(
    text: str = "hello\r\nworld\n",
) -> tuple[TextualEditorAdapter, List[RenderFrame], List[tuple[str, object | None]]]:
    editor = Editor(Size(rows=5, cols=20), buffers=[TextBuffer(text)])
    machine = create_default_machine(editor)
    frames: List[RenderFrame] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        render=frames.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    return TextualEditorAdapter(machine, hooks), frames, events


def test_initial_frame_strips_terminators() -> None:
    _, frames, _ = make_adapter()

    first = frames[0]
    assert first.lines == ("hello", "world", "")
    assert first.cursor == ScreenPosition(col=0, row=0)
    assert first.status.startswith(" NOR index: 0")
    assert first.command_text is None
    assert first.redraw is True


def test_normalize_named_keys() -> None:
    normalize = TextualEditorAdapter.normalize_key

    assert normalize("escape") == KeyInput(key="ESC")
    assert normalize("enter", "\r") == KeyInput(key="ENTER")
    assert normalize("backspace") == KeyInput(key="BACKSPACE")
    assert normalize("left") == KeyInput(key="LEFT")
    assert normalize("tab", "\t") == KeyInput(key="TAB", text="\t")


def test_normalize_characters() -> None:
    normalize = TextualEditorAdapter.normalize_key

    assert normalize("colon", ":") == KeyInput(key=":", text=":")
    assert normalize("G", "G", ("shift",)) == KeyInput(key="G", text="G")
    assert normalize("a", None, ("ctrl",)) == KeyInput(key="a", modifiers=("CTRL",))
    assert normalize("f1") == KeyInput(key="F1")


def test_typing_updates_frames() -> None:
    adapter, frames, _ = make_adapter()

    adapter.handle_key("i", character="i")
    assert adapter.machine.state == INSERT
    adapter.handle_key("h", character="h")
    adapter.handle_key("escape")

    assert frames[-2].lines[0] == "hhello"
    assert frames[-2].status.startswith(" INS")
    assert frames[-2].redraw is True
    assert frames[-1].status.startswith(" NOR")


def test_motion_updates_cursor_without_redraw() -> None:
    adapter, frames, events = make_adapter()

    adapter.handle_key("j", character="j")

    assert frames[-1].cursor == ScreenPosition(col=0, row=1)
    assert frames[-1].redraw is False
    assert ("cursor.move", {"from": 0, "to": 7}) in events


def test_command_line_frames_and_events() -> None:
    adapter, frames, events = make_adapter()

    adapter.handle_key("colon", character=":")
    assert frames[-1].command_text == ""
    adapter.handle_key("w", character="w")
    assert frames[-1].command_text == "w"
    assert frames[-1].status.startswith(" NOR :w")
    result = adapter.handle_key("enter", character="\r")

    assert result.status == "command_unrecognized"
    assert frames[-1].command_text is None
    assert ("command.submit", "w") in events
    outcome = next(payload for name, payload in events if name == "command.result")
    assert isinstance(outcome, CommandOutcome)
    assert outcome.status == "unrecognized"


def test_resize_reserves_status_rows() -> None:
    adapter, frames, _ = make_adapter()

    result = adapter.handle_resize(30, 8)

    assert result.status == "resize"
    assert adapter.machine.context.editor.viewport.size == Size(rows=7, cols=30)
    assert frames[-1].redraw is True


def test_frames_are_clean_after_render() -> None:
    adapter, _, _ = make_adapter()

    assert adapter.machine.context.editor.is_dirty() is False
    assert adapter.frame().redraw is False
