"""Executable Textual app that hosts the modal editor."""

from __future__ import annotations

import argparse
import shutil
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_edit.adapters.textual.app"
    ) from exc

from modal_edit.buffer import BufferLoadError, BufferNotFoundError, TextBuffer
from modal_edit.config import EditorConfig
from modal_edit.editor import Editor, Size
from modal_edit.modes.state_machine import ModeStateMachine, create_default_machine
from modal_edit.runtime import telemetry

from .controller import RenderFrame, TextualEditorAdapter, TextualUIHooks


class ModalEditApp(App[None]):
    """Full-screen buffer view with a one-row status line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, editor: Editor) -> None:
        super().__init__()
        self.editor = editor
        self.machine: ModeStateMachine | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self.logger = telemetry.get_logger("modal_edit.app")

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        yield self._buffer_widget
        yield self._status_widget

    def on_mount(self) -> None:
        self.machine = create_default_machine(self.editor)
        hooks = TextualUIHooks(
            render=self._render_frame,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.machine, hooks)
        self.adapter.handle_resize(self.size.width, self.size.height)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.handle_resize(event.size.width, event.size.height)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        *modifiers, key = event.key.split("+")
        self.adapter.handle_key(key, character=event.character, modifiers=modifiers)
        event.stop()

    def _render_frame(self, frame: RenderFrame) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(self._buffer_text(frame))
        if self._status_widget:
            self._status_widget.update(frame.status)

    @staticmethod
    def _buffer_text(frame: RenderFrame) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        col, row = frame.cursor
        lines = list(frame.lines) or [""]
        for index, line in enumerate(lines):
            if index:
                text.append("\n")
            if index != row:
                text.append(line)
                continue
            under = line[col : col + 1] or " "
            text.append(line[:col])
            text.append(under, style="reverse")
            text.append(line[col + 1 :])
        return text

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "command.result":
            self.logger.info(f"{name} {payload!r}")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="modal-edit", description="Edit a text file in a modal terminal editor."
    )
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--log-level",
        type=int,
        choices=range(len(telemetry.VERBOSITY_LEVELS)),
        default=None,
        help="0=error 1=warning 2=info 3=debug (default: MODAL_EDIT_VERBOSITY or 2)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help=f"Log destination (default: {telemetry.DEFAULT_LOG_FILE})",
    )
    return parser.parse_args(argv)


def build_editor(path: Optional[str], config: EditorConfig) -> Editor:
    """Open ``path`` (or an empty buffer) sized to the current terminal.

    A missing file yields an empty buffer bound to that path so the first
    save creates it; every other load failure propagates.
    """

    columns, lines = shutil.get_terminal_size()
    size = Size(rows=max(lines - config.status_rows, 0), cols=columns)
    if path is None:
        return Editor(size, config=config)
    try:
        return Editor.from_path(size, path, config=config)
    except BufferNotFoundError:
        buffer = TextBuffer(source_path=Path(path))
        return Editor(size, buffers=[buffer], config=config)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = EditorConfig.from_env()
    verbosity = config.log_level if args.log_level is None else args.log_level
    telemetry.setup_logging(verbosity, log_file=args.log_file)
    try:
        editor = build_editor(args.path, config)
    except BufferLoadError as exc:
        telemetry.record_event(
            "app.load_failed",
            level="error",
            data={"path": args.path, "reason": exc.reason},
        )
        raise SystemExit(f"modal-edit: {exc}") from exc
    ModalEditApp(editor).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
