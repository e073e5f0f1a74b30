"""Rope-backed text buffer, optionally bound to a file on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from modal_edit.runtime import telemetry

from .errors import BufferLoadError, BufferSaveError, load_error_for
from .rope import Rope, terminator_length

ENCODING = "utf-8"


class TextBuffer:
    """Mutable text body with line/char coordinate conversion.

    Line terminators are stored verbatim. ``get_line`` returns a line with its
    terminator; ``line_length`` reports the visible length without it. Any
    coordinate query outside the buffer answers ``None`` instead of raising.
    Every mutation bumps ``version``, so coordinates computed against an
    older version must be recomputed.
    """

    def __init__(
        self,
        text: str = "",
        *,
        source_path: Optional[str | os.PathLike[str]] = None,
    ) -> None:
        self.content = Rope(text)
        self.source_path = Path(source_path) if source_path is not None else None
        self.dirty = False
        self.version = 0

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> "TextBuffer":
        """Read ``path`` into a new buffer; raises ``BufferLoadError`` on failure."""

        with telemetry.span(
            "buffer::load", component="buffer", metadata={"path": os.fspath(path)}
        ):
            try:
                with open(path, "r", encoding=ENCODING, newline="") as handle:
                    text = handle.read()
            except OSError as exc:
                raise load_error_for(exc, path) from exc
            except UnicodeDecodeError as exc:
                raise BufferLoadError(
                    f"Cannot decode {os.fspath(path)} as {ENCODING}", path=path
                ) from exc
        buffer = cls(text, source_path=path)
        telemetry.record_event(
            "buffer.load",
            data={"path": os.fspath(path), "lines": buffer.line_count()},
        )
        return buffer

    @property
    def name(self) -> str:
        return self.source_path.name if self.source_path else "[No Name]"

    @property
    def text(self) -> str:
        return str(self.content)

    def __repr__(self) -> str:
        return (
            f"TextBuffer(name={self.name!r}, lines={self.line_count()}, "
            f"dirty={self.dirty})"
        )

    # -- queries --------------------------------------------------------------

    def len_chars(self) -> int:
        return self.content.len_chars()

    def line_count(self) -> int:
        return self.content.len_lines()

    def get_line(self, line_index: int) -> Optional[str]:
        return self.content.line(line_index)

    def line_length(self, line_index: int) -> Optional[int]:
        line = self.get_line(line_index)
        if line is None:
            return None
        return len(line) - terminator_length(line)

    def char_to_line(self, char_index: int) -> Optional[int]:
        return self.content.char_to_line(char_index)

    def line_to_char(self, line_index: int) -> Optional[int]:
        if line_index >= self.line_count():
            return None
        return self.content.line_to_char(line_index)

    def char_at(self, char_index: int) -> Optional[str]:
        if char_index < 0 or char_index >= self.len_chars():
            return None
        return self.content.slice(char_index, char_index + 1)

    def slice(self, start: int, end: int) -> str:
        return self.content.slice(start, end)

    # -- mutation -------------------------------------------------------------

    def insert(self, char_index: int, text: str) -> None:
        if not text:
            return
        self.content.insert(char_index, text)
        self._touch()

    def delete(self, char_index: int, count: int) -> str:
        """Remove up to ``count`` chars starting at ``char_index``."""

        if count <= 0:
            return ""
        removed = self.content.remove(char_index, char_index + count)
        if removed:
            self._touch()
        return removed

    def save(self, path: Optional[str | os.PathLike[str]] = None) -> Path:
        """Write the buffer verbatim to ``path`` (or its source) and mark it clean."""

        target = Path(path) if path is not None else self.source_path
        if target is None:
            raise BufferSaveError("Buffer has no file name")
        with telemetry.span(
            "buffer::save", component="buffer", metadata={"path": str(target)}
        ):
            try:
                with open(target, "w", encoding=ENCODING, newline="") as handle:
                    for chunk in self.content.chunks():
                        handle.write(chunk)
            except OSError as exc:
                raise BufferSaveError(
                    f"Cannot write {target}: {exc}", path=target
                ) from exc
        if self.source_path is None:
            self.source_path = target
        self.dirty = False
        return target

    def _touch(self) -> None:
        self.dirty = True
        self.version += 1


__all__ = ["TextBuffer", "ENCODING"]
