"""Text storage: rope, buffer, and load/save errors."""

from .errors import (
    BufferLoadError,
    BufferNotFoundError,
    BufferPermissionError,
    BufferSaveError,
)
from .rope import Rope
from .text_buffer import TextBuffer

__all__ = [
    "Rope",
    "TextBuffer",
    "BufferLoadError",
    "BufferNotFoundError",
    "BufferPermissionError",
    "BufferSaveError",
]
