"""Cursor, viewport, and the editor that composes them with buffers."""

from .cursor import Cursor
from .editor import Editor
from .viewport import ScreenPosition, Size, Viewport

__all__ = ["Cursor", "Editor", "ScreenPosition", "Size", "Viewport"]
