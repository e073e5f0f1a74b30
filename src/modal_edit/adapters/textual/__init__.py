"""Textual host for the editor core.

``controller`` has no Textual dependency; ``app`` imports Textual and is
loaded only when the editor is launched.
"""

from .controller import RenderFrame, TextualEditorAdapter, TextualUIHooks

__all__ = ["RenderFrame", "TextualEditorAdapter", "TextualUIHooks"]
