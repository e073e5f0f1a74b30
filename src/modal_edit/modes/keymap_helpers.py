"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from modal_edit.keymaps import KeymapResolver

if TYPE_CHECKING:  # pragma: no cover
    from .base_mode import KeyInput, ModeContext

# Modifiers that turn a character into a control chord rather than text.
_CHORD_MODIFIERS = frozenset({"CTRL", "ALT", "META"})


def key_to_token(key: "KeyInput") -> str:
    if key.modifiers:
        modifier = "+".join(sorted(dict.fromkeys(m.lower() for m in key.modifiers)))
        return f"{modifier}+{key.key}"
    return key.key


def printable_text(key: "KeyInput") -> Optional[str]:
    """Text the key types, or ``None`` for control keys and chords."""

    modifiers = {m.upper() for m in key.modifiers}
    if not key.text or modifiers & _CHORD_MODIFIERS:
        return None
    if all(ch.isprintable() or ch == "\t" for ch in key.text):
        return key.text
    return None


def require_keymap_resolver(context: "ModeContext") -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


__all__ = ["key_to_token", "printable_text", "require_keymap_resolver"]
