"""Editing core of a modal terminal text editor."""

__all__ = [
    "adapters",
    "buffer",
    "actions",
    "commands",
    "editor",
    "modes",
    "keymaps",
    "runtime",
    "config",
]

__version__ = "0.1.0"
