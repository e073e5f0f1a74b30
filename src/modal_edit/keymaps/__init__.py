"""Key bindings per mode and the resolver that matches typed keys to them.

Built-in bindings live in ``modal_edit.keymaps.defaults``; they depend on
the action modules, so they are not re-exported here.
"""

from .models import Action, Binding, KeySequence, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "Action",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
