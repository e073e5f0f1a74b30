"""Mode states, handlers, and input event types.

The dispatcher lives in ``modal_edit.modes.state_machine``.
"""

from .base_mode import (
    InputEvent,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    ResizeEvent,
)
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .state import (
    INSERT,
    NORMAL,
    CommandLineState,
    InsertState,
    ModeState,
    NormalState,
)

__all__ = [
    "InputEvent",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "ResizeEvent",
    "NormalMode",
    "InsertMode",
    "CommandMode",
    "ModeState",
    "NormalState",
    "CommandLineState",
    "InsertState",
    "NORMAL",
    "INSERT",
]
