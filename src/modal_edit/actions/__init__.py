"""Editing verbs that keymap bindings point at."""

from .command import backspace_command_line, submit_command_line
from .core import enter_command_mode, enter_insert_mode, exit_to_normal_mode
from .edit import delete_backward, delete_under_cursor, insert_newline
from .motion import (
    buffer_end,
    buffer_start,
    line_end,
    line_start,
    move_down,
    move_left,
    move_right,
    move_up,
)

__all__ = [
    "enter_insert_mode",
    "enter_command_mode",
    "exit_to_normal_mode",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "line_start",
    "line_end",
    "buffer_start",
    "buffer_end",
    "insert_newline",
    "delete_backward",
    "delete_under_cursor",
    "submit_command_line",
    "backspace_command_line",
]
