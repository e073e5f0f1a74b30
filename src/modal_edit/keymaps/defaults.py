"""Built-in actions and key bindings for every mode."""

from __future__ import annotations

from typing import Iterable, Sequence

from modal_edit.actions import command as command_actions
from modal_edit.actions import core as core_actions
from modal_edit.actions import edit as edit_actions
from modal_edit.actions import motion as motion_actions

from .models import Action, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[Action, ...] = (
    Action(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    Action(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Start typing a command line",
    ),
    Action(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    Action(id="motion.left", handler=motion_actions.move_left),
    Action(id="motion.right", handler=motion_actions.move_right),
    Action(id="motion.up", handler=motion_actions.move_up),
    Action(id="motion.down", handler=motion_actions.move_down),
    Action(id="motion.line_start", handler=motion_actions.line_start),
    Action(id="motion.line_end", handler=motion_actions.line_end),
    Action(id="motion.buffer_start", handler=motion_actions.buffer_start),
    Action(id="motion.buffer_end", handler=motion_actions.buffer_end),
    Action(
        id="edit.insert_newline",
        handler=edit_actions.insert_newline,
        description="Break the line at the cursor",
    ),
    Action(
        id="edit.delete_backward",
        handler=edit_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    Action(
        id="edit.delete_under_cursor",
        handler=edit_actions.delete_under_cursor,
        description="Delete the character under the cursor",
    ),
    Action(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Run the command line",
    ),
    Action(
        id="command.backspace",
        handler=command_actions.backspace_command_line,
        description="Delete the last command-line character",
    ),
)


def _bind(
    mode: str, keys: Sequence[str], action_id: str, description: str = ""
) -> Binding:
    return Binding(
        id=f"{mode}.{'_'.join(keys)}",
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", (":",), "core.enter_command", "Start a command line"),
    _bind("normal", ("i",), "core.enter_insert", "Enter insert mode"),
    _bind("normal", ("h",), "motion.left"),
    _bind("normal", ("l",), "motion.right"),
    _bind("normal", ("k",), "motion.up"),
    _bind("normal", ("j",), "motion.down"),
    _bind("normal", ("LEFT",), "motion.left"),
    _bind("normal", ("RIGHT",), "motion.right"),
    _bind("normal", ("UP",), "motion.up"),
    _bind("normal", ("DOWN",), "motion.down"),
    _bind("normal", ("0",), "motion.line_start"),
    _bind("normal", ("$",), "motion.line_end"),
    _bind("normal", ("g", "g"), "motion.buffer_start"),
    _bind("normal", ("G",), "motion.buffer_end"),
    _bind("normal", ("x",), "edit.delete_under_cursor"),
    _bind("insert", ("ESC",), "core.exit_to_normal", "Leave insert mode"),
    _bind("insert", ("ENTER",), "edit.insert_newline"),
    _bind("insert", ("BACKSPACE",), "edit.delete_backward"),
    _bind("command", ("ESC",), "core.exit_to_normal", "Cancel the command line"),
    _bind("command", ("ENTER",), "command.submit_line", "Submit the command line"),
    _bind("command", ("BACKSPACE",), "command.backspace"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and bindings, then any extras."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.add_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.bind(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.bind(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
