"""Built-in keymaps that seed each mode with its editing keys."""

from __future__ import annotations

from typing import Iterable, Sequence

from moded.actions import command as command_actions
from moded.actions import core as core_actions
from moded.actions import edit as edit_actions
from moded.actions import motion as motion_actions
from moded.actions import search as search_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

_ACTION_TABLE = (
    ("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ("core.exit_to_normal", core_actions.exit_to_normal_mode, "Return to normal mode"),
    ("core.enter_command", core_actions.enter_command_mode, "Enter command-line mode"),
    ("motion.up", motion_actions.move_up, "Cursor up"),
    ("motion.down", motion_actions.move_down, "Cursor down"),
    ("motion.left", motion_actions.move_left, "Cursor left"),
    ("motion.right", motion_actions.move_right, "Cursor right"),
    ("edit.newline", edit_actions.insert_newline, "Split the line at the cursor"),
    ("edit.backspace", edit_actions.delete_backward, "Delete the grapheme before the cursor"),
    ("edit.tab", edit_actions.insert_tab, "Insert a tab"),
    ("command.submit_line", command_actions.submit_command_line, "Evaluate the command line"),
    ("command.cancel_line", command_actions.cancel_command_line, "Discard the command line"),
    ("command.erase_char", command_actions.erase_command_char, "Erase the last command character"),
    ("search.next_match", search_actions.next_match, "Jump to the next search match"),
    ("search.insert_at_match", search_actions.insert_at_match, "Insert at the current match"),
)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = tuple(
    ActionRef(id=action_id, handler=handler, description=description)
    for action_id, handler, description in _ACTION_TABLE
)

_ARROWS = (
    ("UP", "motion.up"),
    ("DOWN", "motion.down"),
    ("LEFT", "motion.left"),
    ("RIGHT", "motion.right"),
)

_VI_MOTIONS = (
    ("k", "motion.up"),
    ("j", "motion.down"),
    ("h", "motion.left"),
    ("l", "motion.right"),
)


def _bind(mode: str, key: str, action_id: str, description: str = "") -> Binding:
    return Binding(
        id=f"{mode}.{action_id.split('.', 1)[-1]}.{key.lower()}",
        mode=mode,
        sequence=KeySequence.from_strings(key),
        action_id=action_id,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", "i", "core.enter_insert", "Enter insert mode"),
    _bind("normal", ":", "core.enter_command", "Enter command-line mode"),
    *(_bind("normal", key, action) for key, action in _ARROWS + _VI_MOTIONS),
    _bind("insert", "ESC", "core.exit_to_normal", "Leave insert mode"),
    _bind("insert", "ENTER", "edit.newline", "Split the line"),
    _bind("insert", "BACKSPACE", "edit.backspace", "Delete backwards"),
    _bind("insert", "TAB", "edit.tab", "Insert a tab"),
    *(_bind("insert", key, action) for key, action in _ARROWS),
    _bind("command", "ESC", "command.cancel_line", "Cancel command line"),
    _bind("command", "ENTER", "command.submit_line", "Submit the command line"),
    _bind("command", "BACKSPACE", "command.erase_char", "Erase one character"),
    _bind("search", "ESC", "core.exit_to_normal", "Leave search mode"),
    _bind("search", "ENTER", "search.next_match", "Next match"),
    _bind("search", "i", "search.insert_at_match", "Insert at match"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
