"""Editing verbs bound to keys by the default keymaps."""

from .core import enter_command_mode, enter_insert_mode, exit_to_normal_mode
from .command import cancel_command_line, erase_command_char, submit_command_line
from .edit import delete_backward, insert_newline, insert_tab, type_text
from .motion import move_down, move_left, move_right, move_up
from .search import insert_at_match, next_match

__all__ = [
    "enter_command_mode",
    "enter_insert_mode",
    "exit_to_normal_mode",
    "cancel_command_line",
    "erase_command_char",
    "submit_command_line",
    "delete_backward",
    "insert_newline",
    "insert_tab",
    "type_text",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "insert_at_match",
    "next_match",
]
