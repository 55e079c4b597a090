"""Mode transitions shared across modes."""

from __future__ import annotations

from moded.keymaps import ResolutionMatch
from moded.modes.base_mode import ModeContext, ModeResult
from moded.modes.command_mode import set_command_text


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="exit_to_normal")


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    set_command_text(context, ":")
    return ModeResult(consumed=True, switch_to="command", message="enter_command")


__all__ = ["enter_insert_mode", "exit_to_normal_mode", "enter_command_mode"]
