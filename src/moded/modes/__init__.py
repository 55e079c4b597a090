"""Editor modes and the manager that switches between them."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandMode
from .search_mode import SearchMode
from .command_pipeline import CommandPipeline, CommandStep, SetCommand

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "CommandMode",
    "SearchMode",
    "CommandPipeline",
    "CommandStep",
    "SetCommand",
]
