"""Editor modes and the key dispatch built on them."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandLineMode, CommandMode, SearchMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "CommandLineMode",
    "CommandMode",
    "SearchMode",
]
