"""Modal host: editor state, the four modes and their manager."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeKind, ModeResult
from .command_mode import COMMAND_HANDLERS, CommandMode, run_command_line
from .edit_mode import EditMode
from .insert_mode import InsertMode
from .mode_manager import ModeManager, PendingTimeout
from .state import CommandLine, EditorState, EditSession
from .tree_mode import TreeMode

__all__ = [
    "COMMAND_HANDLERS",
    "CommandLine",
    "CommandMode",
    "EditMode",
    "EditSession",
    "EditorState",
    "InsertMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeKind",
    "ModeManager",
    "ModeResult",
    "PendingTimeout",
    "TreeMode",
    "run_command_line",
]
