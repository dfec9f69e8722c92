"""Edit-mode command grammar, incremental recognizer and applier."""

from outliner_engine.errors import (
    CommandParseError,
    IncompleteCommand,
    InvalidCommand,
    UnknownCommand,
)

from .applier import ApplyResult, CommandApplier
from .grammar import parse_command, parse_motion, split_count
from .recognizer import CommandRecognizer, Recognition, RecognitionStatus
from .types import (
    Change,
    Command,
    Copy,
    Delete,
    Insert,
    Move,
    OperatorCommand,
    Put,
    ReplaceChar,
)

parse = parse_command

__all__ = [
    "ApplyResult",
    "Change",
    "Command",
    "CommandApplier",
    "CommandParseError",
    "CommandRecognizer",
    "Copy",
    "Delete",
    "IncompleteCommand",
    "Insert",
    "InvalidCommand",
    "Move",
    "OperatorCommand",
    "Put",
    "Recognition",
    "RecognitionStatus",
    "ReplaceChar",
    "UnknownCommand",
    "parse",
    "parse_command",
    "parse_motion",
    "split_count",
]
