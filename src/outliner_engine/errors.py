"""Exception types raised across the engine."""

from __future__ import annotations

from typing import Optional


class CommandParseError(ValueError):
    """Base class for grammar failures; ``text`` is the input that failed."""

    reason = "command parse error"

    def __init__(self, text: str, detail: Optional[str] = None) -> None:
        message = f"{self.reason}: {text!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.text = text
        self.detail = detail


class IncompleteCommand(CommandParseError):
    """More keys are needed before the input means anything."""

    reason = "incomplete command"


class InvalidCommand(CommandParseError):
    """The command was recognized but its arguments are malformed."""

    reason = "invalid command"


class UnknownCommand(CommandParseError):
    """The leading key or a sub-selector is not part of the grammar."""

    reason = "unknown command"


class UnsupportedMotionError(NotImplementedError):
    """Raised when a parsed motion has no resolver (paragraphs, search)."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"motion {kind!r} is not supported")
        self.kind = kind


class BufferValidationError(RuntimeError):
    """Raised when an edit or lookup addresses characters outside the buffer."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class OutlineError(KeyError):
    """Raised for node ids the outline tree does not know about."""

    def __init__(self, node_id: int, message: str = "unknown node") -> None:
        super().__init__(f"{message}: {node_id}")
        self.node_id = node_id


__all__ = [
    "BufferValidationError",
    "CommandParseError",
    "IncompleteCommand",
    "InvalidCommand",
    "OutlineError",
    "UnknownCommand",
    "UnsupportedMotionError",
]
