"""Incremental command recognition, one key at a time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from outliner_engine.errors import CommandParseError, IncompleteCommand, InvalidCommand
from outliner_engine.runtime import telemetry

from .grammar import parse_command
from .types import Command

RecognitionStatus = Literal["pending", "command", "error"]


@dataclass(frozen=True, slots=True)
class Recognition:
    """Outcome of feeding a key; ``keys`` is the input seen so far."""

    status: RecognitionStatus
    keys: str = ""
    command: Optional[Command] = None
    error: Optional[CommandParseError] = None


class CommandRecognizer:
    """Accumulates keys until they form a command or cannot form one.

    Every key re-parses the whole pending input, so the grammar stays the
    single source of truth for what is complete.
    """

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._pending = ""
        self._logger_name = logger_name

    @property
    def pending(self) -> str:
        return self._pending

    @property
    def idle(self) -> bool:
        return not self._pending

    def feed(self, key: str) -> Recognition:
        keys = self._pending + key
        with telemetry.span(
            "grammar::parse",
            logger_name=self._logger_name,
            component="grammar",
            metadata={"keys": keys},
        ) as handle:
            try:
                command = parse_command(keys)
            except IncompleteCommand:
                self._pending = keys
                handle.add_metadata("status", "pending")
                return Recognition("pending", keys=keys)
            except CommandParseError as exc:
                self._pending = ""
                handle.add_metadata("status", "error")
                return Recognition("error", keys=keys, error=exc)

            self._pending = ""
            handle.add_metadata("status", "command")
            handle.add_metadata("command", type(command).__name__)
        return Recognition("command", keys=keys, command=command)

    def reset(self) -> None:
        self._pending = ""

    def flush(self) -> Optional[Recognition]:
        """End of input: a half-typed command becomes an ``InvalidCommand``."""

        if not self._pending:
            return None
        keys = self._pending
        self._pending = ""
        error = InvalidCommand(keys, "input ended before the command was complete")
        telemetry.record_event(
            "grammar.flush",
            level="debug",
            data={"keys": keys},
            logger_name=self._logger_name,
        )
        return Recognition("error", keys=keys, error=error)


__all__ = ["CommandRecognizer", "Recognition", "RecognitionStatus"]
