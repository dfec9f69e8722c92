"""Execute recognized commands against a text buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from outliner_engine.buffer import SnipStack, TextBuffer
from outliner_engine.motion import Motion, MotionSession, TextRange
from outliner_engine.runtime import telemetry

from .types import Change, Command, Copy, Delete, Insert, Move, Put, ReplaceChar


@dataclass(frozen=True, slots=True)
class ApplyResult:
    cursor: int
    enter_insert: bool = False
    removed: Optional[str] = None


class CommandApplier:
    """Applies one command as at most one buffer edit.

    Ranges are sliced as ``buffer[low:high]`` of the ordered motion range;
    inclusive motions already report the boundary in ``end``.
    """

    def __init__(
        self,
        session: Optional[MotionSession] = None,
        snips: Optional[SnipStack] = None,
        *,
        logger_name: Optional[str] = None,
    ) -> None:
        self.session = session if session is not None else MotionSession()
        self.snips = snips if snips is not None else SnipStack()
        self._logger_name = logger_name

    def apply(self, buffer: TextBuffer, cursor: int, command: Command) -> ApplyResult:
        with telemetry.span(
            "commands::apply",
            logger_name=self._logger_name,
            component="commands",
            metadata={
                "command": type(command).__name__,
                "cursor": cursor,
                "buffer": buffer.name,
            },
        ) as handle:
            result = self._dispatch(buffer, cursor, command)
            handle.add_metadata("cursor_after", result.cursor)
        return result

    def _dispatch(
        self, buffer: TextBuffer, cursor: int, command: Command
    ) -> ApplyResult:
        if isinstance(command, Move):
            end = self._range(buffer, cursor, command.motion).end
            return ApplyResult(cursor=min(max(end, 0), len(buffer)))
        if isinstance(command, ReplaceChar):
            return self._replace_char(buffer, cursor, command.char)
        if isinstance(command, (Delete, Change)):
            low, removed = self._cut(buffer, cursor, command.motion)
            return ApplyResult(
                cursor=low,
                enter_insert=isinstance(command, Change),
                removed=removed,
            )
        if isinstance(command, Copy):
            low, high = self._range(buffer, cursor, command.motion).ordered()
            if high > low:
                self.snips.push(buffer.slice(low, high))
            return ApplyResult(cursor=cursor)
        if isinstance(command, Put):
            snip = self.snips.take(consume=command.consume)
            if snip:
                buffer.insert(cursor, snip)
            return ApplyResult(cursor=cursor)
        if isinstance(command, Insert):
            return self._insert(buffer, cursor, command)
        raise TypeError(f"unknown command {command!r}")

    def _range(self, buffer: TextBuffer, cursor: int, motion: Motion) -> TextRange:
        return motion.range(buffer, cursor, 1, self.session)

    def _cut(self, buffer: TextBuffer, cursor: int, motion: Motion) -> tuple[int, str]:
        low, high = self._range(buffer, cursor, motion).ordered()
        high = min(high, len(buffer))
        if high <= low:
            return low, ""
        delta = buffer.remove(low, high)
        self.snips.push(delta.removed)
        return low, delta.removed

    def _replace_char(self, buffer: TextBuffer, cursor: int, char: str) -> ApplyResult:
        if cursor >= len(buffer):
            return ApplyResult(cursor=cursor)
        delta = buffer.replace(cursor, cursor + 1, char, label="replace_char")
        return ApplyResult(cursor=cursor, removed=delta.removed)

    def _insert(self, buffer: TextBuffer, cursor: int, command: Insert) -> ApplyResult:
        if command.new_line:
            line_index = buffer.char_to_line(cursor)
            line_end = buffer.line_to_char(line_index) + len(
                buffer.line_content(line_index)
            )
            buffer.insert(line_end, "\n")
            return ApplyResult(cursor=line_end + 1, enter_insert=True)
        if command.at is not None:
            end = self._range(buffer, cursor, command.at).end
            cursor = min(max(end, 0), len(buffer))
        return ApplyResult(cursor=cursor, enter_insert=True)


__all__ = ["ApplyResult", "CommandApplier"]
