"""Turn a ``Motion`` into a concrete ``TextRange`` over a text buffer.

Scalar motions are applied ``count * multiplier`` times, each repetition
starting from the previous target, so ``3w`` is ``w`` three times rather than
one scaled jump. Text objects and passthrough ranges are resolved in one go.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional, Type

from outliner_engine.buffer import ensure_index
from outliner_engine.errors import UnsupportedMotionError
from outliner_engine.runtime import telemetry

from .classify import CharClass, char_class, is_ascii_whitespace, is_word_char
from .search import dir_index_of, index_of, last_index_of
from .text_objects import text_object_range
from .types import (
    An,
    BigWord,
    Char,
    Direction,
    EndOfBigWord,
    EndOfLine,
    EndOfWord,
    Inner,
    Line,
    Motion,
    NextChar,
    NextSearchMatch,
    Paragraph,
    Passthrough,
    RepeatNextChar,
    StartOfLine,
    TextRange,
    WholeLine,
    Word,
)

if TYPE_CHECKING:
    from outliner_engine.buffer import TextBuffer


@dataclass(frozen=True, slots=True)
class CharQuery:
    """The last ``f``/``F``/``t``/``T`` request, replayed by ``;`` and ``,``."""

    char: str
    place_before: bool
    direction: Direction


@dataclass(slots=True)
class MotionSession:
    """Per-editing-session motion state, owned by the host."""

    last_char_query: Optional[CharQuery] = None
    report_missing_query: bool = True

    def remember(self, query: CharQuery) -> None:
        self.last_char_query = query


def resolve_range(
    motion: Motion,
    buffer: "TextBuffer",
    cursor_index: int,
    multiplier: int = 1,
    session: Optional[MotionSession] = None,
) -> TextRange:
    ensure_index(buffer, cursor_index)
    if session is None:
        session = MotionSession()
    with telemetry.span(
        "motion::resolve",
        component="motion",
        metadata={
            "kind": type(motion.kind).__name__,
            "count": motion.count * multiplier,
            "cursor": cursor_index,
        },
    ) as handle:
        result = _resolve(motion, buffer, cursor_index, multiplier, session)
        handle.add_metadata("end", result.end)
    return result


def _resolve(
    motion: Motion,
    buffer: "TextBuffer",
    cursor_index: int,
    multiplier: int,
    session: MotionSession,
) -> TextRange:
    kind = motion.kind
    total = motion.count * multiplier

    if isinstance(kind, Passthrough):
        return TextRange(kind.start, kind.end)
    if isinstance(kind, An):
        return text_object_range(kind.obj, buffer, cursor_index, total, include=True)
    if isinstance(kind, Inner):
        return text_object_range(kind.obj, buffer, cursor_index, total, include=False)
    if isinstance(kind, RepeatNextChar):
        return _repeat_next_char(motion, kind, buffer, cursor_index, multiplier, session)
    if isinstance(kind, WholeLine):
        return _whole_line(buffer, cursor_index, total)
    if isinstance(kind, (Paragraph, NextSearchMatch)):
        raise UnsupportedMotionError(kind)

    step = _STEPS[type(kind)]

    end = cursor_index
    for _ in range(total):
        landed = step(buffer, kind, end, session)
        # steps depend only on the position, so a fixed point is final
        if landed == end:
            break
        end = landed
    return TextRange(cursor_index, end)


# ─────────────────────────────────────────────────────────────────
# Character and line motions (h, l, j, k, ^, $, _)
# ─────────────────────────────────────────────────────────────────


def _char_step(buffer: "TextBuffer", kind: Char, pos: int, session: MotionSession) -> int:
    if kind.direction is Direction.FORWARD:
        return min(pos + 1, buffer.len_chars())
    return max(pos - 1, 0)


def _line_step(buffer: "TextBuffer", kind: Line, pos: int, session: MotionSession) -> int:
    cur_line = buffer.char_to_line(pos)
    if kind.direction is Direction.FORWARD:
        new_line = min(cur_line + 1, buffer.len_lines() - 1)
    else:
        new_line = max(cur_line - 1, 0)
    column = pos - buffer.line_to_char(cur_line)
    return buffer.line_to_char(new_line) + min(column, len(buffer.line(new_line)))


def _start_of_line_step(
    buffer: "TextBuffer", kind: StartOfLine, pos: int, session: MotionSession
) -> int:
    line_index = buffer.char_to_line(pos)
    content = buffer.line_content(line_index)
    offset = 0
    while offset < len(content) and char_class(content[offset]) is CharClass.WHITESPACE:
        offset += 1
    return buffer.line_to_char(line_index) + offset


def _end_of_line_step(
    buffer: "TextBuffer", kind: EndOfLine, pos: int, session: MotionSession
) -> int:
    line_index = buffer.char_to_line(pos)
    length = len(buffer.line(line_index))
    start = buffer.line_to_char(line_index)
    return start + length - 1 if length else start


def _whole_line(buffer: "TextBuffer", cursor_index: int, total: int) -> TextRange:
    start = end = cursor_index
    for repetition in range(total):
        line_index = buffer.char_to_line(end)
        line_start = buffer.line_to_char(line_index)
        if repetition == 0:
            start = line_start
        end = line_start + len(buffer.line(line_index))
        if end >= len(buffer):
            break
    return TextRange(start, end)


# ─────────────────────────────────────────────────────────────────
# Word motions (w, b, W, B)
# ─────────────────────────────────────────────────────────────────


def _word_step(buffer: "TextBuffer", kind: Word, pos: int, session: MotionSession) -> int:
    if kind.direction is Direction.FORWARD:
        return _word_forward(buffer, pos)
    return _word_backward(buffer, pos)


def _word_forward(buffer: "TextBuffer", pos: int) -> int:
    under = buffer.char_at(pos)
    if under is not None and is_word_char(under):
        found = index_of(buffer, lambda ch: not is_word_char(ch), pos)
    else:
        # a run of other non-blank characters
        found = index_of(
            buffer, lambda ch: is_ascii_whitespace(ch) or is_word_char(ch), pos + 1
        )
    if found is None:
        found = pos

    landing = buffer.char_at(found)
    if landing is not None and is_ascii_whitespace(landing):
        after_blank = index_of(buffer, lambda ch: not is_ascii_whitespace(ch), found)
        return found if after_blank is None else after_blank
    return found


def _word_backward(buffer: "TextBuffer", pos: int) -> int:
    text = buffer.text
    n = len(text)
    if pos == 0 or n == 0:
        return 0

    # ``index`` is the next character to inspect, ``end`` the landing spot.
    # They drift apart by one when the cursor sits past the last character.
    index = min(pos + 1, n) - 2
    end = pos - 1
    while index >= 0 and char_class(text[index]) is CharClass.WHITESPACE:
        index -= 1
        end -= 1
    if index < 0:
        return 0

    run_class = char_class(text[index])
    while end > 0 and index >= 0:
        current = char_class(text[index])
        index -= 1
        if current is not run_class:
            break
        end -= 1
    if end > 0:
        end += 1
    return end


def _big_word_step(
    buffer: "TextBuffer", kind: BigWord, pos: int, session: MotionSession
) -> int:
    blank = dir_index_of(buffer, is_ascii_whitespace, pos, kind.direction)
    if blank is None:
        blank = pos
    if kind.direction is Direction.FORWARD:
        after_blank = index_of(buffer, lambda ch: not is_ascii_whitespace(ch), blank)
        return blank if after_blank is None else after_blank

    previous = last_index_of(buffer, is_ascii_whitespace, blank)
    return 0 if previous is None else previous + 1


# ─────────────────────────────────────────────────────────────────
# End-of-word motions (e, E, ge, gE)
# ─────────────────────────────────────────────────────────────────


def _end_of_word_step(
    buffer: "TextBuffer",
    kind: EndOfWord | EndOfBigWord,
    pos: int,
    session: MotionSession,
) -> int:
    bigword = isinstance(kind, EndOfBigWord)
    if kind.direction is Direction.FORWARD:
        return _end_of_word_forward(buffer, pos, bigword)
    return _end_of_word_backward(buffer, pos, bigword)


def _end_of_word_forward(buffer: "TextBuffer", pos: int, bigword: bool) -> int:
    text = buffer.text
    n = len(text)
    if pos >= n:
        return pos

    def cls(index: int) -> CharClass:
        return char_class(text[index], bigword)

    starting = cls(pos)
    end = pos + 1
    if starting is not CharClass.WHITESPACE and end < n and cls(end) is starting:
        while end < n and cls(end) is starting:
            end += 1
    else:
        while end < n and cls(end) is CharClass.WHITESPACE:
            end += 1
        if end < n:
            run_class = cls(end)
            while end < n and cls(end) is run_class:
                end += 1
    return end - 1


def _end_of_word_backward(buffer: "TextBuffer", pos: int, bigword: bool) -> int:
    text = buffer.text
    n = len(text)
    if pos == 0 or n == 0:
        return 0
    pos = min(pos, n - 1)

    def cls(index: int) -> CharClass:
        return char_class(text[index], bigword)

    starting = cls(pos)
    end = pos - 1
    if starting is not CharClass.WHITESPACE:
        while end >= 0 and cls(end) is starting:
            end -= 1
    while end >= 0 and cls(end) is CharClass.WHITESPACE:
        end -= 1
    return max(end, 0)


# ─────────────────────────────────────────────────────────────────
# Find-character motions (f, F, t, T, ;, ,)
# ─────────────────────────────────────────────────────────────────


def _next_char_step(
    buffer: "TextBuffer", kind: NextChar, pos: int, session: MotionSession
) -> int:
    session.remember(CharQuery(kind.char, kind.place_before, kind.direction))
    target = kind.char
    if kind.direction is Direction.FORWARD:
        found = index_of(buffer, lambda ch: ch == target, pos + 1)
    else:
        found = last_index_of(buffer, lambda ch: ch == target, pos)
    if found is None:
        return pos
    if kind.place_before:
        return found - 1 if kind.direction is Direction.FORWARD else found + 1
    return found


def _repeat_next_char(
    motion: Motion,
    kind: RepeatNextChar,
    buffer: "TextBuffer",
    cursor_index: int,
    multiplier: int,
    session: MotionSession,
) -> TextRange:
    query = session.last_char_query
    if query is None:
        if session.report_missing_query:
            telemetry.record_event(
                "motion.repeat_without_query",
                level="warning",
                data={"cursor": cursor_index, "opposite": kind.opposite},
            )
        return TextRange(cursor_index, cursor_index)

    direction = query.direction.reverse() if kind.opposite else query.direction
    replay = Motion(NextChar(query.char, query.place_before, direction), motion.count)
    return _resolve(replay, buffer, cursor_index, multiplier, session)


_STEPS: Dict[Type[object], Callable[..., int]] = {
    Char: _char_step,
    Line: _line_step,
    StartOfLine: _start_of_line_step,
    EndOfLine: _end_of_line_step,
    Word: _word_step,
    BigWord: _big_word_step,
    EndOfWord: _end_of_word_step,
    EndOfBigWord: _end_of_word_step,
    NextChar: _next_char_step,
}


__all__ = ["CharQuery", "MotionSession", "resolve_range"]
