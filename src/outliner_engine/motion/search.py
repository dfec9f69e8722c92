"""Directional index-of searches over a text buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

from .types import Direction

if TYPE_CHECKING:
    from outliner_engine.buffer import TextBuffer

CharPredicate = Callable[[str], bool]


def index_of(buffer: "TextBuffer", pred: CharPredicate, start: int) -> Optional[int]:
    """First index ``>= start`` whose character satisfies ``pred``."""

    for offset, ch in enumerate(buffer.chars_at(start)):
        if pred(ch):
            return max(start, 0) + offset
    return None


def last_index_of(
    buffer: "TextBuffer", pred: CharPredicate, start: int
) -> Optional[int]:
    """Last index ``< start`` whose character satisfies ``pred``."""

    start = min(start, buffer.len_chars())
    for offset, ch in enumerate(buffer.chars_before(start)):
        if pred(ch):
            return start - offset - 1
    return None


def dir_index_of(
    buffer: "TextBuffer", pred: CharPredicate, start: int, direction: Direction
) -> Optional[int]:
    if direction is Direction.FORWARD:
        return index_of(buffer, pred, start)
    return last_index_of(buffer, pred, start)


__all__ = ["CharPredicate", "dir_index_of", "index_of", "last_index_of"]
