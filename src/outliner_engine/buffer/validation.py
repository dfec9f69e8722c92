"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from outliner_engine.errors import BufferValidationError

if TYPE_CHECKING:
    from .text import TextBuffer


def ensure_index(buffer: "TextBuffer", index: int) -> int:
    if index < 0 or index > buffer.len_chars():
        raise BufferValidationError("Index out of range", index=index)
    return index


def ensure_span(buffer: "TextBuffer", start: int, end: int) -> Tuple[int, int]:
    ensure_index(buffer, start)
    ensure_index(buffer, end)
    if start > end:
        raise BufferValidationError("Span start after end", index=start)
    return start, end
