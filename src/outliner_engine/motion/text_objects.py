"""Text object ranges: the "iw" in "diw", the "a(" in "ca(".

Both resolvers return ranges whose ``end`` is the last selected character,
matching the other inclusive motions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from outliner_engine.errors import UnsupportedMotionError

from .classify import CharClass, char_class
from .types import TextObject, TextObjectKind, TextRange

if TYPE_CHECKING:
    from outliner_engine.buffer import TextBuffer


def text_object_range(
    obj: TextObject,
    buffer: "TextBuffer",
    cursor_index: int,
    count: int,
    include: bool,
) -> TextRange:
    """Resolve ``obj`` around the cursor; ``include`` selects "a" over "inner"."""

    if obj.kind in (TextObjectKind.WORD, TextObjectKind.BIG_WORD):
        return word_object_range(
            buffer,
            cursor_index,
            count,
            include,
            bigword=obj.kind is TextObjectKind.BIG_WORD,
        )
    if obj.kind is TextObjectKind.BLOCK:
        return block_object_range(buffer, cursor_index, obj, include)
    raise UnsupportedMotionError(obj)


def word_object_range(
    buffer: "TextBuffer",
    cursor_index: int,
    count: int,
    include: bool,
    *,
    bigword: bool = False,
) -> TextRange:
    text = buffer.text
    n = len(text)
    if not 0 <= cursor_index < n:
        return TextRange(cursor_index, cursor_index)

    def cls(index: int) -> CharClass:
        return char_class(text[index], bigword)

    starting = cls(cursor_index)
    start = cursor_index
    while start > 0 and cls(start - 1) is starting:
        start -= 1

    if not include and starting is CharClass.WHITESPACE:
        return TextRange(start, cursor_index)

    end = start + 1
    for unit in range(count):
        if end >= n:
            break
        while end < n and cls(end) is starting:
            end += 1
        if unit > 0 or include:
            if starting is not CharClass.WHITESPACE:
                gap = CharClass.WHITESPACE
            elif end < n:
                gap = cls(end)
            else:
                continue
            while end < n and cls(end) is gap:
                end += 1
    return TextRange(start, end - 1)


def block_object_range(
    buffer: "TextBuffer", cursor_index: int, obj: TextObject, include: bool
) -> TextRange:
    text = buffer.text
    opener = obj.delimiter
    closer = obj.closer
    noop = TextRange(cursor_index, cursor_index)

    # Nearest opener at or left of the cursor; closers in between are ignored.
    start = text.rfind(opener, 0, min(cursor_index + 1, len(text)))
    if start < 0:
        return noop

    depth = 1
    end = None
    for index in range(start + 1, len(text)):
        ch = text[index]
        if ch == closer:
            depth -= 1
            if depth == 0:
                end = index
                break
        elif ch == opener:
            depth += 1
    if end is None:
        return noop

    if include:
        return TextRange(start, end)
    # An empty block ("()") collapses to the position just inside the opener.
    return TextRange(start + 1, max(end - 1, start + 1))


__all__ = ["block_object_range", "text_object_range", "word_object_range"]
