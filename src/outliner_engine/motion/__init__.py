"""Motion engine: character classes, motion kinds and range resolution."""

from outliner_engine.errors import UnsupportedMotionError

from .classify import CharClass, char_class, is_ascii_whitespace, is_word_char
from .resolver import CharQuery, MotionSession, resolve_range
from .search import dir_index_of, index_of, last_index_of
from .text_objects import text_object_range
from .types import (
    BLOCK_PAIRS,
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
    MotionType,
    NextChar,
    NextSearchMatch,
    Paragraph,
    Passthrough,
    RepeatNextChar,
    StartOfLine,
    TextObject,
    TextObjectKind,
    TextRange,
    WholeLine,
    Word,
)

__all__ = [
    "BLOCK_PAIRS",
    "An",
    "BigWord",
    "Char",
    "CharClass",
    "CharQuery",
    "Direction",
    "EndOfBigWord",
    "EndOfLine",
    "EndOfWord",
    "Inner",
    "Line",
    "Motion",
    "MotionSession",
    "MotionType",
    "NextChar",
    "NextSearchMatch",
    "Paragraph",
    "Passthrough",
    "RepeatNextChar",
    "StartOfLine",
    "TextObject",
    "TextObjectKind",
    "TextRange",
    "UnsupportedMotionError",
    "WholeLine",
    "Word",
    "char_class",
    "dir_index_of",
    "index_of",
    "is_ascii_whitespace",
    "is_word_char",
    "last_index_of",
    "resolve_range",
    "text_object_range",
]
