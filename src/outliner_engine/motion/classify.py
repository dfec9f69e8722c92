"""Character classes used by word, WORD and end-of-word motions."""

from __future__ import annotations

from enum import Enum

# WHATWG "ASCII whitespace"; "\x0b" is not a member.
ASCII_WHITESPACE = frozenset(" \t\n\x0c\r")


class CharClass(Enum):
    WHITESPACE = "whitespace"
    PUNCTUATION = "punctuation"
    REGULAR = "regular"


def is_ascii_whitespace(ch: str) -> bool:
    return ch in ASCII_WHITESPACE


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def char_class(ch: str, bigword: bool = False) -> CharClass:
    """Classify ``ch``; with ``bigword`` punctuation counts as regular."""

    if ch.isspace() or ch in ASCII_WHITESPACE:
        return CharClass.WHITESPACE
    if not is_word_char(ch):
        return CharClass.REGULAR if bigword else CharClass.PUNCTUATION
    return CharClass.REGULAR


__all__ = [
    "ASCII_WHITESPACE",
    "CharClass",
    "char_class",
    "is_ascii_whitespace",
    "is_word_char",
]
