from __future__ import annotations

from outliner_engine.buffer import TextBuffer
from outliner_engine.motion import (
    CharClass,
    Direction,
    char_class,
    dir_index_of,
    index_of,
    is_ascii_whitespace,
    is_word_char,
    last_index_of,
)


def test_char_classes() -> None:
    assert char_class("a") is CharClass.REGULAR
    assert char_class("7") is CharClass.REGULAR
    assert char_class("_") is CharClass.REGULAR
    assert char_class("+") is CharClass.PUNCTUATION
    assert char_class(" ") is CharClass.WHITESPACE
    assert char_class("\n") is CharClass.WHITESPACE
    assert char_class("\u00a0") is CharClass.WHITESPACE


def test_bigword_folds_punctuation_into_regular() -> None:
    assert char_class("#", bigword=True) is CharClass.REGULAR
    assert char_class(" ", bigword=True) is CharClass.WHITESPACE


def test_ascii_whitespace_excludes_vertical_tab() -> None:
    assert is_ascii_whitespace("\t")
    assert is_ascii_whitespace("\x0c")
    assert not is_ascii_whitespace("\x0b")
    assert not is_ascii_whitespace("\u00a0")


def test_word_chars() -> None:
    assert is_word_char("é")
    assert is_word_char("_")
    assert not is_word_char("-")


def test_index_of_searches_from_start_inclusive() -> None:
    buffer = TextBuffer("a-b-c")

    assert index_of(buffer, lambda ch: ch == "-", 0) == 1
    assert index_of(buffer, lambda ch: ch == "-", 1) == 1
    assert index_of(buffer, lambda ch: ch == "-", 2) == 3
    assert index_of(buffer, lambda ch: ch == "z", 0) is None
    assert index_of(buffer, lambda ch: ch == "a", 99) is None


def test_last_index_of_searches_before_start() -> None:
    buffer = TextBuffer("a-b-c")

    assert last_index_of(buffer, lambda ch: ch == "-", 5) == 3
    assert last_index_of(buffer, lambda ch: ch == "-", 3) == 1
    assert last_index_of(buffer, lambda ch: ch == "-", 1) is None
    assert last_index_of(buffer, lambda ch: ch == "c", 99) == 4


def test_dir_index_of_dispatches_on_direction() -> None:
    buffer = TextBuffer("a-b-c")

    assert dir_index_of(buffer, lambda ch: ch == "-", 2, Direction.FORWARD) == 3
    assert dir_index_of(buffer, lambda ch: ch == "-", 2, Direction.BACKWARD) == 1
    assert Direction.FORWARD.reverse() is Direction.BACKWARD
