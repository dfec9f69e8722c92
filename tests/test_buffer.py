from __future__ import annotations

import pytest

from outliner_engine.buffer import BufferValidationError, SnipStack, TextBuffer


def make_buffer() -> TextBuffer:
    return TextBuffer("abc\ndef\nghi", name="test")


def test_line_bookkeeping() -> None:
    buffer = make_buffer()

    assert buffer.len_lines() == 3
    assert buffer.line(0) == "abc\n"
    assert buffer.line(2) == "ghi"
    assert buffer.line_content(1) == "def"
    assert buffer.line_to_char(1) == 4
    assert buffer.line_to_char(3) == len(buffer)
    assert buffer.char_to_line(3) == 0
    assert buffer.char_to_line(4) == 1
    assert buffer.char_to_line(len(buffer)) == 2


def test_trailing_newline_opens_an_empty_last_line() -> None:
    buffer = TextBuffer("abc\n")

    assert buffer.len_lines() == 2
    assert buffer.line(1) == ""
    assert buffer.char_to_line(4) == 1


def test_char_iteration() -> None:
    buffer = make_buffer()

    assert "".join(buffer.chars_at(8)) == "ghi"
    assert "".join(buffer.chars_before(3)) == "cba"
    assert buffer.char_at(len(buffer)) is None


def test_replace_returns_delta_and_bumps_version() -> None:
    buffer = make_buffer()

    delta = buffer.replace(4, 7, "DEF", label="upper")

    assert buffer.text == "abc\nDEF\nghi"
    assert delta.removed == "def"
    assert delta.inserted == "DEF"
    assert delta.version == buffer.version == 1
    assert delta.label == "upper"


def test_insert_and_remove_keep_lines_in_sync() -> None:
    buffer = make_buffer()

    buffer.insert(3, "\nxyz")
    assert buffer.len_lines() == 4
    assert buffer.line_content(1) == "xyz"

    buffer.remove(0, 4)
    assert buffer.text == "xyz\ndef\nghi"
    assert buffer.version == 2


def test_out_of_range_edits_raise() -> None:
    buffer = make_buffer()

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.remove(2, 99)
    assert excinfo.value.index == 99

    with pytest.raises(BufferValidationError):
        buffer.slice(5, 2)
    with pytest.raises(BufferValidationError):
        buffer.char_to_line(-1)


def test_snip_stack_take() -> None:
    snips = SnipStack(["one"])
    snips.push("two")

    assert snips.take(consume=False) == "two"
    assert len(snips) == 2
    assert snips.take(consume=True) == "two"
    assert snips.snapshot() == ("one",)

    snips.clear()
    assert snips.pop() is None
    assert snips.peek() is None
