"""Character-indexed text buffer edited by the command layer.

Motions only read the buffer; the command applier performs exactly one
splice per command through ``TextBuffer.replace``.
"""

from __future__ import annotations

from bisect import bisect_right
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterator, List, Optional

from outliner_engine.runtime import telemetry

from .validation import ensure_index, ensure_span


@dataclass(slots=True)
class BufferDelta:
    version: int
    label: str
    start: int
    removed: str
    inserted: str


class TextBuffer:
    """Mutable string with line bookkeeping.

    Lines are separated by ``"\\n"`` and each line (except possibly the last)
    includes its terminator, so ``"abc\\n"`` has two lines: ``"abc\\n"`` and
    ``""``.
    """

    def __init__(self, text: str = "", *, name: str = "default") -> None:
        self.name = name
        self.version = 0
        self._text = text
        self._line_starts: List[int] = _line_starts(text)

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "TextBuffer":
        return cls(text, name=name)

    @property
    def text(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def len_chars(self) -> int:
        return len(self._text)

    def len_lines(self) -> int:
        return len(self._line_starts)

    def char_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._text):
            return self._text[index]
        return None

    def char_to_line(self, index: int) -> int:
        ensure_index(self, index)
        return bisect_right(self._line_starts, index) - 1

    def line_to_char(self, line_index: int) -> int:
        if line_index < 0 or line_index > len(self._line_starts):
            raise IndexError(f"line {line_index} out of range")
        if line_index == len(self._line_starts):
            return len(self._text)
        return self._line_starts[line_index]

    def line(self, line_index: int) -> str:
        """Text of ``line_index`` including its terminator, if any."""

        start = self.line_to_char(line_index)
        if line_index + 1 < len(self._line_starts):
            return self._text[start : self._line_starts[line_index + 1]]
        return self._text[start:]

    def line_content(self, line_index: int) -> str:
        return self.line(line_index).rstrip("\n")

    def chars_at(self, index: int) -> Iterator[str]:
        """Characters from ``index`` to the end of the buffer."""

        return iter(self._text[max(index, 0) :])

    def chars_before(self, index: int) -> Iterator[str]:
        """Characters before ``index``, nearest first."""

        return reversed(self._text[: max(index, 0)])

    def slice(self, start: int, end: int) -> str:
        start, end = ensure_span(self, start, end)
        return self._text[start:end]

    def insert(self, index: int, text: str) -> BufferDelta:
        return self.replace(index, index, text, label="insert")

    def remove(self, start: int, end: int) -> BufferDelta:
        return self.replace(start, end, "", label="remove")

    def replace(
        self, start: int, end: int, text: str, *, label: str = "replace"
    ) -> BufferDelta:
        start, end = ensure_span(self, start, end)
        with Transaction(self, label):
            removed = self._text[start:end]
            self._text = self._text[:start] + text + self._text[end:]
            self._line_starts = _line_starts(self._text)
            self.version += 1
        return BufferDelta(
            version=self.version,
            label=label,
            start=start,
            removed=removed,
            inserted=text,
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "version": self.buffer.version},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _line_starts(text: str) -> List[int]:
    starts = [0]
    starts.extend(i + 1 for i, ch in enumerate(text) if ch == "\n")
    return starts
