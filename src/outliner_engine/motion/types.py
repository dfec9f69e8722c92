"""Motion data model: directions, text objects, motion kinds and ranges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar, Optional, Tuple, Union

if TYPE_CHECKING:
    from outliner_engine.buffer import TextBuffer

    from .resolver import MotionSession


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    def reverse(self) -> "Direction":
        if self is Direction.FORWARD:
            return Direction.BACKWARD
        return Direction.FORWARD


BLOCK_PAIRS = MappingProxyType(
    {
        "{": "}",
        "(": ")",
        "[": "]",
        "<": ">",
        '"': '"',
        "'": "'",
    }
)


class TextObjectKind(Enum):
    WORD = "word"
    BIG_WORD = "big_word"
    PARAGRAPH = "paragraph"
    BLOCK = "block"


@dataclass(frozen=True, slots=True)
class TextObject:
    """Structural span selected by ``i``/``a``; blocks carry their opener."""

    kind: TextObjectKind
    delimiter: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is TextObjectKind.BLOCK:
            if self.delimiter not in BLOCK_PAIRS:
                raise ValueError(f"no matching block char for {self.delimiter!r}")
        elif self.delimiter is not None:
            raise ValueError(f"{self.kind.value} objects take no delimiter")

    @classmethod
    def word(cls) -> "TextObject":
        return cls(TextObjectKind.WORD)

    @classmethod
    def big_word(cls) -> "TextObject":
        return cls(TextObjectKind.BIG_WORD)

    @classmethod
    def paragraph(cls) -> "TextObject":
        return cls(TextObjectKind.PARAGRAPH)

    @classmethod
    def block(cls, open_char: str) -> "TextObject":
        return cls(TextObjectKind.BLOCK, open_char)

    @property
    def closer(self) -> str:
        if self.delimiter is None:
            raise ValueError(f"{self.kind.value} objects have no closer")
        return BLOCK_PAIRS[self.delimiter]


# ─────────────────────────────────────────────────────────────────
# Motion kinds
# ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Char:
    direction: Direction
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Word:
    direction: Direction
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class BigWord:
    direction: Direction
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class EndOfWord:
    direction: Direction
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class EndOfBigWord:
    direction: Direction
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class NextChar:
    """``f``/``F``/``t``/``T``: find ``char``; ``place_before`` stops short."""

    char: str
    place_before: bool
    direction: Direction
    inclusive: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class RepeatNextChar:
    """``;`` and ``,``; ``opposite`` reverses the remembered direction."""

    opposite: bool = False
    inclusive: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class WholeLine:
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Line:
    direction: Direction
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class StartOfLine:
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class EndOfLine:
    inclusive: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Paragraph:
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class An:
    obj: TextObject
    inclusive: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Inner:
    obj: TextObject
    inclusive: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class NextSearchMatch:
    direction: Direction
    inclusive: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Passthrough:
    """A literal range, so fixed-size edits share the operator path."""

    start: int
    end: int
    inclusive: ClassVar[bool] = True


MotionType = Union[
    Char,
    Word,
    BigWord,
    EndOfWord,
    EndOfBigWord,
    NextChar,
    RepeatNextChar,
    WholeLine,
    Line,
    StartOfLine,
    EndOfLine,
    Paragraph,
    An,
    Inner,
    NextSearchMatch,
    Passthrough,
]


@dataclass(frozen=True, slots=True)
class TextRange:
    """Resolved motion: ``start`` is the anchor, ``end`` the target.

    Backward motions produce ``end < start``; use ``ordered`` before slicing.
    """

    start: int
    end: int

    def ordered(self) -> Tuple[int, int]:
        if self.start <= self.end:
            return self.start, self.end
        return self.end, self.start

    def __len__(self) -> int:
        low, high = self.ordered()
        return high - low


@dataclass(frozen=True, slots=True)
class Motion:
    kind: MotionType
    count: int = 1

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("motion count cannot be negative")

    @classmethod
    def passthrough(cls, start: int, end: int) -> "Motion":
        return cls(Passthrough(start, end))

    @classmethod
    def parse(cls, text: str, opchar: Optional[str] = None) -> "Motion":
        from outliner_engine.commands.grammar import parse_motion

        return parse_motion(text, opchar)

    @property
    def inclusive(self) -> bool:
        return self.kind.inclusive

    def with_count(self, count: int) -> "Motion":
        return Motion(self.kind, count)

    def range(
        self,
        buffer: "TextBuffer",
        cursor_index: int,
        multiplier: int = 1,
        session: Optional["MotionSession"] = None,
    ) -> TextRange:
        from .resolver import resolve_range

        return resolve_range(self, buffer, cursor_index, multiplier, session)


__all__ = [
    "BLOCK_PAIRS",
    "An",
    "BigWord",
    "Char",
    "Direction",
    "EndOfBigWord",
    "EndOfLine",
    "EndOfWord",
    "Inner",
    "Line",
    "Motion",
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
    "WholeLine",
    "Word",
]
