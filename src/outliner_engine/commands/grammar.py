"""Keystroke grammar for edit mode.

``parse_command`` is pure: it maps a complete key string to a ``Command`` or
raises one of the ``CommandParseError`` subclasses. ``IncompleteCommand``
means a longer input could still succeed, which is what the incremental
recognizer relies on. Keys past the end of a complete command are ignored.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Optional, Tuple

from outliner_engine.errors import IncompleteCommand, InvalidCommand, UnknownCommand
from outliner_engine.motion import (
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
    RepeatNextChar,
    StartOfLine,
    TextObject,
    WholeLine,
    Word,
)

from .types import (
    Change,
    Command,
    Copy,
    Delete,
    Insert,
    Move,
    OperatorCommand,
    Put,
    ReplaceChar,
)

FORWARD = Direction.FORWARD
BACKWARD = Direction.BACKWARD

SIMPLE_MOTIONS: "MappingProxyType[str, MotionType]" = MappingProxyType(
    {
        "h": Char(BACKWARD),
        "l": Char(FORWARD),
        "j": Line(FORWARD),
        "k": Line(BACKWARD),
        "w": Word(FORWARD),
        "b": Word(BACKWARD),
        "W": BigWord(FORWARD),
        "B": BigWord(BACKWARD),
        "e": EndOfWord(FORWARD),
        "E": EndOfBigWord(FORWARD),
        "n": NextSearchMatch(FORWARD),
        "N": NextSearchMatch(BACKWARD),
        "^": StartOfLine(),
        "$": EndOfLine(),
        "_": WholeLine(),
        ";": RepeatNextChar(opposite=False),
        ",": RepeatNextChar(opposite=True),
    }
)

G_MOTIONS: "MappingProxyType[str, MotionType]" = MappingProxyType(
    {
        "e": EndOfWord(BACKWARD),
        "E": EndOfBigWord(BACKWARD),
        ";": RepeatNextChar(opposite=True),
    }
)

# key -> (place_before, direction)
FIND_KEYS: "MappingProxyType[str, Tuple[bool, Direction]]" = MappingProxyType(
    {
        "f": (False, FORWARD),
        "F": (False, BACKWARD),
        "t": (True, FORWARD),
        "T": (True, BACKWARD),
    }
)

TEXT_OBJECTS: "MappingProxyType[str, TextObject]" = MappingProxyType(
    {
        "w": TextObject.word(),
        "W": TextObject.big_word(),
        "p": TextObject.paragraph(),
        "{": TextObject.block("{"),
        "}": TextObject.block("{"),
        "(": TextObject.block("("),
        ")": TextObject.block("("),
        "[": TextObject.block("["),
        "]": TextObject.block("["),
        "<": TextObject.block("<"),
        ">": TextObject.block("<"),
        '"': TextObject.block('"'),
        "'": TextObject.block("'"),
    }
)

OPERATORS: "MappingProxyType[str, Callable[[Motion], OperatorCommand]]" = (
    MappingProxyType({"d": Delete, "c": Change, "y": Copy})
)

_FIXED_COMMANDS: Dict[str, Command] = {
    "i": Insert(),
    "a": Insert(at=Motion(Char(FORWARD))),
    "I": Insert(at=Motion(StartOfLine())),
    "A": Insert(at=Motion(EndOfLine())),
    "o": Insert(at=Motion(EndOfLine()), new_line=True),
    "p": Put(consume=True),
    "P": Put(consume=False),
}


def parse_command(text: str) -> Command:
    """Parse a full key string such as ``"3dw"`` or ``"ci("``."""

    if not text:
        raise IncompleteCommand(text)

    count, rest = split_count(text)
    if count is not None:
        if not rest:
            raise IncompleteCommand(text, "count without a command")
        head = rest[0]
        if head in OPERATORS:
            command = _parse_operator(rest, text)
            motion = command.motion
            return type(command)(motion.with_count(motion.count * count))
        if head == "x":
            return Delete(Motion(Char(FORWARD), count))
        return Move(parse_motion(text))

    head = text[0]
    fixed = _FIXED_COMMANDS.get(head)
    if fixed is not None:
        return fixed
    if head == "r":
        if len(text) < 2:
            raise IncompleteCommand(text, "r expects a character")
        return ReplaceChar(_literal(text[1], text))
    if head == "x":
        return Delete(Motion(Char(FORWARD)))
    if head in OPERATORS:
        return _parse_operator(text, text)
    return Move(parse_motion(text))


def parse_motion(chars: str, opchar: Optional[str] = None) -> Motion:
    """Parse ``[count]motion``; ``opchar`` is the pending operator, if any.

    Text objects (``iw``, ``a(``) and the doubled operator (``dd``) are only
    valid while an operator is pending.
    """

    if not chars:
        raise IncompleteCommand(chars)

    count, rest = split_count(chars)
    if not rest:
        raise IncompleteCommand(chars, "count without a motion")

    head, tail = rest[0], rest[1:]
    kind: Optional[MotionType] = SIMPLE_MOTIONS.get(head)
    if kind is None:
        if head == "g":
            if not tail:
                raise IncompleteCommand(chars)
            kind = G_MOTIONS.get(tail[0])
        elif head in FIND_KEYS:
            if not tail:
                raise IncompleteCommand(chars, f"{head} expects a character")
            place_before, direction = FIND_KEYS[head]
            kind = NextChar(_literal(tail[0], chars), place_before, direction)
        elif head in ("i", "a") and opchar is not None:
            if not tail:
                raise IncompleteCommand(chars, "text object expected")
            obj = TEXT_OBJECTS.get(tail[0])
            if obj is not None:
                kind = Inner(obj) if head == "i" else An(obj)
        elif opchar is not None and head == opchar:
            kind = WholeLine()
    if kind is None:
        raise UnknownCommand(chars)

    return Motion(kind, 1 if count is None else count)


def split_count(keys: str) -> Tuple[Optional[int], str]:
    """Split leading digits off ``keys``; ``0`` is a digit like any other."""

    digits = 0
    while digits < len(keys) and keys[digits] in "0123456789":
        digits += 1
    if not digits:
        return None, keys
    return int(keys[:digits]), keys[digits:]


def _parse_operator(keys: str, text: str) -> OperatorCommand:
    op = keys[0]
    motion_keys = keys[1:]
    if not motion_keys:
        raise IncompleteCommand(text, f"{op} expects a motion")
    try:
        motion = parse_motion(motion_keys, opchar=op)
    except (IncompleteCommand, InvalidCommand, UnknownCommand) as exc:
        # report against the whole input, not the motion suffix
        raise type(exc)(text, exc.detail) from exc
    return OPERATORS[op](motion)


def _literal(ch: str, text: str) -> str:
    if ord(ch) < 32 or ord(ch) == 127:
        raise InvalidCommand(text, f"control character {ch!r} is not a literal")
    return ch


__all__ = [
    "FIND_KEYS",
    "G_MOTIONS",
    "OPERATORS",
    "SIMPLE_MOTIONS",
    "TEXT_OBJECTS",
    "parse_command",
    "parse_motion",
    "split_count",
]
