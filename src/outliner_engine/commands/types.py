"""Edit-mode commands produced by the grammar and consumed by the applier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from outliner_engine.motion import Motion


@dataclass(frozen=True, slots=True)
class Move:
    motion: Motion


@dataclass(frozen=True, slots=True)
class Insert:
    """Enter insert mode, optionally after moving by ``at``.

    ``new_line`` opens an empty line below the cursor's line first (``o``).
    """

    at: Optional[Motion] = None
    new_line: bool = False


@dataclass(frozen=True, slots=True)
class ReplaceChar:
    char: str


@dataclass(frozen=True, slots=True)
class Change:
    motion: Motion


@dataclass(frozen=True, slots=True)
class Delete:
    motion: Motion


@dataclass(frozen=True, slots=True)
class Copy:
    motion: Motion


@dataclass(frozen=True, slots=True)
class Put:
    consume: bool = True


Command = Union[Move, Insert, ReplaceChar, Change, Delete, Copy, Put]
OperatorCommand = Union[Change, Delete, Copy]


__all__ = [
    "Change",
    "Command",
    "Copy",
    "Delete",
    "Insert",
    "Move",
    "OperatorCommand",
    "Put",
    "ReplaceChar",
]
