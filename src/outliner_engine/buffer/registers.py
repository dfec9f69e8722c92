"""Snip stack shared by text commands and outline node commands."""

from __future__ import annotations

from typing import List, Optional, Sequence


class SnipStack:
    """LIFO store of copied or deleted text.

    Deletes, changes and copies push; ``p`` pops (consumes) while ``P`` only
    peeks at the top entry.
    """

    def __init__(self, entries: Sequence[str] = ()) -> None:
        self._entries: List[str] = list(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, text: str) -> None:
        self._entries.append(text)

    def pop(self) -> Optional[str]:
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[str]:
        if not self._entries:
            return None
        return self._entries[-1]

    def take(self, *, consume: bool) -> Optional[str]:
        return self.pop() if consume else self.peek()

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()
