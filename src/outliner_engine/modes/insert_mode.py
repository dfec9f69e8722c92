"""Insert mode: typed text goes straight into the node being edited."""

from __future__ import annotations

from .base_mode import (
    BACKSPACE_KEYS,
    ENTER_KEYS,
    ESCAPE_KEYS,
    KeyInput,
    Mode,
    ModeKind,
    ModeResult,
    key_to_char,
)


class InsertMode(Mode):
    kind = ModeKind.INSERT

    def handle_key(self, key: KeyInput) -> ModeResult:
        if key.key in ESCAPE_KEYS:
            return ModeResult(consumed=True, switch_to=ModeKind.EDIT, message="exit_insert")

        session = self.state.require_edit()
        if key.key in ENTER_KEYS:
            text = "\n"
        elif key.key in BACKSPACE_KEYS:
            if session.cursor == 0:
                return ModeResult(consumed=True, status="noop", message="backspace")
            session.buffer.replace(
                session.cursor - 1, session.cursor, "", label="backspace"
            )
            session.cursor -= 1
            return ModeResult(consumed=True, message="backspace")
        else:
            char = key_to_char(key)
            if char is None:
                return ModeResult(consumed=False)
            text = char

        session.buffer.insert(session.cursor, text)
        session.cursor += len(text)
        return ModeResult(consumed=True, message="insert_text")


__all__ = ["InsertMode"]
