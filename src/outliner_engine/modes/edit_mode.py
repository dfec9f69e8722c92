"""Edit mode: Vim-style commands over the text of the selected node."""

from __future__ import annotations

from typing import Optional

from outliner_engine.commands import (
    Command,
    CommandApplier,
    CommandRecognizer,
    Recognition,
)
from outliner_engine.errors import UnsupportedMotionError

from .base_mode import (
    ESCAPE_KEYS,
    KeyInput,
    Mode,
    ModeContext,
    ModeKind,
    ModeResult,
    key_to_char,
)


class EditMode(Mode):
    kind = ModeKind.EDIT

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: Optional[int] = None,
    ) -> None:
        super().__init__(context)
        self.recognizer = CommandRecognizer(logger_name="outliner_engine.commands")
        self.applier = CommandApplier(
            self.state.motion_session,
            self.state.snips,
            logger_name="outliner_engine.commands",
        )
        self._default_timeout_ms = (
            default_pending_timeout_ms or context.settings.pending_timeout_ms
        )

    def on_exit(self, next_mode: Optional[ModeKind]) -> None:
        del next_mode
        self.recognizer.reset()

    def handle_key(self, key: KeyInput) -> ModeResult:
        if key.key in ESCAPE_KEYS:
            if not self.recognizer.idle:
                self.recognizer.reset()
                return ModeResult(
                    consumed=True, status="cancelled", message="pending_dropped"
                )
            return ModeResult(consumed=True, switch_to=ModeKind.TREE, message="exit_edit")

        char = key_to_char(key)
        if char is None:
            return ModeResult(consumed=False)
        return self._after_recognition(self.recognizer.feed(char))

    def handle_timeout(self) -> ModeResult:
        recognition = self.recognizer.flush()
        if recognition is None:
            return ModeResult(consumed=False, status="timeout")
        return self._after_recognition(recognition)

    def _after_recognition(self, recognition: Recognition) -> ModeResult:
        if recognition.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_command",
                timeout_ms=self._default_timeout_ms,
            )
        if recognition.status == "error":
            error = recognition.error
            self.state.last_error = error
            return ModeResult(
                consumed=True, status="command_error", message=str(error)
            )
        if recognition.command is None:
            return ModeResult(consumed=True, status="noop")
        return self._execute(recognition.command)

    def _execute(self, command: Command) -> ModeResult:
        session = self.state.require_edit()
        try:
            result = self.applier.apply(session.buffer, session.cursor, command)
        except UnsupportedMotionError as exc:
            self.state.last_error = exc
            return ModeResult(consumed=True, status="unsupported", message=str(exc))

        session.cursor = result.cursor
        self.state.last_error = None
        if result.enter_insert:
            return ModeResult(
                consumed=True, switch_to=ModeKind.INSERT, message="enter_insert"
            )
        return ModeResult(consumed=True, message=type(command).__name__.lower())


__all__ = ["EditMode"]
