"""Mode manager coordinating the tree, edit, insert and command-line modes."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Dict, Optional

from outliner_engine.runtime import EngineSettings, telemetry

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeKind, ModeResult
from .command_mode import CommandMode
from .edit_mode import EditMode
from .insert_mode import InsertMode
from .state import EditorState
from .tree_mode import TreeMode


@dataclass
class PendingTimeout:
    deadline: float
    timeout_ms: int
    generation: int


class ModeManager:
    """Owns one mode per ``ModeKind``, handles transitions, dispatches keys.

    Crossing between tree mode and the text modes loads the selected node's
    text into an edit session or commits it back to the outline.
    """

    def __init__(
        self,
        state: Optional[EditorState] = None,
        *,
        settings: Optional[EngineSettings] = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        if state is None:
            state = EditorState(settings=settings)
        self.context = ModeContext(
            state=state,
            bus=bus or ModeBus(),
            settings=settings or state.settings,
        )
        self._modes: Dict[ModeKind, Mode] = {
            ModeKind.TREE: TreeMode(self.context),
            ModeKind.EDIT: EditMode(self.context),
            ModeKind.INSERT: InsertMode(self.context),
            ModeKind.COMMAND: CommandMode(self.context),
        }
        self._active = ModeKind.TREE
        self._pending_timeouts: Dict[ModeKind, PendingTimeout] = {}
        self._timer_counter = 0
        self._modes[self._active].on_enter(None)

    @property
    def state(self) -> EditorState:
        return self.context.state

    @property
    def active_kind(self) -> ModeKind:
        return self._active

    @property
    def active_mode(self) -> Mode:
        return self._modes[self._active]

    def mode(self, kind: ModeKind) -> Mode:
        return self._modes[kind]

    def switch_mode(self, kind: ModeKind) -> None:
        previous = self._active
        if previous is kind:
            return
        self.cancel_timeout(previous)
        self._modes[previous].on_exit(kind)
        self._transition(previous, kind)
        self._active = kind
        self._modes[kind].on_enter(previous)
        self.cancel_timeout(kind)
        telemetry.record_event(
            "mode.switch", data={"mode": kind.value, "previous": previous.value}
        )
        self.context.bus.emit("mode.switch", kind)

    def _transition(self, previous: ModeKind, target: ModeKind) -> None:
        state = self.state
        if previous is ModeKind.COMMAND:
            state.abort_command_edit()
        if target is ModeKind.COMMAND:
            state.begin_command_edit()
        if target.edits_text and not state.editing:
            state.begin_editing()
        elif not target.edits_text and state.editing:
            state.finish_editing()
        if previous is ModeKind.INSERT and target is ModeKind.EDIT and state.edit:
            # back on a character, not after the last one
            session = state.edit
            session.cursor = max(min(session.cursor - 1, len(session.buffer) - 1), 0)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(mode, result)

    def _after_mode_result(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self.arm_timeout(mode.kind, result.timeout_ms)
        else:
            self.cancel_timeout(mode.kind)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def arm_timeout(self, kind: ModeKind, timeout_ms: int) -> None:
        self._timer_counter += 1
        deadline = time.monotonic() + (timeout_ms / 1000.0)
        self._pending_timeouts[kind] = PendingTimeout(
            deadline=deadline,
            timeout_ms=timeout_ms,
            generation=self._timer_counter,
        )

    def cancel_timeout(self, kind: ModeKind) -> None:
        self._pending_timeouts.pop(kind, None)

    def has_pending_timeout(self, kind: Optional[ModeKind] = None) -> bool:
        if kind is None:
            return bool(self._pending_timeouts)
        return kind in self._pending_timeouts

    def process_timeouts(self) -> Dict[ModeKind, ModeResult]:
        now = time.monotonic()
        expired = {
            kind: timer
            for kind, timer in self._pending_timeouts.items()
            if timer.deadline <= now
        }
        results: Dict[ModeKind, ModeResult] = {}
        for kind, timer in expired.items():
            results[kind] = self._trigger_timeout(kind, timer.generation)
        return results

    def force_timeout(
        self, kind: Optional[ModeKind] = None
    ) -> Dict[ModeKind, ModeResult]:
        if kind is not None:
            timer = self._pending_timeouts.get(kind)
            if not timer:
                return {}
            return {kind: self._trigger_timeout(kind, timer.generation)}

        current = list(self._pending_timeouts.items())
        results: Dict[ModeKind, ModeResult] = {}
        for pending_kind, timer in current:
            results[pending_kind] = self._trigger_timeout(pending_kind, timer.generation)
        return results

    def _trigger_timeout(self, kind: ModeKind, generation: int) -> ModeResult:
        timer = self._pending_timeouts.get(kind)
        if not timer or timer.generation != generation:
            return ModeResult(consumed=False, status="timeout")
        self._pending_timeouts.pop(kind, None)
        mode = self._modes[kind]
        with telemetry.span(
            name=f"mode_timeout::{mode.name}",
            component=True,
            metadata={"mode": mode.name},
        ):
            result = mode.handle_timeout()
        return self._after_mode_result(mode, result)


__all__ = ["ModeManager", "PendingTimeout"]
