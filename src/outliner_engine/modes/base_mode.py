"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from outliner_engine.runtime import EngineSettings

if TYPE_CHECKING:
    from .state import EditorState

ESCAPE_KEYS = frozenset({"ESC", "<Esc>", "escape"})
ENTER_KEYS = frozenset({"ENTER", "<CR>", "enter"})
BACKSPACE_KEYS = frozenset({"BACKSPACE", "<BS>", "backspace"})


class ModeKind(Enum):
    """The closed set of modes; transitions are decided by ``ModeManager``."""

    TREE = "tree"
    EDIT = "edit"
    INSERT = "insert"
    COMMAND = "command"

    @property
    def edits_text(self) -> bool:
        """Whether the mode works on the selected node's text."""

        return self in (ModeKind.EDIT, ModeKind.INSERT)


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[ModeKind] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    state: "EditorState"
    bus: "ModeBus"
    settings: EngineSettings = field(default_factory=EngineSettings)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


def key_to_token(key: KeyInput) -> str:
    if key.modifiers:
        modifier = "+".join(key.modifiers)
        return f"{modifier}+{key.key}"
    return key.key


def key_to_char(key: KeyInput) -> Optional[str]:
    """Printable character carried by ``key``, if it has exactly one."""

    if key.modifiers and key.modifiers != ("shift",):
        return None
    candidate = key.text if key.text is not None else key.key
    if len(candidate) != 1:
        return None
    return candidate


class Mode:
    """Base class all concrete editor modes inherit from."""

    kind: ModeKind

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def state(self) -> "EditorState":
        return self.context.state

    def on_enter(
        self, previous: Optional[ModeKind]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[ModeKind]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        """Invoked by the manager when a pending key sequence expires."""

        return ModeResult(consumed=False, status="timeout")


__all__ = [
    "BACKSPACE_KEYS",
    "ENTER_KEYS",
    "ESCAPE_KEYS",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeKind",
    "ModeResult",
    "key_to_char",
    "key_to_token",
]
