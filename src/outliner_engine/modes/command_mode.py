"""Command-line mode: a ``:`` line typed in tree mode and run on Enter."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from outliner_engine.errors import UnknownCommand
from outliner_engine.runtime import telemetry

from .base_mode import (
    BACKSPACE_KEYS,
    ENTER_KEYS,
    ESCAPE_KEYS,
    KeyInput,
    Mode,
    ModeContext,
    ModeKind,
    ModeResult,
    key_to_char,
)

CommandHandler = Callable[[ModeContext, List[str]], ModeResult]


def _done(status: str, message: Optional[str] = None) -> ModeResult:
    return ModeResult(
        consumed=True, switch_to=ModeKind.TREE, status=status, message=message
    )


def _handle_echo(context: ModeContext, args: List[str]) -> ModeResult:
    message = " ".join(args)
    context.bus.emit("command.echo", message)
    return _done("command_echo", message)


def _handle_markdown(context: ModeContext, args: List[str]) -> ModeResult:
    del args
    presenter = context.state.presenter
    markdown = presenter.model.to_markdown(presenter.current_root)
    context.bus.emit("command.markdown", markdown)
    return _done("command_markdown", markdown)


def _handle_strike(context: ModeContext, args: List[str]) -> ModeResult:
    del args
    struckout = context.state.presenter.toggle_struckout(context.state.cur_node)
    return _done("ok", "strike" if struckout else "unstrike")


def _handle_zoom(context: ModeContext, args: List[str]) -> ModeResult:
    del args
    context.state.presenter.set_current_root(context.state.cur_node)
    return _done("ok", "zoom")


def _handle_unzoom(context: ModeContext, args: List[str]) -> ModeResult:
    del args
    presenter = context.state.presenter
    presenter.set_current_root(presenter.model.root_id)
    return _done("ok", "unzoom")


COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "echo": _handle_echo,
    "markdown": _handle_markdown,
    "md": _handle_markdown,
    "strike": _handle_strike,
    "zoom": _handle_zoom,
    "unzoom": _handle_unzoom,
}


def run_command_line(context: ModeContext, text: str) -> ModeResult:
    """Split ``text`` into a command name and arguments and dispatch it."""

    parts = text.split()
    if not parts:
        return _done("command_empty")
    name, args = parts[0], parts[1:]
    handler = COMMAND_HANDLERS.get(name)
    if handler is None:
        error = UnknownCommand(name, "command line")
        context.state.last_error = error
        context.bus.emit("command.error", name)
        return _done("command_error", str(error))
    with telemetry.span(
        "command_line::execute",
        component="command_line",
        metadata={"command": name, "args": len(args)},
    ):
        return handler(context, args)


class CommandMode(Mode):
    kind = ModeKind.COMMAND

    def on_enter(self, previous: Optional[ModeKind]) -> None:
        del previous
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: Optional[ModeKind]) -> None:
        del next_mode
        self.context.bus.emit("command.end", None)

    def handle_key(self, key: KeyInput) -> ModeResult:
        if key.key in ESCAPE_KEYS:
            return ModeResult(consumed=True, switch_to=ModeKind.TREE, message="command_cancel")

        line = self.state.command_line
        if line is None:
            return ModeResult(consumed=False)
        if key.key in ENTER_KEYS:
            text = self.state.take_command()
            self.context.bus.emit("command.submit", text)
            return run_command_line(self.context, text)
        if key.key in BACKSPACE_KEYS:
            if line.cursor == 0:
                return ModeResult(consumed=True, status="noop", message="backspace")
            line.buffer.remove(line.cursor - 1, line.cursor)
            line.cursor -= 1
            return ModeResult(consumed=True, status="editing")

        char = key_to_char(key)
        if char is None or not char.isprintable():
            return ModeResult(consumed=False)
        line.buffer.insert(line.cursor, char)
        line.cursor += 1
        return ModeResult(consumed=True, status="editing")


__all__ = ["COMMAND_HANDLERS", "CommandHandler", "CommandMode", "run_command_line"]
