"""Editor state shared by the modes: selection, folding, text and command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Set

from outliner_engine.buffer import SnipStack, TextBuffer
from outliner_engine.motion import MotionSession
from outliner_engine.outline import NodeId, OutlinePresenter
from outliner_engine.runtime import EngineSettings


@dataclass(slots=True)
class EditSession:
    """Text of the node being edited plus the cursor into it."""

    node_id: NodeId
    buffer: TextBuffer
    cursor: int = 0


@dataclass(slots=True)
class CommandLine:
    """Text typed after ``:`` in tree mode."""

    buffer: TextBuffer = field(default_factory=lambda: TextBuffer(name="command"))
    cursor: int = 0


class EditorState:
    """Selection, folding and the active text edit for one outline."""

    def __init__(
        self,
        presenter: Optional[OutlinePresenter] = None,
        *,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        self.presenter = presenter if presenter is not None else OutlinePresenter()
        self.settings = settings if settings is not None else EngineSettings()
        self.cur_node: NodeId = self.presenter.current_root
        self.folded_nodes: Set[NodeId] = set()
        self.edit: Optional[EditSession] = None
        self.command_line: Optional[CommandLine] = None
        self.motion_session = MotionSession(
            report_missing_query=self.settings.report_missing_query
        )
        self.last_error: Optional[Exception] = None

    @property
    def snips(self) -> SnipStack:
        return self.presenter.snips

    @property
    def editing(self) -> bool:
        return self.edit is not None

    def require_edit(self) -> EditSession:
        if self.edit is None:
            raise RuntimeError("no node is being edited")
        return self.edit

    # tree navigation ---------------------------------------------------

    def move_to_next_child(self) -> None:
        """Next sibling, or the first child when there is none and unfolded."""

        tree = self.presenter.model
        target = tree.next_child(self.cur_node)
        if target is None and self.cur_node not in self.folded_nodes:
            children = tree.node(self.cur_node).children
            target = children[0] if children else None
        if target is not None:
            self.cur_node = target

    def move_to_prev_child(self) -> None:
        target = self.presenter.model.prev_child(self.cur_node)
        if target is not None:
            self.cur_node = target
        else:
            self.exit_node()

    def enter_node(self) -> None:
        children = self.presenter.model.node(self.cur_node).children
        if children:
            self.cur_node = children[0]

    def exit_node(self) -> None:
        parent = self.presenter.model.node(self.cur_node).parent_id()
        if parent is None:
            return
        if self.cur_node == self.presenter.current_root:
            self.presenter.set_current_root(parent)
        self.cur_node = parent

    def toggle_folded(self) -> bool:
        """Fold or unfold the current node; leaves never fold."""

        if not self.presenter.model.node(self.cur_node).children:
            return False
        if self.cur_node in self.folded_nodes:
            self.folded_nodes.discard(self.cur_node)
        else:
            self.folded_nodes.add(self.cur_node)
        return True

    # text editing ------------------------------------------------------

    def begin_editing(self, start_at_end: bool = False) -> EditSession:
        if self.edit is not None:
            raise RuntimeError(f"node {self.edit.node_id} is already being edited")
        text = self.presenter.model.node(self.cur_node).text
        self.edit = EditSession(
            node_id=self.cur_node,
            buffer=TextBuffer(text, name=f"node-{self.cur_node}"),
            cursor=len(text) if start_at_end else 0,
        )
        return self.edit

    def finish_editing(self) -> str:
        session = self.require_edit()
        self.edit = None
        text = session.buffer.text
        self.presenter.update_node_text(session.node_id, text)
        return text

    # command line ------------------------------------------------------

    def begin_command_edit(self) -> CommandLine:
        if self.command_line is not None:
            raise RuntimeError("a command line is already open")
        self.command_line = CommandLine()
        return self.command_line

    def abort_command_edit(self) -> None:
        self.command_line = None

    def take_command(self) -> str:
        """Close the command line and return what was typed."""

        if self.command_line is None:
            raise RuntimeError("no command line is open")
        text = self.command_line.buffer.text
        self.command_line = None
        return text


__all__ = ["CommandLine", "EditSession", "EditorState"]
