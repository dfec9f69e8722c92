"""Tree mode: navigate and restructure the outline one node at a time."""

from __future__ import annotations

from typing import Callable, Dict

from .base_mode import KeyInput, Mode, ModeContext, ModeKind, ModeResult, key_to_token


class TreeMode(Mode):
    kind = ModeKind.TREE

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._bindings: Dict[str, Callable[[], ModeResult]] = {
            "j": self._next_child,
            "k": self._prev_child,
            "l": self._enter_node,
            "h": self._exit_node,
            "ctrl+j": self._swap_down,
            "ctrl+k": self._swap_up,
            "i": self._insert_text,
            "e": self._edit_text,
            "o": self._new_sibling,
            "O": self._new_child,
            "shift+o": self._new_child,
            "x": self._delete_node,
            "y": self._copy_node,
            "p": self._put_consume,
            "P": self._put_keep,
            "shift+p": self._put_keep,
            "z": self._toggle_fold,
            ":": self._command_line,
        }

    def handle_key(self, key: KeyInput) -> ModeResult:
        handler = self._bindings.get(key_to_token(key))
        if handler is None:
            return ModeResult(consumed=False)
        return handler()

    # navigation --------------------------------------------------------

    def _next_child(self) -> ModeResult:
        self.state.move_to_next_child()
        return ModeResult(consumed=True, message="next_child")

    def _prev_child(self) -> ModeResult:
        self.state.move_to_prev_child()
        return ModeResult(consumed=True, message="prev_child")

    def _enter_node(self) -> ModeResult:
        self.state.enter_node()
        return ModeResult(consumed=True, message="enter_node")

    def _exit_node(self) -> ModeResult:
        self.state.exit_node()
        return ModeResult(consumed=True, message="exit_node")

    def _swap_down(self) -> ModeResult:
        self.state.presenter.swap_node(self.state.cur_node, 1)
        return ModeResult(consumed=True, message="swap_down")

    def _swap_up(self) -> ModeResult:
        self.state.presenter.swap_node(self.state.cur_node, -1)
        return ModeResult(consumed=True, message="swap_up")

    def _toggle_fold(self) -> ModeResult:
        toggled = self.state.toggle_folded()
        return ModeResult(
            consumed=True,
            status="ok" if toggled else "noop",
            message="toggle_fold",
        )

    # entering text modes -----------------------------------------------

    def _insert_text(self) -> ModeResult:
        self.state.begin_editing(start_at_end=True)
        return ModeResult(consumed=True, switch_to=ModeKind.INSERT, message="insert")

    def _edit_text(self) -> ModeResult:
        self.state.begin_editing(start_at_end=False)
        return ModeResult(consumed=True, switch_to=ModeKind.EDIT, message="edit")

    def _new_sibling(self) -> ModeResult:
        self.state.cur_node = self.state.presenter.insert_node(self.state.cur_node)
        return self._insert_text()

    def _new_child(self) -> ModeResult:
        presenter = self.state.presenter
        self.state.cur_node = presenter.insert_node_as_child(self.state.cur_node)
        return self._insert_text()

    def _command_line(self) -> ModeResult:
        return ModeResult(consumed=True, switch_to=ModeKind.COMMAND, message="command_line")

    # snips -------------------------------------------------------------

    def _delete_node(self) -> ModeResult:
        state = self.state
        tree = state.presenter.model
        doomed = state.cur_node
        successor = (
            tree.next_child(doomed)
            or tree.prev_child(doomed)
            or tree.node(doomed).parent_id()
        )
        if state.presenter.delete_node(doomed) is None:
            return ModeResult(consumed=True, status="noop", message="delete_root")
        if successor is not None:
            state.cur_node = successor
        state.folded_nodes.intersection_update(tree.nodes)
        return ModeResult(consumed=True, message="delete_node")

    def _copy_node(self) -> ModeResult:
        self.state.presenter.copy_node(self.state.cur_node)
        return ModeResult(consumed=True, message="copy_node")

    def _put_consume(self) -> ModeResult:
        return self._put(consume=True)

    def _put_keep(self) -> ModeResult:
        return self._put(consume=False)

    def _put(self, *, consume: bool) -> ModeResult:
        node_id = self.state.presenter.put_node(self.state.cur_node, consume)
        if node_id is None:
            return ModeResult(consumed=True, status="noop", message="snips_empty")
        return ModeResult(consumed=True, message="put_node")


__all__ = ["TreeMode"]
