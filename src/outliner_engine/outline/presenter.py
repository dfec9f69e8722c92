"""Outline operations used by the tree mode, with telemetry on every change."""

from __future__ import annotations

from typing import Optional

from outliner_engine.buffer import SnipStack
from outliner_engine.runtime import telemetry

from .tree import ROOT_PARENT_ID, NodeId, Tree

NEW_NODE_TEXT = ""


class OutlinePresenter:
    """Owns the tree, the displayed root and the snip stack.

    Node copies and text copies share one ``SnipStack``, so a node yanked in
    tree mode can be put as text in edit mode and vice versa.
    """

    def __init__(
        self,
        tree: Optional[Tree] = None,
        *,
        snips: Optional[SnipStack] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.tree = tree if tree is not None else Tree.with_root()
        self.snips = snips if snips is not None else SnipStack()
        self._current_root = self.tree.root_id
        self._logger_name = logger_name

    @property
    def model(self) -> Tree:
        return self.tree

    @property
    def current_root(self) -> NodeId:
        return self._current_root

    def set_current_root(self, node_id: NodeId) -> None:
        self.tree.node(node_id)
        self._current_root = node_id
        self._event("outline.root", node=node_id)

    def _event(self, name: str, **data: object) -> None:
        telemetry.record_event(name, data=dict(data), logger_name=self._logger_name)

    # node creation -----------------------------------------------------

    def insert_node(self, cur_node: NodeId) -> NodeId:
        """New sibling after ``cur_node``; a parentless node gets a child."""

        sibling = self.insert_node_in_parent(cur_node)
        if sibling is not None:
            return sibling
        return self.insert_node_as_child(cur_node)

    def insert_node_in_parent(self, cur_node: NodeId) -> Optional[NodeId]:
        parent = self.tree.node(cur_node).parent_id()
        if parent is None:
            return None
        node_id = self.tree.insert_node(NEW_NODE_TEXT, parent, cur_node, True)
        self._event("outline.insert", node=node_id, parent=parent)
        return node_id

    def insert_node_as_child(self, cur_node: NodeId) -> NodeId:
        node_id = self.tree.add_node(NEW_NODE_TEXT, cur_node)
        self._event("outline.insert", node=node_id, parent=cur_node)
        return node_id

    # node editing ------------------------------------------------------

    def update_node_text(self, node_id: NodeId, text: str) -> None:
        node = self.tree.node(node_id)
        if node.text == text:
            return
        node.text = text
        self._event("outline.update", node=node_id, length=len(text))

    def toggle_struckout(self, node_id: NodeId) -> bool:
        node = self.tree.node(node_id)
        node.struckout = not node.struckout
        self._event("outline.strike", node=node_id, struckout=node.struckout)
        return node.struckout

    def delete_node(self, cur_node: NodeId) -> Optional[str]:
        text = self.tree.delete_node(cur_node)
        if text is None:
            self._event("outline.delete_refused", node=cur_node)
            return None
        self.snips.push(text)
        if cur_node == self._current_root or self._current_root not in self.tree:
            self._current_root = self.tree.root_id
        self._event("outline.delete", node=cur_node)
        return text

    def copy_node(self, cur_node: NodeId) -> None:
        self.snips.push(self.tree.node(cur_node).text)
        self._event("outline.copy", node=cur_node)

    def put_node(self, cur_node: NodeId, consume: bool) -> Optional[NodeId]:
        """Add the top snip as the last child of ``cur_node``."""

        text = self.snips.take(consume=consume)
        if text is None:
            return None
        node_id = self.tree.add_node(text, cur_node)
        self._event("outline.put", node=node_id, parent=cur_node, consume=consume)
        return node_id

    def swap_node(self, cur_node: NodeId, direction: int) -> bool:
        swapped = self.tree.swap_node(cur_node, direction)
        if swapped:
            self._event("outline.swap", node=cur_node, direction=direction)
        return swapped

    # snip stack --------------------------------------------------------

    def copy_str(self, text: str) -> None:
        self.snips.push(text)

    def pop_snip_str(self) -> Optional[str]:
        return self.snips.pop()

    def peek_snip_str(self) -> Optional[str]:
        return self.snips.peek()


__all__ = ["NEW_NODE_TEXT", "OutlinePresenter", "ROOT_PARENT_ID"]
