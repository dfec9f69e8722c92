"""Outline tree: nodes holding text, ordered children and a parent link."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from outliner_engine.errors import OutlineError

NodeId = int

# Parent id of nodes attached to nothing (the root, cut nodes).
ROOT_PARENT_ID: NodeId = 0


@dataclass(slots=True)
class Node:
    id: NodeId
    text: str
    parent: NodeId = ROOT_PARENT_ID
    children: List[NodeId] = field(default_factory=list)
    struckout: bool = False

    def parent_id(self) -> Optional[NodeId]:
        return None if self.parent == ROOT_PARENT_ID else self.parent


class Tree:
    """Flat id -> node table; ids are handed out from 1 and never reused."""

    def __init__(self) -> None:
        self.nodes: Dict[NodeId, Node] = {}
        self._next_id: NodeId = 1
        self._root_id: NodeId = ROOT_PARENT_ID

    @classmethod
    def with_root(cls, text: str = "") -> "Tree":
        tree = cls()
        tree.root_id = tree.add_node(text, ROOT_PARENT_ID)
        return tree

    @property
    def root_id(self) -> NodeId:
        return self._root_id

    @root_id.setter
    def root_id(self, node_id: NodeId) -> None:
        if self._root_id != ROOT_PARENT_ID:
            raise ValueError("tree root is already set")
        self.node(node_id)
        self._root_id = node_id

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: NodeId) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise OutlineError(node_id) from None

    def _create_node(self, text: str, parent: NodeId) -> NodeId:
        if parent != ROOT_PARENT_ID:
            self.node(parent)
        node_id = self._next_id
        self._next_id += 1
        self.nodes[node_id] = Node(id=node_id, text=text, parent=parent)
        return node_id

    def _index_in_parent(self, parent: NodeId, child: NodeId) -> int:
        try:
            return self.node(parent).children.index(child)
        except ValueError:
            raise OutlineError(child, f"not a child of {parent}") from None

    def add_node(self, text: str, parent: NodeId) -> NodeId:
        node_id = self._create_node(text, parent)
        if parent != ROOT_PARENT_ID:
            self.node(parent).children.append(node_id)
        return node_id

    def add_node_at_beginning(self, text: str, parent: NodeId) -> NodeId:
        node_id = self._create_node(text, parent)
        if parent != ROOT_PARENT_ID:
            self.node(parent).children.insert(0, node_id)
        return node_id

    def insert_node(
        self, text: str, parent: NodeId, at: NodeId, after: bool = True
    ) -> NodeId:
        """Create a node next to ``at`` (a child of ``parent``)."""

        if parent == ROOT_PARENT_ID:
            return self._create_node(text, parent)
        index = self._index_in_parent(parent, at)
        node_id = self._create_node(text, parent)
        self.node(parent).children.insert(index + 1 if after else index, node_id)
        return node_id

    def cut_node(self, node_id: NodeId) -> None:
        """Detach ``node_id`` from its parent; the subtree stays in the table."""

        node = self.node(node_id)
        parent = node.parent_id()
        if parent is not None:
            self.node(parent).children.remove(node_id)
            node.parent = ROOT_PARENT_ID

    def reparent_node(
        self,
        node_id: NodeId,
        new_parent: NodeId,
        next_to: Optional[NodeId] = None,
        before: bool = False,
    ) -> None:
        node = self.node(node_id)
        if new_parent != ROOT_PARENT_ID:
            self.node(new_parent)
            if new_parent == node_id or new_parent in self.descendants(node_id):
                raise OutlineError(new_parent, "cannot move a node under itself")
        old_parent = node.parent_id()
        if old_parent is not None:
            self.node(old_parent).children.remove(node_id)
        node.parent = new_parent
        if new_parent == ROOT_PARENT_ID:
            return
        children = self.node(new_parent).children
        if next_to is None:
            children.append(node_id)
        else:
            index = self._index_in_parent(new_parent, next_to)
            children.insert(index if before else index + 1, node_id)

    def clone_node(
        self, node_id: NodeId, new_parent: NodeId, after: Optional[NodeId] = None
    ) -> NodeId:
        """Deep-copy the subtree at ``node_id`` under ``new_parent``."""

        source = self.node(node_id)
        if after is not None:
            clone = self.insert_node(source.text, new_parent, after, True)
        else:
            clone = self.add_node(source.text, new_parent)
        self.node(clone).struckout = source.struckout
        for child in list(source.children):
            self.clone_node(child, clone)
        return clone

    def delete_node(self, node_id: NodeId) -> Optional[str]:
        """Remove ``node_id`` and its subtree, returning the node's text.

        The tree root cannot be deleted; ``None`` is returned instead.
        """

        if node_id == self._root_id:
            return None
        text = self.node(node_id).text
        self.cut_node(node_id)
        for doomed in [node_id, *self.descendants(node_id)]:
            del self.nodes[doomed]
        return text

    def descendants(self, node_id: NodeId) -> List[NodeId]:
        found: List[NodeId] = []
        stack = list(reversed(self.node(node_id).children))
        while stack:
            current = stack.pop()
            found.append(current)
            stack.extend(reversed(self.nodes[current].children))
        return found

    def next_child(self, node_id: NodeId) -> Optional[NodeId]:
        """Following sibling of ``node_id``, if any ("down" the outline)."""

        parent = self.node(node_id).parent_id()
        if parent is None:
            return None
        siblings = self.node(parent).children
        index = siblings.index(node_id)
        if index + 1 < len(siblings):
            return siblings[index + 1]
        return None

    def prev_child(self, node_id: NodeId) -> Optional[NodeId]:
        """Preceding sibling of ``node_id``, if any ("up" the outline)."""

        parent = self.node(node_id).parent_id()
        if parent is None:
            return None
        siblings = self.node(parent).children
        index = siblings.index(node_id)
        if index > 0:
            return siblings[index - 1]
        return None

    def swap_node(self, node_id: NodeId, direction: int) -> bool:
        """Swap ``node_id`` with the sibling ``direction`` steps away."""

        parent = self.node(node_id).parent_id()
        if parent is None:
            return False
        siblings = self.node(parent).children
        index = siblings.index(node_id)
        other = index + direction
        if not 0 <= other < len(siblings):
            return False
        siblings[index], siblings[other] = siblings[other], siblings[index]
        return True

    def walk(self, node_id: Optional[NodeId] = None) -> Iterator[tuple[int, Node]]:
        """Yield ``(depth, node)`` in display order, starting at the root."""

        start = self._root_id if node_id is None else node_id
        if start not in self.nodes:
            return
        stack = [(0, start)]
        while stack:
            depth, current = stack.pop()
            node = self.nodes[current]
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))

    def to_markdown(self, node_id: Optional[NodeId] = None) -> str:
        lines = []
        for depth, node in self.walk(node_id):
            text = f"~~{node.text}~~" if node.struckout else node.text
            lines.append(f"{'  ' * depth}- {text}\n")
        return "".join(lines)


__all__ = ["Node", "NodeId", "ROOT_PARENT_ID", "Tree"]
