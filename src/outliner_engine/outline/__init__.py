"""Outline model: the node tree and the presenter the modes drive."""

from outliner_engine.errors import OutlineError

from .presenter import NEW_NODE_TEXT, OutlinePresenter
from .tree import ROOT_PARENT_ID, Node, NodeId, Tree

__all__ = [
    "NEW_NODE_TEXT",
    "Node",
    "NodeId",
    "OutlineError",
    "OutlinePresenter",
    "ROOT_PARENT_ID",
    "Tree",
]
