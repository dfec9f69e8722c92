from __future__ import annotations

import pytest

from outliner_engine.buffer import SnipStack
from outliner_engine.errors import OutlineError
from outliner_engine.outline import ROOT_PARENT_ID, OutlinePresenter, Tree


def make_tree(*texts: str) -> Tree:
    tree = Tree.with_root("root")
    for text in texts:
        tree.add_node(text, tree.root_id)
    return tree


def children_text(tree: Tree, node_id: int) -> list[str]:
    return [tree.node(child).text for child in tree.node(node_id).children]


def test_with_root_starts_ids_at_one() -> None:
    tree = Tree.with_root()

    assert tree.root_id == 1
    assert tree.node(1).parent == ROOT_PARENT_ID
    assert tree.node(1).parent_id() is None
    assert len(tree) == 1


def test_root_can_only_be_set_once() -> None:
    tree = make_tree()
    with pytest.raises(ValueError):
        tree.root_id = tree.add_node("other", ROOT_PARENT_ID)


def test_add_and_insert_keep_order() -> None:
    tree = make_tree("b", "d")
    root = tree.root_id
    b, d = tree.node(root).children

    tree.add_node_at_beginning("a", root)
    tree.insert_node("c", root, b, after=True)
    tree.insert_node("c-", root, d, after=False)

    assert children_text(tree, root) == ["a", "b", "c", "c-", "d"]


def test_insert_next_to_a_stranger_fails() -> None:
    tree = make_tree("a")
    loose = tree.add_node("loose", ROOT_PARENT_ID)

    with pytest.raises(OutlineError):
        tree.insert_node("x", tree.root_id, loose)


def test_sibling_navigation() -> None:
    tree = make_tree("a", "b", "c")
    a, b, c = tree.node(tree.root_id).children

    assert tree.next_child(a) == b
    assert tree.next_child(c) is None
    assert tree.prev_child(b) == a
    assert tree.prev_child(a) is None
    assert tree.next_child(tree.root_id) is None


def test_swap_node_within_bounds() -> None:
    tree = make_tree("a", "b")
    a, b = tree.node(tree.root_id).children

    assert tree.swap_node(a, 1) is True
    assert tree.node(tree.root_id).children == [b, a]
    assert tree.swap_node(a, 1) is False
    assert tree.swap_node(tree.root_id, -1) is False


def test_cut_and_reparent() -> None:
    tree = make_tree("a", "b")
    a, b = tree.node(tree.root_id).children
    child = tree.add_node("child", a)

    tree.cut_node(child)
    assert tree.node(a).children == []
    assert tree.node(child).parent == ROOT_PARENT_ID

    tree.reparent_node(child, tree.root_id, next_to=b, before=True)
    assert tree.node(tree.root_id).children == [a, child, b]
    assert tree.node(child).parent == tree.root_id

    tree.reparent_node(b, a)
    assert tree.node(a).children == [b]


def test_reparent_under_own_descendant_fails() -> None:
    tree = make_tree("a")
    (a,) = tree.node(tree.root_id).children
    inner = tree.add_node("inner", a)

    with pytest.raises(OutlineError):
        tree.reparent_node(a, inner)


def test_clone_node_copies_subtree() -> None:
    tree = make_tree("a", "b")
    a, b = tree.node(tree.root_id).children
    tree.add_node("a1", a)
    tree.add_node("a2", a)

    clone = tree.clone_node(a, tree.root_id, after=b)

    assert clone not in (a, b)
    assert children_text(tree, tree.root_id) == ["a", "b", "a"]
    assert children_text(tree, clone) == ["a1", "a2"]
    assert tree.node(clone).children != tree.node(a).children


def test_delete_node_removes_subtree() -> None:
    tree = make_tree("a", "b")
    a, _ = tree.node(tree.root_id).children
    grandchild = tree.add_node("a1", a)

    assert tree.delete_node(a) == "a"
    assert a not in tree
    assert grandchild not in tree
    assert children_text(tree, tree.root_id) == ["b"]
    assert tree.delete_node(tree.root_id) is None


def test_unknown_node_raises_outline_error() -> None:
    tree = make_tree()

    with pytest.raises(KeyError) as excinfo:
        tree.node(42)

    assert isinstance(excinfo.value, OutlineError)
    assert excinfo.value.node_id == 42


def test_to_markdown() -> None:
    tree = make_tree("a", "b")
    a, b = tree.node(tree.root_id).children
    tree.add_node("a1", a)
    tree.node(b).struckout = True

    assert tree.to_markdown() == "- root\n  - a\n    - a1\n  - ~~b~~\n"


def test_presenter_inserts_siblings_and_children() -> None:
    presenter = OutlinePresenter(make_tree("a"))
    tree = presenter.model
    root = tree.root_id
    (a,) = tree.node(root).children

    sibling = presenter.insert_node(a)
    assert tree.node(root).children == [a, sibling]
    assert tree.node(sibling).text == ""

    child = presenter.insert_node(root)
    assert tree.node(root).children[-1] == child

    assert presenter.insert_node_in_parent(root) is None
    nested = presenter.insert_node_as_child(a)
    assert tree.node(a).children == [nested]


def test_presenter_delete_copy_put() -> None:
    snips = SnipStack()
    presenter = OutlinePresenter(make_tree("a", "b"), snips=snips)
    tree = presenter.model
    a, b = tree.node(tree.root_id).children

    assert presenter.delete_node(a) == "a"
    assert snips.peek() == "a"

    put = presenter.put_node(b, consume=False)
    assert put is not None
    assert tree.node(put).text == "a"
    assert len(snips) == 1

    presenter.copy_node(b)
    presenter.put_node(b, consume=True)
    assert children_text(tree, b) == ["a", "b"]
    assert snips.snapshot() == ("a",)

    assert presenter.delete_node(tree.root_id) is None


def test_presenter_text_snips_and_root() -> None:
    presenter = OutlinePresenter(make_tree("a"))
    (a,) = presenter.model.node(presenter.model.root_id).children

    presenter.copy_str("text")
    assert presenter.peek_snip_str() == "text"
    assert presenter.pop_snip_str() == "text"
    assert presenter.pop_snip_str() is None

    presenter.update_node_text(a, "renamed")
    assert presenter.model.node(a).text == "renamed"

    presenter.set_current_root(a)
    assert presenter.current_root == a
    presenter.delete_node(a)
    assert presenter.current_root == presenter.model.root_id


def test_presenter_toggles_struckout() -> None:
    tree = make_tree("alpha")
    presenter = OutlinePresenter(tree)
    (alpha,) = tree.node(tree.root_id).children

    assert presenter.toggle_struckout(alpha) is True
    assert "~~alpha~~" in tree.to_markdown()
    assert presenter.toggle_struckout(alpha) is False
    assert "~~" not in tree.to_markdown()
