from __future__ import annotations

from typing import Optional

import pytest

from outliner_engine.commands import Recognition
from outliner_engine.errors import InvalidCommand, UnknownCommand
from outliner_engine.modes import (
    EditorState,
    KeyInput,
    ModeBus,
    ModeKind,
    ModeManager,
    ModeResult,
)
from outliner_engine.outline import OutlinePresenter, Tree
from outliner_engine.runtime import EngineSettings


def make_manager(
    *texts: str, settings: Optional[EngineSettings] = None, bus: Optional[ModeBus] = None
) -> ModeManager:
    tree = Tree.with_root("root")
    for text in texts:
        tree.add_node(text, tree.root_id)
    state = EditorState(OutlinePresenter(tree), settings=settings)
    return ModeManager(state, bus=bus)


def press(manager: ModeManager, *keys: str) -> ModeResult:
    result = ModeResult(consumed=False)
    for key in keys:
        result = manager.handle_key(KeyInput(key=key))
    return result


def child_ids(manager: ModeManager) -> list[int]:
    tree = manager.state.presenter.model
    return list(tree.node(tree.root_id).children)


def node_text(manager: ModeManager, node_id: int) -> str:
    return manager.state.presenter.model.node(node_id).text


def test_manager_starts_in_tree_mode_on_root() -> None:
    manager = make_manager("alpha")

    assert manager.active_kind is ModeKind.TREE
    assert manager.state.cur_node == manager.state.presenter.model.root_id
    assert not manager.state.editing


def test_tree_navigation() -> None:
    manager = make_manager("alpha", "beta", "gamma")
    alpha, beta, _ = child_ids(manager)

    press(manager, "j")
    assert manager.state.cur_node == alpha
    press(manager, "j")
    assert manager.state.cur_node == beta
    press(manager, "k", "k")
    assert manager.state.cur_node == manager.state.presenter.model.root_id

    press(manager, "l")
    assert manager.state.cur_node == alpha
    press(manager, "h")
    assert manager.state.cur_node == manager.state.presenter.model.root_id


def test_unbound_tree_key_is_not_consumed() -> None:
    manager = make_manager()

    assert press(manager, "q").consumed is False


def test_swap_with_ctrl_keys() -> None:
    manager = make_manager("alpha", "beta")
    alpha, beta = child_ids(manager)
    press(manager, "j")

    manager.handle_key(KeyInput(key="j", modifiers=("ctrl",)))
    assert child_ids(manager) == [beta, alpha]

    manager.handle_key(KeyInput(key="k", modifiers=("ctrl",)))
    assert child_ids(manager) == [alpha, beta]


def test_fold_stops_descending() -> None:
    manager = make_manager("alpha")
    (alpha,) = child_ids(manager)

    result = press(manager, "z")
    assert result.status == "ok"
    press(manager, "j")
    assert manager.state.cur_node == manager.state.presenter.model.root_id

    press(manager, "z", "j")
    assert manager.state.cur_node == alpha
    assert press(manager, "z").status == "noop"


def test_edit_commands_commit_on_escape() -> None:
    manager = make_manager("alpha beta")
    (alpha,) = child_ids(manager)
    press(manager, "j")

    result = press(manager, "e")
    assert result.switch_to is ModeKind.EDIT
    assert manager.active_kind is ModeKind.EDIT
    assert manager.state.edit is not None
    assert manager.state.edit.cursor == 0

    press(manager, "d", "w")
    assert manager.state.edit.buffer.text == "beta"

    press(manager, "ESC")
    assert manager.active_kind is ModeKind.TREE
    assert not manager.state.editing
    assert node_text(manager, alpha) == "beta"


def test_insert_appends_and_escape_steps_back() -> None:
    manager = make_manager("alpha")
    (alpha,) = child_ids(manager)
    press(manager, "j", "i")
    assert manager.active_kind is ModeKind.INSERT

    press(manager, "!", "ENTER", "x", "BACKSPACE", "y")
    assert manager.state.edit is not None
    assert manager.state.edit.buffer.text == "alpha!\ny"

    press(manager, "ESC")
    assert manager.active_kind is ModeKind.EDIT
    assert manager.state.edit.cursor == 7

    press(manager, "ESC")
    assert manager.active_kind is ModeKind.TREE
    assert node_text(manager, alpha) == "alpha!\ny"


def test_change_command_switches_to_insert() -> None:
    manager = make_manager("old text")
    press(manager, "j", "e")

    result = press(manager, "c", "w")

    assert result.switch_to is ModeKind.INSERT
    assert manager.active_kind is ModeKind.INSERT
    press(manager, "n", "e", "w", " ")
    assert manager.state.edit is not None
    assert manager.state.edit.buffer.text == "new text"


def test_new_sibling_and_child_nodes() -> None:
    manager = make_manager("alpha")
    (alpha,) = child_ids(manager)
    press(manager, "j", "o", "x", "ESC", "ESC")

    ids = child_ids(manager)
    assert len(ids) == 2
    assert node_text(manager, ids[1]) == "x"
    assert manager.state.cur_node == ids[1]

    press(manager, "O", "y", "ESC", "ESC")
    tree = manager.state.presenter.model
    assert [tree.node(child).text for child in tree.node(ids[1]).children] == ["y"]
    assert alpha in child_ids(manager)


def test_delete_then_put_node() -> None:
    manager = make_manager("alpha", "beta")
    alpha, beta = child_ids(manager)
    press(manager, "j")

    press(manager, "x")
    assert child_ids(manager) == [beta]
    assert manager.state.cur_node == beta

    press(manager, "p")
    tree = manager.state.presenter.model
    assert [tree.node(child).text for child in tree.node(beta).children] == ["alpha"]
    assert press(manager, "p").status == "noop"


def test_text_and_node_snips_are_shared() -> None:
    manager = make_manager("alpha", "beta")
    press(manager, "j", "y", "j", "e", "P")

    assert manager.state.edit is not None
    assert manager.state.edit.buffer.text == "alphabeta"


def test_pending_command_arms_timeout() -> None:
    settings = EngineSettings(pending_timeout_ms=250)
    manager = make_manager("alpha", settings=settings)
    press(manager, "j", "e")

    result = press(manager, "d")

    assert result.status == "pending"
    assert result.timeout_ms == 250
    assert manager.has_pending_timeout(ModeKind.EDIT)


def test_forced_timeout_flushes_pending_command() -> None:
    manager = make_manager("alpha")
    press(manager, "j", "e", "d")

    results = manager.force_timeout(ModeKind.EDIT)

    assert results[ModeKind.EDIT].status == "command_error"
    assert isinstance(manager.state.last_error, InvalidCommand)
    assert not manager.has_pending_timeout()
    assert manager.active_kind is ModeKind.EDIT


def test_escape_drops_pending_command_first() -> None:
    manager = make_manager("alpha")
    press(manager, "j", "e", "d")

    result = press(manager, "ESC")

    assert result.status == "cancelled"
    assert manager.active_kind is ModeKind.EDIT
    assert press(manager, "x").status == "ok"
    assert manager.state.edit is not None
    assert manager.state.edit.buffer.text == "lpha"


def test_parse_errors_are_reported_not_raised() -> None:
    manager = make_manager("alpha")
    press(manager, "j", "e")

    result = press(manager, "q")

    assert result.status == "command_error"
    assert "unknown command" in (result.message or "")
    assert isinstance(manager.state.last_error, UnknownCommand)


def test_unsupported_motion_is_reported() -> None:
    manager = make_manager("alpha")
    press(manager, "j", "e")

    result = press(manager, "n")

    assert result.status == "unsupported"
    assert manager.active_kind is ModeKind.EDIT


def test_mode_switch_is_published_on_bus() -> None:
    bus = ModeBus()
    seen: list[object] = []
    bus.subscribe("mode.switch", seen.append)
    manager = make_manager("alpha", bus=bus)

    press(manager, "j", "e", "ESC")

    assert seen == [ModeKind.EDIT, ModeKind.TREE]


def test_editing_twice_is_rejected() -> None:
    state = EditorState(OutlinePresenter(Tree.with_root("root")))
    state.begin_editing()

    with pytest.raises(RuntimeError):
        state.begin_editing()
    assert state.finish_editing() == "root"
    with pytest.raises(RuntimeError):
        state.finish_editing()


def test_recognition_without_a_command_is_a_noop(monkeypatch: pytest.MonkeyPatch) -> None:
    manager = make_manager("alpha")
    press(manager, "j", "e")
    edit = manager.mode(ModeKind.EDIT)
    monkeypatch.setattr(
        edit.recognizer, "feed", lambda char: Recognition("command", keys=char)
    )

    result = press(manager, "x")

    assert result.status == "noop"
    assert manager.state.edit is not None
    assert manager.state.edit.buffer.text == "alpha"


def test_colon_opens_the_command_line() -> None:
    bus = ModeBus()
    seen: list[object] = []
    bus.subscribe("command.start", seen.append)
    manager = make_manager("alpha", bus=bus)

    result = press(manager, ":")

    assert result.switch_to is ModeKind.COMMAND
    assert manager.active_kind is ModeKind.COMMAND
    assert manager.state.command_line is not None
    assert seen == [None]


def test_command_line_zoom_and_unzoom() -> None:
    manager = make_manager("alpha")
    (alpha,) = child_ids(manager)
    press(manager, "j")

    result = press(manager, ":", "z", "o", "o", "m", "ENTER")

    assert result.status == "ok"
    assert manager.active_kind is ModeKind.TREE
    assert manager.state.command_line is None
    assert manager.state.presenter.current_root == alpha

    press(manager, ":", *"unzoom", "ENTER")
    assert manager.state.presenter.current_root == manager.state.presenter.model.root_id


def test_command_line_strike_toggles() -> None:
    manager = make_manager("alpha")
    (alpha,) = child_ids(manager)
    press(manager, "j")

    assert press(manager, ":", *"strike", "ENTER").message == "strike"
    assert manager.state.presenter.model.node(alpha).struckout
    assert press(manager, ":", *"strike", "ENTER").message == "unstrike"
    assert not manager.state.presenter.model.node(alpha).struckout


def test_command_line_markdown_is_published() -> None:
    bus = ModeBus()
    seen: list[object] = []
    bus.subscribe("command.markdown", seen.append)
    manager = make_manager("alpha", bus=bus)

    result = press(manager, ":", "m", "d", "ENTER")

    assert result.status == "command_markdown"
    assert len(seen) == 1
    assert "alpha" in str(seen[0])
    assert result.message == seen[0]


def test_unknown_command_line_is_reported() -> None:
    manager = make_manager("alpha")

    result = press(manager, ":", *"frob now", "ENTER")

    assert result.status == "command_error"
    assert isinstance(manager.state.last_error, UnknownCommand)
    assert manager.active_kind is ModeKind.TREE


def test_empty_command_line_returns_to_tree() -> None:
    manager = make_manager("alpha")

    result = press(manager, ":", "ENTER")

    assert result.status == "command_empty"
    assert manager.active_kind is ModeKind.TREE


def test_command_line_backspace_and_escape() -> None:
    manager = make_manager("alpha")
    press(manager, ":")

    assert press(manager, "BACKSPACE").status == "noop"
    press(manager, "z", "z", "BACKSPACE")
    line = manager.state.command_line
    assert line is not None
    assert line.buffer.text == "z"
    assert line.cursor == 1

    result = press(manager, "ESC")
    assert result.message == "command_cancel"
    assert manager.active_kind is ModeKind.TREE
    assert manager.state.command_line is None


def test_command_line_cannot_open_twice() -> None:
    state = EditorState(OutlinePresenter(Tree.with_root("root")))
    state.begin_command_edit()

    with pytest.raises(RuntimeError):
        state.begin_command_edit()
    state.abort_command_edit()
    with pytest.raises(RuntimeError):
        state.take_command()
