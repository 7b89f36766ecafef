# tests/test_commands.py

from __future__ import annotations

from tasklist.cli.commands import CommandRegistry
from tasklist.cli.commands import registry as command_registry


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    notes: list[str] = []
    assert reg.handle(state, "/a x y") == "h2:x,y"
    assert reg.handle(state, "/BEE", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_edit_delete_by_row(state) -> None:
    assert command_registry.handle(state, "/add Buy milk") == "Added: Buy milk"
    assert command_registry.handle(state, "/add Walk dog") == "Added: Walk dog"

    assert command_registry.handle(state, "/edit 1 Buy oat milk") == "Renamed: Buy milk -> Buy oat milk"
    assert command_registry.handle(state, "/delete 2") == "Deleted: Walk dog"

    assert [t.title for t in state.task_store.fetch_all()] == ["Buy oat milk"]
    listing = command_registry.handle(state, "/list") or ""
    assert "1. Buy oat milk" in listing


def test_row_commands_reject_bad_rows(state) -> None:
    command_registry.handle(state, "/add only one")
    assert command_registry.handle(state, "/delete 5") == "No task at row 5."
    assert command_registry.handle(state, "/delete zero") == "No task at row zero."
    assert command_registry.handle(state, "/delete 0") == "No task at row 0."
    assert command_registry.handle(state, "/edit 1").startswith("Usage")
    assert state.task_store.count_tasks() == 1


def test_search_rows_follow_filtered_view(state) -> None:
    for title in ["Buy milk", "Walk dog", "Walk cat"]:
        command_registry.handle(state, f"/add {title}")

    assert command_registry.handle(state, "/search WALK") == '2 match(es) for "WALK".'
    # Row 1 of the filtered view is "Walk cat" (sorted by title).
    assert command_registry.handle(state, "/delete 1") == "Deleted: Walk cat"

    assert command_registry.handle(state, "/search") == "Search closed."
    assert [t.title for t in state.task_list.visible_tasks] == ["Buy milk", "Walk dog"]


def test_clear_emits_progress_and_empties_store(state) -> None:
    command_registry.handle(state, "/add a")
    command_registry.handle(state, "/add b")
    notes: list[str] = []

    assert command_registry.handle(state, "/clear", emit=notes.append) == "Deleted 2 task(s)."
    assert notes == ["Deleting 2 task(s)..."]
    assert state.task_store.fetch_all() == []


def test_status_reports_search_state(state) -> None:
    command_registry.handle(state, "/add a")
    command_registry.handle(state, "/search a")
    status = command_registry.handle(state, "/status") or ""
    assert '- Search: "a"' in status
    assert "- Tasks: 1" in status


def test_titles_and_search_text_keep_inner_spacing(state) -> None:
    assert command_registry.handle(state, "/add Buy  oat   milk") == "Added: Buy  oat   milk"
    assert command_registry.handle(state, "/edit 1   Buy  soy milk") == "Renamed: Buy  oat   milk -> Buy  soy milk"

    command_registry.handle(state, "/search y  s")
    assert state.task_list.search_term == "y  s"
    assert [t.title for t in state.task_list.visible_tasks] == ["Buy  soy milk"]

    command_registry.handle(state, "/search y s")
    assert state.task_list.visible_tasks == []
