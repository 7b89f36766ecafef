# tests/test_console.py

from __future__ import annotations

from tasklist.cli.bootstrap import create_initial_state
from tasklist.connectors.console_connector import ConsoleRenderer, handle_line
from tasklist.core.task_list import TaskListModel

from .fakes import FlakyTaskStore


def test_plain_text_adds_a_task(state) -> None:
    assert handle_line(state, "  Buy milk ") == "Added: Buy milk"
    assert handle_line(state, "   ") is None
    assert [t.title for t in state.task_store.fetch_all()] == ["Buy milk"]


def test_store_errors_become_replies(state) -> None:
    state.task_list = TaskListModel(FlakyTaskStore(state.task_store, failing={"create"}))

    reply = handle_line(state, "Buy milk") or ""

    assert reply.startswith("[store]")
    assert state.task_store.count_tasks() == 0


def test_renderer_draws_rows_and_reloads(state) -> None:
    lines: list[str] = []
    renderer = ConsoleRenderer(state, out=lines.append)
    state.task_list.set_observer(renderer)

    state.task_list.add_task("Buy milk")
    state.task_list.add_task("Walk dog")
    state.task_list.update_task(state.task_list.task_at(1), "Walk the dog")
    state.task_list.delete_task(state.task_list.task_at(0))
    state.task_list.search("walk")

    assert lines[0] == "+  1. Buy milk"
    assert lines[1] == "+  2. Walk dog"
    assert lines[2] == "~  2. Walk the dog"
    assert lines[3] == "  - row 1 removed"
    assert lines[4] == '-- tasks matching "walk" --\n  1. Walk the dog'


def test_bootstrap_loads_existing_tasks(settings) -> None:
    first = create_initial_state(settings=settings)
    first.task_list.add_task("Survives restart")

    second = create_initial_state(settings=settings)
    assert [t.title for t in second.task_list.all_tasks] == ["Survives restart"]
    assert second.task_store.db_path == settings.tasks_db_path
