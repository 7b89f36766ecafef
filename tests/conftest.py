# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.core.task_list import TaskListModel
from tasklist.tasks.task_store import TaskStore

from .fakes import ChangeRecorder


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        log_dir=tmp_path,
        db_timeout=5.0,
        load_on_start=True,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path, timeout=settings.db_timeout)


@pytest.fixture()
def changes() -> ChangeRecorder:
    return ChangeRecorder()


@pytest.fixture()
def task_list(store: TaskStore, changes: ChangeRecorder) -> TaskListModel:
    """
    List model on a real SQLite store: the store/model contract is what we test.
    """
    model = TaskListModel(store, on_change=changes)
    model.load_all()
    changes.clear()
    return model


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, task_list: TaskListModel) -> AppState:
    return AppState(settings=settings, task_store=store, task_list=task_list)
