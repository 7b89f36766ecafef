# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the one TaskStore for this process and hands it to the list model.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import ListObserver
from ..core.state import AppState
from ..core.task_list import TaskListModel
from ..tasks.task_store import StoreError, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, on_change: ListObserver | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises StoreError when the database cannot be opened; callers treat that as fatal.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.tasks_db_path, timeout=getattr(settings, "db_timeout", 30.0))
    task_list = TaskListModel(store, on_change=on_change)

    if getattr(settings, "load_on_start", True):
        try:
            task_list.load_all()
        except StoreError:
            logger.exception("Initial load from %s failed; starting with an empty list.", store.db_path)

    return AppState(settings=settings, task_store=store, task_list=task_list)
