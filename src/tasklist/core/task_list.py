# core/task_list.py

"""
In-memory list state for the task screen.

TaskListModel is the single source of truth for what the presentation layer
renders. It owns two collections:

- all_tasks: every task in insertion order (mirrors the store)
- filtered_tasks: matches for the active search term, sorted by title

and decides which one is visible. Every mutation goes to the store first;
the in-memory lists change only after the store has committed, so a failed
write leaves the screen exactly as it was.
"""

from __future__ import annotations

import logging
import threading

from ..tasks.task_models import Task, title_matches, title_sort_key
from ..tasks.task_store import StoreError
from .ports import ChangeKind, ListChange, ListObserver, TaskRepo

logger = logging.getLogger(__name__)


class TaskListModel:
    def __init__(self, store: TaskRepo, *, on_change: ListObserver | None = None) -> None:
        self._store = store
        self._on_change = on_change
        self._lock = threading.RLock()

        self.all_tasks: list[Task] = []
        self.filtered_tasks: list[Task] = []
        self.search_active = False
        self.search_term = ""

    # ---- view state ----

    @property
    def is_filtering(self) -> bool:
        return self.search_active and self.search_term != ""

    @property
    def visible_tasks(self) -> list[Task]:
        return self.filtered_tasks if self.is_filtering else self.all_tasks

    def set_observer(self, on_change: ListObserver | None) -> None:
        self._on_change = on_change

    def task_at(self, index: int) -> Task:
        """Task shown at 0-based row `index`."""
        visible = self.visible_tasks
        if index < 0 or index >= len(visible):
            raise IndexError(f"no task at row {index}")
        return visible[index]

    def index_of(self, task: Task) -> int | None:
        return _index_by_id(self.visible_tasks, task.id)

    # ---- loading / searching ----

    def load_all(self) -> list[Task]:
        with self._lock:
            try:
                tasks = self._store.fetch_all()
            except StoreError:
                logger.warning("Loading tasks failed; keeping %d in memory.", len(self.all_tasks))
                raise
            self.all_tasks = tasks
            if self.is_filtering:
                self._refresh_filtered()
            logger.info("Loaded %d tasks.", len(tasks))
            self._emit(ListChange.reload())
            return tasks

    def search(self, term: str | None) -> None:
        """Forward the raw search-box text. Empty text turns filtering off."""
        term = term or ""
        with self._lock:
            if term == "":
                self.search_active = True
                self.search_term = ""
                self.filtered_tasks = []
                self._emit(ListChange.reload())
                return

            try:
                matches = self._store.fetch_filtered(term)
            except StoreError:
                logger.warning("Search failed term=%r; keeping previous view.", term)
                raise
            self.search_active = True
            self.search_term = term
            self.filtered_tasks = matches
            logger.debug("Search term=%r matches=%d", term, len(matches))
            self._emit(ListChange.reload())

    def end_search(self) -> None:
        with self._lock:
            was_filtering = self.is_filtering
            self.search_active = False
            self.search_term = ""
            self.filtered_tasks = []
            if was_filtering:
                self._emit(ListChange.reload())

    # ---- mutations ----

    def add_task(self, title: str) -> Task | None:
        """Create a task from user input. Blank input is ignored (returns None)."""
        clean = (title or "").strip()
        if not clean:
            return None

        with self._lock:
            try:
                task = self._store.create(clean)
            except StoreError:
                logger.warning("Creating task failed.")
                raise
            self.all_tasks.append(task)

            if self.is_filtering:
                self._refresh_filtered()
                self._emit(ListChange.reload())
            else:
                self._emit(ListChange(ChangeKind.INSERT, len(self.all_tasks) - 1))
            return task

    def update_task(self, existing: Task, new_title: str) -> bool:
        """Rename in place (no re-sort). Blank input is ignored (returns False)."""
        clean = (new_title or "").strip()
        if not clean:
            return False

        with self._lock:
            try:
                self._store.update(existing, clean)
            except StoreError:
                logger.warning("Updating task id=%s failed.", existing.id)
                raise

            for collection in (self.all_tasks, self.filtered_tasks):
                i = _index_by_id(collection, existing.id)
                if i is not None:
                    collection[i].title = existing.title
                    collection[i].updated_at = existing.updated_at

            if self.is_filtering:
                self._refresh_filtered()
                self._emit(ListChange.reload())
                return True

            row = _index_by_id(self.all_tasks, existing.id)
            if row is None:
                self._emit(ListChange.reload())
            else:
                self._emit(ListChange(ChangeKind.UPDATE, row))
            return True

    def delete_task(self, existing: Task) -> None:
        with self._lock:
            row = self.index_of(existing)
            try:
                self._store.delete(existing)
            except StoreError:
                logger.warning("Deleting task id=%s failed; list unchanged.", existing.id)
                raise

            _remove_by_id(self.all_tasks, existing.id)
            _remove_by_id(self.filtered_tasks, existing.id)
            if self.is_filtering:
                self._refresh_filtered()

            if row is None:
                self._emit(ListChange.reload())
            else:
                self._emit(ListChange(ChangeKind.DELETE, row))

    def delete_all_tasks(self) -> int:
        with self._lock:
            try:
                removed = self._store.delete_all()
            except StoreError:
                logger.warning("Deleting all tasks failed; list unchanged.")
                raise
            self.all_tasks = []
            self.filtered_tasks = []
            self._emit(ListChange.reload())
            return removed

    # ---- internals ----

    def _refresh_filtered(self) -> None:
        """Re-run the active search; on store failure, filter all_tasks in memory instead."""
        try:
            self.filtered_tasks = self._store.fetch_filtered(self.search_term)
        except StoreError:
            logger.warning(
                "Re-running search term=%r failed; filtering in memory.",
                self.search_term,
                exc_info=True,
            )
            self.filtered_tasks = sorted(
                (t for t in self.all_tasks if title_matches(t.title, self.search_term)),
                key=title_sort_key,
            )

    def _emit(self, change: ListChange) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(change)
        except Exception:
            logger.exception("List observer failed on %s.", change)


def _index_by_id(tasks: list[Task], task_id: int) -> int | None:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    return None


def _remove_by_id(tasks: list[Task], task_id: int) -> None:
    i = _index_by_id(tasks, task_id)
    if i is not None:
        del tasks[i]
