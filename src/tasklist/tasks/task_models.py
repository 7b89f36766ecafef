# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, eq=False)
class Task:
    """
    A persisted task.

    Identity is the store-assigned id: two Task objects loaded separately
    compare equal when they refer to the same row.
    """

    id: int
    title: str
    created_at: float = 0.0
    updated_at: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def title_matches(title: str | None, term: str) -> bool:
    """Case-insensitive substring match of `term` within `title`."""
    if title is None:
        return False
    return term.casefold() in title.casefold()


def title_sort_key(task: Task) -> tuple[str, int]:
    """Ascending by title, ties by id (insertion order)."""
    return task.title, task.id
