# core/ports.py

"""
Ports (interfaces) used by the core.

The list model depends on Protocols instead of the concrete SQLite store,
and talks back to the presentation layer through plain ListChange signals.
This keeps the store swappable and makes testing easier.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from ..tasks.task_models import Task


class ChangeKind(StrEnum):
    RELOAD = "reload"  # whole visible list changed
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class ListChange:
    """Refresh signal for the presentation layer. `index` is None for RELOAD."""

    kind: ChangeKind
    index: int | None = None

    @classmethod
    def reload(cls) -> ListChange:
        return cls(ChangeKind.RELOAD)


ListObserver = Callable[[ListChange], None]


class TaskRepo(Protocol):
    """What the list model needs from storage."""

    def fetch_all(self) -> list[Task]: ...
    def fetch_filtered(self, search_term: str) -> list[Task]: ...
    def create(self, title: str) -> Task: ...
    def update(self, task: Task, new_title: str) -> None: ...
    def delete(self, task: Task) -> None: ...
    def delete_all(self) -> int: ...
