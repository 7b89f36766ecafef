# tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterator
from pathlib import Path

from .task_models import Task, title_matches

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """The task database could not be read or written."""


class TaskNotFoundError(StoreError):
    """An update/delete referred to a task id that is not persisted."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task id={task_id} not found")
        self.task_id = task_id


def _sql_title_matches(title: str | None, term: str | None) -> int:
    return 1 if title_matches(title, term or "") else 0


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Durability:
    - every mutating method commits before it returns
    - each method opens its own SQLite connection, nothing is held between calls
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", *, timeout: float = 30.0) -> None:
        self._db_path = Path(db_path)
        self._timeout = float(timeout)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"cannot create data dir for {self._db_path}: {e}") from e
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except StoreError:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=self._timeout)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        conn.create_function("title_matches", 2, _sql_title_matches, deterministic=True)

    @contextlib.contextmanager
    def _conn(self, op: str) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation; sqlite errors surface as StoreError."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StoreError(f"{op}: cannot open {self._db_path}: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            logger.debug("TaskStore %s failed db=%s", op, self._db_path, exc_info=True)
            raise StoreError(f"{op}: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def save(conn: sqlite3.Connection) -> None:
        """Commit pending changes; a no-op when nothing is pending."""
        if conn.in_transaction:
            conn.commit()

    def _ensure_schema(self) -> None:
        with self._conn("ensure_schema") as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("title", "TEXT NOT NULL DEFAULT ''")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            self.save(conn)

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._conn("count_tasks") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def get_task(self, task_id: int) -> Task | None:
        with self._conn("get_task") as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
            return self._row_to_task(row) if row else None

    def fetch_all(self) -> list[Task]:
        """Every task in insertion order."""
        with self._conn("fetch_all") as conn:
            rows = conn.execute("SELECT * FROM tasks ORDER BY id ASC").fetchall()
            return [self._row_to_task(r) for r in rows]

    def fetch_filtered(self, search_term: str) -> list[Task]:
        """
        Tasks whose title contains `search_term`, ignoring case, sorted by title.

        Ties keep insertion order. An empty term matches every task.
        """
        with self._conn("fetch_filtered") as conn:
            rows = conn.execute(
                """
                SELECT *
                FROM tasks
                WHERE title_matches(title, ?)
                ORDER BY title ASC, id ASC
                """,
                (search_term or "",),
            ).fetchall()
            return [self._row_to_task(r) for r in rows]

    def create(self, title: str) -> Task:
        """Insert a task; the caller has already validated `title`."""
        now = time.time()
        with self._conn("create") as conn:
            cur = conn.execute(
                "INSERT INTO tasks(title, created_at, updated_at) VALUES (?, ?, ?)",
                (title, now, now),
            )
            self.save(conn)
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreError("SQLite did not return lastrowid for tasks insert")
            task = Task(id=int(rowid), title=title, created_at=now, updated_at=now)
        logger.debug("Task created id=%s", task.id)
        return task

    def update(self, task: Task, new_title: str) -> None:
        """Rename `task` in the database, then on the passed object."""
        now = time.time()
        with self._conn("update") as conn:
            cur = conn.execute(
                "UPDATE tasks SET title = ?, updated_at = ? WHERE id = ?",
                (new_title, now, int(task.id)),
            )
            if cur.rowcount == 0:
                conn.rollback()
                raise TaskNotFoundError(task.id)
            self.save(conn)
        task.title = new_title
        task.updated_at = now
        logger.debug("Task updated id=%s", task.id)

    def delete(self, task: Task) -> None:
        with self._conn("delete") as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task.id),))
            if cur.rowcount == 0:
                conn.rollback()
                raise TaskNotFoundError(task.id)
            self.save(conn)
        logger.debug("Task deleted id=%s", task.id)

    def delete_all(self) -> int:
        """Remove every task in one statement; returns how many rows went."""
        with self._conn("delete_all") as conn:
            cur = conn.execute("DELETE FROM tasks")
            removed = max(0, int(cur.rowcount))
            self.save(conn)
        logger.info("Deleted all tasks count=%s", removed)
        return removed
