# tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from .task_models import Task, TaskPriority, TaskStatistics, as_utc, utcnow

logger = logging.getLogger(__name__)

# Marks a keyword argument as "not provided" so that None can mean "clear it".
UNSET: Any = object()

# SQLite INTEGER is a signed 64-bit value; larger ids cannot exist in the table.
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


def _valid_id(task_id: int) -> bool:
    return _ID_MIN <= int(task_id) <= _ID_MAX


def _dt_to_db(value: datetime | None) -> str | None:
    # Fixed width, always UTC: lexical order == chronological order.
    if value is None:
        return None
    return as_utc(value).isoformat(timespec="microseconds")


def _dt_from_db(raw: str | None) -> datetime | None:
    if not raw:
        return None
    return as_utc(datetime.fromisoformat(raw))


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection, so the store can be shared
      by the request worker threads
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self.created_schema = self._ensure_schema()
        logger.info(
            "TaskStore ready db=%s total=%s new=%s",
            self._db_path,
            self.count_tasks(),
            self.created_schema,
        )

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> bool:
        """Create/upgrade the schema. Returns True if the table did not exist before."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute("SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'tasks'")
            existed = cur.fetchone() is not None

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    priority TEXT NOT NULL DEFAULT 'Medium',
                    due_date TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
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

            add_col("description", "TEXT")
            add_col("is_completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("priority", "TEXT NOT NULL DEFAULT 'Medium'")
            add_col("due_date", "TEXT")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_is_completed ON tasks(is_completed)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_priority ON tasks(priority)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)")

            conn.commit()
            return not existed
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        created_at = _dt_from_db(row["created_at"]) or utcnow()
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            description=row["description"],
            is_completed=bool(row["is_completed"]),
            priority=TaskPriority.from_db(row["priority"]),
            due_date=_dt_from_db(row["due_date"]),
            created_at=created_at,
            updated_at=_dt_from_db(row["updated_at"]) or created_at,
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def add_task(
        self,
        *,
        title: str,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
        is_completed: bool = False,
        now: datetime | None = None,
    ) -> int:
        if not title or not title.strip():
            raise ValueError("title is required")

        now_s = _dt_to_db(now or utcnow())

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO tasks(
                    title, description, is_completed, priority,
                    due_date, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    title,
                    description,
                    int(is_completed),
                    priority.value,
                    _dt_to_db(due_date),
                    now_s,
                    now_s,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug(
                "Task added id=%s priority=%s due_date=%s",
                task_id,
                priority.value,
                due_date,
            )
            return task_id
        finally:
            conn.close()

    def get_task(self, task_id: int) -> Task | None:
        if not _valid_id(task_id):
            return None
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def list_tasks(
        self,
        *,
        is_completed: bool | None = None,
        priority: TaskPriority | None = None,
    ) -> list[Task]:
        """All tasks matching the optional filters, newest first."""
        where: list[str] = []
        params: list[Any] = []

        if is_completed is not None:
            where.append("is_completed = ?")
            params.append(int(is_completed))

        if priority is not None:
            where.append("priority = ?")
            params.append(priority.value)

        sql = "SELECT * FROM tasks"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, id DESC"

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(sql, params)
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def update_task_fields(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: Any = UNSET,
        is_completed: bool | None = None,
        priority: TaskPriority | None = None,
        due_date: Any = UNSET,
        now: datetime | None = None,
    ) -> bool:
        """
        Overwrite the given columns and refresh updated_at.

        `description` and `due_date` may be cleared by passing None explicitly.
        Returns False if no row has this id.
        """
        if not _valid_id(task_id):
            return False

        fields: list[str] = []
        params: list[Any] = []

        if title is not None:
            fields.append("title = ?")
            params.append(title)

        if description is not UNSET:
            fields.append("description = ?")
            params.append(description)

        if is_completed is not None:
            fields.append("is_completed = ?")
            params.append(int(is_completed))

        if priority is not None:
            fields.append("priority = ?")
            params.append(priority.value)

        if due_date is not UNSET:
            fields.append("due_date = ?")
            params.append(_dt_to_db(due_date))

        fields.append("updated_at = ?")
        params.append(_dt_to_db(now or utcnow()))
        params.append(int(task_id))

        sql = f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?"

        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            return cur.rowcount == 1
        finally:
            conn.close()

    def delete_task(self, task_id: int) -> bool:
        if not _valid_id(task_id):
            return False
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            return cur.rowcount == 1
        finally:
            conn.close()

    def task_statistics(self, *, now: datetime | None = None) -> TaskStatistics:
        """
        Aggregate counts over the whole table.

        Overdue = not completed, has a due date, and the due date is before `now`
        (an instant, not a calendar date).
        """
        now_s = _dt_to_db(now or utcnow())

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT COUNT(*) AS total,
                       COALESCE(SUM(is_completed), 0) AS completed,
                       COALESCE(SUM(
                           CASE WHEN is_completed = 0
                                 AND due_date IS NOT NULL
                                 AND due_date < ?
                                THEN 1 ELSE 0 END
                       ), 0) AS overdue
                FROM tasks
                """,
                (now_s,),
            )
            totals = cur.fetchone()

            cur.execute("SELECT priority, COUNT(*) AS n FROM tasks GROUP BY priority")
            by_priority: dict[TaskPriority, int] = {}
            for row in cur.fetchall():
                prio = TaskPriority.from_db(row["priority"])
                by_priority[prio] = by_priority.get(prio, 0) + int(row["n"])
        finally:
            conn.close()

        return TaskStatistics(
            total_tasks=int(totals["total"]),
            completed_tasks=int(totals["completed"]),
            overdue_tasks=int(totals["overdue"]),
            tasks_by_priority={
                p.value: n for p, n in sorted(by_priority.items(), key=lambda kv: kv[0].ordinal)
            },
        )

    def seed_demo_tasks(self, *, now: datetime | None = None) -> list[int]:
        """Insert the three example tasks shipped with a fresh database."""
        now = now or utcnow()
        ids = [
            self.add_task(
                title="Setup Development Environment",
                description="Install necessary tools and configure the development environment",
                priority=TaskPriority.HIGH,
                is_completed=True,
                now=now,
            ),
            self.add_task(
                title="Design API Architecture",
                description="Plan and design the REST API structure and endpoints",
                priority=TaskPriority.HIGH,
                is_completed=True,
                now=now,
            ),
            self.add_task(
                title="Implement CRUD Operations",
                description="Create endpoints for Create, Read, Update, and Delete operations",
                priority=TaskPriority.MEDIUM,
                due_date=now + timedelta(days=7),
                now=now,
            ),
        ]
        logger.info("Seeded %d demo tasks into %s", len(ids), self._db_path)
        return ids
