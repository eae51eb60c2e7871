# src/task_manager/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The service depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from datetime import datetime
from typing import Any, Protocol

from ..tasks.task_models import Task, TaskPriority, TaskStatistics


class TaskRepo(Protocol):
    """Durable task storage keyed by id (SQLite in production)."""

    def add_task(
            self,
            *,
            title: str,
            description: str | None = None,
            priority: TaskPriority = TaskPriority.MEDIUM,
            due_date: datetime | None = None,
            is_completed: bool = False,
            now: datetime | None = None,
    ) -> int: ...

    def get_task(self, task_id: int) -> Task | None: ...

    def list_tasks(
            self,
            *,
            is_completed: bool | None = None,
            priority: TaskPriority | None = None,
    ) -> list[Task]: ...

    def update_task_fields(
            self,
            task_id: int,
            *,
            title: str | None = None,
            description: Any = ...,
            is_completed: bool | None = None,
            priority: TaskPriority | None = None,
            due_date: Any = ...,
            now: datetime | None = None,
    ) -> bool: ...

    def delete_task(self, task_id: int) -> bool: ...

    def task_statistics(self, *, now: datetime | None = None) -> TaskStatistics: ...
