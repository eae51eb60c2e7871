# tasks/task_service.py

"""
Task domain logic.

The service turns validated request payloads into store calls and maps stored
tasks to response models. Payload validation happens upstream (see
`validators.py`); "not found" is reported by returning None/False, never by
raising, so callers decide how to surface it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..core.ports import TaskRepo
from .task_models import Task, TaskPriority, as_utc, utcnow
from .task_schemas import (
    TaskCreateRequest,
    TaskResponse,
    TaskStatisticsResponse,
    TaskUpdateRequest,
)

logger = logging.getLogger(__name__)


def to_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        is_completed=task.is_completed,
        priority=task.priority,
        due_date=task.due_date,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


class TaskService:
    def __init__(self, repo: TaskRepo, *, clock: Callable[[], datetime] = utcnow) -> None:
        self._repo = repo
        self._clock = clock

    def _now(self) -> datetime:
        return as_utc(self._clock())

    def list_tasks(
        self,
        *,
        is_completed: bool | None = None,
        priority: TaskPriority | None = None,
    ) -> list[TaskResponse]:
        logger.info(
            "Fetching all tasks with filters is_completed=%s priority=%s",
            is_completed,
            priority,
        )
        tasks = self._repo.list_tasks(is_completed=is_completed, priority=priority)
        return [to_response(t) for t in tasks]

    def get_task(self, task_id: int) -> TaskResponse | None:
        logger.info("Fetching task id=%s", task_id)
        task = self._repo.get_task(task_id)
        return to_response(task) if task is not None else None

    def create_task(self, payload: TaskCreateRequest) -> TaskResponse:
        logger.info("Creating new task title=%r", payload.title)

        priority = TaskPriority.MEDIUM
        if payload.priority is not None:
            priority = TaskPriority.parse(payload.priority) or TaskPriority.MEDIUM

        task_id = self._repo.add_task(
            title=payload.title or "",
            description=payload.description,
            priority=priority,
            due_date=as_utc(payload.due_date) if payload.due_date is not None else None,
            is_completed=False,
            now=self._now(),
        )
        task = self._repo.get_task(task_id)
        if task is None:
            raise RuntimeError(f"Task id={task_id} vanished right after insert")

        logger.info("Task created id=%s", task_id)
        return to_response(task)

    def update_task(self, task_id: int, payload: TaskUpdateRequest) -> TaskResponse | None:
        logger.info("Updating task id=%s fields=%s", task_id, sorted(payload.model_fields_set))

        if self._repo.get_task(task_id) is None:
            logger.warning("Task id=%s not found for update", task_id)
            return None

        # Only fields present in the payload are overwritten.
        changes: dict[str, Any] = {}
        if payload.is_set("title"):
            changes["title"] = payload.title
        if payload.is_set("description"):
            changes["description"] = payload.description
        if payload.is_set("is_completed"):
            changes["is_completed"] = payload.is_completed
        if payload.is_set("priority"):
            changes["priority"] = TaskPriority.parse(payload.priority)
        if payload.is_set("due_date"):
            changes["due_date"] = as_utc(payload.due_date) if payload.due_date is not None else None

        if not self._repo.update_task_fields(task_id, now=self._now(), **changes):
            logger.warning("Task id=%s disappeared during update", task_id)
            return None

        logger.info("Task id=%s updated", task_id)
        return self.get_task(task_id)

    def delete_task(self, task_id: int) -> bool:
        logger.info("Deleting task id=%s", task_id)

        if self._repo.get_task(task_id) is None:
            logger.warning("Task id=%s not found for deletion", task_id)
            return False

        deleted = self._repo.delete_task(task_id)
        if deleted:
            logger.info("Task id=%s deleted", task_id)
        return deleted

    def complete_task(self, task_id: int) -> TaskResponse | None:
        logger.info("Marking task id=%s as completed", task_id)

        if self._repo.get_task(task_id) is None:
            logger.warning("Task id=%s not found", task_id)
            return None

        if not self._repo.update_task_fields(task_id, is_completed=True, now=self._now()):
            return None

        logger.info("Task id=%s marked as completed", task_id)
        return self.get_task(task_id)

    def get_statistics(self) -> TaskStatisticsResponse:
        logger.info("Calculating task statistics")
        stats = self._repo.task_statistics(now=self._now())
        return TaskStatisticsResponse(
            total_tasks=stats.total_tasks,
            completed_tasks=stats.completed_tasks,
            pending_tasks=stats.pending_tasks,
            overdue_tasks=stats.overdue_tasks,
            tasks_by_priority=dict(stats.tasks_by_priority),
        )
