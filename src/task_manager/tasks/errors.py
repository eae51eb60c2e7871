# tasks/errors.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldViolation:
    property: str
    error: str


class TaskManagerError(Exception):
    """Base class for errors the API turns into a client response."""


class TaskValidationError(TaskManagerError):
    def __init__(self, violations: list[FieldViolation]) -> None:
        super().__init__("Validation failed")
        self.violations = list(violations)


class TaskNotFoundError(TaskManagerError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id
