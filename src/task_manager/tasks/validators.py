# tasks/validators.py

"""
Field rules for create/update payloads.

Each validator returns every violation it finds, in field order, and never
touches the store. An empty list means the payload is valid.

Due dates are checked at date granularity in UTC: a due date of "today" is
accepted even when that moment has already passed.
"""

from __future__ import annotations

from datetime import date, datetime

from .errors import FieldViolation, TaskValidationError
from .task_models import TaskPriority, as_utc, utcnow
from .task_schemas import TaskCreateRequest, TaskUpdateRequest

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


def _check_title(title: str | None, *, required_message: str) -> list[FieldViolation]:
    if title is None or not title.strip():
        return [FieldViolation("Title", required_message)]
    if len(title) > TITLE_MAX_LENGTH:
        return [FieldViolation("Title", f"Title cannot exceed {TITLE_MAX_LENGTH} characters")]
    return []


def _check_description(description: str | None) -> list[FieldViolation]:
    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        return [
            FieldViolation(
                "Description",
                f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
            )
        ]
    return []


def _check_priority(raw: int | str | None) -> list[FieldViolation]:
    if TaskPriority.parse(raw) is None:
        return [FieldViolation("Priority", "Invalid priority value")]
    return []


def _check_due_date(due_date: datetime | None, today: date) -> list[FieldViolation]:
    if due_date is None:
        return []
    try:
        due_day = as_utc(due_date).date()
    except OverflowError:
        # e.g. 9999-12-31T23:00-05:00 has no UTC equivalent
        return [FieldViolation("DueDate", "Due date is out of range")]
    if due_day < today:
        return [FieldViolation("DueDate", "Due date cannot be in the past")]
    return []


def validate_create(payload: TaskCreateRequest, *, today: date | None = None) -> list[FieldViolation]:
    today = today or utcnow().date()
    violations: list[FieldViolation] = []

    violations += _check_title(payload.title, required_message="Title is required")
    violations += _check_description(payload.description)
    if payload.is_set("priority"):
        violations += _check_priority(payload.priority)
    violations += _check_due_date(payload.due_date, today)

    return violations


def validate_update(payload: TaskUpdateRequest, *, today: date | None = None) -> list[FieldViolation]:
    today = today or utcnow().date()
    violations: list[FieldViolation] = []

    if payload.is_set("title"):
        violations += _check_title(payload.title, required_message="Title cannot be empty")
    if payload.is_set("description"):
        violations += _check_description(payload.description)
    if payload.is_set("is_completed") and payload.is_completed is None:
        violations.append(FieldViolation("IsCompleted", "IsCompleted cannot be null"))
    if payload.is_set("priority"):
        violations += _check_priority(payload.priority)
    if payload.is_set("due_date"):
        violations += _check_due_date(payload.due_date, today)

    return violations


def ensure_valid(violations: list[FieldViolation]) -> None:
    if violations:
        raise TaskValidationError(violations)
