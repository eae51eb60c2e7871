# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


class TaskPriority(StrEnum):
    """
    Task priority, stored and serialized by name.

    Clients may also send the ordinal (0..3), the order below is significant.
    """

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"

    @property
    def ordinal(self) -> int:
        return list(TaskPriority).index(self)

    @classmethod
    def parse(cls, raw: object) -> TaskPriority | None:
        """Resolve a name (any case) or an ordinal. Returns None for anything else."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            members = list(cls)
            return members[raw] if 0 <= raw < len(members) else None
        if isinstance(raw, str):
            text = raw.strip()
            if text.isascii() and text.isdigit():
                return cls.parse(int(text))
            for member in cls:
                if member.value.lower() == text.lower():
                    return member
        return None

    @classmethod
    def from_db(cls, raw: str | None) -> TaskPriority:
        if not raw:
            return cls.MEDIUM
        return cls.parse(raw) or cls.MEDIUM


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str | None
    is_completed: bool
    priority: TaskPriority
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class TaskStatistics:
    total_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
    tasks_by_priority: dict[str, int] = field(default_factory=dict)

    @property
    def pending_tasks(self) -> int:
        return self.total_tasks - self.completed_tasks
