# tasks/task_schemas.py

"""
Request and response shapes for the task endpoints.

Request models are deliberately loose (every field optional, priority accepted
as name or ordinal): range and shape rules live in `validators.py` so that all
violations are reported together in one 400 envelope.

Presence matters for partial updates. `model_fields_set` tells an omitted field
apart from one sent as an explicit `null`.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

from .task_models import TaskPriority

# Strict members: a JSON `true` must not be coerced to the ordinal 1. Booleans
# pass through untouched and are rejected by the priority rule.
_PriorityInput = StrictInt | StrictStr | StrictBool | None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreateRequest(_CamelModel):
    title: str | None = None
    description: str | None = None
    priority: _PriorityInput = None
    due_date: datetime | None = None

    def is_set(self, name: str) -> bool:
        return name in self.model_fields_set


class TaskUpdateRequest(_CamelModel):
    title: str | None = None
    description: str | None = None
    is_completed: bool | None = None
    priority: _PriorityInput = None
    due_date: datetime | None = None

    def is_set(self, name: str) -> bool:
        return name in self.model_fields_set


class TaskResponse(_CamelModel):
    id: int
    title: str
    description: str | None = None
    is_completed: bool
    priority: TaskPriority
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class TaskStatisticsResponse(_CamelModel):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    overdue_tasks: int
    tasks_by_priority: dict[str, int] = Field(default_factory=dict)


class MessageResponse(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    property: str
    error: str


class ValidationErrorResponse(BaseModel):
    message: str = "Validation failed"
    errors: list[ErrorDetail] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    service: str
    version: str
