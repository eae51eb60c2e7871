# src/task_manager/api/routes.py

"""
HTTP routes: /api/tasks (CRUD + complete + statistics) and /api/health.

Handlers stay thin: validate, call the service, turn "not found" into
TaskNotFoundError. Error responses are produced by the handlers registered in
`app.py`.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ..config import APP_VERSION, DEFAULT_APP_NAME
from ..tasks.errors import FieldViolation, TaskNotFoundError, TaskValidationError
from ..tasks.task_models import TaskPriority, utcnow
from ..tasks.task_schemas import (
    HealthResponse,
    MessageResponse,
    TaskCreateRequest,
    TaskResponse,
    TaskStatisticsResponse,
    TaskUpdateRequest,
    ValidationErrorResponse,
)
from ..tasks.task_service import TaskService
from ..tasks.validators import ensure_valid, validate_create, validate_update

logger = logging.getLogger(__name__)

tasks_router = APIRouter(prefix="/api/tasks", tags=["tasks"])
health_router = APIRouter(prefix="/api/health", tags=["health"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": MessageResponse}}
_BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}}


def get_task_service(request: Request) -> TaskService:
    return request.app.state.app_state.task_service


ServiceDep = Annotated[TaskService, Depends(get_task_service)]


def _parse_priority_filter(raw: str | None) -> TaskPriority | None:
    if raw is None:
        return None
    priority = TaskPriority.parse(raw)
    if priority is None:
        raise TaskValidationError([FieldViolation("Priority", "Invalid priority value")])
    return priority


@tasks_router.get("", response_model=list[TaskResponse], responses=_BAD_REQUEST)
def list_tasks(
    service: ServiceDep,
    is_completed: Annotated[bool | None, Query(alias="isCompleted")] = None,
    priority: Annotated[str | None, Query()] = None,
) -> list[TaskResponse]:
    """List tasks, newest first, optionally filtered by completion and priority."""
    logger.info("GET /api/tasks isCompleted=%s priority=%s", is_completed, priority)
    return service.list_tasks(
        is_completed=is_completed,
        priority=_parse_priority_filter(priority),
    )


# Declared before /{task_id} so "statistics" is not parsed as an id.
@tasks_router.get("/statistics", response_model=TaskStatisticsResponse)
def get_statistics(service: ServiceDep) -> TaskStatisticsResponse:
    logger.info("GET /api/tasks/statistics")
    return service.get_statistics()


@tasks_router.get("/{task_id}", response_model=TaskResponse, responses=_NOT_FOUND)
def get_task(task_id: int, service: ServiceDep) -> TaskResponse:
    logger.info("GET /api/tasks/%s", task_id)
    task = service.get_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@tasks_router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
)
def create_task(
    payload: TaskCreateRequest,
    request: Request,
    response: Response,
    service: ServiceDep,
) -> TaskResponse:
    logger.info("POST /api/tasks")
    ensure_valid(validate_create(payload))

    created = service.create_task(payload)
    response.headers["Location"] = str(request.url_for("get_task", task_id=created.id))
    return created


@tasks_router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
def update_task(task_id: int, payload: TaskUpdateRequest, service: ServiceDep) -> TaskResponse:
    logger.info("PUT /api/tasks/%s", task_id)
    ensure_valid(validate_update(payload))

    updated = service.update_task(task_id, payload)
    if updated is None:
        raise TaskNotFoundError(task_id)
    return updated


@tasks_router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
def delete_task(task_id: int, service: ServiceDep) -> Response:
    logger.info("DELETE /api/tasks/%s", task_id)
    if not service.delete_task(task_id):
        raise TaskNotFoundError(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@tasks_router.patch("/{task_id}/complete", response_model=TaskResponse, responses=_NOT_FOUND)
def complete_task(task_id: int, service: ServiceDep) -> TaskResponse:
    logger.info("PATCH /api/tasks/%s/complete", task_id)
    task = service.complete_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@health_router.get("", response_model=HealthResponse)
def get_health(request: Request) -> HealthResponse:
    settings = request.app.state.app_state.settings
    return HealthResponse(
        status="Healthy",
        timestamp=utcnow(),
        service=getattr(settings, "app_name", DEFAULT_APP_NAME),
        version=APP_VERSION,
    )
