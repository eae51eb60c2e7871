# src/task_manager/api/app.py

"""
FastAPI application factory.

Error mapping lives here and nowhere else:
- TaskValidationError / RequestValidationError -> 400 {message, errors[]}
- TaskNotFoundError -> 404 {message}
- anything else -> logged once, 500 with a generic message (no internals leak)
"""

from __future__ import annotations

import logging
import re

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..cli.bootstrap import create_initial_state
from ..config import APP_VERSION, DEFAULT_APP_NAME
from ..core.state import AppState
from ..tasks.errors import FieldViolation, TaskNotFoundError, TaskValidationError
from ..tasks.task_schemas import ErrorDetail, MessageResponse, ValidationErrorResponse
from .routes import health_router, tasks_router

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def _property_name(loc: tuple | list) -> str:
    """('body', 'dueDate') -> 'DueDate', ('path', 'task_id') -> 'TaskId'."""
    names = [str(p) for p in loc if isinstance(p, str) and p not in _REQUEST_PARTS]
    if not names:
        return "Body" if loc and loc[0] == "body" else "Request"
    words = re.split(r"_|(?<=[a-z0-9])(?=[A-Z])", names[0])
    return "".join(w[:1].upper() + w[1:] for w in words if w)


def _validation_response(violations: list[FieldViolation]) -> JSONResponse:
    body = ValidationErrorResponse(
        errors=[ErrorDetail(property=v.property, error=v.error) for v in violations],
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def _on_task_validation_error(request: Request, exc: TaskValidationError) -> JSONResponse:
    logger.info(
        "Validation failed %s %s: %s",
        request.method,
        request.url.path,
        [v.property for v in exc.violations],
    )
    return _validation_response(exc.violations)


async def _on_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = [
        FieldViolation(_property_name(err.get("loc", ())), str(err.get("msg", "Invalid value")))
        for err in exc.errors()
    ]
    logger.info("Malformed request %s %s: %s", request.method, request.url.path, violations)
    return _validation_response(violations)


async def _on_not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    logger.warning("Task id=%s not found (%s %s)", exc.task_id, request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=MessageResponse(message=str(exc)).model_dump(),
    )


async def _unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=MessageResponse(message=INTERNAL_ERROR_MESSAGE).model_dump(),
        )


def create_app(state: AppState | None = None) -> FastAPI:
    """
    Build the ASGI app around an AppState.

    If state is None, the default composition root is used (settings from env).
    """
    if state is None:
        state = create_initial_state()

    app = FastAPI(
        title=getattr(state.settings, "app_name", DEFAULT_APP_NAME),
        version=APP_VERSION,
        description="A RESTful API for managing tasks with full CRUD operations",
    )
    app.state.app_state = state

    app.add_exception_handler(TaskValidationError, _on_task_validation_error)
    app.add_exception_handler(RequestValidationError, _on_request_validation_error)
    app.add_exception_handler(TaskNotFoundError, _on_not_found)
    app.middleware("http")(_unhandled_errors)

    app.include_router(tasks_router)
    app.include_router(health_router)

    logger.info("App created: %s v%s", app.title, APP_VERSION)
    return app
