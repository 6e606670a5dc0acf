"""
Boundary mapping from core error kinds to HTTP responses.

``ERROR_RESPONSES`` is the single reviewed table: every concrete
``TodoServiceError`` kind resolves to exactly one entry through its MRO.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from core.errors import (
    InvalidCredentials,
    PersistenceFailure,
    ResourceNotFound,
    TodoServiceError,
    TokenIssuanceFailure,
    TokenValidationFailure,
    Unauthenticated,
)

logger = logging.getLogger(__name__)

# ``None`` as the message means "use the exception's own message".
ERROR_RESPONSES: Dict[Type[TodoServiceError], Tuple[int, str | None]] = {
    ResourceNotFound: (
        status.HTTP_404_NOT_FOUND,
        "The todo that you were trying to find does not exist.",
    ),
    PersistenceFailure: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Something went wrong while performing DB operations.",
    ),
    TokenIssuanceFailure: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Something went wrong while creating the token.",
    ),
    TokenValidationFailure: (
        status.HTTP_401_UNAUTHORIZED,
        "Token is invalid or expired.",
    ),
    InvalidCredentials: (
        status.HTTP_401_UNAUTHORIZED,
        "Bad credentials",
    ),
    Unauthenticated: (
        status.HTTP_401_UNAUTHORIZED,
        None,
    ),
}


def resolve_error(exc: TodoServiceError) -> Tuple[int, str]:
    """Return ``(status_code, message)`` for an error kind."""
    for kind in type(exc).__mro__:
        if kind in ERROR_RESPONSES:
            status_code, message = ERROR_RESPONSES[kind]
            return status_code, message or exc.message
    raise LookupError(f"No boundary mapping for {type(exc).__name__}")


def error_response(exc: TodoServiceError) -> JSONResponse:
    status_code, message = resolve_error(exc)
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code,
        content={"message": message},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the ``TodoServiceError`` handler to the app."""

    @app.exception_handler(TodoServiceError)
    async def todo_service_error(request: Request, exc: TodoServiceError):
        status_code, _ = resolve_error(exc)
        request_id = getattr(request.state, "request_id", "-")
        if status_code >= 500:
            logger.error(
                "[%s] %s %s failed: %r", request_id, request.method, request.url.path, exc
            )
        else:
            logger.debug(
                "[%s] %s %s rejected: %r", request_id, request.method, request.url.path, exc
            )
        return error_response(exc)
