"""
Access logging with a per-request correlation id.

Each response carries ``X-Request-ID``: the caller's value when it is a short
token of safe characters, a fresh uuid4 hex otherwise.  The same id prefixes
the access-log line and is kept on ``request.state.request_id`` for the error
handlers.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def request_id_for(request: Request) -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_PATTERN.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex


def register_middleware(app: FastAPI, slow_request_ms: int) -> None:
    """Attach the access-log middleware; slow requests log at WARNING."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        request_id = request_id_for(request)
        request.state.request_id = request_id
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "[%s] %s %s raised", request_id, request.method, request.url.path
            )
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        level = logging.WARNING if elapsed_ms >= slow_request_ms else logging.DEBUG
        logger.log(
            level,
            "[%s] %s %s -> %d (%.1f ms)",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
