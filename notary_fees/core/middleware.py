"""
Core middleware registration for the FastAPI application.

Request IDs are taken from the X-Request-ID header (or generated), bound to
the logging context together with the caller's X-User-ID, and echoed back.
Each request's completion is logged with its status and duration.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from notary_fees.core.logging import get_logger
from notary_fees.core.logging import request_id as request_id_var
from notary_fees.core.logging import user_id as user_id_var

logger = get_logger(__name__)
access_logger = structlog.get_logger("notary_fees.access")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the request state, the log context and the response."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        request_token = request_id_var.set(request_id)
        user_token = user_id_var.set(request.headers.get("X-User-ID"))
        try:
            response = await call_next(request)
        finally:
            user_id_var.reset(user_token)
            request_id_var.reset(request_token)

        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Log request completion and add an X-Process-Time header."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        access_logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time=f"{process_time:.4f}s",
        )
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Register the core middlewares.

    The last middleware added runs first, so the request ID is bound before
    the timing middleware logs.
    """
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    logger.debug(
        "Core middlewares registered",
        extra={"middlewares": ["RequestIDMiddleware", "TimingMiddleware"]},
    )


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "register_middlewares",
    "get_request_id",
]
