# app/core/middleware.py
"""
Core middleware registration for the FastAPI application.

Request IDs and timing for every request, with the request ID pushed into
the logging context so service-level log lines can be correlated.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core import logging as app_logging
from app.core.logging import get_logger

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each incoming request.

    The request ID is:
    - Stored in request.state.request_id
    - Bound into the logging context for the duration of the request
    - Added to response headers as X-Request-ID
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = app_logging.request_id.set(request_id)
        try:
            response = await call_next(request)
        finally:
            app_logging.request_id.reset(token)

        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that measures and logs request processing time.

    Adds X-Process-Time header to responses with the processing duration in seconds.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        logger.info(
            "Request completed",
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time": f"{process_time:.4f}s",
            }
        )
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Register core middlewares on the application.

    Starlette runs the last-added middleware first, so RequestIDMiddleware
    is added last to wrap the timing middleware.
    """
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
