"""
Exception handlers turning application errors into JSON responses.

Every error body has the shape::

    {"error": {"code", "message", "details", "timestamp"}, "request_id": ...}
"""

import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import BaseAppException, ErrorCode
from app.core.logging import get_logger

logger = get_logger(__name__)


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "timestamp": int(time.time()),
        }
    }
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=body)


async def handle_application_exception(request: Request, exc: BaseAppException) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.error_code.value} - {exc.message}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
        }
    )
    message = exc.message if exc.status_code < 500 else "Internal server error"
    return _error_response(request, exc.status_code, exc.error_code.value, message, exc.details)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors: Dict[str, Dict[str, str]] = {}
    for error in exc.errors():
        field_path = '.'.join(str(x) for x in error['loc'])
        field_errors[field_path] = {
            "message": error['msg'],
            "type": error['type'],
        }

    logger.warning(
        f"Validation error: {len(field_errors)} field(s) failed validation",
        extra={"path": request.url.path, "method": request.method}
    )
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.VALIDATION_ERROR.value,
        "Request validation failed",
        {"field_errors": field_errors, "error_count": len(field_errors)},
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        f"Unhandled database error: {type(exc).__name__}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method}
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.DATABASE_ERROR.value,
        "Internal server error",
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method}
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR.value,
        "Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, handle_application_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)
