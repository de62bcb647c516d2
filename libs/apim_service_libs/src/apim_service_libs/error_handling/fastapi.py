"""FastAPI integration for structured error responses."""

from __future__ import annotations

from uuid import UUID, uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from apim_service_libs.error_handling.error_codes import ErrorCode
from apim_service_libs.error_handling.factories import create_error_detail
from apim_service_libs.error_handling.service_error import ServiceError
from apim_service_libs.logging_utils import create_service_logger

logger = create_service_logger("error_handling.fastapi")


def _request_correlation_id(request: Request) -> UUID:
    correlation_id = getattr(request.state, "correlation_id", None)
    return correlation_id if isinstance(correlation_id, UUID) else uuid4()


def _error_response(error: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.to_dict()},
        headers={"X-Correlation-ID": error.correlation_id},
    )


async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError as ``{"error": {...}}`` with its mapped status."""
    logger.warning(
        "Request failed",
        extra={
            "error_code": exc.error_code,
            "status_code": exc.status_code,
            "operation": exc.operation,
            "path": request.url.path,
            "correlation_id": exc.correlation_id,
        },
    )
    return _error_response(exc)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Render any unhandled exception as UNKNOWN_ERROR without leaking internals."""
    correlation_id = _request_correlation_id(request)
    logger.error(
        "Unhandled exception",
        extra={"path": request.url.path, "correlation_id": str(correlation_id)},
        exc_info=exc,
    )
    error = ServiceError(
        create_error_detail(
            ErrorCode.UNKNOWN_ERROR,
            "An unexpected error occurred",
            service=request.app.title,
            operation=f"{request.method} {request.url.path}",
            correlation_id=correlation_id,
            details={"error_type": type(exc).__name__},
        )
    )
    return _error_response(error)


def register_error_handlers(app: FastAPI) -> None:
    """Install the structured error handlers on ``app``."""
    app.add_exception_handler(ServiceError, handle_service_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
