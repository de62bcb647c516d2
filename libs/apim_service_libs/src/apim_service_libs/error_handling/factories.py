"""
Factory functions that build an ErrorDetail and raise ServiceError.

Each factory takes the raising ``service`` and ``operation``, a
human-readable ``message`` and the request ``correlation_id``. Any extra
keyword arguments are stored in ``ErrorDetail.details``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, NoReturn
from uuid import UUID

from apim_service_libs.error_handling.error_codes import ErrorCode
from apim_service_libs.error_handling.error_detail import ErrorDetail
from apim_service_libs.error_handling.service_error import ServiceError


def create_error_detail(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID,
    details: dict[str, Any] | None = None,
) -> ErrorDetail:
    """Create an ErrorDetail stamped with the current UTC time."""
    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
    )


def raise_invalid_request(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise for a request the service cannot act on (400)."""
    raise ServiceError(
        create_error_detail(
            ErrorCode.INVALID_REQUEST,
            message,
            service,
            operation,
            correlation_id,
            additional_context,
        )
    )


def raise_configuration_error(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when the configuration source itself could not be read (500)."""
    raise ServiceError(
        create_error_detail(
            ErrorCode.CONFIGURATION_ERROR,
            message,
            service,
            operation,
            correlation_id,
            {"config_key": config_key, **additional_context},
        )
    )


def raise_invalid_configuration(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a value needed to serve the request is not configured (400)."""
    raise ServiceError(
        create_error_detail(
            ErrorCode.INVALID_CONFIGURATION,
            message,
            service,
            operation,
            correlation_id,
            {"config_key": config_key, **additional_context},
        )
    )


def raise_external_service_error(
    service: str,
    operation: str,
    external_service: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    raise ServiceError(
        create_error_detail(
            ErrorCode.EXTERNAL_SERVICE_ERROR,
            message,
            service,
            operation,
            correlation_id,
            {"external_service": external_service, **additional_context},
        )
    )


def raise_processing_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    raise ServiceError(
        create_error_detail(
            ErrorCode.PROCESSING_ERROR,
            message,
            service,
            operation,
            correlation_id,
            additional_context,
        )
    )


def raise_invalid_response(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when an upstream response body cannot be decoded (500)."""
    raise ServiceError(
        create_error_detail(
            ErrorCode.INVALID_RESPONSE,
            message,
            service,
            operation,
            correlation_id,
            additional_context,
        )
    )
