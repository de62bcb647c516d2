"""Error handling utilities for APIM services."""

from apim_service_libs.error_handling.error_codes import ErrorCode, http_status_for
from apim_service_libs.error_handling.error_detail import ErrorDetail
from apim_service_libs.error_handling.factories import (
    create_error_detail,
    raise_configuration_error,
    raise_external_service_error,
    raise_invalid_configuration,
    raise_invalid_request,
    raise_invalid_response,
    raise_processing_error,
)
from apim_service_libs.error_handling.service_error import ServiceError

__all__ = [
    "ErrorCode",
    "ErrorDetail",
    "ServiceError",
    "create_error_detail",
    "http_status_for",
    "raise_configuration_error",
    "raise_external_service_error",
    "raise_invalid_configuration",
    "raise_invalid_request",
    "raise_invalid_response",
    "raise_processing_error",
]
