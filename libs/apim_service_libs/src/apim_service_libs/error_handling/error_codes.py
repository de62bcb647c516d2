"""
Centralized error code definitions and their HTTP status mapping.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"  # Configuration source unreadable
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"  # Required value not configured
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    PROCESSING_ERROR = "PROCESSING_ERROR"


ERROR_CODE_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.UNKNOWN_ERROR: 500,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.CONFIGURATION_ERROR: 500,
    ErrorCode.INVALID_CONFIGURATION: 400,
    ErrorCode.EXTERNAL_SERVICE_ERROR: 500,
    ErrorCode.INVALID_RESPONSE: 500,
    ErrorCode.PROCESSING_ERROR: 500,
}


def http_status_for(error_code: ErrorCode) -> int:
    """Return the HTTP status used when rendering ``error_code``."""
    return ERROR_CODE_HTTP_STATUS.get(error_code, 500)
