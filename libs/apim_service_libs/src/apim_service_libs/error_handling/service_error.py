"""
Core exception class carrying a structured ErrorDetail.
"""

from __future__ import annotations

from typing import Any

from apim_service_libs.error_handling.error_codes import http_status_for
from apim_service_libs.error_handling.error_detail import ErrorDetail


class ServiceError(Exception):
    """Exception raised by services for every expected failure.

    The wrapped ErrorDetail is the single source of truth; the properties
    below are conveniences for handlers and log statements.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        self.error_detail = error_detail
        super().__init__(f"[{error_detail.error_code.value}] {error_detail.message}")

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    @property
    def status_code(self) -> int:
        return http_status_for(self.error_detail.error_code)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON error body returned to clients."""
        detail = self.error_detail
        return {
            "code": detail.error_code.value,
            "status_code": self.status_code,
            "message": detail.message,
            "correlation_id": str(detail.correlation_id),
            "service": detail.service,
            "operation": detail.operation,
            "timestamp": detail.timestamp.isoformat(),
            "details": detail.details,
        }
