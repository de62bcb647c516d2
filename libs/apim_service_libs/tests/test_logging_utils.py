"""Tests for logging_utils processors and context binding."""

from typing import Any
from uuid import uuid4

import pytest
from structlog.contextvars import clear_contextvars, get_contextvars

from apim_service_libs.logging_utils import (
    REDACTED,
    add_service_context,
    bind_request_context,
    redact_sensitive_fields,
)


class TestAddServiceContext:
    """Tests for the add_service_context processor."""

    def test_adds_service_identity_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify service.name and deployment.environment come from the environment."""
        # Arrange
        monkeypatch.setenv("SERVICE_NAME", "apim-proxy-service")
        monkeypatch.setenv("ENVIRONMENT", "production")
        event_dict: dict[str, Any] = {"event": "test message"}

        # Act
        result = add_service_context(None, "", event_dict)

        # Assert
        assert result["service.name"] == "apim-proxy-service"
        assert result["deployment.environment"] == "production"

    def test_defaults_when_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.delenv("SERVICE_NAME", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        # Act
        result = add_service_context(None, "", {"event": "test message"})

        # Assert
        assert result["service.name"] == "unknown"
        assert result["deployment.environment"] == "development"

    def test_preserves_existing_fields(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("SERVICE_NAME", "apim-proxy-service")
        event_dict: dict[str, Any] = {"event": "test message", "correlation_id": "abc-123"}

        # Act
        result = add_service_context(None, "", event_dict)

        # Assert
        assert result["event"] == "test message"
        assert result["correlation_id"] == "abc-123"


class TestRedactSensitiveFields:
    """Tests for the redact_sensitive_fields processor."""

    def test_masks_top_level_credentials(self) -> None:
        event_dict: dict[str, Any] = {
            "event": "calling APIM",
            "Authorization": "Bearer abc123",
            "cookie": "HID=123",
            "url": "https://apim.test/api",
        }

        result = redact_sensitive_fields(None, "", event_dict)

        assert result["Authorization"] == REDACTED
        assert result["cookie"] == REDACTED
        assert result["url"] == "https://apim.test/api"

    def test_masks_credentials_inside_extra(self) -> None:
        event_dict: dict[str, Any] = {
            "event": "calling APIM",
            "extra": {"access_token": "abc123", "status_code": 503},
        }

        result = redact_sensitive_fields(None, "", event_dict)

        assert result["extra"] == {"access_token": REDACTED, "status_code": 503}

    def test_leaves_clean_records_untouched(self) -> None:
        event_dict: dict[str, Any] = {"event": "ok", "extra": {"api_count": 3}}

        assert redact_sensitive_fields(None, "", dict(event_dict)) == event_dict


class TestRequestContext:
    """Tests for bind_request_context."""

    def test_binds_correlation_id_as_string(self) -> None:
        correlation_id = uuid4()

        bind_request_context(correlation_id, method="GET", path="/v1/apim/apis")

        try:
            assert get_contextvars() == {
                "correlation_id": str(correlation_id),
                "method": "GET",
                "path": "/v1/apim/apis",
            }
        finally:
            clear_contextvars()

    def test_rebinding_drops_previous_request_values(self) -> None:
        bind_request_context(uuid4(), path="/first")
        second = uuid4()

        bind_request_context(second)

        try:
            assert get_contextvars() == {"correlation_id": str(second)}
        finally:
            clear_contextvars()
