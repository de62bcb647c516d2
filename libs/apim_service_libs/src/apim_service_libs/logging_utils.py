"""
Structured logging utilities built on structlog.

Every service configures logging once at startup with
``configure_service_logging`` and obtains module loggers through
``create_service_logger``. Request-scoped values (the correlation ID) are
carried in structlog contextvars so every record emitted while handling a
request is tagged with them.

Output format:
- console renderer for local development and tests
- JSON renderer in production, or whenever LOG_FORMAT=json
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.typing import EventDict, Processor

# Event keys whose values must never reach a log sink.
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"cookie", "cookies", "authorization", "access_token", "token", "sdid", "hid"}
)
REDACTED = "***"


def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add service identity fields to every record.

    Fields follow OpenTelemetry semantic conventions:
    - service.name: from SERVICE_NAME (set by configure_service_logging)
    - deployment.environment: from ENVIRONMENT
    """
    event_dict["service.name"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["deployment.environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def redact_sensitive_fields(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential-bearing values, including inside an ``extra`` mapping."""
    for key in list(event_dict):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED

    extra = event_dict.get("extra")
    if isinstance(extra, dict):
        event_dict["extra"] = {
            key: REDACTED if key.lower() in SENSITIVE_KEYS else value
            for key, value in extra.items()
        }
    return event_dict


def _build_processors(use_json: bool) -> list[Processor]:
    processors: list[Processor] = [
        merge_contextvars,
        add_service_context,
        redact_sensitive_fields,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]
    if use_json:
        processors.extend(
            [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        )
    else:
        # Keep exceptions pretty in development
        processors.extend([structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=True)])
    return processors


def configure_service_logging(
    service_name: str,
    environment: str | None = None,
    log_level: str = "INFO",
) -> None:
    """
    Configure structlog and stdlib logging for a service.

    Args:
        service_name: Name of the service (e.g., "apim-proxy-service")
        environment: Environment name (defaults to ENVIRONMENT env var)
        log_level: Logging level name (defaults to "INFO")

    Environment Variables:
        LOG_FORMAT: "json" for JSON output, "console" for human-readable output.
            When unset, JSON is used only in production.
    """
    if environment is None:
        environment = os.getenv("ENVIRONMENT", "development")

    os.environ.setdefault("SERVICE_NAME", service_name)
    os.environ.setdefault("ENVIRONMENT", environment)

    log_format = os.getenv("LOG_FORMAT", "").lower()
    use_json = log_format == "json" or (not log_format and environment == "production")

    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )

    structlog.configure(
        processors=_build_processors(use_json),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_service_logger(name: str | None = None) -> Any:
    """
    Create a service logger with optional name binding.

    Args:
        name: Optional logger name (e.g., "apim_proxy.routes")

    Returns:
        A structlog BoundLogger instance
    """
    logger = structlog.get_logger()

    if name:
        logger = logger.bind(logger_name=name)

    return logger


def bind_request_context(correlation_id: UUID, **context: Any) -> None:
    """Reset the logging context and bind the values of the current request."""
    clear_contextvars()
    bind_contextvars(correlation_id=str(correlation_id), **context)
