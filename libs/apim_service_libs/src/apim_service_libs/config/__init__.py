"""Configuration utilities for APIM services."""

from .service_settings import Environment, ServiceSettings

__all__ = ["Environment", "ServiceSettings"]
