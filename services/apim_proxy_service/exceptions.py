"""Exceptions raised inside APIM Proxy Service before they are mapped to errors."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Raised when the configuration source cannot be read."""


class UpstreamDecodeError(Exception):
    """Raised when an APIM response body cannot be decoded into its model."""
