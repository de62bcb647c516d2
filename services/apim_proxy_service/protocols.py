"""Protocol definitions for APIM Proxy Service.

Defines interfaces for the configuration provider and the APIM upstream
clients used in dependency injection.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from services.apim_proxy_service.dto.apim_v1 import APIListV1, ApplicationListV1


class ConfigProviderProtocol(Protocol):
    """Protocol for the key-value configuration source."""

    def get_configuration_object(self, namespace: str) -> Mapping[str, Any] | None:
        """Return the configuration object stored under ``namespace``.

        Args:
            namespace: Dotted configuration key, e.g. "auth.configs"

        Returns:
            The mapping stored under the key, or None when it is absent

        Raises:
            ConfigurationError: If the configuration source cannot be read
        """
        ...


class PublisherClientProtocol(Protocol):
    """Protocol for the APIM Publisher REST API client."""

    async def get_apis(
        self,
        publisher_url: str,
        access_token: str,
        correlation_id: UUID,
    ) -> APIListV1:
        """Fetch the API list from the Publisher.

        Args:
            publisher_url: Publisher server base URL
            access_token: Bearer credential assembled from the dashboard cookies
            correlation_id: Request correlation ID for tracing

        Returns:
            Decoded API list payload

        Raises:
            httpx.HTTPStatusError: If the Publisher does not answer 200
            httpx.RequestError: On transport failures
            UpstreamDecodeError: If the body is not a valid API list
        """
        ...


class StoreClientProtocol(Protocol):
    """Protocol for the APIM Developer Portal (store) REST API client."""

    async def get_applications(
        self,
        store_url: str,
        access_token: str,
        correlation_id: UUID,
    ) -> ApplicationListV1:
        """Fetch the application list from the Developer Portal.

        Args:
            store_url: Developer Portal server base URL
            access_token: Bearer credential assembled from the dashboard cookies
            correlation_id: Request correlation ID for tracing

        Returns:
            Decoded application list payload

        Raises:
            httpx.HTTPStatusError: If the Developer Portal does not answer 200
            httpx.RequestError: On transport failures
            UpstreamDecodeError: If the body is not a valid application list
        """
        ...
