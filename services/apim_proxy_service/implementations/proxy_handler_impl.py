"""APIM proxy handler.

Resolves the APIM server URL, assembles the access token from the dashboard
cookies, calls the upstream client and maps every failure to a structured
ServiceError. One linear attempt per request: no retries.
"""

from __future__ import annotations

import asyncio
from typing import NoReturn
from uuid import UUID

import httpx
from apim_service_libs.error_handling import (
    raise_configuration_error,
    raise_external_service_error,
    raise_invalid_configuration,
    raise_invalid_request,
    raise_invalid_response,
    raise_processing_error,
)
from apim_service_libs.logging_utils import create_service_logger

from services.apim_proxy_service.access_token import MalformedCookieError, extract_access_token
from services.apim_proxy_service.dto.apim_v1 import APIListV1, ApplicationListV1
from services.apim_proxy_service.exceptions import ConfigurationError, UpstreamDecodeError
from services.apim_proxy_service.protocols import (
    ConfigProviderProtocol,
    PublisherClientProtocol,
    StoreClientProtocol,
)
from services.apim_proxy_service.server_urls import (
    AUTH_CONFIGS_NAMESPACE,
    ApimServer,
    resolve_server_url,
)

logger = create_service_logger("apim_proxy.handler")

SERVICE_NAME = "apim_proxy_service"
RESPONSE_PROCESSING_ERROR = "Error occurred while processing server response."

# Names used in client-facing messages
SERVER_LABELS: dict[ApimServer, str] = {
    ApimServer.PUBLISHER: "Publisher",
    ApimServer.STORE: "Developer Portal",
}


class ApimProxyHandler:
    """Serves the API list and application list from the APIM server."""

    def __init__(
        self,
        config_provider: ConfigProviderProtocol,
        publisher_client: PublisherClientProtocol,
        store_client: StoreClientProtocol,
    ) -> None:
        self._config_provider = config_provider
        self._publisher_client = publisher_client
        self._store_client = store_client

    async def list_apis(self, cookie_header: str | None, correlation_id: UUID) -> APIListV1:
        """Retrieve the list of APIs from the APIM Publisher.

        Raises:
            ServiceError: INVALID_CONFIGURATION if no publisher URL is configured,
                INVALID_REQUEST for a missing or malformed cookie, and a 500-class
                error for configuration, upstream status, I/O or decode failures
        """
        operation = "list_apis"
        publisher_url = await self._server_url(ApimServer.PUBLISHER, operation, correlation_id)
        access_token = self._access_token(cookie_header, operation, correlation_id)

        try:
            return await self._publisher_client.get_apis(
                publisher_url, access_token, correlation_id
            )
        except httpx.HTTPStatusError as e:
            self._log_upstream_status(e, ApimServer.PUBLISHER, correlation_id)
            raise_external_service_error(
                service=SERVICE_NAME,
                operation=operation,
                external_service="apim_publisher",
                message="Unable to retrieve API list.",
                correlation_id=correlation_id,
            )
        except httpx.RequestError as e:
            self._raise_io_error(e, operation, correlation_id)
        except UpstreamDecodeError as e:
            self._raise_decode_error(e, operation, correlation_id)

    async def list_applications(
        self, cookie_header: str | None, correlation_id: UUID
    ) -> ApplicationListV1:
        """Retrieve the list of applications from the APIM Developer Portal.

        The store URL falls back to the publisher URL when it is not set.
        """
        operation = "list_applications"
        store_url = await self._server_url(ApimServer.STORE, operation, correlation_id)
        access_token = self._access_token(cookie_header, operation, correlation_id)

        try:
            return await self._store_client.get_applications(
                store_url, access_token, correlation_id
            )
        except httpx.HTTPStatusError as e:
            self._log_upstream_status(e, ApimServer.STORE, correlation_id)
            raise_external_service_error(
                service=SERVICE_NAME,
                operation=operation,
                external_service="apim_store",
                message="Unable to retrieve Application list.",
                correlation_id=correlation_id,
            )
        except httpx.RequestError as e:
            self._raise_io_error(e, operation, correlation_id)
        except UpstreamDecodeError as e:
            self._raise_decode_error(e, operation, correlation_id)

    async def _server_url(self, server: ApimServer, operation: str, correlation_id: UUID) -> str:
        label = SERVER_LABELS[server]
        try:
            # Deployment config is read from disk
            server_url = await asyncio.to_thread(
                resolve_server_url, self._config_provider, server.value
            )
        except ConfigurationError as e:
            logger.error(
                "Failed to read APIM server configuration",
                extra={
                    "server": server.value,
                    "error": str(e),
                    "correlation_id": str(correlation_id),
                },
            )
            raise_configuration_error(
                service=SERVICE_NAME,
                operation=operation,
                config_key=AUTH_CONFIGS_NAMESPACE,
                message=f"Error occurred while retrieving {label} server URL.",
                correlation_id=correlation_id,
                cause=str(e),
            )

        if not server_url:
            logger.warning(
                "APIM server URL not configured",
                extra={"server": server.value, "correlation_id": str(correlation_id)},
            )
            raise_invalid_configuration(
                service=SERVICE_NAME,
                operation=operation,
                config_key=AUTH_CONFIGS_NAMESPACE,
                message=f"Unable to find {label} server URL.",
                correlation_id=correlation_id,
            )
        return server_url

    def _access_token(self, cookie_header: str | None, operation: str, correlation_id: UUID) -> str:
        if cookie_header is None:
            raise_invalid_request(
                service=SERVICE_NAME,
                operation=operation,
                message="Missing Cookie header.",
                correlation_id=correlation_id,
            )
        try:
            return extract_access_token(cookie_header)
        except MalformedCookieError as e:
            raise_invalid_request(
                service=SERVICE_NAME,
                operation=operation,
                message="Unable to read access token from DASHBOARD_USER cookie.",
                correlation_id=correlation_id,
                cause=str(e),
            )

    def _log_upstream_status(
        self, error: httpx.HTTPStatusError, server: ApimServer, correlation_id: UUID
    ) -> None:
        logger.error(
            "APIM server returned an unexpected status",
            extra={
                "server": server.value,
                "status_code": error.response.status_code,
                "url": str(error.request.url),
                "correlation_id": str(correlation_id),
            },
        )

    def _raise_io_error(
        self, error: httpx.RequestError, operation: str, correlation_id: UUID
    ) -> NoReturn:
        logger.error(
            "APIM request failed",
            extra={
                "error_type": type(error).__name__,
                "error": str(error),
                "correlation_id": str(correlation_id),
            },
        )
        raise_processing_error(
            service=SERVICE_NAME,
            operation=operation,
            message=RESPONSE_PROCESSING_ERROR,
            correlation_id=correlation_id,
            cause=f"{type(error).__name__}: {error}",
        )

    def _raise_decode_error(
        self, error: UpstreamDecodeError, operation: str, correlation_id: UUID
    ) -> NoReturn:
        logger.error(
            "APIM response could not be decoded",
            extra={"error": str(error), "correlation_id": str(correlation_id)},
        )
        raise_invalid_response(
            service=SERVICE_NAME,
            operation=operation,
            message=RESPONSE_PROCESSING_ERROR,
            correlation_id=correlation_id,
            cause=str(error),
        )
