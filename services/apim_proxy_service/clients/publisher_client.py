"""APIM Publisher REST API client."""

from __future__ import annotations

from uuid import UUID

import httpx
from apim_service_libs.logging_utils import create_service_logger

from services.apim_proxy_service.clients._utils import build_apim_headers, get_apim_resource
from services.apim_proxy_service.dto.apim_v1 import APIListV1
from services.apim_proxy_service.server_urls import ApimServer, build_endpoint

logger = create_service_logger("apim_proxy.publisher_client")


class PublisherClientImpl:
    """HTTP client for the APIM Publisher v1 REST API."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
        """
        self._client = http_client

    async def get_apis(
        self,
        publisher_url: str,
        access_token: str,
        correlation_id: UUID,
    ) -> APIListV1:
        """Get the API list from GET {publisher}/api/am/publisher/v1/apis."""
        url = f"{build_endpoint(publisher_url, ApimServer.PUBLISHER)}/apis"

        logger.debug(
            "Fetching API list from Publisher",
            extra={"url": url, "correlation_id": str(correlation_id)},
        )

        apis = await get_apim_resource(
            self._client, url, build_apim_headers(access_token, correlation_id), APIListV1
        )

        logger.info(
            "Fetched API list from Publisher",
            extra={"api_count": len(apis.items), "correlation_id": str(correlation_id)},
        )
        return apis
