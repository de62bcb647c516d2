"""APIM Developer Portal (store) REST API client."""

from __future__ import annotations

from uuid import UUID

import httpx
from apim_service_libs.logging_utils import create_service_logger

from services.apim_proxy_service.clients._utils import build_apim_headers, get_apim_resource
from services.apim_proxy_service.dto.apim_v1 import ApplicationListV1
from services.apim_proxy_service.server_urls import ApimServer, build_endpoint

logger = create_service_logger("apim_proxy.store_client")


class StoreClientImpl:
    """HTTP client for the APIM Developer Portal (store) v1 REST API."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._client = http_client

    async def get_applications(
        self,
        store_url: str,
        access_token: str,
        correlation_id: UUID,
    ) -> ApplicationListV1:
        """Get the application list from GET {store}/api/am/store/v1/applications."""
        url = f"{build_endpoint(store_url, ApimServer.STORE)}/applications"

        logger.debug(
            "Fetching application list from Developer Portal",
            extra={"url": url, "correlation_id": str(correlation_id)},
        )

        applications = await get_apim_resource(
            self._client,
            url,
            build_apim_headers(access_token, correlation_id),
            ApplicationListV1,
        )

        logger.info(
            "Fetched application list from Developer Portal",
            extra={
                "application_count": len(applications.items),
                "correlation_id": str(correlation_id),
            },
        )
        return applications
