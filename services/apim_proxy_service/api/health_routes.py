"""Health routes for APIM Proxy Service."""

from __future__ import annotations

import asyncio

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from services.apim_proxy_service.exceptions import ConfigurationError
from services.apim_proxy_service.protocols import ConfigProviderProtocol
from services.apim_proxy_service.server_urls import ApimServer, resolve_server_url

router = APIRouter()


@router.get("/healthz", tags=["Health"])
@inject
async def health_check(config_provider: FromDishka[ConfigProviderProtocol]) -> JSONResponse:
    """Report whether the APIM server URLs can be resolved.

    The service is "healthy" when both roles resolve, "degraded" when either
    is missing, and "unhealthy" (503) when the configuration cannot be read.
    """
    checks: dict[str, bool] = {}
    try:
        for server in ApimServer:
            checks[f"{server.value}_url_configured"] = bool(
                await asyncio.to_thread(resolve_server_url, config_provider, server.value)
            )
    except ConfigurationError as e:
        return JSONResponse(
            status_code=503,
            content={
                "service": "apim_proxy_service",
                "status": "unhealthy",
                "message": "APIM server configuration cannot be read",
                "error": str(e),
            },
        )

    overall_status = "healthy" if all(checks.values()) else "degraded"
    return JSONResponse(
        status_code=200,
        content={
            "service": "apim_proxy_service",
            "status": overall_status,
            "message": f"APIM Proxy Service is {overall_status}",
            "version": "0.1.0",
            "checks": checks,
        },
    )
