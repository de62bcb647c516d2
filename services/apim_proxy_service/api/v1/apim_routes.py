"""APIM proxy API v1 routes.

Read-only endpoints that forward the dashboard's requests to the APIM
Publisher and Developer Portal, authenticated with the token carried in the
dashboard cookies.
"""

from __future__ import annotations

from uuid import UUID

from apim_service_libs.logging_utils import create_service_logger
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Header

from services.apim_proxy_service.dto.apim_v1 import APIListV1, ApplicationListV1
from services.apim_proxy_service.implementations.proxy_handler_impl import ApimProxyHandler

router = APIRouter()
logger = create_service_logger("apim_proxy.apim_routes")

ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"description": "APIM server URL not configured, or cookie missing/malformed"},
    500: {"description": "Configuration unreadable or APIM server request failed"},
}


@router.get(
    "/apis",
    response_model=APIListV1,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
@inject
async def list_apis(
    handler: FromDishka[ApimProxyHandler],
    correlation_id: FromDishka[UUID],
    cookie: str | None = Header(None, include_in_schema=False),
) -> APIListV1:
    """Retrieve the list of APIs from the APIM Publisher."""
    logger.info("Listing APIs", extra={"correlation_id": str(correlation_id)})
    return await handler.list_apis(cookie, correlation_id)


@router.get(
    "/applications",
    response_model=ApplicationListV1,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
@inject
async def list_applications(
    handler: FromDishka[ApimProxyHandler],
    correlation_id: FromDishka[UUID],
    cookie: str | None = Header(None, include_in_schema=False),
) -> ApplicationListV1:
    """Retrieve the list of applications from the APIM Developer Portal."""
    logger.info("Listing applications", extra={"correlation_id": str(correlation_id)})
    return await handler.list_applications(cookie, correlation_id)
