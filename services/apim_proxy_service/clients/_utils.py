"""Shared utilities for APIM Proxy Service HTTP clients."""

from __future__ import annotations

from typing import TypeVar
from uuid import UUID

import httpx
from pydantic import BaseModel, ValidationError

from services.apim_proxy_service.exceptions import UpstreamDecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_apim_headers(access_token: str, correlation_id: UUID) -> dict[str, str]:
    """Build headers for an APIM REST call.

    Args:
        access_token: Token assembled from the dashboard cookies
        correlation_id: Request correlation ID for distributed tracing

    Returns:
        Headers dict with bearer credential, accept type and correlation ID
    """
    return {
        "Authorization": f"Bearer {access_token}",
        "Accept": "application/json",
        "X-Correlation-ID": str(correlation_id),
    }


async def get_apim_resource(
    http_client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str],
    model: type[ModelT],
) -> ModelT:
    """GET ``url`` and decode a 200 response body into ``model``.

    The response is streamed and closed exactly once whichever way the call
    ends.

    Raises:
        httpx.HTTPStatusError: If the status is anything other than 200
        httpx.RequestError: On transport failures
        UpstreamDecodeError: If the body does not decode into ``model``
    """
    request = http_client.build_request("GET", url, headers=headers)
    response = await http_client.send(request, stream=True)
    try:
        if response.status_code != httpx.codes.OK:
            raise httpx.HTTPStatusError(
                f"APIM responded {response.status_code} for {url}",
                request=request,
                response=response,
            )
        body = await response.aread()
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            raise UpstreamDecodeError(
                f"Unable to decode {model.__name__} from {url}: {e.error_count()} error(s)"
            ) from e
    finally:
        await response.aclose()
