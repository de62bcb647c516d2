"""Unit tests for the APIM proxy routes.

Drives the full application (middleware, error handlers, DI) through
httpx.ASGITransport with the APIM server mocked by respx.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any
from uuid import uuid4

import httpx
import pytest
from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from httpx import ASGITransport, AsyncClient, Response
from respx import MockRouter

from services.apim_proxy_service.app import create_app
from services.apim_proxy_service.config import ApimProxySettings
from services.apim_proxy_service.di import RequestContextProvider
from services.apim_proxy_service.exceptions import ConfigurationError
from services.apim_proxy_service.implementations.config_provider_impl import (
    StaticConfigProvider,
)
from services.apim_proxy_service.protocols import ConfigProviderProtocol
from services.apim_proxy_service.tests.test_provider import (
    PUBLISHER_URL,
    STORE_URL,
    FailingConfigProvider,
    InfrastructureTestProvider,
    auth_configs,
)

APIS_URL = f"{PUBLISHER_URL}/api/am/publisher/v1/apis"
APPLICATIONS_URL = f"{STORE_URL}/api/am/store/v1/applications"
COOKIE = 'DASHBOARD_USER={"SDID":"abc"}; HID=123'

API_LIST: dict[str, Any] = {
    "count": 2,
    "list": [
        {
            "id": "api-1",
            "name": "PizzaShackAPI",
            "context": "/pizzashack",
            "version": "1.0.0",
            "lifeCycleStatus": "PUBLISHED",
            "businessInformation": {"businessOwner": "Jane"},
        },
        {"id": "api-2", "name": "Calculator", "gatewayVendor": "wso2"},
    ],
    "pagination": {"offset": 0, "limit": 25, "total": 2, "next": "", "previous": ""},
}

APPLICATION_LIST: dict[str, Any] = {
    "count": 1,
    "list": [
        {
            "applicationId": "app-1",
            "name": "DefaultApplication",
            "throttlingPolicy": "Unlimited",
            "status": "APPROVED",
            "subscriptionCount": 0,
            "tokenType": "JWT",
        }
    ],
}


async def _client_for(
    config_provider: ConfigProviderProtocol | None = None,
) -> AsyncIterator[AsyncClient]:
    test_settings = ApimProxySettings(SERVICE_NAME="apim_proxy_service_test")
    container = make_async_container(
        InfrastructureTestProvider(config_provider=config_provider, settings=test_settings),
        RequestContextProvider(),
        FastapiProvider(),
    )

    app = create_app(test_settings)
    setup_dishka(container, app)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    await container.close()


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Client for an app with both publisher and store URLs configured."""
    async for ac in _client_for():
        yield ac


@pytest.fixture
async def publisher_only_client() -> AsyncIterator[AsyncClient]:
    async for ac in _client_for(StaticConfigProvider(auth_configs(publisherUrl=PUBLISHER_URL))):
        yield ac


@pytest.fixture
async def unconfigured_client() -> AsyncIterator[AsyncClient]:
    async for ac in _client_for(StaticConfigProvider({})):
        yield ac


@pytest.fixture
async def broken_config_client() -> AsyncIterator[AsyncClient]:
    async for ac in _client_for(FailingConfigProvider(ConfigurationError("unreadable"))):
        yield ac


@pytest.mark.asyncio
async def test_list_apis_passes_payload_through(
    client: AsyncClient, respx_mock: MockRouter
) -> None:
    """The Publisher payload reaches the caller unchanged, unknown fields included."""
    route = respx_mock.get(APIS_URL).mock(return_value=Response(200, json=API_LIST))

    response = await client.get("/v1/apim/apis", headers={"Cookie": COOKIE})

    assert response.status_code == 200
    assert response.json() == API_LIST
    assert route.calls[0].request.headers["authorization"] == "Bearer abc123"


@pytest.mark.asyncio
async def test_list_applications_passes_payload_through(
    client: AsyncClient, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(APPLICATIONS_URL).mock(
        return_value=Response(200, json=APPLICATION_LIST)
    )

    response = await client.get("/v1/apim/applications", headers={"Cookie": COOKIE})

    assert response.status_code == 200
    assert response.json() == APPLICATION_LIST
    assert route.calls[0].request.headers["authorization"] == "Bearer abc123"


@pytest.mark.asyncio
async def test_list_applications_falls_back_to_publisher(
    publisher_only_client: AsyncClient, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(f"{PUBLISHER_URL}/api/am/store/v1/applications").mock(
        return_value=Response(200, json=APPLICATION_LIST)
    )

    response = await publisher_only_client.get(
        "/v1/apim/applications", headers={"Cookie": COOKIE}
    )

    assert response.status_code == 200
    assert route.called


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "message"),
    [
        ("/v1/apim/apis", "Unable to find Publisher server URL."),
        ("/v1/apim/applications", "Unable to find Developer Portal server URL."),
    ],
)
async def test_unconfigured_server_returns_400_without_calling_upstream(
    unconfigured_client: AsyncClient, respx_mock: MockRouter, path: str, message: str
) -> None:
    response = await unconfigured_client.get(path, headers={"Cookie": COOKIE})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_CONFIGURATION"
    assert error["message"] == message
    assert respx_mock.calls.call_count == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "message"),
    [
        ("/v1/apim/apis", "Error occurred while retrieving Publisher server URL."),
        ("/v1/apim/applications", "Error occurred while retrieving Developer Portal server URL."),
    ],
)
async def test_unreadable_configuration_returns_500(
    broken_config_client: AsyncClient, respx_mock: MockRouter, path: str, message: str
) -> None:
    response = await broken_config_client.get(path, headers={"Cookie": COOKIE})

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "CONFIGURATION_ERROR"
    assert error["message"] == message
    assert respx_mock.calls.call_count == 0


@pytest.mark.asyncio
async def test_missing_cookie_returns_400(client: AsyncClient, respx_mock: MockRouter) -> None:
    response = await client.get("/v1/apim/apis")

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing Cookie header."
    assert respx_mock.calls.call_count == 0


@pytest.mark.asyncio
async def test_malformed_cookie_returns_400(client: AsyncClient, respx_mock: MockRouter) -> None:
    response = await client.get(
        "/v1/apim/applications", headers={"Cookie": "DASHBOARD_USER=not-json; HID=1"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"
    assert respx_mock.calls.call_count == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "upstream_url", "message"),
    [
        ("/v1/apim/apis", APIS_URL, "Unable to retrieve API list."),
        ("/v1/apim/applications", APPLICATIONS_URL, "Unable to retrieve Application list."),
    ],
)
async def test_upstream_failure_returns_generic_500(
    client: AsyncClient,
    respx_mock: MockRouter,
    path: str,
    upstream_url: str,
    message: str,
) -> None:
    respx_mock.get(upstream_url).mock(
        return_value=Response(503, json={"code": 503, "description": "secret upstream detail"})
    )

    response = await client.get(path, headers={"Cookie": COOKIE})

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "EXTERNAL_SERVICE_ERROR"
    assert error["message"] == message
    assert "secret upstream detail" not in response.text


@pytest.mark.asyncio
async def test_upstream_connection_error_returns_500(
    client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(APIS_URL).mock(side_effect=httpx.ConnectError("Connection refused"))

    response = await client.get("/v1/apim/apis", headers={"Cookie": COOKIE})

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "PROCESSING_ERROR"
    assert error["message"] == "Error occurred while processing server response."


@pytest.mark.asyncio
async def test_undecodable_upstream_body_returns_500(
    client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(APIS_URL).mock(return_value=Response(200, text="<html>login</html>"))

    response = await client.get("/v1/apim/apis", headers={"Cookie": COOKIE})

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INVALID_RESPONSE"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient, respx_mock: MockRouter) -> None:
    correlation_id = str(uuid4())
    route = respx_mock.get(APIS_URL).mock(return_value=Response(200, json=API_LIST))

    response = await client.get(
        "/v1/apim/apis", headers={"Cookie": COOKIE, "X-Correlation-ID": correlation_id}
    )

    assert response.headers["X-Correlation-ID"] == correlation_id
    assert route.calls[0].request.headers["x-correlation-id"] == correlation_id


@pytest.mark.asyncio
async def test_error_body_carries_correlation_id(
    client: AsyncClient, respx_mock: MockRouter
) -> None:
    correlation_id = str(uuid4())

    response = await client.get("/v1/apim/apis", headers={"X-Correlation-ID": correlation_id})

    assert response.status_code == 400
    assert response.json()["error"]["correlation_id"] == correlation_id
    assert response.headers["X-Correlation-ID"] == correlation_id
