"""Dependency Injection providers for APIM Proxy Service.

Provides Dishka DI container setup with APP-scoped infrastructure
and REQUEST-scoped context providers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
from apim_service_libs.logging_utils import create_service_logger
from dishka import Provider, Scope, from_context, provide
from fastapi import Request

from services.apim_proxy_service.clients.publisher_client import PublisherClientImpl
from services.apim_proxy_service.clients.store_client import StoreClientImpl
from services.apim_proxy_service.config import ApimProxySettings, settings
from services.apim_proxy_service.implementations.config_provider_impl import (
    DeploymentConfigProvider,
    StaticConfigProvider,
)
from services.apim_proxy_service.implementations.proxy_handler_impl import ApimProxyHandler
from services.apim_proxy_service.protocols import (
    ConfigProviderProtocol,
    PublisherClientProtocol,
    StoreClientProtocol,
)

logger = create_service_logger("apim_proxy.di")


class ApimProxyProvider(Provider):
    """Infrastructure provider for APIM Proxy Service.

    Provides APP-scoped dependencies: config, HTTP client, APIM clients and
    the proxy handler.
    """

    scope = Scope.APP

    @provide
    def get_config(self) -> ApimProxySettings:
        """Provide settings singleton."""
        return settings

    @provide
    def provide_config_provider(self, config: ApimProxySettings) -> ConfigProviderProtocol:
        """Provide the deployment file provider, or one built from settings."""
        if config.DEPLOYMENT_CONFIG_PATH is not None:
            logger.info(f"Reading APIM server URLs from {config.DEPLOYMENT_CONFIG_PATH}")
            return DeploymentConfigProvider(config.DEPLOYMENT_CONFIG_PATH)
        return StaticConfigProvider.from_settings(config)

    @provide
    async def get_http_client(self, config: ApimProxySettings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling and explicit timeouts."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            ),
            verify=config.HTTP_CLIENT_VERIFY_TLS,
        ) as client:
            yield client

    @provide
    def provide_publisher_client(self, http_client: httpx.AsyncClient) -> PublisherClientProtocol:
        return PublisherClientImpl(http_client)

    @provide
    def provide_store_client(self, http_client: httpx.AsyncClient) -> StoreClientProtocol:
        return StoreClientImpl(http_client)

    @provide
    def provide_proxy_handler(
        self,
        config_provider: ConfigProviderProtocol,
        publisher_client: PublisherClientProtocol,
        store_client: StoreClientProtocol,
    ) -> ApimProxyHandler:
        """Provide the proxy handler wired with its configuration and clients."""
        return ApimProxyHandler(config_provider, publisher_client, store_client)


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation context."""

    request = from_context(provides=Request, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state (set by CorrelationIDMiddleware)."""
        return getattr(request.state, "correlation_id", uuid4())
