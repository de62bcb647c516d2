"""APIM Proxy Service - dashboard-facing proxy for the APIM REST APIs.

Forwards the analytics dashboard's API list and application list requests to
the APIM Publisher and Developer Portal, authenticating with the access token
carried in the dashboard cookies.
"""

from __future__ import annotations

from apim_service_libs.error_handling.fastapi import (
    register_error_handlers as register_fastapi_error_handlers,
)
from apim_service_libs.logging_utils import configure_service_logging, create_service_logger
from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.apim_proxy_service.api.health_routes import router as health_router
from services.apim_proxy_service.api.v1 import router as apim_router_v1
from services.apim_proxy_service.config import ApimProxySettings, settings
from services.apim_proxy_service.di import ApimProxyProvider, RequestContextProvider
from services.apim_proxy_service.middleware import CorrelationIDMiddleware

logger = create_service_logger("apim_proxy_service")


def create_app(config: ApimProxySettings = settings) -> FastAPI:
    """Create and configure the FastAPI application.

    The DI container is not attached here; ``app`` below and the tests attach
    their own with ``setup_dishka``.
    """
    app = FastAPI(
        title=config.SERVICE_NAME,
        version="0.1.0",
        description="APIM Proxy Service - APIM Publisher and Developer Portal proxy",
        docs_url="/docs" if config.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if config.is_development() else None,
    )

    # Register error handlers
    register_fastapi_error_handlers(app)

    # Add Correlation ID Middleware
    app.add_middleware(CorrelationIDMiddleware)

    # Add CORS middleware; the dashboard sends its cookies cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=config.CORS_ALLOW_METHODS,
        allow_headers=config.CORS_ALLOW_HEADERS,
    )

    app.include_router(health_router)
    # Routes: /v1/apim/apis, /v1/apim/applications
    app.include_router(apim_router_v1, prefix=f"{config.API_PREFIX}/apim", tags=["APIM Proxy"])

    return app


def build_app() -> FastAPI:
    """Create the production application with logging and the DI container."""
    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )

    app = create_app()

    container = make_async_container(
        ApimProxyProvider(),
        RequestContextProvider(),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    app.state.di_container = container

    logger.info(
        "APIM Proxy Service configured",
        extra={"api_prefix": settings.API_PREFIX, "environment": settings.ENVIRONMENT.value},
    )
    return app


# Create application instance
app = build_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.apim_proxy_service.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )
