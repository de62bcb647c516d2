"""Configuration for APIM Proxy Service.

Uses Pydantic settings for environment-based configuration. The APIM server
URLs are read either from a YAML deployment file (``auth.configs`` section)
or, when no file is configured, from PUBLISHER_URL / STORE_URL.
"""

from __future__ import annotations

from pathlib import Path

from apim_service_libs.config import ServiceSettings
from pydantic import Field
from pydantic_settings import SettingsConfigDict


class ApimProxySettings(ServiceSettings):
    """Configuration settings for APIM Proxy Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APIM_PROXY_",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity
    SERVICE_NAME: str = "apim-proxy-service"

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(default=9643, description="HTTP server port")
    API_PREFIX: str = Field(default="/v1", description="Prefix for the proxy routes")

    # CORS configuration for the analytics dashboard
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:9643", "http://localhost:3000"],
        description="Allowed CORS origins for the dashboard frontend",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True, description="Allow credentials (cookies) in CORS requests"
    )
    CORS_ALLOW_METHODS: list[str] = Field(
        default=["GET", "OPTIONS"], description="Allowed HTTP methods for CORS"
    )
    CORS_ALLOW_HEADERS: list[str] = Field(
        default=["*"], description="Allowed headers for CORS requests"
    )

    # APIM server configuration
    DEPLOYMENT_CONFIG_PATH: Path | None = Field(
        default=None,
        description="YAML deployment file holding auth.configs.properties",
    )
    PUBLISHER_URL: str | None = Field(
        default=None,
        description="APIM Publisher base URL, used when no deployment file is set",
    )
    STORE_URL: str | None = Field(
        default=None,
        description="APIM Developer Portal (store) base URL, used when no deployment file is set",
    )

    # HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Upstream request timeout in seconds",
    )
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Upstream connection timeout in seconds",
    )
    HTTP_CLIENT_VERIFY_TLS: bool = Field(
        default=True,
        description="Verify the APIM server TLS certificate",
    )


# Global settings instance
settings = ApimProxySettings()
