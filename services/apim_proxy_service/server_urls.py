"""APIM server URL resolution and endpoint templating."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from services.apim_proxy_service.exceptions import ConfigurationError

if TYPE_CHECKING:
    from services.apim_proxy_service.protocols import ConfigProviderProtocol

AUTH_CONFIGS_NAMESPACE = "auth.configs"
PROPERTIES_KEY = "properties"
PUBLISHER_URL_KEY = "publisherUrl"
STORE_URL_KEY = "storeUrl"

ENDPOINT_TEMPLATE = "{serverUrl}/api/am/{serverName}/v1"


class ApimServer(str, Enum):
    """Logical roles of the APIM server."""

    PUBLISHER = "publisher"
    STORE = "store"


def _url_value(properties: Mapping[str, Any], key: str) -> str | None:
    value = properties.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{AUTH_CONFIGS_NAMESPACE}.{PROPERTIES_KEY}.{key} is not a string")
    return value


def resolve_server_url(config_provider: ConfigProviderProtocol, server_name: str) -> str | None:
    """Return the base URL configured for ``server_name``.

    The publisher is matched case-insensitively; any other name resolves the
    store URL, falling back to the publisher URL when the store URL is unset
    or empty.

    Returns:
        The base URL, or None when the server is not configured

    Raises:
        ConfigurationError: If the configuration cannot be read
    """
    auth_config = config_provider.get_configuration_object(AUTH_CONFIGS_NAMESPACE)
    if auth_config is None:
        return None

    properties = auth_config.get(PROPERTIES_KEY)
    if properties is None:
        return None
    if not isinstance(properties, Mapping):
        raise ConfigurationError(f"{AUTH_CONFIGS_NAMESPACE}.{PROPERTIES_KEY} is not a mapping")

    if server_name.lower() == ApimServer.PUBLISHER.value:
        return _url_value(properties, PUBLISHER_URL_KEY)

    store_url = _url_value(properties, STORE_URL_KEY)
    if store_url:
        return store_url
    return _url_value(properties, PUBLISHER_URL_KEY)


def build_endpoint(server_url: str, server: ApimServer) -> str:
    """Substitute the server URL and role into the APIM REST endpoint template."""
    return ENDPOINT_TEMPLATE.replace("{serverUrl}", server_url).replace(
        "{serverName}", server.value
    )
