"""Configuration provider implementations for APIM Proxy Service.

``DeploymentConfigProvider`` reads a YAML deployment file on every lookup so
that edits to the file are picked up without a restart.
``StaticConfigProvider`` serves objects built from service settings.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from apim_service_libs.logging_utils import create_service_logger

from services.apim_proxy_service.config import ApimProxySettings
from services.apim_proxy_service.exceptions import ConfigurationError
from services.apim_proxy_service.server_urls import AUTH_CONFIGS_NAMESPACE

logger = create_service_logger("apim_proxy.config_provider")


def _lookup(document: Mapping[str, Any], namespace: str) -> Any:
    """Find ``namespace`` as a literal key first, then as a dotted path."""
    if namespace in document:
        return document[namespace]

    node: Any = document
    for part in namespace.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def _as_mapping(namespace: str, value: Any) -> Mapping[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration object '{namespace}' is not a mapping")
    return value


class DeploymentConfigProvider:
    """Configuration provider backed by a YAML deployment file."""

    def __init__(self, config_path: Path) -> None:
        """Initialize provider.

        Args:
            config_path: Path to the deployment YAML file
        """
        self.config_path = Path(config_path)

    def _load_document(self) -> Mapping[str, Any]:
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Unable to read deployment configuration {self.config_path}: {e}"
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in deployment configuration {self.config_path}: {e}"
            ) from e

        if document is None:
            return {}
        if not isinstance(document, Mapping):
            raise ConfigurationError(
                f"Deployment configuration {self.config_path} is not a mapping"
            )
        return document

    def get_configuration_object(self, namespace: str) -> Mapping[str, Any] | None:
        document = self._load_document()
        value = _as_mapping(namespace, _lookup(document, namespace))
        if value is None:
            logger.debug(
                "Configuration object not found",
                extra={"namespace": namespace, "config_path": str(self.config_path)},
            )
        return value


class StaticConfigProvider:
    """Configuration provider serving a fixed set of objects."""

    def __init__(self, objects: Mapping[str, Any]) -> None:
        self._objects = dict(objects)

    @classmethod
    def from_settings(cls, settings: ApimProxySettings) -> StaticConfigProvider:
        """Build the ``auth.configs`` object from PUBLISHER_URL / STORE_URL.

        Unset URLs are left out so that the store falls back to the publisher.
        """
        properties: dict[str, str] = {}
        if settings.PUBLISHER_URL:
            properties["publisherUrl"] = settings.PUBLISHER_URL
        if settings.STORE_URL:
            properties["storeUrl"] = settings.STORE_URL
        return cls({AUTH_CONFIGS_NAMESPACE: {"properties": properties}})

    def get_configuration_object(self, namespace: str) -> Mapping[str, Any] | None:
        return _as_mapping(namespace, _lookup(self._objects, namespace))
