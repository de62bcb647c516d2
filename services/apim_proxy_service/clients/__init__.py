"""APIM Proxy Service clients module.

Contains HTTP clients for the APIM Publisher and Developer Portal REST APIs.
"""

from services.apim_proxy_service.clients.publisher_client import PublisherClientImpl
from services.apim_proxy_service.clients.store_client import StoreClientImpl

__all__ = ["PublisherClientImpl", "StoreClientImpl"]
