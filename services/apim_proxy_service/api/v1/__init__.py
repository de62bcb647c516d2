"""APIM Proxy Service API v1 module.

Contains v1 API routes for the APIM API and application lists.
"""

from services.apim_proxy_service.api.v1.apim_routes import router

__all__ = ["router"]
