"""APIM Proxy Service DTO module.

Contains the models for the APIM list payloads passed through by the proxy.
"""

from services.apim_proxy_service.dto.apim_v1 import APIListV1, ApplicationListV1

__all__ = ["APIListV1", "ApplicationListV1"]
