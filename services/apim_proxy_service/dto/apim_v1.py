"""APIM v1 DTOs.

Models for the APIM Publisher and Developer Portal (store) list payloads.
Field names are camelCase on the wire. Fields the models do not declare are
kept (``extra="allow"``) so that a payload is passed through unchanged.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApimModel(BaseModel):
    """Base for APIM wire models: camelCase aliases, unknown fields preserved."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class PaginationV1(ApimModel):
    """Pagination block shared by APIM list responses."""

    offset: int | None = None
    limit: int | None = None
    total: int | None = None
    next: str | None = None
    previous: str | None = None


class APIInfoV1(ApimModel):
    """Single API entry from GET /api/am/publisher/v1/apis."""

    id: str | None = None
    name: str | None = None
    description: str | None = None
    context: str | None = None
    version: str | None = None
    provider: str | None = None
    type: str | None = None
    life_cycle_status: str | None = None
    workflow_status: str | None = None
    has_thumbnail: bool | None = None
    security_scheme: list[str] | None = None


class APIListV1(ApimModel):
    """API list payload returned by the APIM Publisher."""

    count: int | None = None
    items: list[APIInfoV1] = Field(default_factory=list, alias="list")
    pagination: PaginationV1 | None = None


class ApplicationInfoV1(ApimModel):
    """Single application entry from GET /api/am/store/v1/applications."""

    application_id: str | None = None
    name: str | None = None
    throttling_policy: str | None = None
    description: str | None = None
    status: str | None = None
    groups: list[str] | None = None
    subscription_count: int | None = None
    attributes: dict[str, Any] | None = None
    owner: str | None = None


class ApplicationListV1(ApimModel):
    """Application list payload returned by the APIM Developer Portal."""

    count: int | None = None
    items: list[ApplicationInfoV1] = Field(default_factory=list, alias="list")
    pagination: PaginationV1 | None = None
