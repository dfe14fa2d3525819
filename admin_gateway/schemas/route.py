"""Pydantic schemas for custom route payloads."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from admin_gateway.schemas.base import CamelModel


class RouteStep(CamelModel):
    """One provider attempt of a route."""

    provider: str
    model: str | None = None
    retries: int | None = None
    params: dict[str, Any] | None = None
    timeout: str | None = None


class CacheConfig(CamelModel):
    """Response caching options of a route."""

    enabled: bool = False
    ttl: str | None = None


class Route(CamelModel):
    """Custom route definition payload."""

    id: str | None = None
    name: str | None = None
    path: str | None = None
    key_ids: list[str] = Field(default_factory=list)
    steps: list[RouteStep] = Field(default_factory=list)
    cache_config: CacheConfig | None = None
    created_at: int | None = None
    updated_at: int | None = None
