"""Pydantic schemas for user account payloads."""

from __future__ import annotations

from admin_gateway.schemas.base import CamelModel
from admin_gateway.schemas.key import PathConfig


class User(CamelModel):
    """User account payload."""

    id: str | None = None
    name: str | None = None
    user_id: str | None = None
    tags: list[str] | None = None
    key_ids: list[str] | None = None
    revoked: bool | None = None
    revoked_reason: str | None = None
    cost_limit_in_usd: float | None = None
    cost_limit_in_usd_over_time: float | None = None
    cost_limit_in_usd_unit: str | None = None
    rate_limit_over_time: int | None = None
    rate_limit_unit: str | None = None
    ttl: str | None = None
    allowed_paths: list[PathConfig] | None = None
    allowed_models: list[str] | None = None
    created_at: int | None = None
    updated_at: int | None = None


class UpdateUser(CamelModel):
    """Payload to update mutable user fields."""

    name: str | None = None
    tags: list[str] | None = None
    key_ids: list[str] | None = None
    revoked: bool | None = None
    revoked_reason: str | None = None
    cost_limit_in_usd: float | None = None
    cost_limit_in_usd_over_time: float | None = None
    cost_limit_in_usd_unit: str | None = None
    rate_limit_over_time: int | None = None
    rate_limit_unit: str | None = None
    allowed_paths: list[PathConfig] | None = None
    allowed_models: list[str] | None = None
    updated_at: int | None = None
