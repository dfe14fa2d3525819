"""Pydantic schemas for key-management payloads."""

from __future__ import annotations

from pydantic import Field

from admin_gateway.schemas.base import CamelModel


class PathConfig(CamelModel):
    """One path a key is allowed to call."""

    path: str
    method: str


class RequestKey(CamelModel):
    """Payload to create a key."""

    name: str | None = None
    created_at: int | None = None
    updated_at: int | None = None
    tags: list[str] | None = None
    key_id: str | None = None
    revoked: bool | None = None
    key: str | None = None
    revoked_reason: str | None = None
    cost_limit_in_usd: float | None = None
    cost_limit_in_usd_over_time: float | None = None
    cost_limit_in_usd_unit: str | None = None
    rate_limit_over_time: int | None = None
    rate_limit_unit: str | None = None
    ttl: str | None = None
    setting_id: str | None = None
    setting_ids: list[str] | None = None
    allowed_paths: list[PathConfig] | None = None
    should_log_request: bool | None = None
    should_log_response: bool | None = None
    rotation_enabled: bool | None = None
    policy_id: str | None = None
    is_key_not_hashed: bool | None = None


class UpdateKey(CamelModel):
    """Payload to update mutable key fields."""

    name: str | None = None
    updated_at: int | None = None
    tags: list[str] | None = None
    revoked: bool | None = None
    revoked_reason: str | None = None
    setting_id: str | None = None
    setting_ids: list[str] | None = None
    cost_limit_in_usd: float | None = None
    cost_limit_in_usd_over_time: float | None = None
    cost_limit_in_usd_unit: str | None = None
    rate_limit_over_time: int | None = None
    rate_limit_unit: str | None = None
    allowed_paths: list[PathConfig] | None = None
    should_log_request: bool | None = None
    should_log_response: bool | None = None
    rotation_enabled: bool | None = None
    policy_id: str | None = None


class KeyFilterRequest(CamelModel):
    """Structured filter for listing keys."""

    tags: list[str] = Field(default_factory=list)
    key_ids: list[str] = Field(default_factory=list)
    revoked: bool | None = None
    limit: int = 0
    offset: int = 0
    name: str = ""
    order: str = ""
    return_count: bool = False


class ResponseKey(CamelModel):
    """Key response payload."""

    name: str | None = None
    created_at: int | None = None
    updated_at: int | None = None
    tags: list[str] | None = None
    key_id: str
    revoked: bool = False
    revoked_reason: str | None = None
    cost_limit_in_usd: float | None = None
    cost_limit_in_usd_over_time: float | None = None
    cost_limit_in_usd_unit: str | None = None
    rate_limit_over_time: int | None = None
    rate_limit_unit: str | None = None
    ttl: str | None = None
    setting_id: str | None = None
    setting_ids: list[str] | None = None
    allowed_paths: list[PathConfig] | None = None
    should_log_request: bool | None = None
    should_log_response: bool | None = None
    rotation_enabled: bool | None = None
    policy_id: str | None = None
