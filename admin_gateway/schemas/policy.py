"""Pydantic schemas for access policy payloads."""

from __future__ import annotations

from typing import Any

from admin_gateway.schemas.base import CamelModel


class Policy(CamelModel):
    """Access policy payload."""

    id: str | None = None
    name: str | None = None
    tags: list[str] | None = None
    config: dict[str, Any] | None = None
    regex_config: dict[str, Any] | None = None
    custom_config: dict[str, Any] | None = None
    created_at: int | None = None
    updated_at: int | None = None


class UpdatePolicy(CamelModel):
    """Payload to update mutable policy fields."""

    name: str | None = None
    tags: list[str] | None = None
    config: dict[str, Any] | None = None
    regex_config: dict[str, Any] | None = None
    custom_config: dict[str, Any] | None = None
    updated_at: int | None = None
