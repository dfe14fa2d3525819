"""Pydantic schemas for provider settings and custom providers."""

from __future__ import annotations

from pydantic import Field

from admin_gateway.schemas.base import CamelModel


class ProviderSetting(CamelModel):
    """Provider credential setting payload."""

    id: str | None = None
    provider: str | None = None
    name: str | None = None
    setting: dict[str, str] = Field(default_factory=dict)
    allowed_models: list[str] | None = None
    created_at: int | None = None
    updated_at: int | None = None


class UpdateProviderSetting(CamelModel):
    """Payload to update a provider setting."""

    name: str | None = None
    setting: dict[str, str] | None = None
    allowed_models: list[str] | None = None
    updated_at: int | None = None


class RouteConfig(CamelModel):
    """Request mapping of one custom provider path."""

    path: str
    target_url: str
    model_location: str | None = None
    prompt_location: str | None = None
    completion_location: str | None = None
    stream_location: str | None = None
    stream_end_word: str | None = None
    stream_max_empty_messages: int | None = None


class CustomProvider(CamelModel):
    """Custom provider definition payload."""

    id: str | None = None
    provider: str | None = None
    route_configs: list[RouteConfig] = Field(default_factory=list)
    authentication_param: str | None = None
    created_at: int | None = None
    updated_at: int | None = None


class UpdateCustomProvider(CamelModel):
    """Payload to update a custom provider."""

    route_configs: list[RouteConfig] | None = None
    authentication_param: str | None = None
    updated_at: int | None = None
