"""Pydantic schemas for usage reporting and event queries."""

from __future__ import annotations

from pydantic import Field

from admin_gateway.schemas.base import CamelModel


class ReportingRequest(CamelModel):
    """Aggregated event metrics query."""

    key_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    custom_ids: list[str] = Field(default_factory=list)
    user_ids: list[str] = Field(default_factory=list)
    filters: list[str] = Field(default_factory=list)
    start: int = 0
    end: int = 0
    increment: int = 0


class EventRequest(CamelModel):
    """Structured raw event query."""

    user_ids: list[str] = Field(default_factory=list)
    custom_ids: list[str] = Field(default_factory=list)
    key_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    start: int = 0
    end: int = 0
    limit: int = 0
    offset: int = 0
    return_count: bool = False


class KeyReportingRequest(CamelModel):
    """Top keys ranking query."""

    key_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    order: str = ""
    limit: int = 0
    offset: int = 0
    name: str = ""
    revoked: bool | None = None
    start: int = 0
    end: int = 0


class KeyReporting(CamelModel):
    """Usage totals for one key."""

    cost_in_micro_dollars: int = 0
