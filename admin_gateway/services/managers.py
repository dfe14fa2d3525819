"""Manager contracts the admin handlers call into.

Managers own storage and business rules for one resource family. They are
process-wide, called concurrently from many requests, and report failures by
raising exceptions whose ``kind`` is an ``ErrorKind`` (see
``admin_gateway.core.errors.ManagerError``). Any other exception is treated
as an internal failure.

Methods may be plain functions (run in the threadpool) or coroutines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Protocol

from admin_gateway.schemas.key import KeyFilterRequest
from admin_gateway.schemas.key import RequestKey
from admin_gateway.schemas.key import UpdateKey
from admin_gateway.schemas.policy import Policy
from admin_gateway.schemas.policy import UpdatePolicy
from admin_gateway.schemas.provider import CustomProvider
from admin_gateway.schemas.provider import ProviderSetting
from admin_gateway.schemas.provider import UpdateCustomProvider
from admin_gateway.schemas.provider import UpdateProviderSetting
from admin_gateway.schemas.reporting import EventRequest
from admin_gateway.schemas.reporting import KeyReportingRequest
from admin_gateway.schemas.reporting import ReportingRequest
from admin_gateway.schemas.route import Route
from admin_gateway.schemas.user import UpdateUser
from admin_gateway.schemas.user import User


class KeyManager(Protocol):
    """Contract for key storage and validation."""

    def get_keys(self, tags: list[str], key_ids: list[str], provider: str | None) -> Any: ...
    def get_keys_v2(self, request: KeyFilterRequest) -> Any: ...
    def create_key(self, key: RequestKey) -> Any: ...
    def update_key(self, key_id: str, key: UpdateKey) -> Any: ...
    def delete_key(self, key_id: str) -> None: ...


class KeyReportingManager(Protocol):
    """Contract for usage reporting and event queries."""

    def get_key_reporting(self, key_id: str) -> Any: ...
    def get_event_reporting(self, request: ReportingRequest) -> Any: ...
    def get_aggregated_event_by_day_reporting(self, request: ReportingRequest) -> Any: ...
    def get_events(
        self,
        user_id: str | None,
        custom_id: str | None,
        key_ids: list[str],
        start: int | None,
        end: int | None,
    ) -> Any: ...
    def get_events_v2(self, request: EventRequest) -> Any: ...
    def get_user_ids(self, key_id: str) -> Any: ...
    def get_top_key_reporting(self, request: KeyReportingRequest) -> Any: ...
    def get_custom_ids(self, key_id: str) -> Any: ...


class ProviderSettingsManager(Protocol):
    """Contract for provider credential settings."""

    def create_setting(self, setting: ProviderSetting) -> Any: ...
    def get_settings(self, ids: list[str]) -> Any: ...
    def update_setting(self, setting_id: str, setting: UpdateProviderSetting) -> Any: ...


class CustomProvidersManager(Protocol):
    """Contract for custom provider definitions."""

    def create_custom_provider(self, provider: CustomProvider) -> Any: ...
    def get_custom_providers(self) -> Any: ...
    def update_custom_provider(self, provider_id: str, provider: UpdateCustomProvider) -> Any: ...


class RouteManager(Protocol):
    """Contract for custom route definitions."""

    def create_route(self, route: Route) -> Any: ...
    def get_route(self, route_id: str) -> Any: ...
    def get_routes(self) -> Any: ...
    def delete_route(self, route_id: str) -> None: ...


class PoliciesManager(Protocol):
    """Contract for access policies."""

    def create_policy(self, policy: Policy) -> Any: ...
    def update_policy(self, policy_id: str, policy: UpdatePolicy) -> Any: ...
    def get_policies_by_tags(self, tags: list[str]) -> Any: ...


class UserManager(Protocol):
    """Contract for user accounts."""

    def create_user(self, user: User) -> Any: ...
    def update_user(self, user_id: str, user: UpdateUser) -> Any: ...
    def update_user_via_tags_and_user_id(self, tags: list[str], user_id: str, user: UpdateUser) -> Any: ...
    def get_users(
        self,
        tags: list[str],
        key_ids: list[str],
        user_ids: list[str],
        offset: int,
        limit: int,
    ) -> Any: ...


@dataclass(frozen=True)
class Managers:
    """Every manager the admin server dispatches to, built once at startup."""

    keys: KeyManager
    key_reporting: KeyReportingManager
    provider_settings: ProviderSettingsManager
    custom_providers: CustomProvidersManager
    routes: RouteManager
    policies: PoliciesManager
    users: UserManager
