"""Provider setting and custom provider routes."""

from __future__ import annotations

from fastapi import Request

from admin_gateway.api.decoding import Arguments
from admin_gateway.api.decoding import body
from admin_gateway.api.decoding import no_arguments
from admin_gateway.api.decoding import path_id_and_body
from admin_gateway.api.decoding import query_list
from admin_gateway.api.handlers import Operation
from admin_gateway.api.handlers import AdminRoute
from admin_gateway.core.errors import NOT_FOUND
from admin_gateway.core.errors import ProblemCatalog
from admin_gateway.core.errors import ProblemType
from admin_gateway.schemas.provider import CustomProvider
from admin_gateway.schemas.provider import ProviderSetting
from admin_gateway.schemas.provider import UpdateCustomProvider
from admin_gateway.schemas.provider import UpdateProviderSetting


def _setting_problems(title: str) -> ProblemCatalog:
    return ProblemCatalog(
        internal=ProblemType("/errors/provider-settings-manager", title),
        validation=ProblemType("/errors/validation", "provider setting validation failed"),
        not_found=ProblemType(NOT_FOUND.type, "provider setting is not found"),
    )


def _custom_provider_problems(title: str) -> ProblemCatalog:
    return ProblemCatalog(
        internal=ProblemType("/errors/custom-provider-manager", title),
        validation=ProblemType("/errors/validation", "custom provider validation failed"),
        not_found=ProblemType(NOT_FOUND.type, "custom provider is not found"),
    )


async def decode_setting_ids(request: Request, purpose: str) -> Arguments:
    return (query_list(request, "ids"),)


ROUTES = [
    AdminRoute(
        "PUT",
        "/api/provider-settings",
        Operation(
            handler="create_provider_setting_handler",
            action="create_setting",
            manager="provider_settings",
            method="create_setting",
            decode=body(ProviderSetting),
            problems=_setting_problems("provider setting creation failed"),
            purpose="creating a provider setting",
        ),
    ),
    AdminRoute(
        "GET",
        "/api/provider-settings",
        Operation(
            handler="get_provider_settings_handler",
            action="get_settings",
            manager="provider_settings",
            method="get_settings",
            decode=decode_setting_ids,
            problems=_setting_problems("get provider settings failed"),
            purpose="retrieving provider settings",
        ),
    ),
    AdminRoute(
        "PATCH",
        "/api/provider-settings/{id:path}",
        Operation(
            handler="update_provider_setting_handler",
            action="update_setting",
            manager="provider_settings",
            method="update_setting",
            decode=path_id_and_body(UpdateProviderSetting),
            problems=_setting_problems("provider setting update failed"),
            purpose="updating a provider setting",
        ),
    ),
    AdminRoute(
        "POST",
        "/api/custom/providers",
        Operation(
            handler="create_custom_provider_handler",
            action="create_custom_provider",
            manager="custom_providers",
            method="create_custom_provider",
            decode=body(CustomProvider),
            problems=_custom_provider_problems("creating a custom provider error"),
            purpose="creating a custom provider",
        ),
    ),
    AdminRoute(
        "GET",
        "/api/custom/providers",
        Operation(
            handler="get_custom_providers_handler",
            action="get_custom_providers",
            manager="custom_providers",
            method="get_custom_providers",
            decode=no_arguments,
            problems=_custom_provider_problems("getting custom providers error"),
            purpose="retrieving custom providers",
        ),
    ),
    AdminRoute(
        "PATCH",
        "/api/custom/providers/{id:path}",
        Operation(
            handler="update_custom_provider_handler",
            action="update_custom_provider",
            manager="custom_providers",
            method="update_custom_provider",
            decode=path_id_and_body(UpdateCustomProvider),
            problems=_custom_provider_problems("updating a custom provider error"),
            purpose="updating a custom provider",
        ),
    ),
]
