"""Key-management routes."""

from __future__ import annotations

from fastapi import Request

from admin_gateway.api.decoding import Arguments
from admin_gateway.api.decoding import body
from admin_gateway.api.decoding import missing_filters_error
from admin_gateway.api.decoding import path_id
from admin_gateway.api.decoding import path_id_and_body
from admin_gateway.api.decoding import query_list
from admin_gateway.api.decoding import query_param
from admin_gateway.api.handlers import Operation
from admin_gateway.api.handlers import AdminRoute
from admin_gateway.core.errors import NOT_FOUND
from admin_gateway.core.errors import ProblemCatalog
from admin_gateway.core.errors import ProblemType
from admin_gateway.schemas.key import KeyFilterRequest
from admin_gateway.schemas.key import RequestKey
from admin_gateway.schemas.key import UpdateKey

KEYS_PATH = "/api/key-management/keys"
KEY_PATH = "/api/key-management/keys/{id:path}"


def _key_manager_problems(title: str) -> ProblemCatalog:
    return ProblemCatalog(
        internal=ProblemType("/errors/key-manager", title),
        validation=ProblemType("/errors/validation", "key validation failed"),
        not_found=ProblemType(NOT_FOUND.type, "key is not found"),
    )


async def decode_key_filters(request: Request, purpose: str) -> Arguments:
    """Merge ``tag`` and ``tags`` into one de-duplicated selection."""
    tag = query_param(request, "tag")
    tags = query_list(request, "tags")
    key_ids = query_list(request, "keyIds")
    provider = query_param(request, "provider")

    if not tag and not tags and not key_ids and not provider:
        raise missing_filters_error(purpose)

    selected: list[str] = []
    if tag:
        selected.append(tag)
    for value in tags:
        if value != tag:
            selected.append(value)

    return (selected, key_ids, provider)


ROUTES = [
    AdminRoute(
        "GET",
        KEYS_PATH,
        Operation(
            handler="get_keys_handler",
            action="get_keys",
            manager="keys",
            method="get_keys",
            decode=decode_key_filters,
            problems=ProblemCatalog(
                internal=ProblemType("/errors/getting-keys", "getting keys errored out"),
                validation=ProblemType("/errors/validation", "get keys request validation failed"),
            ),
            purpose="retrieving keys",
        ),
    ),
    AdminRoute(
        "POST",
        "/api/v2/key-management/keys",
        Operation(
            handler="get_keys_v2_handler",
            action="get_keys_v2",
            manager="keys",
            method="get_keys_v2",
            decode=body(KeyFilterRequest),
            problems=ProblemCatalog(
                internal=ProblemType("/errors/key-manager", "getting keys errored out"),
                validation=ProblemType("/errors/validation", "get keys request validation failed"),
            ),
            purpose="retrieving keys",
        ),
    ),
    AdminRoute(
        "PUT",
        KEYS_PATH,
        Operation(
            handler="create_key_handler",
            action="create_key",
            manager="keys",
            method="create_key",
            decode=body(RequestKey),
            problems=_key_manager_problems("key creation error"),
            purpose="creating a key",
        ),
    ),
    AdminRoute(
        "PATCH",
        KEY_PATH,
        Operation(
            handler="update_key_handler",
            action="update_key",
            manager="keys",
            method="update_key",
            decode=path_id_and_body(UpdateKey),
            problems=_key_manager_problems("update key error"),
            purpose="updating a key",
        ),
    ),
    AdminRoute(
        "DELETE",
        KEY_PATH,
        Operation(
            handler="delete_key_handler",
            action="delete_key",
            manager="keys",
            method="delete_key",
            decode=path_id(),
            problems=_key_manager_problems("key deletion error"),
            purpose="deleting a key",
            empty_response=True,
        ),
    ),
]
