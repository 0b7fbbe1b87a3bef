"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from appylink_api.middleware.auth import (
    AdminContext,
    AuthUser,
    get_admin_context,
    get_current_user,
    require_capability,
)
from appylink_api.storage import ClientState, KeyValueStorage
from appylink_api.utils.pagination import PaginationParams

CLIENT_ID_HEADER = "X-Client-Id"
CLIENT_ID_COOKIE = "appylink_client"

__all__ = [
    "AdminContext",
    "AuthUser",
    "PaginationParams",
    "get_admin_context",
    "get_client_id",
    "get_client_state",
    "get_current_user",
    "require_capability",
]


def get_client_id(request: Request) -> str:
    """Header, then cookie, then the caller's address."""
    client_id = request.headers.get(CLIENT_ID_HEADER) or request.cookies.get(CLIENT_ID_COOKIE)
    if client_id:
        return f"id:{client_id.strip()[:64]}"
    client = request.client
    return f"ip:{client.host if client else 'unknown'}"


def get_client_state(request: Request) -> ClientState:
    storage: KeyValueStorage = request.app.state.client_storage
    return ClientState(storage, get_client_id(request), clock=request.app.state.clock)
