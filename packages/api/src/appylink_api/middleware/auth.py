"""Session resolution and the per-request admin capability object."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

import structlog
from fastapi import Depends, Request
from jose import JWTError
from jose import jwt as jose_jwt
from supabase import Client

from appylink_shared.config import settings
from appylink_shared.constants import TABLE_PROFILES, Role
from appylink_shared.db import get_user_client, is_supabase_configured
from appylink_shared.models import AdminProfile

from appylink_api.errors import (
    AuthenticationRequired,
    BackendError,
    NotConfigured,
    PermissionDenied,
    backend_errors,
)

logger = structlog.get_logger(__name__)

Action = Literal[
    "read_admin",
    "review_submissions",
    "edit_providers",
    "delete_providers",
    "manage_categories",
]

ROLE_ACTIONS: dict[str, frozenset[str]] = {
    "admin": frozenset(
        {"read_admin", "review_submissions", "edit_providers", "delete_providers", "manage_categories"}
    ),
    "editor": frozenset({"read_admin", "review_submissions", "edit_providers"}),
    "viewer": frozenset({"read_admin"}),
}

RESTRICTED_NOTICE = (
    "You are signed in but not marked as admin. Read-only features will work; "
    "write actions are blocked."
)


@dataclass
class AuthUser:
    user_id: str
    email: str | None = None
    access_token: str = field(default="", repr=False)
    claims: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class Capabilities:
    """What the signed-in user may do; resolved once per request."""

    role: Role | None
    actions: frozenset[str]

    @classmethod
    def for_role(cls, role: Role | None) -> "Capabilities":
        return cls(role=role, actions=ROLE_ACTIONS.get(role or "", frozenset()))

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def notice(self) -> str | None:
        return None if self.is_admin else RESTRICTED_NOTICE

    def allows(self, action: Action) -> bool:
        return action in self.actions

    def require(self, action: Action) -> None:
        if not self.allows(action):
            raise PermissionDenied(
                f"Your role ({self.role or 'none'}) does not allow '{action}'."
            )

    def as_dict(self) -> dict[str, bool]:
        return {action: action in self.actions for action in ROLE_ACTIONS["admin"]}


@dataclass
class AdminContext:
    user: AuthUser
    capabilities: Capabilities
    client: Client = field(repr=False)


def _validate_jwt(token: str) -> dict[str, Any] | None:
    """Validate a Supabase JWT and return its claims."""
    try:
        return jose_jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            audience="authenticated",
        )
    except JWTError as exc:
        logger.info("jwt_rejected", error=str(exc))
        return None


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


async def get_current_user(request: Request) -> AuthUser | None:
    """Extract and validate the user from a bearer JWT.

    Returns None if no credentials are provided (public access).
    Raises 401 if the token is invalid.
    """
    token = _bearer_token(request)
    if token is None:
        return None
    claims = _validate_jwt(token)
    if claims is None:
        raise AuthenticationRequired("Invalid or expired session.")
    return AuthUser(
        user_id=str(claims.get("sub", "")),
        email=claims.get("email"),
        access_token=token,
        claims=claims,
    )


def lookup_role(client: Client, user: AuthUser) -> Role | None:
    """Role from the profiles table, or the bootstrap admin override."""
    bootstrap = settings.bootstrap_admin_email
    if bootstrap and (user.email or "").lower() == bootstrap:
        logger.info("bootstrap_admin_session", user_id=user.user_id)
        return "admin"

    with backend_errors("lookup_role"):
        result = (
            client.table(TABLE_PROFILES)
            .select("id, email, role")
            .eq("id", user.user_id)
            .limit(1)
            .execute()
        )
    if not result.data:
        return None
    return AdminProfile.from_db_row(result.data[0]).role


def resolve_session(user: AuthUser) -> AdminContext:
    """The user's RLS-scoped client and capabilities, looked up once."""
    if not is_supabase_configured():
        raise NotConfigured("Supabase not configured")
    client = get_user_client(user.access_token)
    capabilities = Capabilities.for_role(lookup_role(client, user))
    return AdminContext(user=user, capabilities=capabilities, client=client)


def session_capabilities(user: AuthUser) -> Capabilities:
    """
    Capabilities for the session endpoint.

    A refused or failed profiles lookup leaves the user signed in without a
    role, so they still see the restricted notice instead of an error.
    """
    if not is_supabase_configured():
        raise NotConfigured("Supabase not configured")
    try:
        role = lookup_role(get_user_client(user.access_token), user)
    except (PermissionDenied, BackendError) as exc:
        logger.warning("role_lookup_failed", user_id=user.user_id, error=exc.message)
        role = None
    return Capabilities.for_role(role)


async def get_admin_context(
    user: AuthUser | None = Depends(get_current_user),
) -> AdminContext:
    if user is None:
        raise AuthenticationRequired("Sign in to use the admin portal.")
    return resolve_session(user)


def require_capability(action: Action):
    """Dependency factory that requires the session to allow `action`."""

    async def _dependency(ctx: AdminContext = Depends(get_admin_context)) -> AdminContext:
        ctx.capabilities.require(action)
        return ctx

    return _dependency
