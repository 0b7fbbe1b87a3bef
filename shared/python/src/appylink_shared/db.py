"""
db.py — Supabase client singletons.

Usage:
    from appylink_shared.db import get_supabase_client, get_user_client

    supabase = get_supabase_client()                    # anon key (public reads/inserts)
    supabase = get_supabase_client(service_role=True)   # service key (CLI seeding)
    supabase = get_user_client(access_token)            # caller's JWT (RLS as that user)
"""

from __future__ import annotations

import threading
from typing import Literal

import structlog
from supabase import Client, create_client

from appylink_shared.config import settings

logger = structlog.get_logger(__name__)

ClientRole = Literal["anon", "service_role"]


class SupabaseNotConfigured(RuntimeError):
    """Raised when a client is requested but credentials are missing."""


def is_supabase_configured() -> bool:
    """True when both the project URL and the anon key are set."""
    return settings.supabase_configured


# ---------------------------------------------------------------------------
# One shared client per role per process, created lazily under a lock
# ---------------------------------------------------------------------------
_clients_lock = threading.Lock()
_clients: dict[ClientRole, Client] = {}


def _credentials(role: ClientRole) -> tuple[str, str]:
    if role == "service_role":
        key, env = settings.supabase_service_key, "SUPABASE_SERVICE_KEY"
    else:
        key, env = settings.supabase_anon_key, "SUPABASE_ANON_KEY"
    if not settings.supabase_url or not key:
        raise SupabaseNotConfigured(f"SUPABASE_URL and {env} must be set. Set them in .env.")
    return settings.supabase_url, key


def get_supabase_client(*, service_role: bool = False) -> Client:
    """
    Return the process-wide Supabase client for a role.

    Args:
        service_role: True for the service role key, which bypasses RLS
                      (CLI seeding and status). False (default) for the
                      anon key, which public reads and form inserts use.

    Raises:
        SupabaseNotConfigured: the URL or the role's key is missing.
    """
    role: ClientRole = "service_role" if service_role else "anon"
    with _clients_lock:
        client = _clients.get(role)
        if client is None:
            client = create_client(*_credentials(role))
            _clients[role] = client
            logger.info("supabase_client_created", role=role)
        return client


def get_user_client(access_token: str) -> Client:
    """
    Return a fresh anon-key client whose PostgREST calls carry the caller's JWT.

    Row-level policies then evaluate against the signed-in user, so admin
    writes succeed or fail exactly as they would from the browser.
    """
    client = create_client(*_credentials("anon"))
    client.postgrest.auth(access_token)
    return client


def reset_supabase_clients() -> None:
    """Drop the shared clients; the next call recreates them from settings."""
    with _clients_lock:
        _clients.clear()
