"""Identity calls proxied to Supabase Auth.

A fresh client is created per call: signing in stores a session on the
client, and the shared anon client must never act as a signed-in user.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from supabase import AuthError, Client, create_client

from appylink_shared.config import settings
from appylink_shared.db import is_supabase_configured
from appylink_shared.validation import is_valid_email

from appylink_api.errors import AppyLinkError, NotConfigured, ValidationFailed

logger = structlog.get_logger(__name__)


class AuthFailed(AppyLinkError):
    status_code = 400
    code = "AUTH_FAILED"


def create_anon_client() -> Client:
    if not is_supabase_configured():
        raise NotConfigured("Supabase not configured")
    return create_client(settings.supabase_url, settings.supabase_anon_key)


@contextmanager
def _auth_errors(action: str, email: str | None = None) -> Iterator[None]:
    try:
        yield
    except AuthError as exc:
        logger.info("auth_call_failed", action=action, email=email, error=exc.message)
        raise AuthFailed(exc.message or "Authentication failed.") from exc


def _check_email(email: str) -> str:
    email = email.strip()
    if not is_valid_email(email):
        raise ValidationFailed({"email": "Please enter a valid email address"})
    return email


def _session_payload(response: Any) -> dict[str, Any]:
    session = getattr(response, "session", None)
    user = getattr(response, "user", None)
    payload: dict[str, Any] = {
        "user": {"id": user.id, "email": user.email} if user else None,
        "session": None,
    }
    if session is not None:
        payload["session"] = {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "expires_in": session.expires_in,
            "token_type": session.token_type,
        }
    return payload


def send_magic_link(email: str) -> dict[str, str]:
    email = _check_email(email)
    client = create_anon_client()
    with _auth_errors("magic_link", email):
        client.auth.sign_in_with_otp(
            {"email": email, "options": {"email_redirect_to": settings.admin_redirect_url}}
        )
    logger.info("magic_link_sent", email=email)
    return {"message": "Check your email for a magic link."}


def sign_in_with_password(email: str, password: str) -> dict[str, Any]:
    email = _check_email(email)
    client = create_anon_client()
    with _auth_errors("sign_in", email):
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    logger.info("password_sign_in", email=email)
    return _session_payload(response)


def sign_up(email: str, password: str) -> dict[str, Any]:
    email = _check_email(email)
    client = create_anon_client()
    with _auth_errors("sign_up", email):
        response = client.auth.sign_up(
            {
                "email": email,
                "password": password,
                "options": {"email_redirect_to": settings.admin_redirect_url},
            }
        )
    logger.info("sign_up", email=email)
    payload = _session_payload(response)
    if payload["session"] is None:
        payload["message"] = "Check your email to confirm your account."
    return payload


def reset_password(email: str) -> dict[str, str]:
    email = _check_email(email)
    client = create_anon_client()
    with _auth_errors("reset_password", email):
        client.auth.reset_password_for_email(email, {"redirect_to": settings.admin_redirect_url})
    logger.info("password_reset_requested", email=email)
    return {"message": "If that address has an account, a reset link is on its way."}


def sign_out(access_token: str, refresh_token: str) -> None:
    client = create_anon_client()
    with _auth_errors("sign_out"):
        client.auth.set_session(access_token, refresh_token)
        client.auth.sign_out()
    logger.info("signed_out")
