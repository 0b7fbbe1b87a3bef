"""Tests for sign-in flows and session/role resolution."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from postgrest.exceptions import APIError
from supabase import AuthError

from appylink_api.middleware.auth import RESTRICTED_NOTICE, Capabilities
from appylink_shared.config import settings
from tests.conftest import bearer, with_role


def test_capabilities_by_role():
    admin = Capabilities.for_role("admin")
    editor = Capabilities.for_role("editor")
    viewer = Capabilities.for_role("viewer")
    nobody = Capabilities.for_role(None)

    assert admin.is_admin and admin.notice is None
    assert editor.allows("review_submissions") and editor.allows("edit_providers")
    assert not editor.allows("delete_providers")
    assert not editor.allows("manage_categories")
    assert viewer.allows("read_admin") and not viewer.allows("edit_providers")
    assert nobody.actions == frozenset()
    assert nobody.notice == RESTRICTED_NOTICE


def test_session_unauthenticated(client):
    body = client.get("/v1/auth/session").json()
    assert body["data"] == {"state": "unauthenticated"}


def test_invalid_token_returns_401(client, configured):
    response = client.get("/v1/auth/session", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"


def test_session_admin(client, configured):
    with patch("appylink_api.middleware.auth.get_user_client", return_value=with_role("admin")):
        data = client.get("/v1/auth/session", headers=bearer("admin@example.com")).json()["data"]

    assert data["state"] == "authenticated"
    assert data["user"]["email"] == "admin@example.com"
    assert data["role"] == "admin"
    assert data["is_admin"] is True
    assert data["notice"] is None
    assert all(data["capabilities"].values())


def test_session_non_admin_keeps_session_with_notice(client, configured):
    with patch("appylink_api.middleware.auth.get_user_client", return_value=with_role("viewer")):
        data = client.get("/v1/auth/session", headers=bearer("viewer@example.com")).json()["data"]

    assert data["state"] == "authenticated"
    assert data["is_admin"] is False
    assert data["notice"] == RESTRICTED_NOTICE
    assert data["capabilities"]["read_admin"] is True
    assert data["capabilities"]["edit_providers"] is False


def test_session_without_profile_has_no_role(client, configured):
    with patch("appylink_api.middleware.auth.get_user_client", return_value=with_role(None)):
        data = client.get("/v1/auth/session", headers=bearer()).json()["data"]
    assert data["role"] is None
    assert not any(data["capabilities"].values())


def test_unknown_role_value_is_ignored(client, configured):
    with patch("appylink_api.middleware.auth.get_user_client", return_value=with_role("superuser")):
        data = client.get("/v1/auth/session", headers=bearer()).json()["data"]
    assert data["role"] is None


def test_refused_profile_lookup_keeps_session_without_role(client, configured):
    mock = with_role(None)
    mock.table("profiles").execute.side_effect = APIError(
        {"message": "permission denied for table profiles", "code": "42501", "hint": None, "details": None}
    )
    with patch("appylink_api.middleware.auth.get_user_client", return_value=mock):
        response = client.get("/v1/auth/session", headers=bearer())

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["state"] == "authenticated"
    assert data["role"] is None
    assert data["notice"] == RESTRICTED_NOTICE


def test_failed_profile_lookup_keeps_session_without_role(client, configured):
    mock = with_role(None)
    mock.table("profiles").execute.side_effect = APIError(
        {"message": "upstream timeout", "code": "57014", "hint": None, "details": None}
    )
    with patch("appylink_api.middleware.auth.get_user_client", return_value=mock):
        data = client.get("/v1/auth/session", headers=bearer()).json()["data"]

    assert data["state"] == "authenticated"
    assert data["is_admin"] is False


def test_refused_profile_lookup_still_blocks_admin_routes(client, configured):
    mock = with_role(None)
    mock.table("profiles").execute.side_effect = APIError(
        {"message": "permission denied for table profiles", "code": "42501", "hint": None, "details": None}
    )
    with patch("appylink_api.middleware.auth.get_user_client", return_value=mock):
        response = client.get("/v1/admin/submissions", headers=bearer())
    assert response.status_code == 403


def test_bootstrap_admin_email_skips_profile_lookup(client, configured, monkeypatch):
    monkeypatch.setattr(settings, "bootstrap_admin_email", "owner@appylink.co.uk")
    mock = with_role(None)
    with patch("appylink_api.middleware.auth.get_user_client", return_value=mock):
        data = client.get("/v1/auth/session", headers=bearer("Owner@AppyLink.co.uk")).json()["data"]

    assert data["is_admin"] is True
    mock.table.assert_not_called()


def test_session_requires_configured_backend(client):
    response = client.get("/v1/auth/session", headers=bearer())
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "NOT_CONFIGURED"


def test_magic_link(client, configured):
    anon = MagicMock()
    with patch("appylink_api.services.auth_service.create_anon_client", return_value=anon):
        response = client.post("/v1/auth/magic-link", json={"email": " sam@example.com "})

    assert response.status_code == 200
    assert "magic link" in response.json()["data"]["message"]
    payload = anon.auth.sign_in_with_otp.call_args[0][0]
    assert payload["email"] == "sam@example.com"
    assert payload["options"]["email_redirect_to"] == "http://localhost:3000/#admin"


def test_magic_link_rejects_bad_email(client, configured):
    response = client.post("/v1/auth/magic-link", json={"email": "not-an-email"})
    assert response.status_code == 422
    assert "email" in response.json()["error"]["details"]["fields"]


def test_magic_link_when_unconfigured(client):
    response = client.post("/v1/auth/magic-link", json={"email": "sam@example.com"})
    assert response.status_code == 503


def test_password_sign_in(client, configured):
    anon = MagicMock()
    anon.auth.sign_in_with_password.return_value = SimpleNamespace(
        user=SimpleNamespace(id="user-1", email="sam@example.com"),
        session=SimpleNamespace(
            access_token="access", refresh_token="refresh", expires_in=3600, token_type="bearer"
        ),
    )
    with patch("appylink_api.services.auth_service.create_anon_client", return_value=anon):
        response = client.post("/v1/auth/sign-in", json={"email": "sam@example.com", "password": "secret1"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"] == {"id": "user-1", "email": "sam@example.com"}
    assert data["session"]["access_token"] == "access"


def test_password_sign_in_failure(client, configured):
    anon = MagicMock()
    anon.auth.sign_in_with_password.side_effect = AuthError("Invalid login credentials", None)
    with patch("appylink_api.services.auth_service.create_anon_client", return_value=anon):
        response = client.post("/v1/auth/sign-in", json={"email": "sam@example.com", "password": "wrong-pw"})

    assert response.status_code == 400
    assert response.json()["error"] == {"code": "AUTH_FAILED", "message": "Invalid login credentials"}


def test_short_password_rejected(client, configured):
    response = client.post("/v1/auth/sign-up", json={"email": "sam@example.com", "password": "123"})
    assert response.status_code == 422


def test_sign_up_pending_confirmation(client, configured):
    anon = MagicMock()
    anon.auth.sign_up.return_value = SimpleNamespace(
        user=SimpleNamespace(id="user-2", email="new@example.com"),
        session=None,
    )
    with patch("appylink_api.services.auth_service.create_anon_client", return_value=anon):
        data = client.post(
            "/v1/auth/sign-up", json={"email": "new@example.com", "password": "secret1"}
        ).json()["data"]

    assert data["session"] is None
    assert data["message"] == "Check your email to confirm your account."


def test_reset_password(client, configured):
    anon = MagicMock()
    with patch("appylink_api.services.auth_service.create_anon_client", return_value=anon):
        response = client.post("/v1/auth/reset-password", json={"email": "sam@example.com"})

    assert response.status_code == 200
    anon.auth.reset_password_for_email.assert_called_once_with(
        "sam@example.com", {"redirect_to": "http://localhost:3000/#admin"}
    )


def test_sign_out_requires_session(client):
    response = client.post("/v1/auth/sign-out", json={"refresh_token": "r"})
    assert response.status_code == 401


def test_sign_out(client, configured):
    anon = MagicMock()
    with patch("appylink_api.services.auth_service.create_anon_client", return_value=anon):
        response = client.post("/v1/auth/sign-out", json={"refresh_token": "r"}, headers=bearer())

    assert response.status_code == 204
    anon.auth.sign_out.assert_called_once()
