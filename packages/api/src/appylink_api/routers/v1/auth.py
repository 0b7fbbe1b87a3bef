"""Sign-in flows and session inspection for the admin portal."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from appylink_api.dependencies import AuthUser, get_current_user
from appylink_api.errors import AuthenticationRequired
from appylink_api.middleware.auth import session_capabilities
from appylink_api.responses import wrap_response
from appylink_api.schemas import EmailRequest, PasswordRequest, SignOutRequest
from appylink_api.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/magic-link")
async def magic_link(body: EmailRequest):
    return wrap_response(auth_service.send_magic_link(body.email))


@router.post("/sign-in")
async def sign_in(body: PasswordRequest):
    return wrap_response(auth_service.sign_in_with_password(body.email, body.password))


@router.post("/sign-up")
async def sign_up(body: PasswordRequest):
    return wrap_response(auth_service.sign_up(body.email, body.password))


@router.post("/reset-password")
async def reset_password(body: EmailRequest):
    return wrap_response(auth_service.reset_password(body.email))


@router.post("/sign-out", status_code=204)
async def sign_out(
    body: SignOutRequest,
    user: AuthUser | None = Depends(get_current_user),
):
    if user is None:
        raise AuthenticationRequired("No active session.")
    auth_service.sign_out(user.access_token, body.refresh_token)


@router.get("/session")
async def session(user: AuthUser | None = Depends(get_current_user)):
    """
    unauthenticated -> authenticated (role unknown) -> admin | non-admin.

    Non-admin users keep their session and get a restricted notice.
    """
    if user is None:
        return wrap_response({"state": "unauthenticated"})
    capabilities = session_capabilities(user)
    return wrap_response(
        {
            "state": "authenticated",
            "user": {"id": user.user_id, "email": user.email},
            "role": capabilities.role,
            "is_admin": capabilities.is_admin,
            "capabilities": capabilities.as_dict(),
            "notice": capabilities.notice,
        }
    )
