"""Domain errors and the FastAPI handlers that render them."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from appylink_shared.constants import PERMISSION_DENIED_CODE
from appylink_shared.db import SupabaseNotConfigured

from appylink_api.responses import error_response

logger = structlog.get_logger(__name__)


class AppyLinkError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationFailed(AppyLinkError):
    status_code = 422
    code = "VALIDATION_FAILED"

    def __init__(self, errors: dict[str, str], message: str = "Please correct the highlighted fields.") -> None:
        super().__init__(message, details={"fields": errors})
        self.errors = errors


class ConfirmationRequired(AppyLinkError):
    status_code = 400
    code = "CONFIRMATION_REQUIRED"


class AuthenticationRequired(AppyLinkError):
    status_code = 401
    code = "AUTHENTICATION_REQUIRED"


class PermissionDenied(AppyLinkError):
    status_code = 403
    code = "PERMISSION_DENIED"


class NotFound(AppyLinkError):
    status_code = 404
    code = "NOT_FOUND"


class Conflict(AppyLinkError):
    status_code = 409
    code = "CONFLICT"


class RateLimited(AppyLinkError):
    status_code = 429
    code = "PLEASE_WAIT"

    def __init__(self, remaining_seconds: float) -> None:
        wait = max(1, int(remaining_seconds + 0.999))
        super().__init__(
            f"Please wait {wait} seconds before submitting again.",
            details={"retry_after": wait},
        )
        self.retry_after = wait


class BackendError(AppyLinkError):
    status_code = 502
    code = "BACKEND_ERROR"


class NotConfigured(AppyLinkError):
    status_code = 503
    code = "NOT_CONFIGURED"


@contextmanager
def backend_errors(action: str) -> Iterator[None]:
    """Translate Supabase failures raised inside the block into domain errors."""
    try:
        yield
    except APIError as exc:
        logger.warning("backend_call_failed", action=action, code=exc.code, error=exc.message)
        if exc.code == PERMISSION_DENIED_CODE:
            raise PermissionDenied(
                exc.message or "You do not have permission to perform this action."
            ) from exc
        raise BackendError(exc.message or "The data store rejected the request.") from exc
    except SupabaseNotConfigured as exc:
        raise NotConfigured(str(exc)) from exc


async def _app_error_handler(request: Request, exc: AppyLinkError) -> JSONResponse:
    headers: dict[str, str] = {}
    if isinstance(exc, RateLimited):
        headers["Retry-After"] = str(exc.retry_after)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.code, exc.message, details=exc.details),
        headers=headers,
    )


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response("HTTP_ERROR", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = {
        ".".join(str(p) for p in err["loc"] if p != "body"): err["msg"]
        for err in exc.errors()
    }
    return JSONResponse(
        status_code=422,
        content=error_response(
            "VALIDATION_FAILED",
            "Please correct the highlighted fields.",
            details={"fields": fields},
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppyLinkError, _app_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
