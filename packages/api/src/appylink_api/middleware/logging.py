"""One structured log line per request."""

from __future__ import annotations

import time

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from appylink_api.dependencies import CLIENT_ID_HEADER

logger = structlog.get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration. Requests that reach the error
    handlers still log as completed with their 4xx/5xx status; only
    exceptions that escape every handler log as failed.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.monotonic()
        log = logger.bind(
            method=request.method,
            path=request.url.path,
            client_id=request.headers.get(CLIENT_ID_HEADER),
            authenticated="authorization" in request.headers,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            log.error("request_failed", error=str(exc), duration_ms=_elapsed_ms(start))
            raise

        emit = log.warning if response.status_code >= 500 else log.info
        emit("request_completed", status=response.status_code, duration_ms=_elapsed_ms(start))
        return response


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 2)
