"""
The `{"data", "meta", "links"}` envelope returned by every endpoint, and the
`{"error": {...}}` body returned by every failure.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

# "live" when read from Supabase, "local" when served from the bundled seed
# or queued in client storage.
DataSource = Literal["live", "local"]


class ResponseMeta(BaseModel):
    total_count: int | None = None
    page_size: int | None = None
    offset: int | None = None
    source: DataSource | None = None
    error: str | None = None


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class ApiError(BaseModel):
    error: ErrorDetail


def wrap_response(
    data: Any,
    *,
    total_count: int | None = None,
    page_size: int | None = None,
    offset: int | None = None,
    source: DataSource | None = None,
    error: str | None = None,
    links: dict[str, str] | None = None,
) -> dict[str, Any]:
    meta = ResponseMeta(
        total_count=total_count,
        page_size=page_size,
        offset=offset,
        source=source,
        error=error,
    )
    return {
        "data": data,
        "meta": meta.model_dump(exclude_none=True),
        "links": links or {},
    }


def error_response(
    code: str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    body = ApiError(error=ErrorDetail(code=code, message=message, details=details or None))
    return body.model_dump(exclude_none=True)
