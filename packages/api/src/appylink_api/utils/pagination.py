"""Offset ("load more") pagination helpers."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from fastapi import Query

from appylink_shared.config import settings


class PaginationParams:
    """Dependency for extracting pagination query params."""

    def __init__(
        self,
        offset: int = Query(0, ge=0, description="Number of results already shown"),
        page_size: int | None = Query(None, ge=1, le=200, description="Number of results per page"),
    ) -> None:
        self.offset = offset
        self.page_size = page_size or settings.directory_page_size


def build_links(
    path: str,
    params: dict[str, Any],
    *,
    offset: int,
    page_size: int,
    total: int,
) -> dict[str, str]:
    """Build self/next links; `next` is present while results remain."""

    def _url(off: int) -> str:
        query = urlencode(
            {**{k: v for k, v in params.items() if v is not None}, "offset": off, "page_size": page_size},
            doseq=True,
        )
        return f"{path}?{query}"

    links: dict[str, str] = {"self": _url(offset)}
    if offset + page_size < total:
        links["next"] = _url(offset + page_size)
    return links
