"""Public directory endpoints: providers, categories, discounts, quote requests."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from appylink_shared.constants import ALL_CATEGORIES, SortMode

from appylink_api.dependencies import PaginationParams, get_client_state
from appylink_api.responses import wrap_response
from appylink_api.routers.v1.forms import form_response
from appylink_api.schemas import LeadForm
from appylink_api.services import directory_service, form_service
from appylink_api.storage import ClientState
from appylink_api.utils.filtering import FilterState, all_tags
from appylink_api.utils.pagination import build_links

router = APIRouter(tags=["directory"])


@router.get("/providers")
async def list_providers(
    pagination: PaginationParams = Depends(),
    q: str = Query("", description="Search name, summary, details and tags"),
    category: str = Query(ALL_CATEGORIES, description="Category id or 'all'"),
    tags: list[str] = Query([], description="Match providers carrying any of these tags"),
    only_discounts: bool = Query(False),
    sort: SortMode = Query("relevance"),
):
    state = FilterState(
        q=q,
        category=category,
        tags=frozenset(tags),
        only_discounts=only_discounts,
        sort=sort,
    )
    data, total, snapshot = directory_service.search_providers(
        state, offset=pagination.offset, page_size=pagination.page_size
    )
    links = build_links(
        "/v1/providers",
        {
            "q": q or None,
            "category": category if category != ALL_CATEGORIES else None,
            "tags": tags or None,
            "only_discounts": "true" if only_discounts else None,
            "sort": sort,
        },
        offset=pagination.offset,
        page_size=pagination.page_size,
        total=total,
    )
    return wrap_response(
        data,
        total_count=total,
        page_size=pagination.page_size,
        offset=pagination.offset,
        source=snapshot.source,
        error=snapshot.error,
        links=links,
    )


@router.get("/providers/tags")
async def list_tags():
    snapshot = directory_service.load_directory()
    return wrap_response(all_tags(snapshot.providers), source=snapshot.source, error=snapshot.error)


@router.get("/providers/{provider_id}")
async def get_provider(provider_id: str):
    profile, source = directory_service.get_provider_profile(provider_id)
    return wrap_response(profile, source=source)


@router.post("/providers/{provider_id}/leads", status_code=201)
async def request_quote(
    provider_id: str,
    body: LeadForm,
    response: Response,
    state: ClientState = Depends(get_client_state),
):
    directory_service.require_provider(provider_id)
    return form_response(form_service.request_quote(provider_id, body, state), response)


@router.get("/discounts")
async def list_discounts():
    snapshot = directory_service.load_directory()
    labels = snapshot.category_labels()
    data = [
        directory_service.to_card(p, labels)
        for p in snapshot.providers
        if p.discount is not None
    ]
    return wrap_response(data, total_count=len(data), source=snapshot.source, error=snapshot.error)


@router.get("/categories")
async def list_categories():
    snapshot = directory_service.load_directory()
    data = [c.model_dump() for c in snapshot.categories]
    return wrap_response(data, total_count=len(data), source=snapshot.source, error=snapshot.error)
