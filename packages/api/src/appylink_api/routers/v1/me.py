"""Per-client favorites, comparison and offline drafts."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from appylink_shared.constants import COMPARE_LIMIT

from appylink_api.dependencies import get_client_state
from appylink_api.responses import wrap_response
from appylink_api.services import directory_service
from appylink_api.storage import ClientState

router = APIRouter(prefix="/me", tags=["me"])


@router.get("/favorites")
async def list_favorites(state: ClientState = Depends(get_client_state)):
    ids = state.favorites()
    cards, snapshot = directory_service.resolve_providers(ids)
    return wrap_response({"ids": ids, "providers": cards}, total_count=len(ids), source=snapshot.source)


@router.post("/favorites/{provider_id}")
async def toggle_favorite(provider_id: str, state: ClientState = Depends(get_client_state)):
    directory_service.require_provider(provider_id)
    saved = state.toggle_favorite(provider_id)
    return wrap_response({"ids": state.favorites(), "saved": saved})


@router.get("/compare")
async def list_compare(state: ClientState = Depends(get_client_state)):
    ids = state.compare()
    cards, snapshot = directory_service.resolve_providers(ids)
    return wrap_response(
        {"ids": ids, "providers": cards, "limit": COMPARE_LIMIT},
        total_count=len(ids),
        source=snapshot.source,
    )


@router.post("/compare/{provider_id}")
async def toggle_compare(provider_id: str, state: ClientState = Depends(get_client_state)):
    directory_service.require_provider(provider_id)
    result = state.toggle_compare(provider_id)
    return wrap_response(
        {"ids": result.ids, "selected": result.selected, "full": result.full, "limit": COMPARE_LIMIT}
    )


@router.delete("/compare")
async def clear_compare(state: ClientState = Depends(get_client_state)):
    state.clear_compare()
    return wrap_response({"ids": []})


@router.get("/drafts")
async def list_drafts(state: ClientState = Depends(get_client_state)):
    drafts = state.drafts()
    return wrap_response(drafts, total_count=len(drafts), source="local")
