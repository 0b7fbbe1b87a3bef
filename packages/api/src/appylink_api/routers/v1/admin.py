"""Admin portal endpoints: moderation queue, provider and category CRUD."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from appylink_shared.constants import SubmissionStatus

from appylink_api.dependencies import AdminContext, require_capability
from appylink_api.responses import wrap_response
from appylink_api.schemas import (
    ApproveRequest,
    CategoryCreate,
    CategoryUpdate,
    ProviderCreate,
    ProviderUpdate,
    RejectRequest,
)
from appylink_api.services import admin_service

router = APIRouter(prefix="/admin", tags=["admin"])

can_read = require_capability("read_admin")
can_review = require_capability("review_submissions")
can_edit = require_capability("edit_providers")
can_delete = require_capability("delete_providers")
can_manage_categories = require_capability("manage_categories")


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


@router.get("/submissions")
async def list_submissions(
    status: SubmissionStatus | None = Query(None, description="new, approved or rejected"),
    ctx: AdminContext = Depends(can_read),
):
    data = [s.model_dump(mode="json") for s in admin_service.list_submissions(ctx, status)]
    return wrap_response(data, total_count=len(data), source="live")


@router.post("/submissions/{submission_id}/approve")
async def approve_submission(
    submission_id: str,
    body: ApproveRequest | None = None,
    ctx: AdminContext = Depends(can_review),
):
    publish = body.publish if body is not None else True
    result = admin_service.approve_submission(ctx, submission_id, publish=publish)
    return wrap_response({"submission_id": submission_id, "published": publish, "result": result})


@router.post("/submissions/{submission_id}/reject")
async def reject_submission(
    submission_id: str,
    body: RejectRequest | None = None,
    ctx: AdminContext = Depends(can_review),
):
    reason = body.reason if body is not None else None
    submission = admin_service.reject_submission(ctx, submission_id, reason=reason)
    return wrap_response(submission.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


@router.get("/providers")
async def list_providers(ctx: AdminContext = Depends(can_read)):
    data = [p.model_dump(mode="json") for p in admin_service.list_all_providers(ctx)]
    return wrap_response(data, total_count=len(data), source="live")


@router.post("/providers", status_code=201)
async def create_provider(body: ProviderCreate, ctx: AdminContext = Depends(can_edit)):
    return wrap_response(admin_service.create_provider(ctx, body).model_dump(mode="json"))


@router.patch("/providers/{provider_id}")
async def update_provider(
    provider_id: str,
    body: ProviderUpdate,
    ctx: AdminContext = Depends(can_edit),
):
    return wrap_response(admin_service.update_provider(ctx, provider_id, body).model_dump(mode="json"))


@router.post("/providers/{provider_id}/hide")
async def hide_provider(provider_id: str, ctx: AdminContext = Depends(can_edit)):
    provider = admin_service.set_provider_visibility(ctx, provider_id, active=False)
    return wrap_response(provider.model_dump(mode="json"))


@router.post("/providers/{provider_id}/show")
async def show_provider(provider_id: str, ctx: AdminContext = Depends(can_edit)):
    provider = admin_service.set_provider_visibility(ctx, provider_id, active=True)
    return wrap_response(provider.model_dump(mode="json"))


@router.delete("/providers/{provider_id}", status_code=204)
async def delete_provider(
    provider_id: str,
    confirm: bool = Query(False),
    ctx: AdminContext = Depends(can_delete),
):
    admin_service.delete_provider(ctx, provider_id, confirm=confirm)


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@router.get("/categories")
async def list_categories(ctx: AdminContext = Depends(can_read)):
    data = [c.model_dump() for c in admin_service.list_categories(ctx)]
    return wrap_response(data, total_count=len(data), source="live")


@router.post("/categories", status_code=201)
async def create_category(body: CategoryCreate, ctx: AdminContext = Depends(can_manage_categories)):
    return wrap_response(admin_service.create_category(ctx, body).model_dump())


@router.patch("/categories/{category_id}")
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    ctx: AdminContext = Depends(can_manage_categories),
):
    return wrap_response(admin_service.update_category(ctx, category_id, body).model_dump())


@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(
    category_id: str,
    confirm: bool = Query(False),
    ctx: AdminContext = Depends(can_manage_categories),
):
    admin_service.delete_category(ctx, category_id, confirm=confirm)
