"""
Admin moderation and CRUD.

Every call runs through the signed-in user's Supabase client, so the
project's row-level policies make the final decision; the capability checks
in the routers only stop requests that would certainly be refused.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog
from supabase import Client

from appylink_shared.constants import (
    RPC_APPROVE_SUBMISSION,
    TABLE_CATEGORIES,
    TABLE_PROVIDERS,
    TABLE_SUBMISSIONS,
    SubmissionStatus,
)
from appylink_shared.models import Category, ListingSubmission, Provider
from appylink_shared.validation import validate_category, validate_provider

from appylink_api.errors import ConfirmationRequired, Conflict, NotFound, ValidationFailed, backend_errors
from appylink_api.middleware.auth import AdminContext
from appylink_api.schemas import CategoryCreate, CategoryUpdate, ProviderCreate, ProviderUpdate
from appylink_api.services.directory_service import invalidate_directory, parse_rows

logger = structlog.get_logger(__name__)


def _reviewer(ctx: AdminContext) -> str:
    return ctx.user.email or ctx.user.user_id


def _require_confirmation(confirm: bool, what: str) -> None:
    if not confirm:
        raise ConfirmationRequired(f"Deleting {what} must be confirmed (confirm=true).")


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


def list_submissions(ctx: AdminContext, status: SubmissionStatus | None = None) -> list[ListingSubmission]:
    with backend_errors("list_submissions"):
        query = ctx.client.table(TABLE_SUBMISSIONS).select("*").order("created_at", desc=True)
        if status:
            query = query.eq("status", status)
        result = query.execute()
    return parse_rows(ListingSubmission, result.data)


def get_submission(client: Client, submission_id: str) -> ListingSubmission:
    with backend_errors("get_submission"):
        result = (
            client.table(TABLE_SUBMISSIONS)
            .select("*")
            .eq("id", submission_id)
            .limit(1)
            .execute()
        )
    if not result.data:
        raise NotFound(f"Submission '{submission_id}' not found")
    return ListingSubmission.from_db_row(result.data[0])


def approve_submission(ctx: AdminContext, submission_id: str, *, publish: bool = True) -> Any:
    """
    Approve a submission and create its provider in one stored-procedure call.

    The procedure marks the submission approved and inserts the provider in a
    single transaction, so neither half can exist without the other.
    """
    submission = get_submission(ctx.client, submission_id)
    if submission.is_reviewed:
        raise Conflict(f"Submission was already {submission.status}.")

    with backend_errors("approve_submission"):
        result = ctx.client.rpc(
            RPC_APPROVE_SUBMISSION,
            {"sub_id": submission_id, "publish": publish},
        ).execute()

    invalidate_directory()
    logger.info(
        "submission_approved",
        submission_id=submission_id,
        publish=publish,
        reviewer=_reviewer(ctx),
    )
    return result.data


def reject_submission(ctx: AdminContext, submission_id: str, *, reason: str | None = None) -> ListingSubmission:
    submission = get_submission(ctx.client, submission_id)
    if submission.is_reviewed:
        raise Conflict(f"Submission was already {submission.status}.")

    changes = {
        "status": "rejected",
        "review_note": (reason or "").strip() or None,
        "reviewed_at": datetime.now(timezone.utc).isoformat(),
        "reviewed_by": _reviewer(ctx),
    }
    with backend_errors("reject_submission"):
        result = (
            ctx.client.table(TABLE_SUBMISSIONS)
            .update(changes)
            .eq("id", submission_id)
            .eq("status", "new")
            .execute()
        )
    if not result.data:
        # Another reviewer got there first, or RLS hid the row from the update.
        raise Conflict("Submission could not be rejected; it may have been reviewed already.")

    logger.info("submission_rejected", submission_id=submission_id, reviewer=_reviewer(ctx))
    return ListingSubmission.from_db_row(result.data[0])


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


def list_all_providers(ctx: AdminContext) -> list[Provider]:
    with backend_errors("list_providers"):
        result = ctx.client.table(TABLE_PROVIDERS).select("*").order("created_at", desc=True).execute()
    return parse_rows(Provider, result.data)


def _single_row(result: Any, what: str) -> dict[str, Any]:
    if not result.data:
        raise NotFound(f"{what} not found")
    return result.data[0]


def create_provider(ctx: AdminContext, body: ProviderCreate) -> Provider:
    values = body.model_dump(mode="json")
    errors = validate_provider(values)
    if errors:
        raise ValidationFailed(errors)
    if values["tier"] != "free":
        values["is_featured"] = True

    with backend_errors("create_provider"):
        result = ctx.client.table(TABLE_PROVIDERS).insert(values).execute()
    invalidate_directory()
    row = _single_row(result, "Created provider")
    logger.info("provider_created", provider_id=row.get("id"), name=values["name"])
    return Provider.from_db_row(row)


def update_provider(ctx: AdminContext, provider_id: str, body: ProviderUpdate) -> Provider:
    changes = body.model_dump(mode="json", exclude_unset=True)
    if not changes:
        raise ValidationFailed({"body": "Nothing to update"})
    errors = validate_provider(changes, partial=True)
    if errors:
        raise ValidationFailed(errors)
    if changes.get("tier") not in (None, "free"):
        changes["is_featured"] = True

    with backend_errors("update_provider"):
        result = ctx.client.table(TABLE_PROVIDERS).update(changes).eq("id", provider_id).execute()
    invalidate_directory()
    logger.info("provider_updated", provider_id=provider_id, fields=sorted(changes))
    return Provider.from_db_row(_single_row(result, f"Provider '{provider_id}'"))


def set_provider_visibility(ctx: AdminContext, provider_id: str, *, active: bool) -> Provider:
    with backend_errors("set_provider_visibility"):
        result = (
            ctx.client.table(TABLE_PROVIDERS)
            .update({"is_active": active})
            .eq("id", provider_id)
            .execute()
        )
    invalidate_directory()
    logger.info("provider_visibility_changed", provider_id=provider_id, active=active)
    return Provider.from_db_row(_single_row(result, f"Provider '{provider_id}'"))


def delete_provider(ctx: AdminContext, provider_id: str, *, confirm: bool) -> None:
    _require_confirmation(confirm, "a provider")
    with backend_errors("delete_provider"):
        result = ctx.client.table(TABLE_PROVIDERS).delete().eq("id", provider_id).execute()
    _single_row(result, f"Provider '{provider_id}'")
    invalidate_directory()
    logger.info("provider_deleted", provider_id=provider_id)


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def list_categories(ctx: AdminContext) -> list[Category]:
    with backend_errors("list_categories"):
        result = (
            ctx.client.table(TABLE_CATEGORIES)
            .select("*")
            .order("sort_order")
            .order("label")
            .execute()
        )
    return parse_rows(Category, result.data)


def create_category(ctx: AdminContext, body: CategoryCreate) -> Category:
    category = Category(id=body.id.strip(), label=body.label.strip(), sort_order=body.sort_order)
    errors = validate_category(category.model_dump())
    if errors:
        raise ValidationFailed(errors)

    with backend_errors("create_category"):
        result = ctx.client.table(TABLE_CATEGORIES).insert(category.to_insert_dict()).execute()
    invalidate_directory()
    logger.info("category_created", category_id=category.id)
    return Category.from_db_row(_single_row(result, "Created category"))


def update_category(ctx: AdminContext, category_id: str, body: CategoryUpdate) -> Category:
    """Relabel a category. The id is a stable slug and is never renamed."""
    errors = validate_category(body.model_dump(), check_id=False)
    if errors:
        raise ValidationFailed(errors)

    changes: dict[str, Any] = {"label": body.label.strip()}
    if body.sort_order is not None:
        changes["sort_order"] = body.sort_order
    with backend_errors("update_category"):
        result = ctx.client.table(TABLE_CATEGORIES).update(changes).eq("id", category_id).execute()
    invalidate_directory()
    logger.info("category_updated", category_id=category_id)
    return Category.from_db_row(_single_row(result, f"Category '{category_id}'"))


def count_providers_in_category(client: Client, category_id: str) -> int:
    with backend_errors("count_providers_in_category"):
        result = (
            client.table(TABLE_PROVIDERS)
            .select("id", count="exact")
            .eq("category_id", category_id)
            .execute()
        )
    if result.count is not None:
        return result.count
    return len(result.data or [])


def delete_category(ctx: AdminContext, category_id: str, *, confirm: bool) -> None:
    in_use = count_providers_in_category(ctx.client, category_id)
    if in_use > 0:
        logger.info("category_delete_blocked", category_id=category_id, providers=in_use)
        raise Conflict(
            f"Cannot delete: {in_use} provider(s) still use this category. Reassign them first.",
            details={"provider_count": in_use},
        )
    _require_confirmation(confirm, "a category")

    with backend_errors("delete_category"):
        result = ctx.client.table(TABLE_CATEGORIES).delete().eq("id", category_id).execute()
    _single_row(result, f"Category '{category_id}'")
    invalidate_directory()
    logger.info("category_deleted", category_id=category_id)
