"""
Public form handling: listing submissions, contact messages and quote requests.

Each submission goes through the same steps:
  1. honeypot filled in -> dropped silently, nothing stored
  2. field validation   -> ValidationFailed with every failing field
  3. cooldown           -> RateLimited while the previous one is recent
  4. insert into Supabase, or queue as a local draft when unconfigured
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

import structlog

from appylink_shared.config import settings
from appylink_shared.constants import (
    FORM_CONTACT,
    FORM_LEAD,
    FORM_SUBMISSION,
    TABLE_CONTACT_MESSAGES,
    TABLE_LEADS,
    TABLE_SUBMISSIONS,
)
from appylink_shared.db import get_supabase_client, is_supabase_configured
from appylink_shared.validation import validate_contact, validate_lead, validate_submission

from appylink_api.errors import ValidationFailed, backend_errors
from appylink_api.schemas import ContactForm, LeadForm, SubmissionForm
from appylink_api.services.throttle import check_cooldown
from appylink_api.storage import ClientState

logger = structlog.get_logger(__name__)

Outcome = Literal["received", "queued", "dropped"]


@dataclass(frozen=True)
class FormResult:
    outcome: Outcome
    record: dict[str, Any] | None = None

    @property
    def source(self) -> str | None:
        return {"received": "live", "queued": "local"}.get(self.outcome)


def _submit(
    *,
    form: str,
    is_bot: bool,
    values: Mapping[str, Any],
    validator: Callable[[Mapping[str, Any]], dict[str, str]],
    table: str,
    build_record: Callable[[], dict[str, Any]],
    state: ClientState,
) -> FormResult:
    log = logger.bind(form=form, client_id=state.client_id)

    if is_bot:
        log.info("honeypot_tripped")
        return FormResult("dropped")

    errors = validator(values)
    if errors:
        raise ValidationFailed(errors)

    check_cooldown(state, form, settings.form_cooldown_seconds)
    record = build_record()

    if not is_supabase_configured():
        state.append_draft(form, record)
        state.mark_submitted(form)
        log.info("form_queued_locally")
        return FormResult("queued", record)

    with backend_errors(f"insert_{form}"):
        get_supabase_client().table(table).insert(record).execute()
    state.mark_submitted(form)
    log.info("form_received")
    return FormResult("received", record)


def submit_listing(body: SubmissionForm, state: ClientState) -> FormResult:
    """A company asking to be listed; lands in listing_submissions as 'new'."""
    return _submit(
        form=FORM_SUBMISSION,
        is_bot=body.is_bot(),
        values=body.values(),
        validator=validate_submission,
        table=TABLE_SUBMISSIONS,
        build_record=lambda: body.to_model().to_insert_dict(),
        state=state,
    )


def send_contact_message(body: ContactForm, state: ClientState) -> FormResult:
    return _submit(
        form=FORM_CONTACT,
        is_bot=body.is_bot(),
        values=body.values(),
        validator=validate_contact,
        table=TABLE_CONTACT_MESSAGES,
        build_record=lambda: body.to_model().to_insert_dict(),
        state=state,
    )


def request_quote(provider_id: str, body: LeadForm, state: ClientState) -> FormResult:
    return _submit(
        form=FORM_LEAD,
        is_bot=body.is_bot(),
        values=body.values(),
        validator=validate_lead,
        table=TABLE_LEADS,
        build_record=lambda: body.to_model(provider_id).to_insert_dict(),
        state=state,
    )
