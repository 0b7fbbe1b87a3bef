"""Client-side cooldown between form submissions."""

from __future__ import annotations

import structlog

from appylink_api.errors import RateLimited
from appylink_api.storage import ClientState

logger = structlog.get_logger(__name__)


def check_cooldown(state: ClientState, form: str, cooldown_seconds: float) -> None:
    """
    Raise RateLimited when `form` was submitted by this client less than
    `cooldown_seconds` ago. Advisory only: a client that changes its id
    escapes it.
    """
    last = state.last_submitted(form)
    if not last:
        return
    elapsed = state.now() - last
    if elapsed < cooldown_seconds:
        remaining = cooldown_seconds - elapsed
        logger.info("form_throttled", client_id=state.client_id, form=form, remaining=round(remaining, 1))
        raise RateLimited(remaining)
