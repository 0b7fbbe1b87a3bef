"""
constants.py — shared constants used by the API, the CLI, and the models.

Table names, typed literals, form limits and client-storage keys are defined
here so they stay in sync between modules.
"""

from __future__ import annotations

import re
from typing import Final, Literal

# ---------------------------------------------------------------------------
# Brand
# ---------------------------------------------------------------------------
BRAND_NAME: Final[str] = "Appy Link"
BRAND_TAGLINE: Final[str] = "Linking movers with suppliers."

# ---------------------------------------------------------------------------
# Supabase tables and procedures
# ---------------------------------------------------------------------------
TABLE_CATEGORIES: Final[str] = "categories"
TABLE_PROVIDERS: Final[str] = "providers"
TABLE_SUBMISSIONS: Final[str] = "listing_submissions"
TABLE_CONTACT_MESSAGES: Final[str] = "contact_messages"
TABLE_PROFILES: Final[str] = "profiles"
TABLE_PROVIDER_SERVICES: Final[str] = "provider_services"
TABLE_PROVIDER_MEDIA: Final[str] = "provider_media"
TABLE_PROVIDER_REVIEWS: Final[str] = "provider_reviews"
TABLE_LEADS: Final[str] = "leads"

RPC_APPROVE_SUBMISSION: Final[str] = "approve_submission"

# PostgREST / Postgres code for an RLS or GRANT refusal
PERMISSION_DENIED_CODE: Final[str] = "42501"

# ---------------------------------------------------------------------------
# Typed literals
# ---------------------------------------------------------------------------
SortMode = Literal["relevance", "name-asc", "name-desc"]

Tier = Literal["free", "featured", "sponsor"]

SubmissionStatus = Literal["new", "approved", "rejected"]

Role = Literal["admin", "editor", "viewer"]
ROLES: Final[tuple[str, ...]] = ("admin", "editor", "viewer")

ALL_CATEGORIES: Final[str] = "all"

# ---------------------------------------------------------------------------
# Directory
# ---------------------------------------------------------------------------
COMPARE_LIMIT: Final[int] = 3
DRAFTS_LIMIT: Final[int] = 20

FAVICON_URL: Final[str] = "https://www.google.com/s2/favicons?domain={host}&sz=128"
FALLBACK_FAVICON_HOST: Final[str] = "example.com"

# ---------------------------------------------------------------------------
# Form limits
# ---------------------------------------------------------------------------
COMPANY_NAME_MIN: Final[int] = 2
COMPANY_NAME_MAX: Final[int] = 100
DESCRIPTION_MIN: Final[int] = 10
DESCRIPTION_MAX: Final[int] = 500
DISCOUNT_MAX: Final[int] = 100
CONTACT_NAME_MAX: Final[int] = 100
MESSAGE_MIN: Final[int] = 10
MESSAGE_MAX: Final[int] = 1000
PHONE_MAX: Final[int] = 40
CATEGORY_ID_MAX: Final[int] = 50
CATEGORY_LABEL_MAX: Final[int] = 100

EMAIL_RE: Final[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CATEGORY_ID_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z][a-z0-9_]*$")

# ---------------------------------------------------------------------------
# Client-local storage keys
# ---------------------------------------------------------------------------
STORAGE_FAVORITES: Final[str] = "favorites"
STORAGE_COMPARE: Final[str] = "compare"
STORAGE_DRAFTS: Final[str] = "drafts"
STORAGE_RATE_LIMIT_PREFIX: Final[str] = "rateLimit_"

FORM_SUBMISSION: Final[str] = "submission"
FORM_CONTACT: Final[str] = "contact"
FORM_LEAD: Final[str] = "lead"
