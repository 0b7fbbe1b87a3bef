"""
appylink_shared.models — Pydantic models matching each Supabase table.

These models are used by:
- packages/api: parse query results and validate writes
- the CLI seed command: build rows for upsert

Table models provide:
  .from_db_row(row: dict) -> Model
  .to_insert_dict() -> dict
"""

from appylink_shared.models.directory import (
    Category,
    Discount,
    Provider,
    ProviderMedia,
    ProviderReview,
    ProviderService,
)
from appylink_shared.models.profiles import AdminProfile
from appylink_shared.models.submissions import ContactMessage, Lead, ListingSubmission

__all__ = [
    "Category",
    "Discount",
    "Provider",
    "ProviderService",
    "ProviderMedia",
    "ProviderReview",
    "ListingSubmission",
    "ContactMessage",
    "Lead",
    "AdminProfile",
]
