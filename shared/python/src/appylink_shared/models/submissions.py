"""
models/submissions.py — Pydantic models for publicly submitted records:
listing_submissions, contact_messages and leads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from appylink_shared.constants import SubmissionStatus


class ListingSubmission(BaseModel):
    """Matches the listing_submissions table row."""

    id: str | None = None
    company_name: str
    category_id: str | None = None
    website: str | None = None
    description: str
    discount: str | None = None
    status: SubmissionStatus = "new"
    review_note: str | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return str(v) if v is not None else v

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        return v or "new"

    @property
    def is_reviewed(self) -> bool:
        return self.status != "new"

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "ListingSubmission":
        return cls(**row)

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "company_name": self.company_name,
            "category_id": self.category_id,
            "website": self.website,
            "description": self.description,
            "discount": self.discount,
            "status": "new",
        }


class ContactMessage(BaseModel):
    """Matches the contact_messages table row."""

    id: str | None = None
    name: str
    email: str
    message: str
    created_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email, "message": self.message}


class Lead(BaseModel):
    """Matches the leads table row (quote request sent to one provider)."""

    id: str | None = None
    provider_id: str
    name: str
    email: str
    phone: str | None = None
    details: str | None = None
    created_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "provider_id": self.provider_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "details": self.details,
        }
