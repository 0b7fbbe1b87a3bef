"""Request bodies accepted by the API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from appylink_shared.constants import Tier
from appylink_shared.models import ContactMessage, Discount, Lead, ListingSubmission


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ---------------------------------------------------------------------------
# Public forms
# ---------------------------------------------------------------------------


class SubmissionForm(BaseModel):
    name: str = ""
    category_id: str | None = None
    website: str | None = None
    description: str = ""
    discount: str | None = None
    # Hidden from people; bots fill it in.
    company_website_confirm: str | None = None

    def is_bot(self) -> bool:
        return bool(self.company_website_confirm)

    def values(self) -> dict[str, Any]:
        return self.model_dump(exclude={"company_website_confirm"})

    def to_model(self) -> ListingSubmission:
        return ListingSubmission(
            company_name=self.name.strip(),
            category_id=_clean(self.category_id),
            website=_clean(self.website),
            description=self.description.strip(),
            discount=_clean(self.discount),
        )


class ContactForm(BaseModel):
    name: str = ""
    email: str = ""
    message: str = ""
    nickname: str | None = None

    def is_bot(self) -> bool:
        return bool(self.nickname)

    def values(self) -> dict[str, Any]:
        return self.model_dump(exclude={"nickname"})

    def to_model(self) -> ContactMessage:
        return ContactMessage(
            name=self.name.strip(),
            email=self.email.strip(),
            message=self.message.strip(),
        )


class LeadForm(BaseModel):
    name: str = ""
    email: str = ""
    phone: str | None = None
    details: str | None = None
    nickname: str | None = None

    def is_bot(self) -> bool:
        return bool(self.nickname)

    def values(self) -> dict[str, Any]:
        return self.model_dump(exclude={"nickname"})

    def to_model(self, provider_id: str) -> Lead:
        return Lead(
            provider_id=provider_id,
            name=self.name.strip(),
            email=self.email.strip(),
            phone=_clean(self.phone),
            details=_clean(self.details),
        )


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


class ProviderCreate(BaseModel):
    name: str
    category_id: str
    website: str | None = None
    summary: str | None = None
    details: str | None = None
    tags: list[str] = Field(default_factory=list)
    discount: Discount | None = None
    logo: str | None = None
    tier: Tier = "free"
    is_featured: bool = False
    featured_until: datetime | None = None
    is_active: bool = False


class ProviderUpdate(BaseModel):
    name: str | None = None
    category_id: str | None = None
    website: str | None = None
    summary: str | None = None
    details: str | None = None
    tags: list[str] | None = None
    discount: Discount | None = None
    logo: str | None = None
    tier: Tier | None = None
    is_featured: bool | None = None
    featured_until: datetime | None = None


class CategoryCreate(BaseModel):
    id: str
    label: str
    sort_order: int | None = None


class CategoryUpdate(BaseModel):
    label: str
    sort_order: int | None = None


class ApproveRequest(BaseModel):
    publish: bool = True


class RejectRequest(BaseModel):
    reason: str | None = None


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class EmailRequest(BaseModel):
    email: str


class PasswordRequest(BaseModel):
    email: str
    password: str = Field(min_length=6)


class SignOutRequest(BaseModel):
    refresh_token: str
