"""
models/directory.py — Pydantic models for categories, providers and the
read-only provider profile tables (services, media, reviews).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from appylink_shared.constants import Tier


class Category(BaseModel):
    """Matches the categories table row."""

    id: str
    label: str
    sort_order: int | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Category":
        return cls(**row)

    def to_insert_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "label": self.label}
        if self.sort_order is not None:
            data["sort_order"] = self.sort_order
        return data


class Discount(BaseModel):
    label: str
    details: str | None = None


class Provider(BaseModel):
    """Matches the providers table row."""

    id: str
    name: str
    category_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    website: str | None = None
    summary: str | None = None
    details: str | None = None
    discount: Discount | None = None
    logo: str | None = None
    logo_url: str | None = None
    is_active: bool = True
    is_featured: bool = False
    featured_until: datetime | None = None
    tier: Tier = "free"
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return str(v) if v is not None else v

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("discount", mode="before")
    @classmethod
    def coerce_discount(cls, v: Any) -> Any:
        # Submissions store the discount as free text.
        if isinstance(v, str):
            return {"label": v} if v.strip() else None
        return v

    @field_validator("tier", mode="before")
    @classmethod
    def coerce_tier(cls, v: Any) -> Any:
        return v or "free"

    def is_currently_featured(self, now: datetime | None = None) -> bool:
        """Featured flag honouring an optional expiry."""
        if not self.is_featured:
            return False
        if self.featured_until is None:
            return True
        now = now or datetime.now(timezone.utc)
        until = self.featured_until
        if until.tzinfo is None:
            until = until.replace(tzinfo=timezone.utc)
        return until > now

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Provider":
        data = dict(row)
        # The directory page used `category`; the table column is `category_id`.
        if "category_id" not in data and isinstance(data.get("category"), str):
            data["category_id"] = data.pop("category")
        return cls(**data)

    def to_insert_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"created_at"})
        return data


class ProviderService(BaseModel):
    """Matches the provider_services table row."""

    id: str
    provider_id: str
    label: str

    @field_validator("id", "provider_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return str(v) if v is not None else v


class ProviderMedia(BaseModel):
    """Matches the provider_media table row."""

    id: str
    provider_id: str
    url: str
    type: str = "image"
    sort: int | None = None

    @field_validator("id", "provider_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return str(v) if v is not None else v


class ProviderReview(BaseModel):
    """Matches the provider_reviews table row."""

    id: str
    provider_id: str
    rating: float | None = None
    author: str | None = None
    body: str | None = None
    created_at: datetime | None = None

    @field_validator("id", "provider_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return str(v) if v is not None else v
