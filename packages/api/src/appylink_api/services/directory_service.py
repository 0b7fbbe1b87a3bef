"""Directory data service: providers, categories, profiles, with seed fallback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from appylink_shared.constants import (
    TABLE_CATEGORIES,
    TABLE_PROVIDER_MEDIA,
    TABLE_PROVIDER_REVIEWS,
    TABLE_PROVIDER_SERVICES,
    TABLE_PROVIDERS,
)
from appylink_shared.db import get_supabase_client, is_supabase_configured
from appylink_shared.models import (
    Category,
    Provider,
    ProviderMedia,
    ProviderReview,
    ProviderService,
)
from appylink_shared.seed import SEED_CATEGORIES, SEED_PROVIDERS

from appylink_api.errors import NotFound, backend_errors
from appylink_api.responses import DataSource
from appylink_api.utils.cache import directory_cache
from appylink_api.utils.filtering import FilterState, filter_providers
from appylink_api.utils.logos import get_logo

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def parse_rows(model: type[M], rows: Iterable[dict[str, Any]] | None) -> list[M]:
    """Build models from table rows, skipping and logging rows that do not validate."""
    from_row = getattr(model, "from_db_row", None)
    parsed: list[M] = []
    for row in rows or []:
        try:
            parsed.append(from_row(row) if from_row else model(**row))
        except ValidationError as exc:
            logger.warning(
                "row_skipped",
                model=model.__name__,
                row_id=row.get("id"),
                errors=exc.error_count(),
            )
    return parsed


@dataclass(frozen=True)
class DirectorySnapshot:
    providers: list[Provider]
    categories: list[Category]
    source: DataSource
    error: str | None = None

    def category_labels(self) -> dict[str, str]:
        return {c.id: c.label for c in self.categories}

    def find(self, provider_id: str) -> Provider | None:
        return next((p for p in self.providers if p.id == provider_id), None)


def _seed_snapshot(error: str | None) -> DirectorySnapshot:
    return DirectorySnapshot(
        providers=[p for p in SEED_PROVIDERS if p.is_active],
        categories=list(SEED_CATEGORIES),
        source="local",
        error=error,
    )


def _fetch_live() -> DirectorySnapshot:
    supabase = get_supabase_client()
    prov = (
        supabase.table(TABLE_PROVIDERS)
        .select("*")
        .eq("is_active", True)
        .order("is_featured", desc=True)
        .order("name")
        .execute()
    )
    cats = (
        supabase.table(TABLE_CATEGORIES)
        .select("*")
        .order("sort_order")
        .order("label")
        .execute()
    )
    return DirectorySnapshot(
        providers=parse_rows(Provider, prov.data),
        categories=parse_rows(Category, cats.data),
        source="live",
    )


def load_directory() -> DirectorySnapshot:
    """
    Active providers and all categories.

    Falls back to the bundled seed list when Supabase is unconfigured or the
    read fails; the failure is logged and reported in snapshot.error.
    """
    cached = directory_cache.get("snapshot")
    if cached is not None:
        return cached

    if not is_supabase_configured():
        return _seed_snapshot(None)

    try:
        snapshot = _fetch_live()
    except Exception as exc:
        logger.error("directory_fallback", error=str(exc))
        return _seed_snapshot(str(exc) or exc.__class__.__name__)

    directory_cache.set("snapshot", snapshot)
    logger.info(
        "directory_loaded",
        providers=len(snapshot.providers),
        categories=len(snapshot.categories),
    )
    return snapshot


def invalidate_directory() -> None:
    directory_cache.clear()


def to_card(provider: Provider, labels: dict[str, str]) -> dict[str, Any]:
    """Serialize a provider for listing responses."""
    data = provider.model_dump(mode="json")
    data["category_label"] = labels.get(provider.category_id or "", provider.category_id)
    data["logo"] = get_logo(provider)
    data["featured"] = provider.is_currently_featured()
    return data


def search_providers(
    state: FilterState,
    *,
    offset: int = 0,
    page_size: int = 12,
) -> tuple[list[dict[str, Any]], int, DirectorySnapshot]:
    """One page of the filtered directory plus the total match count."""
    snapshot = load_directory()
    results = filter_providers(snapshot.providers, state)
    labels = snapshot.category_labels()
    page = [to_card(p, labels) for p in results[offset : offset + page_size]]
    return page, len(results), snapshot


def resolve_providers(ids: list[str]) -> tuple[list[dict[str, Any]], DirectorySnapshot]:
    """Cards for the given ids in the given order; unknown ids are skipped."""
    snapshot = load_directory()
    labels = snapshot.category_labels()
    cards = []
    for provider_id in ids:
        provider = snapshot.find(provider_id)
        if provider is not None:
            cards.append(to_card(provider, labels))
    return cards, snapshot


def require_provider(provider_id: str) -> Provider:
    provider = load_directory().find(provider_id)
    if provider is None:
        raise NotFound(f"Provider '{provider_id}' not found")
    return provider


def _fetch_profile_extras(
    provider_id: str,
) -> tuple[list[ProviderService], list[ProviderMedia], list[ProviderReview]]:
    supabase = get_supabase_client()
    services = (
        supabase.table(TABLE_PROVIDER_SERVICES)
        .select("*")
        .eq("provider_id", provider_id)
        .execute()
    )
    media = (
        supabase.table(TABLE_PROVIDER_MEDIA)
        .select("*")
        .eq("provider_id", provider_id)
        .order("sort")
        .execute()
    )
    reviews = (
        supabase.table(TABLE_PROVIDER_REVIEWS)
        .select("*")
        .eq("provider_id", provider_id)
        .order("created_at", desc=True)
        .execute()
    )
    return (
        parse_rows(ProviderService, services.data),
        parse_rows(ProviderMedia, media.data),
        parse_rows(ProviderReview, reviews.data),
    )


def get_provider_profile(provider_id: str) -> tuple[dict[str, Any], DataSource]:
    """Provider with services, media, reviews and the average rating."""
    snapshot = load_directory()
    provider = snapshot.find(provider_id)
    if provider is None:
        raise NotFound(f"Provider '{provider_id}' not found")

    services: list[ProviderService] = []
    media: list[ProviderMedia] = []
    reviews: list[ProviderReview] = []
    if snapshot.source == "live":
        with backend_errors("provider_profile"):
            services, media, reviews = _fetch_profile_extras(provider_id)

    ratings = [r.rating or 0 for r in reviews]
    profile = to_card(provider, snapshot.category_labels())
    profile.update(
        {
            "services": [s.model_dump(mode="json") for s in services],
            "media": [m.model_dump(mode="json") for m in media],
            "reviews": [r.model_dump(mode="json") for r in reviews],
            "rating": round(sum(ratings) / len(ratings), 1) if ratings else 0.0,
            "review_count": len(reviews),
        }
    )
    return profile, snapshot.source
