"""
Directory filtering over an in-memory provider list.

All active predicates must hold (AND); the free-text query matches when any
of name, summary, details or a tag contains it (OR), case-insensitively.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from appylink_shared.constants import ALL_CATEGORIES, SortMode
from appylink_shared.models import Provider


@dataclass(frozen=True)
class FilterState:
    q: str = ""
    category: str = ALL_CATEGORIES
    tags: frozenset[str] = field(default_factory=frozenset)
    only_discounts: bool = False
    sort: SortMode = "relevance"


def matches_query(provider: Provider, q: str) -> bool:
    needle = q.strip().casefold()
    if not needle:
        return True
    haystacks = [provider.name, provider.summary, provider.details, *provider.tags]
    return any(needle in text.casefold() for text in haystacks if text)


def matches(provider: Provider, state: FilterState) -> bool:
    if state.category != ALL_CATEGORIES and provider.category_id != state.category:
        return False
    if state.only_discounts and provider.discount is None:
        return False
    if state.tags and not state.tags.intersection(provider.tags):
        return False
    return matches_query(provider, state.q)


def sort_providers(
    providers: Iterable[Provider],
    mode: SortMode,
    *,
    now: datetime | None = None,
) -> list[Provider]:
    items = list(providers)
    if mode == "name-asc":
        return sorted(items, key=lambda p: (p.name.casefold(), p.name))
    if mode == "name-desc":
        return sorted(items, key=lambda p: (p.name.casefold(), p.name), reverse=True)
    # relevance: featured first, otherwise keep the incoming order
    return sorted(items, key=lambda p: not p.is_currently_featured(now))


def filter_providers(
    providers: Iterable[Provider],
    state: FilterState,
    *,
    now: datetime | None = None,
) -> list[Provider]:
    """Visible, ordered subset of `providers` for the given filter state."""
    return sort_providers((p for p in providers if matches(p, state)), state.sort, now=now)


def all_tags(providers: Iterable[Provider]) -> list[str]:
    return sorted({tag for p in providers for tag in p.tags})
