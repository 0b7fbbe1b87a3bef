"""
Per-client state: favorites, compare selection, offline drafts and form
throttle timestamps.

Every value lives in a KeyValueStorage under `<client_id>:<key>` as a JSON
string, so any backend that stores strings can hold it.

Usage:
    state = ClientState(MemoryStorage(), "ip:127.0.0.1")
    state.toggle_favorite("moveman")      # True  (now saved)
    state.toggle_compare("moveman")       # CompareToggle(ids=["moveman"], selected=True, full=False)
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

import structlog

from appylink_shared.constants import (
    COMPARE_LIMIT,
    DRAFTS_LIMIT,
    STORAGE_COMPARE,
    STORAGE_DRAFTS,
    STORAGE_FAVORITES,
    STORAGE_RATE_LIMIT_PREFIX,
)

from appylink_api.storage.base import KeyValueStorage

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CompareToggle:
    ids: list[str]
    selected: bool
    full: bool


class ClientState:
    def __init__(
        self,
        storage: KeyValueStorage,
        client_id: str,
        *,
        compare_limit: int = COMPARE_LIMIT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self.client_id = client_id
        self._compare_limit = compare_limit
        self._clock = clock

    # ------------------------------------------------------------------
    # Raw JSON access
    # ------------------------------------------------------------------

    def _key(self, name: str) -> str:
        return f"{self.client_id}:{name}"

    def _read(self, name: str, default: Any) -> Any:
        raw = self._storage.get(self._key(name))
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("client_state_corrupt", client_id=self.client_id, key=name)
            return default

    def _write(self, name: str, value: Any) -> None:
        self._storage.set(self._key(name), json.dumps(value))

    def _read_ids(self, name: str) -> list[str]:
        value = self._read(name, [])
        if not isinstance(value, list):
            return []
        return [str(v) for v in value]

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def favorites(self) -> list[str]:
        return self._read_ids(STORAGE_FAVORITES)

    def toggle_favorite(self, provider_id: str) -> bool:
        """Add or remove a favorite. Returns True when it is now saved."""
        ids = self.favorites()
        if provider_id in ids:
            ids.remove(provider_id)
            saved = False
        else:
            ids.append(provider_id)
            saved = True
        self._write(STORAGE_FAVORITES, ids)
        return saved

    # ------------------------------------------------------------------
    # Compare
    # ------------------------------------------------------------------

    def compare(self) -> list[str]:
        return self._read_ids(STORAGE_COMPARE)[: self._compare_limit]

    def toggle_compare(self, provider_id: str) -> CompareToggle:
        """
        Add or remove a provider from the comparison.

        Adding to a full selection changes nothing and reports full=True.
        """
        ids = self.compare()
        if provider_id in ids:
            ids.remove(provider_id)
            self._write(STORAGE_COMPARE, ids)
            return CompareToggle(ids=ids, selected=False, full=False)
        if len(ids) >= self._compare_limit:
            return CompareToggle(ids=ids, selected=False, full=True)
        ids.append(provider_id)
        self._write(STORAGE_COMPARE, ids)
        return CompareToggle(ids=ids, selected=True, full=len(ids) >= self._compare_limit)

    def clear_compare(self) -> None:
        self._write(STORAGE_COMPARE, [])

    # ------------------------------------------------------------------
    # Offline drafts
    # ------------------------------------------------------------------

    def drafts(self) -> list[dict[str, Any]]:
        value = self._read(STORAGE_DRAFTS, [])
        return value if isinstance(value, list) else []

    def append_draft(self, kind: str, record: dict[str, Any]) -> dict[str, Any]:
        draft = {
            "kind": kind,
            "record": record,
            "queued_at": datetime.fromtimestamp(self._clock(), tz=timezone.utc).isoformat(),
        }
        drafts = self.drafts()
        drafts.append(draft)
        # Oldest drafts go first once the queue is full.
        del drafts[:-DRAFTS_LIMIT]
        self._write(STORAGE_DRAFTS, drafts)
        return draft

    # ------------------------------------------------------------------
    # Form throttle
    # ------------------------------------------------------------------

    def now(self) -> float:
        return self._clock()

    def last_submitted(self, form: str) -> float:
        value = self._read(f"{STORAGE_RATE_LIMIT_PREFIX}{form}", 0)
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    def mark_submitted(self, form: str) -> None:
        self._write(f"{STORAGE_RATE_LIMIT_PREFIX}{form}", self._clock())
