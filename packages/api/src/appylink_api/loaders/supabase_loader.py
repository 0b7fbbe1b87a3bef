"""
loaders/supabase_loader.py — Idempotent batched upsert into Supabase.

Used by `appylink seed` to load the shipped directory into a fresh project.
The loader:
  - Batches rows to stay under the PostgREST payload limit
  - Upserts (INSERT … ON CONFLICT DO UPDATE) on the given conflict columns
  - Logs failed batches and carries on with the rest
  - Returns a LoadResult with loaded and failed counts

Usage:
    from appylink_api.loaders.supabase_loader import SupabaseLoader

    loader = SupabaseLoader()
    result = loader.upsert("categories", rows, conflict_columns=["id"])
    print(result.records_loaded, result.records_failed)
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Any

import structlog
from supabase import Client

from appylink_shared.db import get_supabase_client

log = structlog.get_logger(__name__)

BATCH_SIZE = 500


@dataclass
class LoadResult:
    """Summary of one upsert call."""

    table: str
    records_loaded: int = 0
    records_failed: int = 0
    batches_total: int = 0
    batches_failed: int = 0
    errors: list[str] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.records_failed == 0

    @property
    def status(self) -> str:
        if self.records_failed == 0:
            return "success"
        if self.records_loaded > 0:
            return "partial_failure"
        return "failure"


class SupabaseLoader:
    """Writes with the service role key, so row-level security is bypassed."""

    def __init__(self, client: Client | None = None, batch_size: int = BATCH_SIZE) -> None:
        self._batch_size = batch_size
        self._client = client or get_supabase_client(service_role=True)

    def upsert(
        self,
        table: str,
        rows: list[dict[str, Any]],
        conflict_columns: list[str],
    ) -> LoadResult:
        result = LoadResult(table=table)
        t0 = time.monotonic()

        if not rows:
            log.warning("upsert_no_rows", table=table)
            return result

        loader_log = log.bind(table=table, total_rows=len(rows))
        loader_log.info("upsert_start")

        n_batches = math.ceil(len(rows) / self._batch_size)
        result.batches_total = n_batches

        for batch_idx in range(n_batches):
            start = batch_idx * self._batch_size
            batch = rows[start : start + self._batch_size]
            try:
                self._client.table(table).upsert(
                    batch,
                    on_conflict=",".join(conflict_columns),
                ).execute()
                result.records_loaded += len(batch)
            except Exception as exc:
                loader_log.error("batch_failed", batch=batch_idx + 1, error=str(exc))
                result.records_failed += len(batch)
                result.batches_failed += 1
                result.errors.append(f"Batch {batch_idx + 1}/{n_batches}: {exc}")

        result.duration_ms = int((time.monotonic() - t0) * 1000)
        loader_log.info(
            "upsert_complete",
            records_loaded=result.records_loaded,
            records_failed=result.records_failed,
            duration_ms=result.duration_ms,
            status=result.status,
        )
        return result
