"""Pool and token enrichment for ledger read paths.

One generic operation serves positions, fee records, swaps and pools: resolve
`pool_id`, then resolve the two token identifiers the record names for that
pool. Missing joins degrade to empty fields instead of raising.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Sequence
from uuid import UUID

from app.db import LedgerStorePort
from app.domain import EnrichableRecord, EnrichedRecord, Token


class LedgerEnrichmentService:
    """Join ledger records to their pool and token metadata."""

    def __init__(self, store: LedgerStorePort, max_workers: int = 8):
        """Initialize enrichment dependencies.

        Args:
            store: Ledger store used for pool and token lookups.
            max_workers: Upper bound of concurrent per-record resolutions.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when store is None or max_workers < 1.
        """

        if store is None:
            raise ValueError("store must not be None")
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._store = store
        self._max_workers = max_workers

    def ledger_enrich_record(self, record: EnrichableRecord) -> EnrichedRecord:
        """Resolve pool and token references of one record.

        Args:
            record: Record exposing `pool_id` and `enrichment_token_ids`.

        Returns:
            EnrichedRecord: Record with the joins that resolved.

        Raises:
            UpstreamFailureError: Raised when a store lookup fails.
        """

        pool_id = record.pool_id
        if pool_id is None:
            return EnrichedRecord(record=record)

        pool = self._store.db_pool_get_by_id(pool_id)
        if pool is None:
            return EnrichedRecord(record=record)

        first_token_id, second_token_id = record.enrichment_token_ids(pool)
        return EnrichedRecord(
            record=record,
            pool=pool,
            token_a=self._ledger_resolve_token(first_token_id),
            token_b=self._ledger_resolve_token(second_token_id),
        )

    def ledger_enrich_records(self, records: Sequence[EnrichableRecord]) -> list[EnrichedRecord]:
        """Enrich a sequence of records concurrently, preserving input order.

        Args:
            records: Heterogeneous records to enrich.

        Returns:
            list[EnrichedRecord]: One enriched record per input, same order.

        Raises:
            UpstreamFailureError: Raised when any store lookup fails.
        """

        if not records:
            return []
        if len(records) == 1:
            return [self.ledger_enrich_record(records[0])]

        worker_count = min(self._max_workers, len(records))
        with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="ledger-enrich") as executor:
            return list(executor.map(self.ledger_enrich_record, records))

    def _ledger_resolve_token(self, token_id: UUID | None) -> Token | None:
        if token_id is None:
            return None
        return self._store.db_token_get_by_id(token_id)
