"""Fee accrual and claim state transitions."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable
from uuid import UUID

from app.adapters import ChainSettlementPort
from app.db import LedgerStorePort
from app.domain import EnrichedRecord, FeeRecord, InvalidInputError, NotFoundError

from .enrichment import LedgerEnrichmentService
from .interfaces import FeeClaimResult
from .settlement import ledger_request_settlement, ledger_require_settlement_adapter
from .validation import ledger_is_interactive_client, ledger_require_non_negative_amount, ledger_require_text

logger = logging.getLogger(__name__)


def _fee_utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeeSettlementService:
    """Own the unclaimed-fee lifecycle of (pool, wallet) pairs."""

    def __init__(
        self,
        store: LedgerStorePort,
        enrichment_service: LedgerEnrichmentService,
        settlement_adapter: ChainSettlementPort | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize fee settlement dependencies.

        Args:
            store: Ledger store owning fee records.
            enrichment_service: Enrichment engine for read paths.
            settlement_adapter: Optional chain settlement adapter for interactive clients.
            clock: Optional UTC clock used for claim timestamps.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when store or enrichment_service is None.
        """

        if store is None:
            raise ValueError("store must not be None")
        if enrichment_service is None:
            raise ValueError("enrichment_service must not be None")
        self._store = store
        self._enrichment_service = enrichment_service
        self._settlement_adapter = settlement_adapter
        self._clock = clock or _fee_utc_now

    def ledger_fee_claim(
        self,
        pool_id: UUID,
        user_wallet: str,
        client_origin: str | None = None,
    ) -> FeeClaimResult:
        """Zero the unclaimed balances of one (pool, wallet) record.

        A record that was already drained is found and re-zeroed; the returned
        `claimed_fee_*` values are then zero.

        Args:
            pool_id: Pool identifier.
            user_wallet: Claiming wallet address.
            client_origin: Caller marker; `ui` requests a transaction artifact.

        Returns:
            FeeClaimResult: Updated record, pre-claim balances and optional artifact.

        Raises:
            InvalidInputError: Raised when the wallet is blank.
            NotFoundError: Raised when no fee record exists for the pair.
            StaleWriteError: Raised when the record changed concurrently.
            UpstreamFailureError: Raised when the store or adapter fails.
        """

        normalized_wallet = ledger_require_text(user_wallet, "user_wallet")
        fee_record = self._store.db_fee_get_for_pool_and_wallet(pool_id, normalized_wallet)
        if fee_record is None:
            raise NotFoundError("no unclaimed fees found", code="NO_UNCLAIMED_FEES")

        settlement = None
        if ledger_is_interactive_client(client_origin):
            pool = self._store.db_pool_get_by_id(pool_id)
            if pool is None:
                raise NotFoundError("pool not found", code="POOL_NOT_FOUND")
            adapter = ledger_require_settlement_adapter(self._settlement_adapter)
            settlement = ledger_request_settlement(
                "fee collection",
                lambda: adapter.adapter_submit_fee_collection(pool, normalized_wallet),
            )

        claimed_record = self._store.db_fee_update_balances(
            fee_record.fee_record_id,
            expected_version=fee_record.version,
            unclaimed_fee_a=Decimal("0"),
            unclaimed_fee_b=Decimal("0"),
            last_claimed_at_utc=self._clock(),
        )
        logger.info(
            "claimed fees for wallet %s in pool %s (fee_a=%s, fee_b=%s)",
            normalized_wallet,
            pool_id,
            fee_record.unclaimed_fee_a,
            fee_record.unclaimed_fee_b,
        )

        return FeeClaimResult(
            fee_record=claimed_record,
            claimed_fee_a=fee_record.unclaimed_fee_a,
            claimed_fee_b=fee_record.unclaimed_fee_b,
            settlement=settlement,
        )

    def ledger_fee_accrue(
        self,
        pool_id: UUID,
        user_wallet: str,
        fee_a: object,
        fee_b: object,
    ) -> FeeRecord:
        """Add accrued fees to a record, creating it on first accrual.

        Args:
            pool_id: Pool identifier.
            user_wallet: Earning wallet address.
            fee_a: Token A fees to add (>= 0).
            fee_b: Token B fees to add (>= 0).

        Returns:
            FeeRecord: Created or updated record.

        Raises:
            InvalidInputError: Raised when amounts are negative or the wallet is blank.
            NotFoundError: Raised when the pool does not exist.
            StaleWriteError: Raised when the record changed concurrently.
        """

        normalized_wallet = ledger_require_text(user_wallet, "user_wallet")
        accrued_a = ledger_require_non_negative_amount(fee_a, "fee_a")
        accrued_b = ledger_require_non_negative_amount(fee_b, "fee_b")
        if accrued_a == Decimal("0") and accrued_b == Decimal("0"):
            raise InvalidInputError("at least one fee amount must be > 0", code="INVALID_AMOUNT")
        if self._store.db_pool_get_by_id(pool_id) is None:
            raise NotFoundError("pool not found", code="POOL_NOT_FOUND")

        fee_record = self._store.db_fee_get_for_pool_and_wallet(pool_id, normalized_wallet)
        if fee_record is None:
            return self._store.db_fee_create(
                pool_id=pool_id,
                user_wallet=normalized_wallet,
                unclaimed_fee_a=accrued_a,
                unclaimed_fee_b=accrued_b,
            )

        return self._store.db_fee_update_balances(
            fee_record.fee_record_id,
            expected_version=fee_record.version,
            unclaimed_fee_a=fee_record.unclaimed_fee_a + accrued_a,
            unclaimed_fee_b=fee_record.unclaimed_fee_b + accrued_b,
            last_claimed_at_utc=fee_record.last_claimed_at_utc,
        )

    def ledger_fee_list_for_wallet(self, user_wallet: str) -> list[EnrichedRecord]:
        """List enriched fee records with something left to claim.

        Args:
            user_wallet: Owning wallet address.

        Returns:
            list[EnrichedRecord]: Enriched records, zero-balance records excluded.
        """

        normalized_wallet = ledger_require_text(user_wallet, "wallet")
        claimable_records = [
            fee_record
            for fee_record in self._store.db_fee_list_for_wallet(normalized_wallet)
            if fee_record.has_unclaimed_balance
        ]
        return self._enrichment_service.ledger_enrich_records(claimable_records)
