"""Liquidity position accounting service."""

from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

from app.adapters import ChainSettlementPort, LiquidityChangeAmounts, PriceRange, SettlementReceipt
from app.db import LedgerStorePort
from app.domain import EnrichedRecord, InvalidInputError, LiquidityPosition, NotFoundError, Pool

from .enrichment import LedgerEnrichmentService
from .interfaces import LiquidityChangeResult
from .settlement import ledger_request_settlement, ledger_require_settlement_adapter
from .validation import (
    ledger_is_interactive_client,
    ledger_require_non_negative_amount,
    ledger_require_positive_amount,
    ledger_require_text,
)
from .withdrawal import ledger_compute_withdrawal

logger = logging.getLogger(__name__)


class LiquidityPositionService:
    """Apply liquidity additions and withdrawals to stored positions."""

    def __init__(
        self,
        store: LedgerStorePort,
        enrichment_service: LedgerEnrichmentService,
        settlement_adapter: ChainSettlementPort | None = None,
    ):
        """Initialize position service dependencies.

        Args:
            store: Ledger store owning position state.
            enrichment_service: Enrichment engine for read paths.
            settlement_adapter: Optional chain settlement adapter for interactive clients.

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

    def ledger_position_remove_liquidity(
        self,
        position_id: UUID,
        lp_amount: object,
        client_origin: str | None = None,
    ) -> LiquidityChangeResult:
        """Remove LP units from one position, closing it when nothing remains.

        Args:
            position_id: Position identifier.
            lp_amount: LP units to remove; must be > 0.
            client_origin: Caller marker; `ui` requests a transaction artifact.

        Returns:
            LiquidityChangeResult: Updated or deleted position and optional artifact.

        Raises:
            InvalidInputError: Raised when the amount is not positive.
            NotFoundError: Raised when the position (or, for artifacts, its pool) is absent.
            InvalidStateError: Raised when the position holds no LP units.
            StaleWriteError: Raised when the position changed concurrently.
            UpstreamFailureError: Raised when the store or adapter fails.
        """

        requested_lp_amount = ledger_require_positive_amount(lp_amount, "amount", code="INVALID_AMOUNT")
        position = self._store.db_position_get_by_id(position_id)
        if position is None:
            raise NotFoundError("liquidity position not found", code="POSITION_NOT_FOUND")

        computation = ledger_compute_withdrawal(position, requested_lp_amount)
        settlement = None
        if ledger_is_interactive_client(client_origin):
            settlement = self._ledger_prepare_change(
                pool=self._ledger_require_pool(position.pool_id),
                user_wallet=position.user_wallet,
                amounts=LiquidityChangeAmounts(
                    token_a_delta=computation.new_amount_token_a - position.amount_token_a,
                    token_b_delta=computation.new_amount_token_b - position.amount_token_b,
                    lp_token_delta=computation.new_lp_tokens - position.lp_tokens,
                ),
                price_range=None,
            )

        if computation.full_closure:
            resulting_position = self._store.db_position_delete(position.position_id, expected_version=position.version)
            logger.info(
                "closed liquidity position %s (requested=%s, held=%s)",
                position.position_id,
                requested_lp_amount,
                position.lp_tokens,
            )
        else:
            resulting_position = self._store.db_position_update_amounts(
                position.position_id,
                expected_version=position.version,
                amount_token_a=computation.new_amount_token_a,
                amount_token_b=computation.new_amount_token_b,
                lp_tokens=computation.new_lp_tokens,
            )
            logger.info(
                "reduced liquidity position %s by %s LP units (remaining=%s)",
                position.position_id,
                requested_lp_amount,
                computation.new_lp_tokens,
            )

        return LiquidityChangeResult(
            position=resulting_position,
            closed=computation.full_closure,
            settlement=settlement,
        )

    def ledger_position_add_liquidity(
        self,
        user_wallet: str,
        pool_id: UUID,
        amount_token_a: object,
        amount_token_b: object,
        lp_tokens: object,
        client_origin: str | None = None,
        price_range: PriceRange | None = None,
    ) -> LiquidityChangeResult:
        """Open a position or grow the wallet's existing position in a pool.

        Args:
            user_wallet: Supplying wallet address.
            pool_id: Target pool identifier.
            amount_token_a: Supplied token A amount (>= 0).
            amount_token_b: Supplied token B amount (>= 0).
            lp_tokens: Issued LP units (> 0).
            client_origin: Caller marker; `ui` requests a transaction artifact.
            price_range: Optional price range forwarded to the settlement adapter.

        Returns:
            LiquidityChangeResult: Created or updated position and optional artifact.

        Raises:
            InvalidInputError: Raised when inputs are invalid.
            NotFoundError: Raised when the pool is absent.
            StaleWriteError: Raised when the position changed concurrently.
            UpstreamFailureError: Raised when the store or adapter fails.
        """

        normalized_wallet = ledger_require_text(user_wallet, "user_wallet")
        supplied_a = ledger_require_non_negative_amount(amount_token_a, "amount_token_a")
        supplied_b = ledger_require_non_negative_amount(amount_token_b, "amount_token_b")
        issued_lp_tokens = ledger_require_positive_amount(lp_tokens, "lp_tokens")
        if supplied_a == Decimal("0") and supplied_b == Decimal("0"):
            raise InvalidInputError("at least one token amount must be > 0", code="INVALID_AMOUNT")
        if price_range is not None and not Decimal("0") < price_range.lower_price < price_range.upper_price:
            raise InvalidInputError("price range must satisfy 0 < lower_price < upper_price", code="INVALID_PRICE_RANGE")

        pool = self._ledger_require_pool(pool_id)
        settlement = None
        if ledger_is_interactive_client(client_origin):
            settlement = self._ledger_prepare_change(
                pool=pool,
                user_wallet=normalized_wallet,
                amounts=LiquidityChangeAmounts(
                    token_a_delta=supplied_a,
                    token_b_delta=supplied_b,
                    lp_token_delta=issued_lp_tokens,
                ),
                price_range=price_range,
            )

        existing_position = self._store.db_position_get_for_wallet_and_pool(normalized_wallet, pool.pool_id)
        if existing_position is None:
            resulting_position = self._store.db_position_create(
                user_wallet=normalized_wallet,
                pool_id=pool.pool_id,
                amount_token_a=supplied_a,
                amount_token_b=supplied_b,
                lp_tokens=issued_lp_tokens,
            )
            logger.info("opened liquidity position %s in pool %s", resulting_position.position_id, pool.pool_id)
        else:
            resulting_position = self._store.db_position_update_amounts(
                existing_position.position_id,
                expected_version=existing_position.version,
                amount_token_a=existing_position.amount_token_a + supplied_a,
                amount_token_b=existing_position.amount_token_b + supplied_b,
                lp_tokens=existing_position.lp_tokens + issued_lp_tokens,
            )
            logger.info("increased liquidity position %s by %s LP units", resulting_position.position_id, issued_lp_tokens)

        return LiquidityChangeResult(position=resulting_position, closed=False, settlement=settlement)

    def ledger_position_get(self, position_id: UUID) -> EnrichedRecord:
        """Return one enriched position.

        Raises:
            NotFoundError: Raised when the position is absent.
        """

        position = self._store.db_position_get_by_id(position_id)
        if position is None:
            raise NotFoundError("liquidity position not found", code="POSITION_NOT_FOUND")
        return self._enrichment_service.ledger_enrich_record(position)

    def ledger_position_list_for_wallet(self, user_wallet: str) -> list[EnrichedRecord]:
        """List enriched positions held by one wallet.

        Args:
            user_wallet: Owning wallet address.

        Returns:
            list[EnrichedRecord]: Enriched positions; empty when none exist.

        Raises:
            InvalidInputError: Raised when the wallet is blank.
            UpstreamFailureError: Raised when the store fails.
        """

        normalized_wallet = ledger_require_text(user_wallet, "wallet")
        positions: list[LiquidityPosition] = self._store.db_position_list_for_wallet(normalized_wallet)
        return self._enrichment_service.ledger_enrich_records(positions)

    def _ledger_require_pool(self, pool_id: UUID | None) -> Pool:
        pool = None if pool_id is None else self._store.db_pool_get_by_id(pool_id)
        if pool is None:
            raise NotFoundError("pool not found", code="POOL_NOT_FOUND")
        return pool

    def _ledger_prepare_change(
        self,
        pool: Pool,
        user_wallet: str,
        amounts: LiquidityChangeAmounts,
        price_range: PriceRange | None,
    ) -> SettlementReceipt:
        adapter = ledger_require_settlement_adapter(self._settlement_adapter)
        return ledger_request_settlement(
            "liquidity change",
            lambda: adapter.adapter_submit_liquidity_change(pool, user_wallet, amounts, price_range),
        )
