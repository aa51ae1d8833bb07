"""Swap history service."""

from __future__ import annotations

import logging
from uuid import UUID

from app.adapters import SWAP_DIRECTION_A_TO_B, SWAP_DIRECTION_B_TO_A, ChainSettlementPort
from app.db import LedgerStorePort
from app.domain import EnrichedRecord, InvalidInputError, NotFoundError

from .enrichment import LedgerEnrichmentService
from .interfaces import SwapRecordResult
from .settlement import ledger_request_settlement, ledger_require_settlement_adapter
from .validation import ledger_is_interactive_client, ledger_require_positive_amount, ledger_require_text

logger = logging.getLogger(__name__)


class SwapLedgerService:
    """Record executed swaps and serve enriched swap history."""

    def __init__(
        self,
        store: LedgerStorePort,
        enrichment_service: LedgerEnrichmentService,
        settlement_adapter: ChainSettlementPort | None = None,
    ):
        if store is None:
            raise ValueError("store must not be None")
        if enrichment_service is None:
            raise ValueError("enrichment_service must not be None")
        self._store = store
        self._enrichment_service = enrichment_service
        self._settlement_adapter = settlement_adapter

    def ledger_swap_record(
        self,
        pool_id: UUID,
        user_wallet: str,
        token_in_id: UUID,
        token_out_id: UUID,
        amount_in: object,
        amount_out: object,
        tx_hash: str,
        client_origin: str | None = None,
    ) -> SwapRecordResult:
        """Append one executed swap to the ledger.

        Args:
            pool_id: Pool the swap executed in.
            user_wallet: Trading wallet address.
            token_in_id: Input token identifier.
            token_out_id: Output token identifier.
            amount_in: Input amount (> 0).
            amount_out: Output amount (> 0).
            tx_hash: On-chain transaction hash, unique across swaps.
            client_origin: Caller marker; `ui` requests a transaction artifact.

        Returns:
            SwapRecordResult: Persisted swap and optional artifact.

        Raises:
            InvalidInputError: Raised when inputs are invalid or tokens do not belong to the pool.
            NotFoundError: Raised when the pool or a token does not exist.
            ConflictError: Raised when the transaction hash was already recorded.
            UpstreamFailureError: Raised when the store or adapter fails.
        """

        normalized_wallet = ledger_require_text(user_wallet, "user_wallet")
        normalized_tx_hash = ledger_require_text(tx_hash, "tx_hash")
        validated_amount_in = ledger_require_positive_amount(amount_in, "amount_in")
        validated_amount_out = ledger_require_positive_amount(amount_out, "amount_out")
        if token_in_id == token_out_id:
            raise InvalidInputError("token_in_id and token_out_id must differ", code="SAME_TOKEN")

        pool = self._store.db_pool_get_by_id(pool_id)
        if pool is None:
            raise NotFoundError("pool not found", code="POOL_NOT_FOUND")
        for token_id in (token_in_id, token_out_id):
            if self._store.db_token_get_by_id(token_id) is None:
                raise NotFoundError(f"token not found: {token_id}", code="TOKEN_NOT_FOUND")
        if {token_in_id, token_out_id} != {pool.token_a_id, pool.token_b_id}:
            raise InvalidInputError("swap tokens must be the pool's token pair", code="TOKEN_NOT_IN_POOL")

        settlement = None
        if ledger_is_interactive_client(client_origin):
            adapter = ledger_require_settlement_adapter(self._settlement_adapter)
            direction = SWAP_DIRECTION_A_TO_B if token_in_id == pool.token_a_id else SWAP_DIRECTION_B_TO_A
            settlement = ledger_request_settlement(
                "swap",
                lambda: adapter.adapter_submit_swap(
                    pool,
                    normalized_wallet,
                    validated_amount_in,
                    direction,
                    validated_amount_out,
                ),
            )

        swap = self._store.db_swap_create(
            pool_id=pool.pool_id,
            user_wallet=normalized_wallet,
            token_in_id=token_in_id,
            token_out_id=token_out_id,
            amount_in=validated_amount_in,
            amount_out=validated_amount_out,
            tx_hash=normalized_tx_hash,
        )
        logger.info("recorded swap %s in pool %s (tx=%s)", swap.swap_id, pool.pool_id, normalized_tx_hash)

        return SwapRecordResult(swap=swap, settlement=settlement)

    def ledger_swap_list_for_pool(self, pool_id: UUID) -> list[EnrichedRecord]:
        """List enriched swaps of one pool, oldest first.

        Raises:
            NotFoundError: Raised when the pool does not exist.
        """

        if self._store.db_pool_get_by_id(pool_id) is None:
            raise NotFoundError("pool not found", code="POOL_NOT_FOUND")
        return self._enrichment_service.ledger_enrich_records(self._store.db_swap_list_for_pool(pool_id))

    def ledger_swap_list_for_wallet(self, user_wallet: str) -> list[EnrichedRecord]:
        """List enriched swaps executed by one wallet."""

        normalized_wallet = ledger_require_text(user_wallet, "wallet")
        return self._enrichment_service.ledger_enrich_records(self._store.db_swap_list_for_wallet(normalized_wallet))
