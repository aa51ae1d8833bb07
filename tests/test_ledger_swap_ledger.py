"""Tests for swap recording and swap history reads."""

from __future__ import annotations

import base64
import json
from decimal import Decimal
from uuid import uuid4

import pytest

from app.adapters import ChainSettlementRequestError, PlaceholderChainSettlementAdapter
from app.domain import ConflictError, InvalidInputError, NotFoundError, UpstreamFailureError
from app.ledger import LedgerEnrichmentService, SwapLedgerService


class _RejectingSettlementAdapter(PlaceholderChainSettlementAdapter):
    """Adapter that refuses to build swap instructions."""

    def adapter_submit_swap(self, pool, user_wallet, input_amount, direction, min_output):
        raise ChainSettlementRequestError("slippage bound rejected", error_code="SLIPPAGE")


def _build_service(store, settlement_adapter=None) -> SwapLedgerService:
    return SwapLedgerService(
        store=store,
        enrichment_service=LedgerEnrichmentService(store=store),
        settlement_adapter=settlement_adapter,
    )


def _record(service, seed, tx_hash: str, wallet: str = "wallet-1", reverse: bool = False, client_origin=None):
    token_in, token_out = (seed.token_b, seed.token_a) if reverse else (seed.token_a, seed.token_b)
    return service.ledger_swap_record(
        pool_id=seed.pool.pool_id,
        user_wallet=wallet,
        token_in_id=token_in.token_id,
        token_out_id=token_out.token_id,
        amount_in="1.25",
        amount_out="180.5",
        tx_hash=tx_hash,
        client_origin=client_origin,
    )


def test_record_swap_persists_immutable_row(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    result = _record(service, ledger_seed, "tx-1")

    assert result.settlement is None
    assert result.swap.amount_in == Decimal("1.25")
    assert result.swap.amount_out == Decimal("180.5")
    assert ledger_seed.store.db_swap_get_by_tx_hash("tx-1") == result.swap


def test_duplicate_tx_hash_is_conflict(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    _record(service, ledger_seed, "tx-dup")

    with pytest.raises(ConflictError) as error_info:
        _record(service, ledger_seed, "tx-dup", wallet="wallet-2")

    assert error_info.value.code == "DUPLICATE_TX_HASH"


def test_record_swap_validates_tokens_and_amounts(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    foreign_token = ledger_seed.store.db_token_create("mint-bonk", "BONK", "Bonk", 5, None)
    base_arguments = {
        "pool_id": ledger_seed.pool.pool_id,
        "user_wallet": "wallet-1",
        "token_in_id": ledger_seed.token_a.token_id,
        "token_out_id": ledger_seed.token_b.token_id,
        "amount_in": "1",
        "amount_out": "1",
        "tx_hash": "tx-validate",
    }

    with pytest.raises(NotFoundError):
        service.ledger_swap_record(**{**base_arguments, "pool_id": uuid4()})
    with pytest.raises(NotFoundError):
        service.ledger_swap_record(**{**base_arguments, "token_out_id": uuid4()})
    with pytest.raises(InvalidInputError):
        service.ledger_swap_record(**{**base_arguments, "token_out_id": ledger_seed.token_a.token_id})
    with pytest.raises(InvalidInputError) as error_info:
        service.ledger_swap_record(**{**base_arguments, "token_out_id": foreign_token.token_id})
    assert error_info.value.code == "TOKEN_NOT_IN_POOL"
    with pytest.raises(InvalidInputError):
        service.ledger_swap_record(**{**base_arguments, "amount_in": "0"})
    with pytest.raises(InvalidInputError):
        service.ledger_swap_record(**{**base_arguments, "tx_hash": ""})


def test_interactive_swap_direction_follows_input_token(ledger_seed) -> None:
    service = _build_service(ledger_seed.store, settlement_adapter=PlaceholderChainSettlementAdapter())

    forward = _record(service, ledger_seed, "tx-fwd", client_origin="ui")
    backward = _record(service, ledger_seed, "tx-back", reverse=True, client_origin="ui")

    assert json.loads(base64.b64decode(forward.settlement.tx_handle))["direction"] == "a_to_b"
    assert json.loads(base64.b64decode(backward.settlement.tx_handle))["direction"] == "b_to_a"


def test_list_for_pool_is_oldest_first_and_enriched(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    first = _record(service, ledger_seed, "tx-a").swap
    second = _record(service, ledger_seed, "tx-b", reverse=True).swap

    enriched_swaps = service.ledger_swap_list_for_pool(ledger_seed.pool.pool_id)

    assert [enriched.record for enriched in enriched_swaps] == [first, second]
    assert enriched_swaps[1].token_a == ledger_seed.token_b
    assert enriched_swaps[1].token_b == ledger_seed.token_a


def test_list_for_unknown_pool_is_not_found(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    with pytest.raises(NotFoundError):
        service.ledger_swap_list_for_pool(uuid4())


def test_list_for_wallet_filters_by_wallet(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    _record(service, ledger_seed, "tx-w1", wallet="wallet-1")
    _record(service, ledger_seed, "tx-w2", wallet="wallet-2")

    enriched_swaps = service.ledger_swap_list_for_wallet("wallet-2")

    assert [enriched.record.tx_hash for enriched in enriched_swaps] == ["tx-w2"]
    assert service.ledger_swap_list_for_wallet("wallet-3") == []


def test_swap_adapter_failure_records_nothing_and_tx_hash_stays_free(ledger_seed) -> None:
    failing_service = _build_service(ledger_seed.store, settlement_adapter=_RejectingSettlementAdapter())

    with pytest.raises(UpstreamFailureError) as error_info:
        _record(failing_service, ledger_seed, "tx-retry", client_origin="ui")

    assert error_info.value.code == "SETTLEMENT_FAILED"
    assert ledger_seed.store.db_swap_get_by_tx_hash("tx-retry") is None

    retried = _record(
        _build_service(ledger_seed.store, settlement_adapter=PlaceholderChainSettlementAdapter()),
        ledger_seed,
        "tx-retry",
        client_origin="ui",
    )
    assert retried.settlement is not None
    assert ledger_seed.store.db_swap_list_for_pool(ledger_seed.pool.pool_id) == [retried.swap]


def test_interactive_swap_without_adapter_records_nothing(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    with pytest.raises(UpstreamFailureError) as error_info:
        _record(service, ledger_seed, "tx-no-adapter", client_origin="ui")

    assert error_info.value.code == "SETTLEMENT_UNAVAILABLE"
    assert service.ledger_swap_list_for_wallet("wallet-1") == []
