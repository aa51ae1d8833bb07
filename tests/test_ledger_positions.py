"""Tests for liquidity position removal, addition and reads."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from uuid import uuid4

import pytest

from app.adapters import ChainSettlementRequestError, PlaceholderChainSettlementAdapter, PriceRange
from app.db import InMemoryLedgerStore
from app.domain import InvalidInputError, NotFoundError, StaleWriteError, UpstreamFailureError
from app.ledger import LedgerEnrichmentService, LiquidityPositionService


class _RecordingSettlementAdapter(PlaceholderChainSettlementAdapter):
    """Placeholder adapter that remembers requested liquidity changes."""

    def __init__(self):
        self.liquidity_requests = []

    def adapter_submit_liquidity_change(self, pool, user_wallet, amounts, price_range):
        self.liquidity_requests.append((pool.pool_id, user_wallet, amounts, price_range))
        return super().adapter_submit_liquidity_change(pool, user_wallet, amounts, price_range)


class _FailingSettlementAdapter(PlaceholderChainSettlementAdapter):
    """Adapter that rejects every request."""

    def adapter_submit_liquidity_change(self, pool, user_wallet, amounts, price_range):
        raise ChainSettlementRequestError("rpc rejected instruction", error_code="RPC_REJECTED")


class _BarrierLedgerStore(InMemoryLedgerStore):
    """Store that holds position reads until every racing caller has read."""

    def __init__(self, parties: int):
        super().__init__()
        self._barrier = threading.Barrier(parties)

    def db_position_get_by_id(self, position_id):
        position = super().db_position_get_by_id(position_id)
        self._barrier.wait(timeout=5)
        return position


def _build_service(store, settlement_adapter=None) -> LiquidityPositionService:
    return LiquidityPositionService(
        store=store,
        enrichment_service=LedgerEnrichmentService(store=store, max_workers=4),
        settlement_adapter=settlement_adapter,
    )


def _open_position(seed, lp_tokens: str = "40", wallet: str = "wallet-1"):
    return seed.store.db_position_create(
        user_wallet=wallet,
        pool_id=seed.pool.pool_id,
        amount_token_a=Decimal("100"),
        amount_token_b=Decimal("200"),
        lp_tokens=Decimal(lp_tokens),
    )


def test_partial_removal_updates_position_and_bumps_version(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    service = _build_service(ledger_seed.store)

    result = service.ledger_position_remove_liquidity(position.position_id, Decimal("10"))

    assert result.closed is False
    assert result.settlement is None
    assert result.position.lp_tokens == Decimal("30")
    assert result.position.amount_token_a == Decimal("75")
    assert result.position.amount_token_b == Decimal("150")
    assert result.position.version == 2
    assert ledger_seed.store.db_position_get_by_id(position.position_id) == result.position


def test_full_removal_deletes_position(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    service = _build_service(ledger_seed.store)

    result = service.ledger_position_remove_liquidity(position.position_id, "40")

    assert result.closed is True
    assert result.position.position_id == position.position_id
    assert ledger_seed.store.db_position_get_by_id(position.position_id) is None


def test_over_withdrawal_deletes_position(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    service = _build_service(ledger_seed.store)

    result = service.ledger_position_remove_liquidity(position.position_id, Decimal("1000"))

    assert result.closed is True
    assert ledger_seed.store.db_position_list_for_wallet("wallet-1") == []


def test_invalid_amount_is_rejected_before_lookup(ledger_seed) -> None:
    """Validation runs first, so an unknown id still reports the bad amount."""

    service = _build_service(ledger_seed.store)

    with pytest.raises(InvalidInputError):
        service.ledger_position_remove_liquidity(uuid4(), Decimal("0"))


def test_missing_position_is_not_found(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    with pytest.raises(NotFoundError) as error_info:
        service.ledger_position_remove_liquidity(uuid4(), Decimal("1"))

    assert error_info.value.code == "POSITION_NOT_FOUND"


def test_interactive_removal_returns_artifact_with_negative_deltas(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    adapter = _RecordingSettlementAdapter()
    service = _build_service(ledger_seed.store, settlement_adapter=adapter)

    result = service.ledger_position_remove_liquidity(position.position_id, Decimal("10"), client_origin="ui")

    assert result.settlement is not None
    assert result.settlement.tx_handle
    _, wallet, amounts, price_range = adapter.liquidity_requests[0]
    assert wallet == "wallet-1"
    assert amounts.lp_token_delta == Decimal("-10")
    assert amounts.token_a_delta == Decimal("-25")
    assert amounts.token_b_delta == Decimal("-50")
    assert price_range is None


def test_non_interactive_removal_skips_adapter(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    adapter = _RecordingSettlementAdapter()
    service = _build_service(ledger_seed.store, settlement_adapter=adapter)

    result = service.ledger_position_remove_liquidity(position.position_id, Decimal("10"), client_origin="api")

    assert result.settlement is None
    assert adapter.liquidity_requests == []


def test_adapter_failure_surfaces_as_upstream_failure_and_keeps_position(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    service = _build_service(ledger_seed.store, settlement_adapter=_FailingSettlementAdapter())

    with pytest.raises(UpstreamFailureError) as error_info:
        service.ledger_position_remove_liquidity(position.position_id, Decimal("10"), client_origin="ui")

    assert error_info.value.code == "SETTLEMENT_FAILED"
    assert ledger_seed.store.db_position_get_by_id(position.position_id) == position


def test_retry_after_adapter_failure_withdraws_once(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    failing_service = _build_service(ledger_seed.store, settlement_adapter=_FailingSettlementAdapter())
    with pytest.raises(UpstreamFailureError):
        failing_service.ledger_position_remove_liquidity(position.position_id, Decimal("10"), client_origin="ui")

    retry = _build_service(ledger_seed.store, settlement_adapter=_RecordingSettlementAdapter())
    result = retry.ledger_position_remove_liquidity(position.position_id, Decimal("10"), client_origin="ui")

    assert result.position.lp_tokens == Decimal("30")
    assert result.position.version == 2


def test_interactive_removal_without_adapter_leaves_position_untouched(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    service = _build_service(ledger_seed.store)

    with pytest.raises(UpstreamFailureError) as error_info:
        service.ledger_position_remove_liquidity(position.position_id, Decimal("10"), client_origin="ui")

    assert error_info.value.code == "SETTLEMENT_UNAVAILABLE"
    stored = ledger_seed.store.db_position_get_by_id(position.position_id)
    assert stored.lp_tokens == Decimal("40")
    assert stored.version == 1


def test_interactive_full_closure_without_adapter_keeps_position(ledger_seed) -> None:
    position = _open_position(ledger_seed)
    service = _build_service(ledger_seed.store)

    with pytest.raises(UpstreamFailureError):
        service.ledger_position_remove_liquidity(position.position_id, Decimal("40"), client_origin="ui")

    assert ledger_seed.store.db_position_get_by_id(position.position_id) == position


def test_interactive_add_without_adapter_creates_nothing(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    with pytest.raises(UpstreamFailureError) as error_info:
        service.ledger_position_add_liquidity("wallet-2", ledger_seed.pool.pool_id, "10", "20", "5", client_origin="ui")

    assert error_info.value.code == "SETTLEMENT_UNAVAILABLE"
    assert ledger_seed.store.db_position_list_for_wallet("wallet-2") == []


def test_concurrent_removals_against_one_version_apply_once(ledger_seed_factory) -> None:
    """Two withdrawals that read the same version cannot both be applied."""

    seed = ledger_seed_factory(_BarrierLedgerStore(parties=2))
    position = _open_position(seed)
    service = _build_service(seed.store)

    def _remove():
        try:
            return service.ledger_position_remove_liquidity(position.position_id, Decimal("10"))
        except StaleWriteError as error:
            return error

    with ThreadPoolExecutor(max_workers=2) as executor:
        outcomes = list(executor.map(lambda _: _remove(), range(2)))

    stale_errors = [outcome for outcome in outcomes if isinstance(outcome, StaleWriteError)]
    assert len(stale_errors) == 1
    assert [row.lp_tokens for row in seed.store.db_position_list_for_wallet("wallet-1")] == [Decimal("30")]


def test_add_liquidity_creates_then_increases_position(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    created = service.ledger_position_add_liquidity("wallet-2", ledger_seed.pool.pool_id, "10", "20", "5")
    increased = service.ledger_position_add_liquidity("wallet-2", ledger_seed.pool.pool_id, "1", "2", "0.5")

    assert created.position.version == 1
    assert increased.position.position_id == created.position.position_id
    assert increased.position.amount_token_a == Decimal("11")
    assert increased.position.amount_token_b == Decimal("22")
    assert increased.position.lp_tokens == Decimal("5.5")
    assert increased.position.version == 2


def test_add_liquidity_forwards_price_range_for_interactive_clients(ledger_seed) -> None:
    adapter = _RecordingSettlementAdapter()
    service = _build_service(ledger_seed.store, settlement_adapter=adapter)
    price_range = PriceRange(lower_price=Decimal("90"), upper_price=Decimal("110"))

    result = service.ledger_position_add_liquidity(
        "wallet-2",
        ledger_seed.pool.pool_id,
        "10",
        "20",
        "5",
        client_origin="ui",
        price_range=price_range,
    )

    assert result.settlement is not None
    assert result.settlement.position_mint is not None
    assert adapter.liquidity_requests[0][3] == price_range
    assert adapter.liquidity_requests[0][2].lp_token_delta == Decimal("5")


def test_add_liquidity_rejects_unknown_pool_and_bad_amounts(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    with pytest.raises(NotFoundError):
        service.ledger_position_add_liquidity("wallet-2", uuid4(), "10", "20", "5")
    with pytest.raises(InvalidInputError):
        service.ledger_position_add_liquidity("wallet-2", ledger_seed.pool.pool_id, "-1", "20", "5")
    with pytest.raises(InvalidInputError):
        service.ledger_position_add_liquidity("wallet-2", ledger_seed.pool.pool_id, "10", "20", "0")
    with pytest.raises(InvalidInputError):
        service.ledger_position_add_liquidity(" ", ledger_seed.pool.pool_id, "10", "20", "5")


def test_list_positions_for_wallet_is_enriched(ledger_seed) -> None:
    _open_position(ledger_seed, wallet="wallet-3")
    service = _build_service(ledger_seed.store)

    enriched_positions = service.ledger_position_list_for_wallet("wallet-3")

    assert len(enriched_positions) == 1
    assert enriched_positions[0].pool == ledger_seed.pool
    assert enriched_positions[0].token_a == ledger_seed.token_a
    assert enriched_positions[0].token_b == ledger_seed.token_b
    assert service.ledger_position_list_for_wallet("nobody") == []
