"""Tests for the in-memory ledger store reference implementation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from app.domain import ConflictError, NotFoundError, StaleWriteError


def test_unique_keys_raise_conflicts(ledger_seed) -> None:
    store = ledger_seed.store
    pool_id = ledger_seed.pool.pool_id
    store.db_position_create("wallet-1", pool_id, Decimal("1"), Decimal("1"), Decimal("1"))
    store.db_fee_create(pool_id, "wallet-1", Decimal("1"), Decimal("0"))

    with pytest.raises(ConflictError):
        store.db_position_create("wallet-1", pool_id, Decimal("2"), Decimal("2"), Decimal("2"))
    with pytest.raises(ConflictError):
        store.db_fee_create(pool_id, "wallet-1", Decimal("1"), Decimal("1"))
    with pytest.raises(ConflictError):
        store.db_pool_create(
            ledger_seed.pool.pool_address,
            ledger_seed.token_a.token_id,
            ledger_seed.token_b.token_id,
            None,
            None,
            None,
        )


def test_versioned_update_rejects_stale_and_missing_rows(ledger_seed) -> None:
    store = ledger_seed.store
    position = store.db_position_create("wallet-1", ledger_seed.pool.pool_id, Decimal("4"), Decimal("4"), Decimal("4"))

    updated = store.db_position_update_amounts(position.position_id, 1, Decimal("2"), Decimal("2"), Decimal("2"))

    assert updated.version == 2
    with pytest.raises(StaleWriteError):
        store.db_position_update_amounts(position.position_id, 1, Decimal("1"), Decimal("1"), Decimal("1"))
    with pytest.raises(StaleWriteError):
        store.db_position_delete(position.position_id, expected_version=1)

    deleted = store.db_position_delete(position.position_id, expected_version=2)

    assert deleted == updated
    with pytest.raises(NotFoundError):
        store.db_position_delete(position.position_id, expected_version=2)
    with pytest.raises(NotFoundError):
        store.db_fee_update_balances(uuid4(), 1, Decimal("0"), Decimal("0"), None)


def test_wallet_listings_preserve_insertion_order(ledger_seed) -> None:
    store = ledger_seed.store
    second_pool = store.db_pool_create(
        "pool-usdc-sol",
        ledger_seed.token_b.token_id,
        ledger_seed.token_a.token_id,
        None,
        None,
        None,
    )
    first = store.db_position_create("wallet-1", ledger_seed.pool.pool_id, Decimal("1"), Decimal("1"), Decimal("1"))
    second = store.db_position_create("wallet-1", second_pool.pool_id, Decimal("2"), Decimal("2"), Decimal("2"))
    store.db_position_create("wallet-2", second_pool.pool_id, Decimal("3"), Decimal("3"), Decimal("3"))

    assert store.db_position_list_for_wallet("wallet-1") == [first, second]
    assert store.db_position_get_for_wallet_and_pool("wallet-2", second_pool.pool_id).lp_tokens == Decimal("3")
    assert store.db_position_get_for_wallet_and_pool("wallet-2", ledger_seed.pool.pool_id) is None


def test_presale_completion_flags_token_and_bumps_version(ledger_seed) -> None:
    store = ledger_seed.store
    start = datetime(2026, 3, 1, tzinfo=timezone.utc)
    end = start + timedelta(days=1)
    presale = store.db_presale_create(ledger_seed.token_a.token_id, "presale-sol", Decimal("10"), start, end)
    _, contribution = store.db_presale_record_contribution(presale.presale_id, 1, "wallet-1", Decimal("4"), start)

    completed = store.db_presale_update(presale.presale_id, 2, "completed", presale.end_time_utc)

    assert completed.version == 3
    assert completed.total_raised == Decimal("4")
    assert store.db_token_get_by_id(ledger_seed.token_a.token_id).presale_completed is True
    assert store.db_token_get_by_id(ledger_seed.token_b.token_id).presale_completed is False
    assert store.db_presale_list() == [completed]
    assert store.db_presale_list_contributions(presale.presale_id) == [contribution]
    assert store.db_presale_list_contributions(uuid4()) == []
    with pytest.raises(StaleWriteError):
        store.db_presale_update(presale.presale_id, 2, "cancelled", presale.end_time_utc)
    with pytest.raises(NotFoundError):
        store.db_presale_update(uuid4(), 1, "cancelled", presale.end_time_utc)


def test_pool_list_returns_pools_oldest_first(ledger_seed) -> None:
    store = ledger_seed.store
    token_a_id, token_b_id = ledger_seed.token_a.token_id, ledger_seed.token_b.token_id
    second_pool = store.db_pool_create("pool-usdc-sol", token_b_id, token_a_id, None, None, None)

    assert store.db_pool_list() == [ledger_seed.pool, second_pool]
