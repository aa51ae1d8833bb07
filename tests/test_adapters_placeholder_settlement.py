"""Tests for the placeholder chain settlement adapter artifacts."""

from __future__ import annotations

import base64
import json
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from app.adapters import (
    ChainSettlementError,
    LiquidityChangeAmounts,
    PlaceholderChainSettlementAdapter,
    PriceRange,
)
from app.domain import Pool


def _build_pool() -> Pool:
    return Pool(
        pool_id=uuid4(),
        pool_address="pool-sol-usdc",
        token_a_id=uuid4(),
        token_b_id=uuid4(),
        lp_mint=None,
        tick_spacing=64,
        fee_rate=3000,
        created_at_utc=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )


def _decode(tx_handle: str) -> dict[str, object]:
    return json.loads(base64.b64decode(tx_handle))


def test_liquidity_artifact_encodes_deltas_and_stable_position_mint() -> None:
    adapter = PlaceholderChainSettlementAdapter()
    pool = _build_pool()
    amounts = LiquidityChangeAmounts(Decimal("-25"), Decimal("-50"), Decimal("-10"))

    first = adapter.adapter_submit_liquidity_change(pool, "wallet-1", amounts, None)
    second = adapter.adapter_submit_liquidity_change(pool, "wallet-1", amounts, None)

    assert first == second
    artifact = _decode(first.tx_handle)
    assert artifact["artifact_version"] == 1
    assert artifact["instruction"] == "liquidity_change"
    assert artifact["lp_token_delta"] == "-10"
    assert "price_range" not in artifact


def test_liquidity_artifact_rejects_inverted_price_range() -> None:
    adapter = PlaceholderChainSettlementAdapter()
    amounts = LiquidityChangeAmounts(Decimal("1"), Decimal("1"), Decimal("1"))

    with pytest.raises(ChainSettlementError):
        adapter.adapter_submit_liquidity_change(
            _build_pool(),
            "wallet-1",
            amounts,
            PriceRange(lower_price=Decimal("2"), upper_price=Decimal("1")),
        )


def test_swap_artifact_rejects_unknown_direction() -> None:
    adapter = PlaceholderChainSettlementAdapter()

    receipt = adapter.adapter_submit_swap(_build_pool(), "wallet-1", Decimal("1"), "a_to_b", Decimal("0.9"))

    assert _decode(receipt.tx_handle)["min_output"] == "0.9"
    assert receipt.position_mint is None
    with pytest.raises(ChainSettlementError):
        adapter.adapter_submit_swap(_build_pool(), "wallet-1", Decimal("1"), "sideways", Decimal("0.9"))
