"""Placeholder chain settlement adapter producing unsigned instruction artifacts.

The artifact is the base64 encoding of a canonical JSON description of the
requested instruction. It lets interactive clients exercise the signing flow
without a live chain backend.
"""

from __future__ import annotations

import base64
import json
from decimal import Decimal
from typing import Any, Final
from uuid import NAMESPACE_URL, uuid5

from app.domain import Pool

from .chain_errors import ChainSettlementRequestError
from .interfaces import (
    SWAP_DIRECTION_A_TO_B,
    SWAP_DIRECTION_B_TO_A,
    ChainSettlementPort,
    LiquidityChangeAmounts,
    PriceRange,
    SettlementReceipt,
)


class PlaceholderChainSettlementAdapter(ChainSettlementPort):
    """Adapter that encodes instructions instead of submitting them."""

    _ARTIFACT_VERSION: Final[int] = 1

    def adapter_source_name(self) -> str:
        return "placeholder-settlement"

    def adapter_submit_liquidity_change(
        self,
        pool: Pool,
        user_wallet: str,
        amounts: LiquidityChangeAmounts,
        price_range: PriceRange | None,
    ) -> SettlementReceipt:
        if price_range is not None and price_range.lower_price >= price_range.upper_price:
            raise ChainSettlementRequestError("price range lower bound must be below upper bound")

        instruction: dict[str, Any] = {
            "instruction": "liquidity_change",
            "pool_address": pool.pool_address,
            "user_wallet": user_wallet,
            "token_a_delta": str(amounts.token_a_delta),
            "token_b_delta": str(amounts.token_b_delta),
            "lp_token_delta": str(amounts.lp_token_delta),
        }
        if price_range is not None:
            instruction["price_range"] = {
                "lower_price": str(price_range.lower_price),
                "upper_price": str(price_range.upper_price),
            }
        position_mint = str(uuid5(NAMESPACE_URL, f"{pool.pool_address}:{user_wallet}"))
        return SettlementReceipt(tx_handle=self._adapter_encode(instruction), position_mint=position_mint)

    def adapter_submit_swap(
        self,
        pool: Pool,
        user_wallet: str,
        input_amount: Decimal,
        direction: str,
        min_output: Decimal,
    ) -> SettlementReceipt:
        if direction not in {SWAP_DIRECTION_A_TO_B, SWAP_DIRECTION_B_TO_A}:
            raise ChainSettlementRequestError(f"unsupported swap direction={direction}")

        instruction = {
            "instruction": "swap",
            "pool_address": pool.pool_address,
            "user_wallet": user_wallet,
            "input_amount": str(input_amount),
            "direction": direction,
            "min_output": str(min_output),
        }
        return SettlementReceipt(tx_handle=self._adapter_encode(instruction), position_mint=None)

    def adapter_submit_fee_collection(self, pool: Pool, user_wallet: str) -> SettlementReceipt:
        instruction = {
            "instruction": "collect_fees",
            "pool_address": pool.pool_address,
            "user_wallet": user_wallet,
        }
        return SettlementReceipt(tx_handle=self._adapter_encode(instruction), position_mint=None)

    def _adapter_encode(self, instruction: dict[str, Any]) -> str:
        payload = {"artifact_version": self._ARTIFACT_VERSION, **instruction}
        encoded_payload = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return base64.b64encode(encoded_payload).decode("ascii")
