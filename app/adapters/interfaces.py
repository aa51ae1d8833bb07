"""Typed interfaces for chain settlement adapter responsibilities."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from app.domain import Pool

SWAP_DIRECTION_A_TO_B = "a_to_b"
SWAP_DIRECTION_B_TO_A = "b_to_a"


@dataclass(frozen=True)
class LiquidityChangeAmounts:
    """Signed token deltas of one liquidity change.

    Attributes:
        token_a_delta: Token A delta (negative for withdrawals).
        token_b_delta: Token B delta (negative for withdrawals).
        lp_token_delta: LP token delta (negative for withdrawals).
    """

    token_a_delta: Decimal
    token_b_delta: Decimal
    lp_token_delta: Decimal


@dataclass(frozen=True)
class PriceRange:
    """Concentrated-liquidity price bounds.

    Attributes:
        lower_price: Lower price bound.
        upper_price: Upper price bound.
    """

    lower_price: Decimal
    upper_price: Decimal


@dataclass(frozen=True)
class SettlementReceipt:
    """Result contract for chain settlement requests.

    Attributes:
        tx_handle: Opaque base64 transaction artifact to be signed elsewhere.
        position_mint: Position mint address for liquidity changes, when issued.
    """

    tx_handle: str
    position_mint: str | None


class ChainSettlementPort(Protocol):
    """Port definition for building on-chain liquidity, swap and fee transactions."""

    def adapter_source_name(self) -> str:
        """Return adapter source identifier for diagnostics.

        Returns:
            str: Human-readable settlement backend identifier.
        """

    def adapter_submit_liquidity_change(
        self,
        pool: Pool,
        user_wallet: str,
        amounts: LiquidityChangeAmounts,
        price_range: PriceRange | None,
    ) -> SettlementReceipt:
        """Request a transaction artifact for one liquidity change.

        Args:
            pool: Target pool.
            user_wallet: Acting wallet address.
            amounts: Signed token deltas.
            price_range: Optional price range for concentrated positions.

        Returns:
            SettlementReceipt: Transaction artifact and position mint.

        Raises:
            ChainSettlementError: Raised when the artifact cannot be produced.
        """

    def adapter_submit_swap(
        self,
        pool: Pool,
        user_wallet: str,
        input_amount: Decimal,
        direction: str,
        min_output: Decimal,
    ) -> SettlementReceipt:
        """Request a transaction artifact for one swap.

        Args:
            pool: Target pool.
            user_wallet: Acting wallet address.
            input_amount: Amount of the input token.
            direction: `a_to_b` or `b_to_a`.
            min_output: Minimum acceptable output amount.

        Returns:
            SettlementReceipt: Transaction artifact.

        Raises:
            ChainSettlementError: Raised when the artifact cannot be produced.
        """

    def adapter_submit_fee_collection(self, pool: Pool, user_wallet: str) -> SettlementReceipt:
        """Request a transaction artifact collecting one wallet's fees in one pool.

        Args:
            pool: Target pool.
            user_wallet: Acting wallet address.

        Returns:
            SettlementReceipt: Transaction artifact.

        Raises:
            ChainSettlementError: Raised when the artifact cannot be produced.
        """
