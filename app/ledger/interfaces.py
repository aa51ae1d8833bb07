"""Typed result contracts for ledger-layer operations."""

from dataclasses import dataclass
from decimal import Decimal

from app.adapters import SettlementReceipt
from app.domain import FeeRecord, LiquidityPosition, Presale, PresaleContribution, Swap


@dataclass(frozen=True)
class LiquidityChangeResult:
    """Outcome of adding or removing liquidity.

    Attributes:
        position: Updated position, or the deleted row when closed.
        closed: Whether the position was deleted.
        settlement: Transaction artifact for interactive clients.
    """

    position: LiquidityPosition
    closed: bool
    settlement: SettlementReceipt | None


@dataclass(frozen=True)
class FeeClaimResult:
    """Outcome of one fee claim.

    Attributes:
        fee_record: Record after the claim (zero balances).
        claimed_fee_a: Token A balance before the claim.
        claimed_fee_b: Token B balance before the claim.
        settlement: Transaction artifact for interactive clients.
    """

    fee_record: FeeRecord
    claimed_fee_a: Decimal
    claimed_fee_b: Decimal
    settlement: SettlementReceipt | None


@dataclass(frozen=True)
class SwapRecordResult:
    """Outcome of recording one executed swap."""

    swap: Swap
    settlement: SettlementReceipt | None


@dataclass(frozen=True)
class PresaleContributionResult:
    """Outcome of one presale contribution."""

    presale: Presale
    contribution: PresaleContribution
