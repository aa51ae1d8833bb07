"""Proportional withdrawal arithmetic for liquidity positions.

Removing `requested` LP units from a position holding `lp_tokens` scales both
token amounts by `1 - requested / lp_tokens`. A request at or above the held
balance is an explicit full closure: the caller deletes the position and the
would-be leftover amounts are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from app.domain import InvalidStateError, LiquidityPosition

from .validation import ledger_require_positive_amount

_WITHDRAWAL_DECIMAL_PRECISION = 60
_ZERO = Decimal("0")


@dataclass(frozen=True)
class WithdrawalComputation:
    """Resulting position state of one withdrawal.

    Attributes:
        full_closure: Whether the position must be deleted.
        new_amount_token_a: Remaining token A amount (zero on closure).
        new_amount_token_b: Remaining token B amount (zero on closure).
        new_lp_tokens: Remaining LP units (zero on closure).
        fraction: Requested share of the held LP units, unclamped.
    """

    full_closure: bool
    new_amount_token_a: Decimal
    new_amount_token_b: Decimal
    new_lp_tokens: Decimal
    fraction: Decimal


def ledger_compute_withdrawal(position: LiquidityPosition, requested_lp_amount: object) -> WithdrawalComputation:
    """Compute the position state after removing LP units.

    Args:
        position: Current position snapshot.
        requested_lp_amount: LP units to remove; must be > 0.

    Returns:
        WithdrawalComputation: Full closure, or the reduced amounts.

    Raises:
        InvalidInputError: Raised when the requested amount is not a positive finite number.
        InvalidStateError: Raised when the position holds no LP units.
    """

    requested = ledger_require_positive_amount(requested_lp_amount, "amount", code="INVALID_AMOUNT")
    if position.lp_tokens <= _ZERO:
        raise InvalidStateError(
            f"liquidity position {position.position_id} holds no LP tokens",
            code="EMPTY_POSITION",
        )

    with localcontext() as context:
        context.prec = _WITHDRAWAL_DECIMAL_PRECISION
        fraction = requested / position.lp_tokens
        new_lp_tokens = position.lp_tokens - requested
        if new_lp_tokens <= _ZERO:
            return WithdrawalComputation(
                full_closure=True,
                new_amount_token_a=_ZERO,
                new_amount_token_b=_ZERO,
                new_lp_tokens=_ZERO,
                fraction=fraction,
            )

        remaining_share = Decimal("1") - fraction
        return WithdrawalComputation(
            full_closure=False,
            new_amount_token_a=position.amount_token_a * remaining_share,
            new_amount_token_b=position.amount_token_b * remaining_share,
            new_lp_tokens=new_lp_tokens,
            fraction=fraction,
        )
