"""Typed ledger entities shared across runtime layers.

Entities are immutable snapshots of persisted rows. Services never mutate an
entity in place; they build replacement values with `dataclasses.replace` and
hand them to the Ledger Store, which owns persisted state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable
from uuid import UUID


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class Token:
    """Fungible asset identity.

    Attributes:
        token_id: Surrogate token identifier.
        mint_address: Unique on-chain mint address.
        symbol: Ticker symbol.
        name: Display name.
        decimals: Declared decimal precision.
        logo_uri: Optional logo URI.
        presale_completed: Whether the token's presale has been finalized.
        created_at_utc: Row creation timestamp in UTC.
    """

    token_id: UUID
    mint_address: str
    symbol: str
    name: str
    decimals: int
    logo_uri: str | None
    presale_completed: bool
    created_at_utc: datetime


@dataclass(frozen=True)
class Pool:
    """Trading venue for an ordered token pair.

    Attributes:
        pool_id: Surrogate pool identifier.
        pool_address: Unique on-chain pool address.
        token_a_id: First token identifier.
        token_b_id: Second token identifier.
        lp_mint: Optional LP mint address.
        tick_spacing: Optional tick spacing of the concentrated-liquidity pool.
        fee_rate: Optional fee rate in hundredths of a basis point.
        created_at_utc: Row creation timestamp in UTC.
    """

    pool_id: UUID
    pool_address: str
    token_a_id: UUID
    token_b_id: UUID
    lp_mint: str | None
    tick_spacing: int | None
    fee_rate: int | None
    created_at_utc: datetime

    def enrichment_token_ids(self, pool: Pool) -> tuple[UUID | None, UUID | None]:
        """Return this pool's token pair; `pool` is the stored row for this same pool."""

        return pool.token_a_id, pool.token_b_id


@dataclass(frozen=True)
class LiquidityPosition:
    """One wallet's liquidity stake in one pool.

    Attributes:
        position_id: Surrogate position identifier.
        user_wallet: Owning wallet address.
        pool_id: Pool identifier, or None when the pool reference was removed.
        amount_token_a: Represented amount of token A.
        amount_token_b: Represented amount of token B.
        lp_tokens: Proportional-ownership units held.
        version: Optimistic concurrency version.
        created_at_utc: Row creation timestamp in UTC.
        updated_at_utc: Last write timestamp in UTC.
    """

    position_id: UUID
    user_wallet: str
    pool_id: UUID | None
    amount_token_a: Decimal
    amount_token_b: Decimal
    lp_tokens: Decimal
    version: int
    created_at_utc: datetime
    updated_at_utc: datetime

    def enrichment_token_ids(self, pool: Pool) -> tuple[UUID | None, UUID | None]:
        """Return the owning pool's token pair."""

        return pool.token_a_id, pool.token_b_id


@dataclass(frozen=True)
class Swap:
    """Immutable record of one executed trade.

    Attributes:
        swap_id: Surrogate swap identifier.
        pool_id: Pool identifier, or None when the pool reference was removed.
        user_wallet: Trading wallet address.
        token_in_id: Input token identifier.
        token_out_id: Output token identifier.
        amount_in: Input amount.
        amount_out: Output amount.
        tx_hash: Unique on-chain transaction hash.
        executed_at_utc: Execution timestamp in UTC.
    """

    swap_id: UUID
    pool_id: UUID | None
    user_wallet: str
    token_in_id: UUID | None
    token_out_id: UUID | None
    amount_in: Decimal
    amount_out: Decimal
    tx_hash: str
    executed_at_utc: datetime

    def enrichment_token_ids(self, pool: Pool) -> tuple[UUID | None, UUID | None]:
        """Return the swapped tokens in trade direction; the pool pair is ignored."""

        _ = pool
        return self.token_in_id, self.token_out_id


@dataclass(frozen=True)
class FeeRecord:
    """Accrued-but-unclaimed trading fees for one (pool, wallet) pair.

    Attributes:
        fee_record_id: Surrogate fee record identifier.
        pool_id: Pool identifier, or None when the pool reference was removed.
        user_wallet: Owning wallet address.
        unclaimed_fee_a: Unclaimed token A fees.
        unclaimed_fee_b: Unclaimed token B fees.
        last_claimed_at_utc: Timestamp of the latest claim, if any.
        version: Optimistic concurrency version.
    """

    fee_record_id: UUID
    pool_id: UUID | None
    user_wallet: str
    unclaimed_fee_a: Decimal
    unclaimed_fee_b: Decimal
    last_claimed_at_utc: datetime | None
    version: int

    @property
    def has_unclaimed_balance(self) -> bool:
        """Whether any fee amount remains to be claimed."""

        return self.unclaimed_fee_a != Decimal("0") or self.unclaimed_fee_b != Decimal("0")

    def enrichment_token_ids(self, pool: Pool) -> tuple[UUID | None, UUID | None]:
        """Return the owning pool's token pair, matching `fee_a` and `fee_b`."""

        return pool.token_a_id, pool.token_b_id


@dataclass(frozen=True)
class Presale:
    """Fundraising window attached to one token.

    Attributes:
        presale_id: Surrogate presale identifier.
        token_id: Token being sold.
        presale_address: Unique on-chain presale account address.
        target_amount: Raise target.
        total_raised: Amount raised so far.
        start_time_utc: Window start in UTC.
        end_time_utc: Window end in UTC.
        status: Lifecycle status (`active`, `completed`, `cancelled`).
        version: Optimistic concurrency version.
        created_at_utc: Row creation timestamp in UTC.
    """

    presale_id: UUID
    token_id: UUID
    presale_address: str
    target_amount: Decimal
    total_raised: Decimal
    start_time_utc: datetime
    end_time_utc: datetime
    status: str
    version: int
    created_at_utc: datetime


@dataclass(frozen=True)
class PresaleContribution:
    """Immutable record of one presale contribution."""

    contribution_id: UUID
    presale_id: UUID
    user_wallet: str
    amount: Decimal
    contributed_at_utc: datetime


@runtime_checkable
class HasPoolId(Protocol):
    """Capability of records that reference an owning pool."""

    @property
    def pool_id(self) -> UUID | None:
        """Return the owning pool identifier."""


@runtime_checkable
class HasTokenRefs(Protocol):
    """Capability of records that can name the two tokens to join for display."""

    def enrichment_token_ids(self, pool: Pool) -> tuple[UUID | None, UUID | None]:
        """Return the (first, second) token identifiers to resolve for this record.

        Args:
            pool: Resolved owning pool.

        Returns:
            tuple[UUID | None, UUID | None]: Token identifiers, None when unset.
        """


class EnrichableRecord(HasPoolId, HasTokenRefs, Protocol):
    """Record that supports pool and token enrichment."""


@dataclass(frozen=True)
class EnrichedRecord:
    """Record joined with its pool and token metadata for presentation.

    Attributes:
        record: Original ledger record (a pool enriches against itself).
        pool: Resolved pool, None when the reference did not resolve.
        token_a: First resolved token (token in for swaps).
        token_b: Second resolved token (token out for swaps).
    """

    record: LiquidityPosition | Swap | FeeRecord | Pool
    pool: Pool | None = None
    token_a: Token | None = None
    token_b: Token | None = None


PRESALE_STATUS_ACTIVE = "active"
PRESALE_STATUS_COMPLETED = "completed"
PRESALE_STATUS_CANCELLED = "cancelled"
PRESALE_STATUSES = frozenset({PRESALE_STATUS_ACTIVE, PRESALE_STATUS_COMPLETED, PRESALE_STATUS_CANCELLED})
