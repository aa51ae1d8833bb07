"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules.
Mutating methods on versioned entities take the version the caller read and
reject the write with `StaleWriteError` when the stored version moved on.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from app.domain import (
    FeeRecord,
    HealthStatus,
    LiquidityPosition,
    Pool,
    Presale,
    PresaleContribution,
    Swap,
    Token,
)


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class TokenRepositoryPort(Protocol):
    """Port definition for token persistence and lookups."""

    def db_token_create(
        self,
        mint_address: str,
        symbol: str,
        name: str,
        decimals: int,
        logo_uri: str | None,
    ) -> Token:
        """Insert one token row.

        Args:
            mint_address: Unique on-chain mint address.
            symbol: Ticker symbol.
            name: Display name.
            decimals: Declared decimal precision.
            logo_uri: Optional logo URI.

        Returns:
            Token: Persisted token.

        Raises:
            ConflictError: Raised when the mint address already exists.
            UpstreamFailureError: Raised when persistence fails.
        """

    def db_token_get_by_id(self, token_id: UUID) -> Token | None:
        """Fetch one token by primary key.

        Args:
            token_id: Token identifier.

        Returns:
            Token | None: Matching token, or None when absent.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_token_get_by_mint_address(self, mint_address: str) -> Token | None:
        """Fetch one token by mint address.

        Args:
            mint_address: On-chain mint address.

        Returns:
            Token | None: Matching token, or None when absent.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_token_list(self) -> list[Token]:
        """List all tokens ordered by creation time.

        Returns:
            list[Token]: Token rows.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """


class PoolRepositoryPort(Protocol):
    """Port definition for pool persistence and lookups."""

    def db_pool_create(
        self,
        pool_address: str,
        token_a_id: UUID,
        token_b_id: UUID,
        lp_mint: str | None,
        tick_spacing: int | None,
        fee_rate: int | None,
    ) -> Pool:
        """Insert one pool row.

        Args:
            pool_address: Unique on-chain pool address.
            token_a_id: First token identifier.
            token_b_id: Second token identifier.
            lp_mint: Optional LP mint address.
            tick_spacing: Optional tick spacing.
            fee_rate: Optional fee rate.

        Returns:
            Pool: Persisted pool.

        Raises:
            ConflictError: Raised when the pool address already exists.
            UpstreamFailureError: Raised when persistence fails.
        """

    def db_pool_get_by_id(self, pool_id: UUID) -> Pool | None:
        """Fetch one pool by primary key.

        Args:
            pool_id: Pool identifier.

        Returns:
            Pool | None: Matching pool, or None when absent.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_pool_get_by_address(self, pool_address: str) -> Pool | None:
        """Fetch one pool by on-chain address.

        Args:
            pool_address: On-chain pool address.

        Returns:
            Pool | None: Matching pool, or None when absent.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_pool_list(self) -> list[Pool]:
        """List all pools ordered by creation time."""


class PositionRepositoryPort(Protocol):
    """Port definition for liquidity position persistence with versioned writes."""

    def db_position_create(
        self,
        user_wallet: str,
        pool_id: UUID,
        amount_token_a: Decimal,
        amount_token_b: Decimal,
        lp_tokens: Decimal,
    ) -> LiquidityPosition:
        """Insert one position row at version 1.

        Args:
            user_wallet: Owning wallet address.
            pool_id: Pool identifier.
            amount_token_a: Token A amount.
            amount_token_b: Token B amount.
            lp_tokens: LP token amount.

        Returns:
            LiquidityPosition: Persisted position.

        Raises:
            ConflictError: Raised when the wallet already holds a position in the pool.
            UpstreamFailureError: Raised when persistence fails.
        """

    def db_position_get_by_id(self, position_id: UUID) -> LiquidityPosition | None:
        """Fetch one position by primary key.

        Args:
            position_id: Position identifier.

        Returns:
            LiquidityPosition | None: Matching position, or None when absent.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_position_get_for_wallet_and_pool(self, user_wallet: str, pool_id: UUID) -> LiquidityPosition | None:
        """Fetch the position one wallet holds in one pool.

        Args:
            user_wallet: Owning wallet address.
            pool_id: Pool identifier.

        Returns:
            LiquidityPosition | None: Matching position, or None when absent.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_position_list_for_wallet(self, user_wallet: str) -> list[LiquidityPosition]:
        """List positions held by one wallet ordered by creation time.

        Args:
            user_wallet: Owning wallet address.

        Returns:
            list[LiquidityPosition]: Position rows.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_position_update_amounts(
        self,
        position_id: UUID,
        expected_version: int,
        amount_token_a: Decimal,
        amount_token_b: Decimal,
        lp_tokens: Decimal,
    ) -> LiquidityPosition:
        """Overwrite position amounts when the stored version matches.

        Args:
            position_id: Position identifier.
            expected_version: Version observed by the caller.
            amount_token_a: New token A amount.
            amount_token_b: New token B amount.
            lp_tokens: New LP token amount.

        Returns:
            LiquidityPosition: Updated position with incremented version.

        Raises:
            NotFoundError: Raised when the position no longer exists.
            StaleWriteError: Raised when the stored version differs.
            UpstreamFailureError: Raised when persistence fails.
        """

    def db_position_delete(self, position_id: UUID, expected_version: int) -> LiquidityPosition:
        """Delete one position when the stored version matches.

        Args:
            position_id: Position identifier.
            expected_version: Version observed by the caller.

        Returns:
            LiquidityPosition: Deleted position row.

        Raises:
            NotFoundError: Raised when the position no longer exists.
            StaleWriteError: Raised when the stored version differs.
            UpstreamFailureError: Raised when persistence fails.
        """


class SwapRepositoryPort(Protocol):
    """Port definition for append-only swap persistence."""

    def db_swap_create(
        self,
        pool_id: UUID,
        user_wallet: str,
        token_in_id: UUID,
        token_out_id: UUID,
        amount_in: Decimal,
        amount_out: Decimal,
        tx_hash: str,
    ) -> Swap:
        """Insert one immutable swap row.

        Args:
            pool_id: Pool identifier.
            user_wallet: Trading wallet address.
            token_in_id: Input token identifier.
            token_out_id: Output token identifier.
            amount_in: Input amount.
            amount_out: Output amount.
            tx_hash: Unique transaction hash.

        Returns:
            Swap: Persisted swap.

        Raises:
            ConflictError: Raised when the transaction hash was already recorded.
            UpstreamFailureError: Raised when persistence fails.
        """

    def db_swap_get_by_tx_hash(self, tx_hash: str) -> Swap | None:
        """Fetch one swap by transaction hash.

        Args:
            tx_hash: Transaction hash.

        Returns:
            Swap | None: Matching swap, or None when absent.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_swap_list_for_pool(self, pool_id: UUID) -> list[Swap]:
        """List swaps executed in one pool, oldest first.

        Args:
            pool_id: Pool identifier.

        Returns:
            list[Swap]: Swap rows.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_swap_list_for_wallet(self, user_wallet: str) -> list[Swap]:
        """List swaps executed by one wallet, oldest first.

        Args:
            user_wallet: Trading wallet address.

        Returns:
            list[Swap]: Swap rows.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """


class FeeRepositoryPort(Protocol):
    """Port definition for fee record persistence with versioned writes."""

    def db_fee_create(
        self,
        pool_id: UUID,
        user_wallet: str,
        unclaimed_fee_a: Decimal,
        unclaimed_fee_b: Decimal,
    ) -> FeeRecord:
        """Insert one fee record at version 1.

        Args:
            pool_id: Pool identifier.
            user_wallet: Owning wallet address.
            unclaimed_fee_a: Initial token A fees.
            unclaimed_fee_b: Initial token B fees.

        Returns:
            FeeRecord: Persisted fee record.

        Raises:
            ConflictError: Raised when a record already exists for the pair.
            UpstreamFailureError: Raised when persistence fails.
        """

    def db_fee_get_for_pool_and_wallet(self, pool_id: UUID, user_wallet: str) -> FeeRecord | None:
        """Fetch the unique fee record of one (pool, wallet) pair.

        Args:
            pool_id: Pool identifier.
            user_wallet: Owning wallet address.

        Returns:
            FeeRecord | None: Matching record, or None when absent.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_fee_list_for_wallet(self, user_wallet: str) -> list[FeeRecord]:
        """List every fee record of one wallet, including drained ones.

        Args:
            user_wallet: Owning wallet address.

        Returns:
            list[FeeRecord]: Fee rows.

        Raises:
            UpstreamFailureError: Raised when the read fails.
        """

    def db_fee_update_balances(
        self,
        fee_record_id: UUID,
        expected_version: int,
        unclaimed_fee_a: Decimal,
        unclaimed_fee_b: Decimal,
        last_claimed_at_utc: datetime | None,
    ) -> FeeRecord:
        """Overwrite fee balances and claim timestamp when the stored version matches.

        Args:
            fee_record_id: Fee record identifier.
            expected_version: Version observed by the caller.
            unclaimed_fee_a: New token A balance.
            unclaimed_fee_b: New token B balance.
            last_claimed_at_utc: New claim timestamp.

        Returns:
            FeeRecord: Updated record with incremented version.

        Raises:
            NotFoundError: Raised when the record no longer exists.
            StaleWriteError: Raised when the stored version differs.
            UpstreamFailureError: Raised when persistence fails.
        """


class PresaleRepositoryPort(Protocol):
    """Port definition for presale and contribution persistence."""

    def db_presale_create(
        self,
        token_id: UUID,
        presale_address: str,
        target_amount: Decimal,
        start_time_utc: datetime,
        end_time_utc: datetime,
    ) -> Presale:
        """Insert one active presale with zero raised.

        Args:
            token_id: Token identifier.
            presale_address: Unique presale address.
            target_amount: Raise target.
            start_time_utc: Window start.
            end_time_utc: Window end.

        Returns:
            Presale: Persisted presale.

        Raises:
            ConflictError: Raised when the token or presale address already has a presale.
            UpstreamFailureError: Raised when persistence fails.
        """

    def db_presale_get_by_id(self, presale_id: UUID) -> Presale | None:
        """Fetch one presale by primary key."""

    def db_presale_get_by_token_id(self, token_id: UUID) -> Presale | None:
        """Fetch the presale attached to one token."""

    def db_presale_get_by_address(self, presale_address: str) -> Presale | None:
        """Fetch one presale by on-chain address."""

    def db_presale_list(self) -> list[Presale]:
        """List all presales ordered by creation time."""

    def db_presale_list_contributions(self, presale_id: UUID) -> list[PresaleContribution]:
        """List contributions of one presale, oldest first."""

    def db_presale_update(
        self,
        presale_id: UUID,
        expected_version: int,
        status: str,
        end_time_utc: datetime,
    ) -> Presale:
        """Replace status and window end of one presale.

        Moving to `completed` also flags the presale token as
        `presale_completed` in the same atomic write.

        Args:
            presale_id: Presale identifier.
            expected_version: Version observed by the caller.
            status: New lifecycle status.
            end_time_utc: New window end.

        Returns:
            Presale: Updated presale.

        Raises:
            NotFoundError: Raised when the presale no longer exists.
            StaleWriteError: Raised when the stored version differs.
            UpstreamFailureError: Raised when persistence fails.
        """

    def db_presale_record_contribution(
        self,
        presale_id: UUID,
        expected_version: int,
        user_wallet: str,
        amount: Decimal,
        contributed_at_utc: datetime,
    ) -> tuple[Presale, PresaleContribution]:
        """Append one contribution and raise `total_raised` in one atomic write.

        Args:
            presale_id: Presale identifier.
            expected_version: Version observed by the caller.
            user_wallet: Contributing wallet address.
            amount: Contribution amount.
            contributed_at_utc: Contribution timestamp.

        Returns:
            tuple[Presale, PresaleContribution]: Updated presale and new contribution.

        Raises:
            NotFoundError: Raised when the presale no longer exists.
            StaleWriteError: Raised when the stored version differs.
            UpstreamFailureError: Raised when persistence fails.
        """


class LedgerStorePort(
    TokenRepositoryPort,
    PoolRepositoryPort,
    PositionRepositoryPort,
    SwapRepositoryPort,
    FeeRepositoryPort,
    PresaleRepositoryPort,
    Protocol,
):
    """Aggregate port covering every ledger entity repository."""
