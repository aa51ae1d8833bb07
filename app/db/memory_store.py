"""In-memory Ledger Store reference implementation.

Rows live in per-entity dictionaries guarded by one lock. Every versioned
write compares the caller's expected version under that lock, so the
read-compute-write cycle of the accounting services cannot double-apply
against a stale snapshot.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable
from uuid import UUID, uuid4

from app.domain import (
    PRESALE_STATUS_ACTIVE,
    PRESALE_STATUS_COMPLETED,
    ConflictError,
    FeeRecord,
    LiquidityPosition,
    NotFoundError,
    Pool,
    Presale,
    PresaleContribution,
    StaleWriteError,
    Swap,
    Token,
)

from .interfaces import LedgerStorePort


def _memory_utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryLedgerStore(LedgerStorePort):
    """Thread-safe dictionary-backed ledger store."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        """Initialize empty entity tables.

        Args:
            clock: Optional UTC clock used for row timestamps.
        """

        self._clock = clock or _memory_utc_now
        self._lock = threading.Lock()
        self._tokens: dict[UUID, Token] = {}
        self._pools: dict[UUID, Pool] = {}
        self._positions: dict[UUID, LiquidityPosition] = {}
        self._swaps: dict[UUID, Swap] = {}
        self._fees: dict[UUID, FeeRecord] = {}
        self._presales: dict[UUID, Presale] = {}
        self._contributions: dict[UUID, PresaleContribution] = {}

    # tokens

    def db_token_create(
        self,
        mint_address: str,
        symbol: str,
        name: str,
        decimals: int,
        logo_uri: str | None,
    ) -> Token:
        with self._lock:
            if any(token.mint_address == mint_address for token in self._tokens.values()):
                raise ConflictError("token with this mint address already exists", code="DUPLICATE_MINT_ADDRESS")
            token = Token(
                token_id=uuid4(),
                mint_address=mint_address,
                symbol=symbol,
                name=name,
                decimals=decimals,
                logo_uri=logo_uri,
                presale_completed=False,
                created_at_utc=self._clock(),
            )
            self._tokens[token.token_id] = token
            return token

    def db_token_get_by_id(self, token_id: UUID) -> Token | None:
        with self._lock:
            return self._tokens.get(token_id)

    def db_token_get_by_mint_address(self, mint_address: str) -> Token | None:
        with self._lock:
            return next((token for token in self._tokens.values() if token.mint_address == mint_address), None)

    def db_token_list(self) -> list[Token]:
        with self._lock:
            return sorted(self._tokens.values(), key=lambda token: token.created_at_utc)

    # pools

    def db_pool_create(
        self,
        pool_address: str,
        token_a_id: UUID,
        token_b_id: UUID,
        lp_mint: str | None,
        tick_spacing: int | None,
        fee_rate: int | None,
    ) -> Pool:
        with self._lock:
            if any(pool.pool_address == pool_address for pool in self._pools.values()):
                raise ConflictError("pool with this address already exists", code="DUPLICATE_POOL_ADDRESS")
            pool = Pool(
                pool_id=uuid4(),
                pool_address=pool_address,
                token_a_id=token_a_id,
                token_b_id=token_b_id,
                lp_mint=lp_mint,
                tick_spacing=tick_spacing,
                fee_rate=fee_rate,
                created_at_utc=self._clock(),
            )
            self._pools[pool.pool_id] = pool
            return pool

    def db_pool_get_by_id(self, pool_id: UUID) -> Pool | None:
        with self._lock:
            return self._pools.get(pool_id)

    def db_pool_get_by_address(self, pool_address: str) -> Pool | None:
        with self._lock:
            return next((pool for pool in self._pools.values() if pool.pool_address == pool_address), None)

    def db_pool_list(self) -> list[Pool]:
        with self._lock:
            return sorted(self._pools.values(), key=lambda pool: pool.created_at_utc)

    # liquidity positions

    def db_position_create(
        self,
        user_wallet: str,
        pool_id: UUID,
        amount_token_a: Decimal,
        amount_token_b: Decimal,
        lp_tokens: Decimal,
    ) -> LiquidityPosition:
        with self._lock:
            if self._memory_find_position(user_wallet=user_wallet, pool_id=pool_id) is not None:
                raise ConflictError("wallet already holds a position in this pool", code="DUPLICATE_POSITION")
            created_at_utc = self._clock()
            position = LiquidityPosition(
                position_id=uuid4(),
                user_wallet=user_wallet,
                pool_id=pool_id,
                amount_token_a=amount_token_a,
                amount_token_b=amount_token_b,
                lp_tokens=lp_tokens,
                version=1,
                created_at_utc=created_at_utc,
                updated_at_utc=created_at_utc,
            )
            self._positions[position.position_id] = position
            return position

    def db_position_get_by_id(self, position_id: UUID) -> LiquidityPosition | None:
        with self._lock:
            return self._positions.get(position_id)

    def db_position_get_for_wallet_and_pool(self, user_wallet: str, pool_id: UUID) -> LiquidityPosition | None:
        with self._lock:
            return self._memory_find_position(user_wallet=user_wallet, pool_id=pool_id)

    def db_position_list_for_wallet(self, user_wallet: str) -> list[LiquidityPosition]:
        with self._lock:
            rows = [position for position in self._positions.values() if position.user_wallet == user_wallet]
        return sorted(rows, key=lambda position: position.created_at_utc)

    def db_position_update_amounts(
        self,
        position_id: UUID,
        expected_version: int,
        amount_token_a: Decimal,
        amount_token_b: Decimal,
        lp_tokens: Decimal,
    ) -> LiquidityPosition:
        with self._lock:
            current = self._memory_require_version(self._positions, position_id, expected_version, "liquidity position")
            updated = replace(
                current,
                amount_token_a=amount_token_a,
                amount_token_b=amount_token_b,
                lp_tokens=lp_tokens,
                version=current.version + 1,
                updated_at_utc=self._clock(),
            )
            self._positions[position_id] = updated
            return updated

    def db_position_delete(self, position_id: UUID, expected_version: int) -> LiquidityPosition:
        with self._lock:
            self._memory_require_version(self._positions, position_id, expected_version, "liquidity position")
            return self._positions.pop(position_id)

    # swaps

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
        with self._lock:
            if any(swap.tx_hash == tx_hash for swap in self._swaps.values()):
                raise ConflictError("transaction already processed", code="DUPLICATE_TX_HASH")
            swap = Swap(
                swap_id=uuid4(),
                pool_id=pool_id,
                user_wallet=user_wallet,
                token_in_id=token_in_id,
                token_out_id=token_out_id,
                amount_in=amount_in,
                amount_out=amount_out,
                tx_hash=tx_hash,
                executed_at_utc=self._clock(),
            )
            self._swaps[swap.swap_id] = swap
            return swap

    def db_swap_get_by_tx_hash(self, tx_hash: str) -> Swap | None:
        with self._lock:
            return next((swap for swap in self._swaps.values() if swap.tx_hash == tx_hash), None)

    def db_swap_list_for_pool(self, pool_id: UUID) -> list[Swap]:
        with self._lock:
            rows = [swap for swap in self._swaps.values() if swap.pool_id == pool_id]
        return sorted(rows, key=lambda swap: swap.executed_at_utc)

    def db_swap_list_for_wallet(self, user_wallet: str) -> list[Swap]:
        with self._lock:
            rows = [swap for swap in self._swaps.values() if swap.user_wallet == user_wallet]
        return sorted(rows, key=lambda swap: swap.executed_at_utc)

    # fees

    def db_fee_create(
        self,
        pool_id: UUID,
        user_wallet: str,
        unclaimed_fee_a: Decimal,
        unclaimed_fee_b: Decimal,
    ) -> FeeRecord:
        with self._lock:
            if self._memory_find_fee(pool_id=pool_id, user_wallet=user_wallet) is not None:
                raise ConflictError("fee record already exists for this pool and wallet", code="DUPLICATE_FEE_RECORD")
            fee_record = FeeRecord(
                fee_record_id=uuid4(),
                pool_id=pool_id,
                user_wallet=user_wallet,
                unclaimed_fee_a=unclaimed_fee_a,
                unclaimed_fee_b=unclaimed_fee_b,
                last_claimed_at_utc=None,
                version=1,
            )
            self._fees[fee_record.fee_record_id] = fee_record
            return fee_record

    def db_fee_get_for_pool_and_wallet(self, pool_id: UUID, user_wallet: str) -> FeeRecord | None:
        with self._lock:
            return self._memory_find_fee(pool_id=pool_id, user_wallet=user_wallet)

    def db_fee_list_for_wallet(self, user_wallet: str) -> list[FeeRecord]:
        with self._lock:
            return [fee_record for fee_record in self._fees.values() if fee_record.user_wallet == user_wallet]

    def db_fee_update_balances(
        self,
        fee_record_id: UUID,
        expected_version: int,
        unclaimed_fee_a: Decimal,
        unclaimed_fee_b: Decimal,
        last_claimed_at_utc: datetime | None,
    ) -> FeeRecord:
        with self._lock:
            current = self._memory_require_version(self._fees, fee_record_id, expected_version, "fee record")
            updated = replace(
                current,
                unclaimed_fee_a=unclaimed_fee_a,
                unclaimed_fee_b=unclaimed_fee_b,
                last_claimed_at_utc=last_claimed_at_utc,
                version=current.version + 1,
            )
            self._fees[fee_record_id] = updated
            return updated

    # presales

    def db_presale_create(
        self,
        token_id: UUID,
        presale_address: str,
        target_amount: Decimal,
        start_time_utc: datetime,
        end_time_utc: datetime,
    ) -> Presale:
        with self._lock:
            for presale in self._presales.values():
                if presale.token_id == token_id:
                    raise ConflictError("presale already exists for this token", code="DUPLICATE_PRESALE_TOKEN")
                if presale.presale_address == presale_address:
                    raise ConflictError("presale with this address already exists", code="DUPLICATE_PRESALE_ADDRESS")
            presale = Presale(
                presale_id=uuid4(),
                token_id=token_id,
                presale_address=presale_address,
                target_amount=target_amount,
                total_raised=Decimal("0"),
                start_time_utc=start_time_utc,
                end_time_utc=end_time_utc,
                status=PRESALE_STATUS_ACTIVE,
                version=1,
                created_at_utc=self._clock(),
            )
            self._presales[presale.presale_id] = presale
            return presale

    def db_presale_get_by_id(self, presale_id: UUID) -> Presale | None:
        with self._lock:
            return self._presales.get(presale_id)

    def db_presale_get_by_token_id(self, token_id: UUID) -> Presale | None:
        with self._lock:
            return next((presale for presale in self._presales.values() if presale.token_id == token_id), None)

    def db_presale_get_by_address(self, presale_address: str) -> Presale | None:
        with self._lock:
            return next(
                (presale for presale in self._presales.values() if presale.presale_address == presale_address),
                None,
            )

    def db_presale_list(self) -> list[Presale]:
        with self._lock:
            return sorted(self._presales.values(), key=lambda presale: presale.created_at_utc)

    def db_presale_list_contributions(self, presale_id: UUID) -> list[PresaleContribution]:
        with self._lock:
            rows = [
                contribution
                for contribution in self._contributions.values()
                if contribution.presale_id == presale_id
            ]
        return sorted(rows, key=lambda contribution: contribution.contributed_at_utc)

    def db_presale_update(
        self,
        presale_id: UUID,
        expected_version: int,
        status: str,
        end_time_utc: datetime,
    ) -> Presale:
        with self._lock:
            current = self._memory_require_version(self._presales, presale_id, expected_version, "presale")
            updated = replace(current, status=status, end_time_utc=end_time_utc, version=current.version + 1)
            self._presales[presale_id] = updated
            token = self._tokens.get(current.token_id)
            if status == PRESALE_STATUS_COMPLETED and token is not None:
                self._tokens[token.token_id] = replace(token, presale_completed=True)
            return updated

    def db_presale_record_contribution(
        self,
        presale_id: UUID,
        expected_version: int,
        user_wallet: str,
        amount: Decimal,
        contributed_at_utc: datetime,
    ) -> tuple[Presale, PresaleContribution]:
        with self._lock:
            current = self._memory_require_version(self._presales, presale_id, expected_version, "presale")
            contribution = PresaleContribution(
                contribution_id=uuid4(),
                presale_id=presale_id,
                user_wallet=user_wallet,
                amount=amount,
                contributed_at_utc=contributed_at_utc,
            )
            updated = replace(current, total_raised=current.total_raised + amount, version=current.version + 1)
            self._contributions[contribution.contribution_id] = contribution
            self._presales[presale_id] = updated
            return updated, contribution

    def _memory_find_position(self, user_wallet: str, pool_id: UUID) -> LiquidityPosition | None:
        return next(
            (
                position
                for position in self._positions.values()
                if position.user_wallet == user_wallet and position.pool_id == pool_id
            ),
            None,
        )

    def _memory_find_fee(self, pool_id: UUID, user_wallet: str) -> FeeRecord | None:
        return next(
            (
                fee_record
                for fee_record in self._fees.values()
                if fee_record.pool_id == pool_id and fee_record.user_wallet == user_wallet
            ),
            None,
        )

    def _memory_require_version(self, table: dict, row_id: UUID, expected_version: int, entity_label: str):
        """Return the stored row when its version matches; caller must hold the lock.

        Args:
            table: Entity table.
            row_id: Row identifier.
            expected_version: Version observed by the caller.
            entity_label: Entity name for error messages.

        Returns:
            object: Stored row.

        Raises:
            NotFoundError: Raised when the row is absent.
            StaleWriteError: Raised when the stored version differs.
        """

        current = table.get(row_id)
        if current is None:
            raise NotFoundError(f"{entity_label} not found")
        if current.version != expected_version:
            raise StaleWriteError(
                f"{entity_label} changed concurrently (expected version {expected_version}, found {current.version})"
            )
        return current
