"""SQLAlchemy-backed Ledger Store for PostgreSQL.

Versioned writes use `UPDATE ... WHERE version = :expected_version` inside one
transaction; a missed update is then classified as absent or stale with a
follow-up read in the same transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Final
from uuid import UUID

from sqlalchemy import Connection, Engine, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.domain import (
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
    UpstreamFailureError,
)

from .interfaces import LedgerStorePort

logger = logging.getLogger(__name__)

_TOKEN_COLUMNS: Final[str] = (
    "token_id, mint_address, symbol, name, decimals, logo_uri, presale_completed, created_at_utc"
)
_POOL_COLUMNS: Final[str] = (
    "pool_id, pool_address, token_a_id, token_b_id, lp_mint, tick_spacing, fee_rate, created_at_utc"
)
_POSITION_COLUMNS: Final[str] = (
    "position_id, user_wallet, pool_id, amount_token_a, amount_token_b, lp_tokens, version, "
    "created_at_utc, updated_at_utc"
)
_SWAP_COLUMNS: Final[str] = (
    "swap_id, pool_id, user_wallet, token_in_id, token_out_id, amount_in, amount_out, tx_hash, executed_at_utc"
)
_FEE_COLUMNS: Final[str] = (
    "fee_record_id, pool_id, user_wallet, unclaimed_fee_a, unclaimed_fee_b, last_claimed_at_utc, version"
)
_PRESALE_COLUMNS: Final[str] = (
    "presale_id, token_id, presale_address, target_amount, total_raised, start_time_utc, end_time_utc, "
    "status, version, created_at_utc"
)
_CONTRIBUTION_COLUMNS: Final[str] = "contribution_id, presale_id, user_wallet, amount, contributed_at_utc"

_UNIQUE_CONSTRAINT_MESSAGES: Final[dict[str, tuple[str, str]]] = {
    "uq_token_mint_address": ("DUPLICATE_MINT_ADDRESS", "token with this mint address already exists"),
    "uq_pool_pool_address": ("DUPLICATE_POOL_ADDRESS", "pool with this address already exists"),
    "uq_liquidity_position_wallet_pool": ("DUPLICATE_POSITION", "wallet already holds a position in this pool"),
    "uq_swap_tx_hash": ("DUPLICATE_TX_HASH", "transaction already processed"),
    "uq_fee_record_pool_wallet": ("DUPLICATE_FEE_RECORD", "fee record already exists for this pool and wallet"),
    "uq_presale_token_id": ("DUPLICATE_PRESALE_TOKEN", "presale already exists for this token"),
    "uq_presale_presale_address": ("DUPLICATE_PRESALE_ADDRESS", "presale with this address already exists"),
}


class SQLAlchemyLedgerStore(LedgerStorePort):
    """SQLAlchemy-backed ledger store.

    All statements are explicit SQL executed on short-lived connections; no
    ORM session state outlives a call.
    """

    def __init__(self, engine: Engine):
        """Initialize ledger store.

        Args:
            engine: SQLAlchemy engine used for all persistence operations.

        Returns:
            None: This initializer does not return a value.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    # tokens

    def db_token_create(
        self,
        mint_address: str,
        symbol: str,
        name: str,
        decimals: int,
        logo_uri: str | None,
    ) -> Token:
        row = self._db_write_one(
            "failed to create token",
            f"INSERT INTO token (mint_address, symbol, name, decimals, logo_uri) "
            f"VALUES (:mint_address, :symbol, :name, :decimals, :logo_uri) RETURNING {_TOKEN_COLUMNS}",
            {
                "mint_address": mint_address,
                "symbol": symbol,
                "name": name,
                "decimals": decimals,
                "logo_uri": logo_uri,
            },
        )
        return self._map_token(row)

    def db_token_get_by_id(self, token_id: UUID) -> Token | None:
        row = self._db_read_first(
            "failed to fetch token by id",
            f"SELECT {_TOKEN_COLUMNS} FROM token WHERE token_id = :token_id",
            {"token_id": token_id},
        )
        return None if row is None else self._map_token(row)

    def db_token_get_by_mint_address(self, mint_address: str) -> Token | None:
        row = self._db_read_first(
            "failed to fetch token by mint address",
            f"SELECT {_TOKEN_COLUMNS} FROM token WHERE mint_address = :mint_address",
            {"mint_address": mint_address},
        )
        return None if row is None else self._map_token(row)

    def db_token_list(self) -> list[Token]:
        rows = self._db_read_all(
            "failed to list tokens",
            f"SELECT {_TOKEN_COLUMNS} FROM token ORDER BY created_at_utc ASC, token_id ASC",
            {},
        )
        return [self._map_token(row) for row in rows]

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
        row = self._db_write_one(
            "failed to create pool",
            f"INSERT INTO pool (pool_address, token_a_id, token_b_id, lp_mint, tick_spacing, fee_rate) "
            f"VALUES (:pool_address, :token_a_id, :token_b_id, :lp_mint, :tick_spacing, :fee_rate) "
            f"RETURNING {_POOL_COLUMNS}",
            {
                "pool_address": pool_address,
                "token_a_id": token_a_id,
                "token_b_id": token_b_id,
                "lp_mint": lp_mint,
                "tick_spacing": tick_spacing,
                "fee_rate": fee_rate,
            },
        )
        return self._map_pool(row)

    def db_pool_get_by_id(self, pool_id: UUID) -> Pool | None:
        row = self._db_read_first(
            "failed to fetch pool by id",
            f"SELECT {_POOL_COLUMNS} FROM pool WHERE pool_id = :pool_id",
            {"pool_id": pool_id},
        )
        return None if row is None else self._map_pool(row)

    def db_pool_get_by_address(self, pool_address: str) -> Pool | None:
        row = self._db_read_first(
            "failed to fetch pool by address",
            f"SELECT {_POOL_COLUMNS} FROM pool WHERE pool_address = :pool_address",
            {"pool_address": pool_address},
        )
        return None if row is None else self._map_pool(row)

    def db_pool_list(self) -> list[Pool]:
        rows = self._db_read_all(
            "failed to list pools",
            f"SELECT {_POOL_COLUMNS} FROM pool ORDER BY created_at_utc ASC, pool_id ASC",
            {},
        )
        return [self._map_pool(row) for row in rows]

    # liquidity positions

    def db_position_create(
        self,
        user_wallet: str,
        pool_id: UUID,
        amount_token_a: Decimal,
        amount_token_b: Decimal,
        lp_tokens: Decimal,
    ) -> LiquidityPosition:
        row = self._db_write_one(
            "failed to create liquidity position",
            f"INSERT INTO liquidity_position (user_wallet, pool_id, amount_token_a, amount_token_b, lp_tokens) "
            f"VALUES (:user_wallet, :pool_id, :amount_token_a, :amount_token_b, :lp_tokens) "
            f"RETURNING {_POSITION_COLUMNS}",
            {
                "user_wallet": user_wallet,
                "pool_id": pool_id,
                "amount_token_a": amount_token_a,
                "amount_token_b": amount_token_b,
                "lp_tokens": lp_tokens,
            },
        )
        return self._map_position(row)

    def db_position_get_by_id(self, position_id: UUID) -> LiquidityPosition | None:
        row = self._db_read_first(
            "failed to fetch liquidity position by id",
            f"SELECT {_POSITION_COLUMNS} FROM liquidity_position WHERE position_id = :position_id",
            {"position_id": position_id},
        )
        return None if row is None else self._map_position(row)

    def db_position_get_for_wallet_and_pool(self, user_wallet: str, pool_id: UUID) -> LiquidityPosition | None:
        row = self._db_read_first(
            "failed to fetch liquidity position by wallet and pool",
            f"SELECT {_POSITION_COLUMNS} FROM liquidity_position "
            f"WHERE user_wallet = :user_wallet AND pool_id = :pool_id",
            {"user_wallet": user_wallet, "pool_id": pool_id},
        )
        return None if row is None else self._map_position(row)

    def db_position_list_for_wallet(self, user_wallet: str) -> list[LiquidityPosition]:
        rows = self._db_read_all(
            "failed to list liquidity positions",
            f"SELECT {_POSITION_COLUMNS} FROM liquidity_position "
            f"WHERE user_wallet = :user_wallet ORDER BY created_at_utc ASC, position_id ASC",
            {"user_wallet": user_wallet},
        )
        return [self._map_position(row) for row in rows]

    def db_position_update_amounts(
        self,
        position_id: UUID,
        expected_version: int,
        amount_token_a: Decimal,
        amount_token_b: Decimal,
        lp_tokens: Decimal,
    ) -> LiquidityPosition:
        row = self._db_write_versioned(
            "failed to update liquidity position",
            "liquidity position",
            "liquidity_position",
            "position_id",
            f"UPDATE liquidity_position SET "
            f"amount_token_a = :amount_token_a, amount_token_b = :amount_token_b, lp_tokens = :lp_tokens, "
            f"version = version + 1, updated_at_utc = now() "
            f"WHERE position_id = :row_id AND version = :expected_version "
            f"RETURNING {_POSITION_COLUMNS}",
            {
                "row_id": position_id,
                "expected_version": expected_version,
                "amount_token_a": amount_token_a,
                "amount_token_b": amount_token_b,
                "lp_tokens": lp_tokens,
            },
        )
        return self._map_position(row)

    def db_position_delete(self, position_id: UUID, expected_version: int) -> LiquidityPosition:
        row = self._db_write_versioned(
            "failed to delete liquidity position",
            "liquidity position",
            "liquidity_position",
            "position_id",
            f"DELETE FROM liquidity_position "
            f"WHERE position_id = :row_id AND version = :expected_version "
            f"RETURNING {_POSITION_COLUMNS}",
            {"row_id": position_id, "expected_version": expected_version},
        )
        return self._map_position(row)

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
        row = self._db_write_one(
            "failed to create swap",
            f"INSERT INTO swap (pool_id, user_wallet, token_in_id, token_out_id, amount_in, amount_out, tx_hash) "
            f"VALUES (:pool_id, :user_wallet, :token_in_id, :token_out_id, :amount_in, :amount_out, :tx_hash) "
            f"RETURNING {_SWAP_COLUMNS}",
            {
                "pool_id": pool_id,
                "user_wallet": user_wallet,
                "token_in_id": token_in_id,
                "token_out_id": token_out_id,
                "amount_in": amount_in,
                "amount_out": amount_out,
                "tx_hash": tx_hash,
            },
        )
        return self._map_swap(row)

    def db_swap_get_by_tx_hash(self, tx_hash: str) -> Swap | None:
        row = self._db_read_first(
            "failed to fetch swap by tx hash",
            f"SELECT {_SWAP_COLUMNS} FROM swap WHERE tx_hash = :tx_hash",
            {"tx_hash": tx_hash},
        )
        return None if row is None else self._map_swap(row)

    def db_swap_list_for_pool(self, pool_id: UUID) -> list[Swap]:
        rows = self._db_read_all(
            "failed to list swaps for pool",
            f"SELECT {_SWAP_COLUMNS} FROM swap WHERE pool_id = :pool_id ORDER BY executed_at_utc ASC, swap_id ASC",
            {"pool_id": pool_id},
        )
        return [self._map_swap(row) for row in rows]

    def db_swap_list_for_wallet(self, user_wallet: str) -> list[Swap]:
        rows = self._db_read_all(
            "failed to list swaps for wallet",
            f"SELECT {_SWAP_COLUMNS} FROM swap "
            f"WHERE user_wallet = :user_wallet ORDER BY executed_at_utc ASC, swap_id ASC",
            {"user_wallet": user_wallet},
        )
        return [self._map_swap(row) for row in rows]

    # fees

    def db_fee_create(
        self,
        pool_id: UUID,
        user_wallet: str,
        unclaimed_fee_a: Decimal,
        unclaimed_fee_b: Decimal,
    ) -> FeeRecord:
        row = self._db_write_one(
            "failed to create fee record",
            f"INSERT INTO fee_record (pool_id, user_wallet, unclaimed_fee_a, unclaimed_fee_b) "
            f"VALUES (:pool_id, :user_wallet, :unclaimed_fee_a, :unclaimed_fee_b) RETURNING {_FEE_COLUMNS}",
            {
                "pool_id": pool_id,
                "user_wallet": user_wallet,
                "unclaimed_fee_a": unclaimed_fee_a,
                "unclaimed_fee_b": unclaimed_fee_b,
            },
        )
        return self._map_fee(row)

    def db_fee_get_for_pool_and_wallet(self, pool_id: UUID, user_wallet: str) -> FeeRecord | None:
        row = self._db_read_first(
            "failed to fetch fee record",
            f"SELECT {_FEE_COLUMNS} FROM fee_record WHERE pool_id = :pool_id AND user_wallet = :user_wallet",
            {"pool_id": pool_id, "user_wallet": user_wallet},
        )
        return None if row is None else self._map_fee(row)

    def db_fee_list_for_wallet(self, user_wallet: str) -> list[FeeRecord]:
        rows = self._db_read_all(
            "failed to list fee records",
            f"SELECT {_FEE_COLUMNS} FROM fee_record WHERE user_wallet = :user_wallet ORDER BY fee_record_id ASC",
            {"user_wallet": user_wallet},
        )
        return [self._map_fee(row) for row in rows]

    def db_fee_update_balances(
        self,
        fee_record_id: UUID,
        expected_version: int,
        unclaimed_fee_a: Decimal,
        unclaimed_fee_b: Decimal,
        last_claimed_at_utc: datetime | None,
    ) -> FeeRecord:
        row = self._db_write_versioned(
            "failed to update fee record",
            "fee record",
            "fee_record",
            "fee_record_id",
            f"UPDATE fee_record SET "
            f"unclaimed_fee_a = :unclaimed_fee_a, unclaimed_fee_b = :unclaimed_fee_b, "
            f"last_claimed_at_utc = :last_claimed_at_utc, version = version + 1 "
            f"WHERE fee_record_id = :row_id AND version = :expected_version "
            f"RETURNING {_FEE_COLUMNS}",
            {
                "row_id": fee_record_id,
                "expected_version": expected_version,
                "unclaimed_fee_a": unclaimed_fee_a,
                "unclaimed_fee_b": unclaimed_fee_b,
                "last_claimed_at_utc": last_claimed_at_utc,
            },
        )
        return self._map_fee(row)

    # presales

    def db_presale_create(
        self,
        token_id: UUID,
        presale_address: str,
        target_amount: Decimal,
        start_time_utc: datetime,
        end_time_utc: datetime,
    ) -> Presale:
        row = self._db_write_one(
            "failed to create presale",
            f"INSERT INTO presale (token_id, presale_address, target_amount, start_time_utc, end_time_utc) "
            f"VALUES (:token_id, :presale_address, :target_amount, :start_time_utc, :end_time_utc) "
            f"RETURNING {_PRESALE_COLUMNS}",
            {
                "token_id": token_id,
                "presale_address": presale_address,
                "target_amount": target_amount,
                "start_time_utc": start_time_utc,
                "end_time_utc": end_time_utc,
            },
        )
        return self._map_presale(row)

    def db_presale_get_by_id(self, presale_id: UUID) -> Presale | None:
        row = self._db_read_first(
            "failed to fetch presale by id",
            f"SELECT {_PRESALE_COLUMNS} FROM presale WHERE presale_id = :presale_id",
            {"presale_id": presale_id},
        )
        return None if row is None else self._map_presale(row)

    def db_presale_get_by_token_id(self, token_id: UUID) -> Presale | None:
        row = self._db_read_first(
            "failed to fetch presale by token id",
            f"SELECT {_PRESALE_COLUMNS} FROM presale WHERE token_id = :token_id",
            {"token_id": token_id},
        )
        return None if row is None else self._map_presale(row)

    def db_presale_get_by_address(self, presale_address: str) -> Presale | None:
        row = self._db_read_first(
            "failed to fetch presale by address",
            f"SELECT {_PRESALE_COLUMNS} FROM presale WHERE presale_address = :presale_address",
            {"presale_address": presale_address},
        )
        return None if row is None else self._map_presale(row)

    def db_presale_list(self) -> list[Presale]:
        rows = self._db_read_all(
            "failed to list presales",
            f"SELECT {_PRESALE_COLUMNS} FROM presale ORDER BY created_at_utc ASC, presale_id ASC",
            {},
        )
        return [self._map_presale(row) for row in rows]

    def db_presale_list_contributions(self, presale_id: UUID) -> list[PresaleContribution]:
        rows = self._db_read_all(
            "failed to list presale contributions",
            f"SELECT {_CONTRIBUTION_COLUMNS} FROM presale_contribution WHERE presale_id = :presale_id "
            f"ORDER BY contributed_at_utc ASC, contribution_id ASC",
            {"presale_id": presale_id},
        )
        return [self._map_contribution(row) for row in rows]

    def db_presale_update(
        self,
        presale_id: UUID,
        expected_version: int,
        status: str,
        end_time_utc: datetime,
    ) -> Presale:
        try:
            with self._engine.begin() as connection:
                presale_row = self._db_execute_versioned(
                    connection=connection,
                    entity_label="presale",
                    table_name="presale",
                    key_column="presale_id",
                    statement=(
                        f"UPDATE presale SET status = :status, end_time_utc = :end_time_utc, version = version + 1 "
                        f"WHERE presale_id = :row_id AND version = :expected_version "
                        f"RETURNING {_PRESALE_COLUMNS}"
                    ),
                    parameters={
                        "row_id": presale_id,
                        "expected_version": expected_version,
                        "status": status,
                        "end_time_utc": end_time_utc,
                    },
                )
                if status == PRESALE_STATUS_COMPLETED:
                    connection.execute(
                        text("UPDATE token SET presale_completed = TRUE WHERE token_id = :token_id"),
                        {"token_id": presale_row["token_id"]},
                    )
                return self._map_presale(presale_row)
        except SQLAlchemyError as error:
            logger.warning("failed to update presale: %s", error)
            raise UpstreamFailureError("failed to update presale") from error

    def db_presale_record_contribution(
        self,
        presale_id: UUID,
        expected_version: int,
        user_wallet: str,
        amount: Decimal,
        contributed_at_utc: datetime,
    ) -> tuple[Presale, PresaleContribution]:
        try:
            with self._engine.begin() as connection:
                presale_row = self._db_execute_versioned(
                    connection=connection,
                    entity_label="presale",
                    table_name="presale",
                    key_column="presale_id",
                    statement=(
                        f"UPDATE presale SET total_raised = total_raised + :amount, version = version + 1 "
                        f"WHERE presale_id = :row_id AND version = :expected_version "
                        f"RETURNING {_PRESALE_COLUMNS}"
                    ),
                    parameters={"row_id": presale_id, "expected_version": expected_version, "amount": amount},
                )
                contribution_row = connection.execute(
                    text(
                        f"INSERT INTO presale_contribution (presale_id, user_wallet, amount, contributed_at_utc) "
                        f"VALUES (:presale_id, :user_wallet, :amount, :contributed_at_utc) "
                        f"RETURNING {_CONTRIBUTION_COLUMNS}"
                    ),
                    {
                        "presale_id": presale_id,
                        "user_wallet": user_wallet,
                        "amount": amount,
                        "contributed_at_utc": contributed_at_utc,
                    },
                ).mappings().one()
                return self._map_presale(presale_row), self._map_contribution(contribution_row)
        except SQLAlchemyError as error:
            raise UpstreamFailureError("failed to record presale contribution") from error

    def _db_read_first(self, failure_message: str, statement: str, parameters: dict[str, Any]) -> Any:
        try:
            with self._engine.connect() as connection:
                return connection.execute(text(statement), parameters).mappings().first()
        except SQLAlchemyError as error:
            logger.warning("%s: %s", failure_message, error)
            raise UpstreamFailureError(failure_message) from error

    def _db_read_all(self, failure_message: str, statement: str, parameters: dict[str, Any]) -> list[Any]:
        try:
            with self._engine.connect() as connection:
                return list(connection.execute(text(statement), parameters).mappings().all())
        except SQLAlchemyError as error:
            logger.warning("%s: %s", failure_message, error)
            raise UpstreamFailureError(failure_message) from error

    def _db_write_one(self, failure_message: str, statement: str, parameters: dict[str, Any]) -> Any:
        """Execute one insert inside a transaction and return the returned row.

        Args:
            failure_message: Message used when persistence fails.
            statement: SQL statement with a RETURNING clause.
            parameters: Bound parameters.

        Returns:
            Any: Returned row mapping.

        Raises:
            ConflictError: Raised when a unique constraint is violated.
            UpstreamFailureError: Raised when persistence fails otherwise.
        """

        try:
            with self._engine.begin() as connection:
                return connection.execute(text(statement), parameters).mappings().one()
        except IntegrityError as error:
            raise self._map_integrity_error(error, failure_message) from error
        except SQLAlchemyError as error:
            logger.warning("%s: %s", failure_message, error)
            raise UpstreamFailureError(failure_message) from error

    def _db_write_versioned(
        self,
        failure_message: str,
        entity_label: str,
        table_name: str,
        key_column: str,
        statement: str,
        parameters: dict[str, Any],
    ) -> Any:
        try:
            with self._engine.begin() as connection:
                return self._db_execute_versioned(
                    connection=connection,
                    entity_label=entity_label,
                    table_name=table_name,
                    key_column=key_column,
                    statement=statement,
                    parameters=parameters,
                )
        except SQLAlchemyError as error:
            logger.warning("%s: %s", failure_message, error)
            raise UpstreamFailureError(failure_message) from error

    def _db_execute_versioned(
        self,
        connection: Connection,
        entity_label: str,
        table_name: str,
        key_column: str,
        statement: str,
        parameters: dict[str, Any],
    ) -> Any:
        """Run one version-guarded statement and classify a missed row.

        Args:
            connection: Active transactional connection.
            entity_label: Entity name for error messages.
            table_name: Target table name.
            key_column: Primary key column name.
            statement: Guarded statement using `:row_id` and `:expected_version`.
            parameters: Bound parameters.

        Returns:
            Any: Returned row mapping.

        Raises:
            NotFoundError: Raised when the row does not exist.
            StaleWriteError: Raised when the row exists with another version.
        """

        row = connection.execute(text(statement), parameters).mappings().first()
        if row is not None:
            return row

        current_version = connection.execute(
            text(f"SELECT version FROM {table_name} WHERE {key_column} = :row_id"),
            {"row_id": parameters["row_id"]},
        ).scalar()
        if current_version is None:
            raise NotFoundError(f"{entity_label} not found")
        raise StaleWriteError(
            f"{entity_label} changed concurrently "
            f"(expected version {parameters['expected_version']}, found {current_version})"
        )

    def _map_integrity_error(self, error: IntegrityError, failure_message: str) -> Exception:
        error_text = str(error.orig)
        for constraint_name, (code, message) in _UNIQUE_CONSTRAINT_MESSAGES.items():
            if constraint_name in error_text:
                return ConflictError(message, code=code)
        logger.warning("%s: %s", failure_message, error)
        return UpstreamFailureError(failure_message)

    def _map_token(self, row: Any) -> Token:
        return Token(
            token_id=row["token_id"],
            mint_address=row["mint_address"],
            symbol=row["symbol"],
            name=row["name"],
            decimals=int(row["decimals"]),
            logo_uri=row["logo_uri"],
            presale_completed=bool(row["presale_completed"]),
            created_at_utc=row["created_at_utc"],
        )

    def _map_pool(self, row: Any) -> Pool:
        return Pool(
            pool_id=row["pool_id"],
            pool_address=row["pool_address"],
            token_a_id=row["token_a_id"],
            token_b_id=row["token_b_id"],
            lp_mint=row["lp_mint"],
            tick_spacing=row["tick_spacing"],
            fee_rate=row["fee_rate"],
            created_at_utc=row["created_at_utc"],
        )

    def _map_position(self, row: Any) -> LiquidityPosition:
        return LiquidityPosition(
            position_id=row["position_id"],
            user_wallet=row["user_wallet"],
            pool_id=row["pool_id"],
            amount_token_a=Decimal(row["amount_token_a"]),
            amount_token_b=Decimal(row["amount_token_b"]),
            lp_tokens=Decimal(row["lp_tokens"]),
            version=int(row["version"]),
            created_at_utc=row["created_at_utc"],
            updated_at_utc=row["updated_at_utc"],
        )

    def _map_swap(self, row: Any) -> Swap:
        return Swap(
            swap_id=row["swap_id"],
            pool_id=row["pool_id"],
            user_wallet=row["user_wallet"],
            token_in_id=row["token_in_id"],
            token_out_id=row["token_out_id"],
            amount_in=Decimal(row["amount_in"]),
            amount_out=Decimal(row["amount_out"]),
            tx_hash=row["tx_hash"],
            executed_at_utc=row["executed_at_utc"],
        )

    def _map_fee(self, row: Any) -> FeeRecord:
        return FeeRecord(
            fee_record_id=row["fee_record_id"],
            pool_id=row["pool_id"],
            user_wallet=row["user_wallet"],
            unclaimed_fee_a=Decimal(row["unclaimed_fee_a"]),
            unclaimed_fee_b=Decimal(row["unclaimed_fee_b"]),
            last_claimed_at_utc=row["last_claimed_at_utc"],
            version=int(row["version"]),
        )

    def _map_presale(self, row: Any) -> Presale:
        return Presale(
            presale_id=row["presale_id"],
            token_id=row["token_id"],
            presale_address=row["presale_address"],
            target_amount=Decimal(row["target_amount"]),
            total_raised=Decimal(row["total_raised"]),
            start_time_utc=row["start_time_utc"],
            end_time_utc=row["end_time_utc"],
            status=row["status"],
            version=int(row["version"]),
            created_at_utc=row["created_at_utc"],
        )

    def _map_contribution(self, row: Any) -> PresaleContribution:
        return PresaleContribution(
            contribution_id=row["contribution_id"],
            presale_id=row["presale_id"],
            user_wallet=row["user_wallet"],
            amount=Decimal(row["amount"]),
            contributed_at_utc=row["contributed_at_utc"],
        )
