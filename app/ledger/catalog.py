"""Token, pool and presale catalog service."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable
from uuid import UUID

from app.db import LedgerStorePort
from app.domain import (
    PRESALE_STATUS_ACTIVE,
    PRESALE_STATUSES,
    EnrichedRecord,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    Presale,
    PresaleContribution,
    Token,
)

from .enrichment import LedgerEnrichmentService
from .interfaces import PresaleContributionResult
from .validation import ledger_require_positive_amount, ledger_require_text

logger = logging.getLogger(__name__)

TOKEN_DECIMALS_MAX = 255


def _catalog_utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _catalog_require_aware(value: datetime, field_name: str) -> datetime:
    if value is None:
        raise InvalidInputError(f"{field_name} is required", code="MISSING_REQUIRED_FIELD")
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidInputError(f"{field_name} must be timezone-aware", code="INVALID_TIMESTAMP")
    return value.astimezone(timezone.utc)


class LedgerCatalogService:
    """Register tokens, pools and presales."""

    def __init__(
        self,
        store: LedgerStorePort,
        enrichment_service: LedgerEnrichmentService,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize catalog dependencies.

        Args:
            store: Ledger store owning catalog rows.
            enrichment_service: Enrichment engine used for pool views.
            clock: Optional UTC clock used for contribution timestamps.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when store or enrichment_service is None.
        """

        if store is None:
            raise ValueError("store must not be None")
        if enrichment_service is None:
            raise ValueError("enrichment_service must not be None")
        self._store = store
        self._enrichment_service = enrichment_service
        self._clock = clock or _catalog_utc_now

    def ledger_token_create(
        self,
        mint_address: str,
        symbol: str,
        name: str,
        decimals: int,
        logo_uri: str | None = None,
    ) -> Token:
        """Register one token.

        Args:
            mint_address: Unique on-chain mint address.
            symbol: Ticker symbol.
            name: Display name.
            decimals: Decimal precision in 0..255.
            logo_uri: Optional logo URI.

        Returns:
            Token: Persisted token.

        Raises:
            InvalidInputError: Raised when fields are blank or decimals is out of range.
            ConflictError: Raised when the mint address is already registered.
        """

        normalized_mint = ledger_require_text(mint_address, "mint_address")
        normalized_symbol = ledger_require_text(symbol, "symbol")
        normalized_name = ledger_require_text(name, "name")
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise InvalidInputError("decimals must be an integer", code="INVALID_DECIMALS")
        if not 0 <= decimals <= TOKEN_DECIMALS_MAX:
            raise InvalidInputError(f"decimals must be between 0 and {TOKEN_DECIMALS_MAX}", code="INVALID_DECIMALS")
        normalized_logo_uri = (logo_uri or "").strip() or None

        token = self._store.db_token_create(
            mint_address=normalized_mint,
            symbol=normalized_symbol,
            name=normalized_name,
            decimals=decimals,
            logo_uri=normalized_logo_uri,
        )
        logger.info("registered token %s (%s)", token.token_id, normalized_symbol)
        return token

    def ledger_token_get(self, token_id: UUID) -> Token:
        token = self._store.db_token_get_by_id(token_id)
        if token is None:
            raise NotFoundError("token not found", code="TOKEN_NOT_FOUND")
        return token

    def ledger_token_list(self) -> list[Token]:
        return self._store.db_token_list()

    def ledger_pool_register(
        self,
        pool_address: str,
        token_a_id: UUID,
        token_b_id: UUID,
        lp_mint: str | None = None,
        tick_spacing: int | None = None,
        fee_rate: int | None = None,
    ) -> EnrichedRecord:
        """Register one pool over two existing, distinct tokens.

        Args:
            pool_address: Unique on-chain pool address.
            token_a_id: First token identifier.
            token_b_id: Second token identifier.
            lp_mint: Optional LP mint address.
            tick_spacing: Optional tick spacing (> 0).
            fee_rate: Optional fee rate (>= 0).

        Returns:
            EnrichedRecord: Persisted pool joined with its tokens.

        Raises:
            InvalidInputError: Raised when the tokens are equal or numeric fields are invalid.
            NotFoundError: Raised when a token does not exist.
            ConflictError: Raised when the pool address is already registered.
        """

        normalized_address = ledger_require_text(pool_address, "pool_address")
        if token_a_id == token_b_id:
            raise InvalidInputError("token_a_id and token_b_id must differ", code="SAME_TOKEN")
        if tick_spacing is not None and tick_spacing <= 0:
            raise InvalidInputError("tick_spacing must be > 0", code="INVALID_TICK_SPACING")
        if fee_rate is not None and fee_rate < 0:
            raise InvalidInputError("fee_rate must be >= 0", code="INVALID_FEE_RATE")
        for token_id in (token_a_id, token_b_id):
            if self._store.db_token_get_by_id(token_id) is None:
                raise NotFoundError(f"token not found: {token_id}", code="TOKEN_NOT_FOUND")

        pool = self._store.db_pool_create(
            pool_address=normalized_address,
            token_a_id=token_a_id,
            token_b_id=token_b_id,
            lp_mint=(lp_mint or "").strip() or None,
            tick_spacing=tick_spacing,
            fee_rate=fee_rate,
        )
        logger.info("registered pool %s at %s", pool.pool_id, normalized_address)
        return self._enrichment_service.ledger_enrich_record(pool)

    def ledger_pool_get(self, pool_id: UUID) -> EnrichedRecord:
        pool = self._store.db_pool_get_by_id(pool_id)
        if pool is None:
            raise NotFoundError("pool not found", code="POOL_NOT_FOUND")
        return self._enrichment_service.ledger_enrich_record(pool)

    def ledger_pool_list(self) -> list[EnrichedRecord]:
        """List every pool joined with its tokens, oldest first."""

        return self._enrichment_service.ledger_enrich_records(self._store.db_pool_list())

    def ledger_presale_create(
        self,
        token_id: UUID,
        presale_address: str,
        target_amount: object,
        start_time_utc: datetime,
        end_time_utc: datetime,
    ) -> Presale:
        """Open one presale window for a token.

        Args:
            token_id: Token being sold.
            presale_address: Unique on-chain presale address.
            target_amount: Raise target (> 0).
            start_time_utc: Window start (timezone-aware).
            end_time_utc: Window end (timezone-aware, after start).

        Returns:
            Presale: Persisted active presale.

        Raises:
            InvalidInputError: Raised when the target or window is invalid.
            NotFoundError: Raised when the token does not exist.
            ConflictError: Raised when the token already has a presale or the address is taken.
        """

        normalized_address = ledger_require_text(presale_address, "presale_address")
        validated_target = ledger_require_positive_amount(target_amount, "target_amount")
        window_start = _catalog_require_aware(start_time_utc, "start_time_utc")
        window_end = _catalog_require_aware(end_time_utc, "end_time_utc")
        if window_start >= window_end:
            raise InvalidInputError("start_time_utc must be before end_time_utc", code="INVALID_PRESALE_WINDOW")
        if self._store.db_token_get_by_id(token_id) is None:
            raise NotFoundError("token not found", code="TOKEN_NOT_FOUND")

        presale = self._store.db_presale_create(
            token_id=token_id,
            presale_address=normalized_address,
            target_amount=validated_target,
            start_time_utc=window_start,
            end_time_utc=window_end,
        )
        logger.info("opened presale %s for token %s", presale.presale_id, token_id)
        return presale

    def ledger_presale_contribute(
        self,
        presale_ref: str,
        user_wallet: str,
        amount: object,
        contributed_at_utc: datetime | None = None,
    ) -> PresaleContributionResult:
        """Record one contribution against an active presale.

        Args:
            presale_ref: Presale identifier, or its on-chain address.
            user_wallet: Contributing wallet address.
            amount: Contribution amount (> 0).
            contributed_at_utc: Optional contribution time; defaults to the clock.

        Returns:
            PresaleContributionResult: Updated presale and new contribution.

        Raises:
            InvalidInputError: Raised when inputs are invalid.
            NotFoundError: Raised when the presale does not exist.
            InvalidStateError: Raised when the presale is not active or outside its window.
            StaleWriteError: Raised when the presale changed concurrently.
        """

        normalized_ref = ledger_require_text(presale_ref, "presale_id")
        normalized_wallet = ledger_require_text(user_wallet, "user_wallet")
        validated_amount = ledger_require_positive_amount(amount, "amount")
        contribution_time = (
            self._clock()
            if contributed_at_utc is None
            else _catalog_require_aware(contributed_at_utc, "contributed_at_utc")
        )

        presale = self._ledger_require_presale(normalized_ref)
        if presale.status != PRESALE_STATUS_ACTIVE:
            raise InvalidStateError(f"presale is {presale.status}", code="PRESALE_NOT_ACTIVE")
        if not presale.start_time_utc <= contribution_time <= presale.end_time_utc:
            raise InvalidStateError("presale window is closed", code="PRESALE_WINDOW_CLOSED")

        updated_presale, contribution = self._store.db_presale_record_contribution(
            presale.presale_id,
            expected_version=presale.version,
            user_wallet=normalized_wallet,
            amount=validated_amount,
            contributed_at_utc=contribution_time,
        )
        logger.info(
            "recorded contribution of %s to presale %s (total_raised=%s)",
            validated_amount,
            presale.presale_id,
            updated_presale.total_raised,
        )
        return PresaleContributionResult(presale=updated_presale, contribution=contribution)

    def ledger_presale_list(self) -> list[Presale]:
        return self._store.db_presale_list()

    def ledger_presale_get(self, presale_ref: str) -> tuple[Presale, Token | None]:
        """Return one presale, addressed by id or presale address, with its token.

        Raises:
            NotFoundError: Raised when the presale does not exist.
        """

        presale = self._ledger_require_presale(presale_ref)
        return presale, self._store.db_token_get_by_id(presale.token_id)

    def ledger_presale_list_contributions(self, presale_ref: str) -> list[PresaleContribution]:
        """List contributions of one presale, oldest first.

        Raises:
            NotFoundError: Raised when the presale does not exist.
        """

        presale = self._ledger_require_presale(presale_ref)
        return self._store.db_presale_list_contributions(presale.presale_id)

    def ledger_presale_update(
        self,
        presale_ref: str,
        status: str | None = None,
        end_time_utc: datetime | None = None,
    ) -> Presale:
        """Move an active presale to a new status or window end.

        Only `active` presales can change; `completed` and `cancelled` are
        terminal. Completing a presale flags its token as `presale_completed`.

        Args:
            presale_ref: Presale identifier, or its on-chain address.
            status: Optional new status (`active`, `completed`, `cancelled`).
            end_time_utc: Optional new window end (timezone-aware, after start).

        Returns:
            Presale: Updated presale.

        Raises:
            InvalidInputError: Raised when nothing is requested or a field is invalid.
            NotFoundError: Raised when the presale does not exist.
            InvalidStateError: Raised when the presale is no longer active.
            StaleWriteError: Raised when the presale changed concurrently.
        """

        if status is None and end_time_utc is None:
            raise InvalidInputError("status or end_time_utc is required", code="EMPTY_UPDATE")
        normalized_status = None if status is None else ledger_require_text(status, "status").lower()
        if normalized_status is not None and normalized_status not in PRESALE_STATUSES:
            raise InvalidInputError(f"unsupported presale status: {status}", code="INVALID_PRESALE_STATUS")
        new_end_time = None if end_time_utc is None else _catalog_require_aware(end_time_utc, "end_time_utc")

        presale = self._ledger_require_presale(presale_ref)
        if presale.status != PRESALE_STATUS_ACTIVE:
            raise InvalidStateError(f"presale is {presale.status}", code="PRESALE_NOT_ACTIVE")
        if new_end_time is not None and new_end_time <= presale.start_time_utc:
            raise InvalidInputError("end_time_utc must be after start_time_utc", code="INVALID_PRESALE_WINDOW")

        updated_presale = self._store.db_presale_update(
            presale.presale_id,
            expected_version=presale.version,
            status=normalized_status or presale.status,
            end_time_utc=new_end_time or presale.end_time_utc,
        )
        logger.info(
            "updated presale %s (status=%s, end_time_utc=%s)",
            presale.presale_id,
            updated_presale.status,
            updated_presale.end_time_utc.isoformat(),
        )
        return updated_presale

    def _ledger_require_presale(self, presale_ref: str) -> Presale:
        presale = self._ledger_find_presale(ledger_require_text(presale_ref, "presale_id"))
        if presale is None:
            raise NotFoundError("presale not found", code="PRESALE_NOT_FOUND")
        return presale

    def _ledger_find_presale(self, presale_ref: str) -> Presale | None:
        try:
            presale_id = UUID(presale_ref)
        except ValueError:
            return self._store.db_presale_get_by_address(presale_ref)
        presale = self._store.db_presale_get_by_id(presale_id)
        if presale is None:
            return self._store.db_presale_get_by_address(presale_ref)
        return presale
