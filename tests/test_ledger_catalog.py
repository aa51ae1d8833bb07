"""Tests for token, pool and presale catalog operations."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from app.domain import ConflictError, InvalidInputError, InvalidStateError, NotFoundError
from app.ledger import LedgerCatalogService, LedgerEnrichmentService

WINDOW_START_UTC = datetime(2026, 3, 1, tzinfo=timezone.utc)
WINDOW_END_UTC = datetime(2026, 3, 31, tzinfo=timezone.utc)
INSIDE_WINDOW_UTC = datetime(2026, 3, 15, tzinfo=timezone.utc)


def _build_service(store, now: datetime = INSIDE_WINDOW_UTC) -> LedgerCatalogService:
    return LedgerCatalogService(
        store=store,
        enrichment_service=LedgerEnrichmentService(store=store),
        clock=lambda: now,
    )


def _create_presale(service, seed, presale_address: str = "presale-sol"):
    return service.ledger_presale_create(
        token_id=seed.token_a.token_id,
        presale_address=presale_address,
        target_amount="1000",
        start_time_utc=WINDOW_START_UTC,
        end_time_utc=WINDOW_END_UTC,
    )


def test_create_token_normalizes_and_persists(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    token = service.ledger_token_create(" mint-jup ", "JUP", "Jupiter", 6, logo_uri="  ")

    assert token.mint_address == "mint-jup"
    assert token.logo_uri is None
    assert token.presale_completed is False
    assert service.ledger_token_get(token.token_id) == token
    assert token in service.ledger_token_list()


def test_create_token_rejects_duplicate_mint(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)

    with pytest.raises(ConflictError) as error_info:
        service.ledger_token_create(ledger_seed.token_a.mint_address, "SOL2", "Other SOL", 9)

    assert error_info.value.code == "DUPLICATE_MINT_ADDRESS"


@pytest.mark.parametrize(
    ("mint_address", "symbol", "name", "decimals"),
    [
        ("", "JUP", "Jupiter", 6),
        ("mint-jup", " ", "Jupiter", 6),
        ("mint-jup", "JUP", "", 6),
        ("mint-jup", "JUP", "Jupiter", -1),
        ("mint-jup", "JUP", "Jupiter", 256),
    ],
)
def test_create_token_rejects_invalid_input(ledger_seed, mint_address, symbol, name, decimals) -> None:
    service = _build_service(ledger_seed.store)

    with pytest.raises(InvalidInputError):
        service.ledger_token_create(mint_address, symbol, name, decimals)


def test_token_get_missing_is_not_found(ledger_seed) -> None:
    with pytest.raises(NotFoundError):
        _build_service(ledger_seed.store).ledger_token_get(uuid4())


def test_register_pool_returns_enriched_pool(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    token_c = service.ledger_token_create("mint-jup", "JUP", "Jupiter", 6)

    enriched_pool = service.ledger_pool_register("pool-jup-usdc", token_c.token_id, ledger_seed.token_b.token_id)

    assert enriched_pool.record.pool_address == "pool-jup-usdc"
    assert enriched_pool.token_a == token_c
    assert enriched_pool.token_b == ledger_seed.token_b
    assert service.ledger_pool_get(enriched_pool.record.pool_id) == enriched_pool


def test_register_pool_validates_tokens_and_address(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    token_a_id = ledger_seed.token_a.token_id
    token_b_id = ledger_seed.token_b.token_id

    with pytest.raises(InvalidInputError):
        service.ledger_pool_register("pool-same", token_a_id, token_a_id)
    with pytest.raises(NotFoundError):
        service.ledger_pool_register("pool-missing", token_a_id, uuid4())
    with pytest.raises(ConflictError):
        service.ledger_pool_register(ledger_seed.pool.pool_address, token_a_id, token_b_id)
    with pytest.raises(NotFoundError):
        service.ledger_pool_get(uuid4())


def test_create_presale_starts_active_with_nothing_raised(ledger_seed) -> None:
    presale = _create_presale(_build_service(ledger_seed.store), ledger_seed)

    assert presale.status == "active"
    assert presale.total_raised == Decimal("0")
    assert presale.target_amount == Decimal("1000")
    assert presale.version == 1


def test_create_presale_enforces_one_per_token_and_unique_address(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    _create_presale(service, ledger_seed)

    with pytest.raises(ConflictError) as error_info:
        _create_presale(service, ledger_seed, presale_address="presale-other")

    assert error_info.value.code == "DUPLICATE_PRESALE_TOKEN"


def test_create_presale_validates_input(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    token_id = ledger_seed.token_b.token_id

    with pytest.raises(InvalidInputError):
        service.ledger_presale_create(token_id, "presale-x", "0", WINDOW_START_UTC, WINDOW_END_UTC)
    with pytest.raises(InvalidInputError):
        service.ledger_presale_create(token_id, "presale-x", "10", WINDOW_END_UTC, WINDOW_START_UTC)
    with pytest.raises(InvalidInputError):
        service.ledger_presale_create(token_id, "presale-x", "10", datetime(2026, 3, 1), WINDOW_END_UTC)
    with pytest.raises(NotFoundError):
        service.ledger_presale_create(uuid4(), "presale-x", "10", WINDOW_START_UTC, WINDOW_END_UTC)


def test_contribution_increments_total_raised(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    presale = _create_presale(service, ledger_seed)

    first = service.ledger_presale_contribute(str(presale.presale_id), "wallet-1", "100")
    second = service.ledger_presale_contribute("presale-sol", "wallet-2", "50.5")

    assert first.presale.total_raised == Decimal("100")
    assert second.presale.total_raised == Decimal("150.5")
    assert second.presale.version == 3
    assert second.contribution.user_wallet == "wallet-2"
    assert second.contribution.contributed_at_utc == INSIDE_WINDOW_UTC


def test_contribution_outside_window_is_invalid_state(ledger_seed) -> None:
    presale = _create_presale(_build_service(ledger_seed.store), ledger_seed)
    late_service = _build_service(ledger_seed.store, now=WINDOW_END_UTC + timedelta(seconds=1))

    with pytest.raises(InvalidStateError) as error_info:
        late_service.ledger_presale_contribute(str(presale.presale_id), "wallet-1", "1")

    assert error_info.value.code == "PRESALE_WINDOW_CLOSED"


def test_contribution_validates_reference_and_amount(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    _create_presale(service, ledger_seed)

    with pytest.raises(NotFoundError):
        service.ledger_presale_contribute(str(uuid4()), "wallet-1", "1")
    with pytest.raises(NotFoundError):
        service.ledger_presale_contribute("presale-unknown", "wallet-1", "1")
    with pytest.raises(InvalidInputError):
        service.ledger_presale_contribute("presale-sol", "wallet-1", "-5")


def test_pool_list_returns_enriched_pools(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    token_c = service.ledger_token_create("mint-jup", "JUP", "Jupiter", 6)
    registered = service.ledger_pool_register("pool-jup-usdc", token_c.token_id, ledger_seed.token_b.token_id)

    enriched_pools = service.ledger_pool_list()

    assert [enriched.record.pool_address for enriched in enriched_pools] == ["pool-sol-usdc", "pool-jup-usdc"]
    assert enriched_pools[0].token_a == ledger_seed.token_a
    assert enriched_pools[1] == registered


def test_presale_get_by_id_or_address_includes_token(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    presale = _create_presale(service, ledger_seed)

    assert service.ledger_presale_get(str(presale.presale_id)) == (presale, ledger_seed.token_a)
    assert service.ledger_presale_get("presale-sol") == (presale, ledger_seed.token_a)
    assert service.ledger_presale_list() == [presale]
    with pytest.raises(NotFoundError) as error_info:
        service.ledger_presale_get("presale-unknown")
    assert error_info.value.code == "PRESALE_NOT_FOUND"


def test_presale_contributions_are_listed_oldest_first(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    presale = _create_presale(service, ledger_seed)
    first = service.ledger_presale_contribute("presale-sol", "wallet-1", "10", contributed_at_utc=INSIDE_WINDOW_UTC)
    second = service.ledger_presale_contribute(
        "presale-sol",
        "wallet-2",
        "20",
        contributed_at_utc=INSIDE_WINDOW_UTC + timedelta(hours=1),
    )

    contributions = service.ledger_presale_list_contributions(str(presale.presale_id))

    assert contributions == [first.contribution, second.contribution]
    with pytest.raises(NotFoundError):
        service.ledger_presale_list_contributions(str(uuid4()))


def test_completing_presale_flags_token(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    _create_presale(service, ledger_seed)
    service.ledger_presale_contribute("presale-sol", "wallet-1", "100")

    completed = service.ledger_presale_update("presale-sol", status=" Completed ")

    assert completed.status == "completed"
    assert completed.total_raised == Decimal("100")
    assert completed.version == 3
    assert service.ledger_token_get(ledger_seed.token_a.token_id).presale_completed is True
    assert service.ledger_token_get(ledger_seed.token_b.token_id).presale_completed is False


def test_cancelled_presale_is_terminal(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    _create_presale(service, ledger_seed)

    cancelled = service.ledger_presale_update("presale-sol", status="cancelled")

    assert cancelled.status == "cancelled"
    assert service.ledger_token_get(ledger_seed.token_a.token_id).presale_completed is False
    with pytest.raises(InvalidStateError) as update_error:
        service.ledger_presale_update("presale-sol", status="active")
    with pytest.raises(InvalidStateError) as contribute_error:
        service.ledger_presale_contribute("presale-sol", "wallet-1", "1")
    assert update_error.value.code == "PRESALE_NOT_ACTIVE"
    assert contribute_error.value.code == "PRESALE_NOT_ACTIVE"


def test_extending_presale_window_keeps_it_active(ledger_seed) -> None:
    service = _build_service(ledger_seed.store)
    _create_presale(service, ledger_seed)
    extended_end = WINDOW_END_UTC + timedelta(days=7)

    extended = service.ledger_presale_update("presale-sol", end_time_utc=extended_end)
    late_service = _build_service(ledger_seed.store, now=WINDOW_END_UTC + timedelta(days=1))
    result = late_service.ledger_presale_contribute("presale-sol", "wallet-1", "5")

    assert extended.status == "active"
    assert extended.end_time_utc == extended_end
    assert result.presale.total_raised == Decimal("5")


@pytest.mark.parametrize(
    ("status", "end_time_utc", "expected_code"),
    [
        (None, None, "EMPTY_UPDATE"),
        ("finished", None, "INVALID_PRESALE_STATUS"),
        (None, datetime(2026, 4, 1), "INVALID_TIMESTAMP"),
        (None, WINDOW_START_UTC, "INVALID_PRESALE_WINDOW"),
    ],
)
def test_presale_update_rejects_invalid_input(ledger_seed, status, end_time_utc, expected_code) -> None:
    service = _build_service(ledger_seed.store)
    presale = _create_presale(service, ledger_seed)

    with pytest.raises(InvalidInputError) as error_info:
        service.ledger_presale_update("presale-sol", status=status, end_time_utc=end_time_utc)

    assert error_info.value.code == expected_code
    assert ledger_seed.store.db_presale_get_by_id(presale.presale_id) == presale


def test_presale_update_missing_is_not_found(ledger_seed) -> None:
    with pytest.raises(NotFoundError):
        _build_service(ledger_seed.store).ledger_presale_update("presale-unknown", status="completed")
