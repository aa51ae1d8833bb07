"""JSON serializers for ledger entities and service results."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from app.adapters import SettlementReceipt
from app.domain import (
    EnrichedRecord,
    FeeRecord,
    LiquidityPosition,
    Pool,
    Presale,
    PresaleContribution,
    Swap,
    Token,
)


def api_format_decimal(value: Decimal | None) -> str | None:
    """Render a decimal amount as plain (non-exponent) text."""

    if value is None:
        return None
    return format(value, "f")


def _api_format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _api_format_id(value: object | None) -> str | None:
    return str(value) if value is not None else None


def api_serialize_token(token: Token | None) -> dict[str, object] | None:
    if token is None:
        return None
    return {
        "token_id": str(token.token_id),
        "mint_address": token.mint_address,
        "symbol": token.symbol,
        "name": token.name,
        "decimals": token.decimals,
        "logo_uri": token.logo_uri,
        "presale_completed": token.presale_completed,
        "created_at_utc": _api_format_datetime(token.created_at_utc),
    }


def api_serialize_pool(pool: Pool | None) -> dict[str, object] | None:
    if pool is None:
        return None
    return {
        "pool_id": str(pool.pool_id),
        "pool_address": pool.pool_address,
        "token_a_id": str(pool.token_a_id),
        "token_b_id": str(pool.token_b_id),
        "lp_mint": pool.lp_mint,
        "tick_spacing": pool.tick_spacing,
        "fee_rate": pool.fee_rate,
        "created_at_utc": _api_format_datetime(pool.created_at_utc),
    }


def api_serialize_position(position: LiquidityPosition) -> dict[str, object]:
    return {
        "position_id": str(position.position_id),
        "user_wallet": position.user_wallet,
        "pool_id": _api_format_id(position.pool_id),
        "amount_token_a": api_format_decimal(position.amount_token_a),
        "amount_token_b": api_format_decimal(position.amount_token_b),
        "lp_tokens": api_format_decimal(position.lp_tokens),
        "version": position.version,
        "created_at_utc": _api_format_datetime(position.created_at_utc),
        "updated_at_utc": _api_format_datetime(position.updated_at_utc),
    }


def api_serialize_swap(swap: Swap) -> dict[str, object]:
    return {
        "swap_id": str(swap.swap_id),
        "pool_id": _api_format_id(swap.pool_id),
        "user_wallet": swap.user_wallet,
        "token_in_id": _api_format_id(swap.token_in_id),
        "token_out_id": _api_format_id(swap.token_out_id),
        "amount_in": api_format_decimal(swap.amount_in),
        "amount_out": api_format_decimal(swap.amount_out),
        "tx_hash": swap.tx_hash,
        "executed_at_utc": _api_format_datetime(swap.executed_at_utc),
    }


def api_serialize_fee_record(fee_record: FeeRecord) -> dict[str, object]:
    return {
        "fee_record_id": str(fee_record.fee_record_id),
        "pool_id": _api_format_id(fee_record.pool_id),
        "user_wallet": fee_record.user_wallet,
        "unclaimed_fee_a": api_format_decimal(fee_record.unclaimed_fee_a),
        "unclaimed_fee_b": api_format_decimal(fee_record.unclaimed_fee_b),
        "last_claimed_at_utc": _api_format_datetime(fee_record.last_claimed_at_utc),
        "version": fee_record.version,
    }


def api_serialize_presale(presale: Presale) -> dict[str, object]:
    return {
        "presale_id": str(presale.presale_id),
        "token_id": str(presale.token_id),
        "presale_address": presale.presale_address,
        "target_amount": api_format_decimal(presale.target_amount),
        "total_raised": api_format_decimal(presale.total_raised),
        "start_time_utc": _api_format_datetime(presale.start_time_utc),
        "end_time_utc": _api_format_datetime(presale.end_time_utc),
        "status": presale.status,
        "version": presale.version,
        "created_at_utc": _api_format_datetime(presale.created_at_utc),
    }


def api_serialize_presale_contribution(contribution: PresaleContribution) -> dict[str, object]:
    return {
        "contribution_id": str(contribution.contribution_id),
        "presale_id": str(contribution.presale_id),
        "user_wallet": contribution.user_wallet,
        "amount": api_format_decimal(contribution.amount),
        "contributed_at_utc": _api_format_datetime(contribution.contributed_at_utc),
    }


_API_RECORD_SERIALIZERS = (
    (LiquidityPosition, api_serialize_position),
    (Swap, api_serialize_swap),
    (FeeRecord, api_serialize_fee_record),
    (Pool, api_serialize_pool),
)


def api_serialize_enriched_record(enriched: EnrichedRecord) -> dict[str, object]:
    """Serialize one enriched record as its own fields plus joined metadata.

    Swaps name their joined tokens `token_in` / `token_out`; every other
    record names them `token_a` / `token_b`.

    Args:
        enriched: Enriched ledger record.

    Returns:
        dict[str, object]: JSON-serializable payload.

    Raises:
        TypeError: Raised when the wrapped record type is unsupported.
    """

    payload: dict[str, object] | None = None
    for record_type, serializer in _API_RECORD_SERIALIZERS:
        if isinstance(enriched.record, record_type):
            payload = dict(serializer(enriched.record))
            break
    if payload is None:
        raise TypeError(f"unsupported enriched record type: {type(enriched.record).__name__}")

    if not isinstance(enriched.record, Pool):
        payload["pool"] = api_serialize_pool(enriched.pool)
    if isinstance(enriched.record, Swap):
        payload["token_in"] = api_serialize_token(enriched.token_a)
        payload["token_out"] = api_serialize_token(enriched.token_b)
    else:
        payload["token_a"] = api_serialize_token(enriched.token_a)
        payload["token_b"] = api_serialize_token(enriched.token_b)
    return payload


def api_build_success_payload(data: object, settlement: SettlementReceipt | None = None) -> dict[str, object]:
    """Wrap response data in the success envelope.

    Args:
        data: JSON-serializable response data.
        settlement: Optional transaction artifact to expose as `tx`.

    Returns:
        dict[str, object]: `{"data": ...}` with `tx` when an artifact exists.
    """

    payload: dict[str, object] = {"data": data}
    if settlement is not None:
        payload["tx"] = settlement.tx_handle
        if settlement.position_mint is not None:
            payload["position_mint"] = settlement.position_mint
    return payload
