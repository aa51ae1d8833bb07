"""Request body contracts for mutating ledger endpoints.

Bodies only enforce shape and types. Amount ranges and cross-entity rules are
checked by ledger services so that they report `invalid_input` errors with
stable codes instead of schema errors.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class _LedgerRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class RemoveLiquidityRequest(_LedgerRequest):
    position_id: UUID
    amount: Decimal
    client_origin: str | None = None


class AddLiquidityRequest(_LedgerRequest):
    user_wallet: str
    pool_id: UUID
    amount_token_a: Decimal
    amount_token_b: Decimal
    lp_tokens: Decimal
    lower_price: Decimal | None = None
    upper_price: Decimal | None = None
    client_origin: str | None = None


class ClaimFeesRequest(_LedgerRequest):
    pool_id: UUID
    user_wallet: str
    client_origin: str | None = None


class AccrueFeesRequest(_LedgerRequest):
    pool_id: UUID
    user_wallet: str
    fee_a: Decimal = Decimal("0")
    fee_b: Decimal = Decimal("0")


class RecordSwapRequest(_LedgerRequest):
    pool_id: UUID
    user_wallet: str
    token_in_id: UUID
    token_out_id: UUID
    amount_in: Decimal
    amount_out: Decimal
    tx_hash: str
    client_origin: str | None = None


class CreateTokenRequest(_LedgerRequest):
    mint_address: str
    symbol: str
    name: str
    decimals: int = Field(strict=True)
    logo_uri: str | None = None


class RegisterPoolRequest(_LedgerRequest):
    pool_address: str
    token_a_id: UUID
    token_b_id: UUID
    lp_mint: str | None = None
    tick_spacing: int | None = None
    fee_rate: int | None = None


class CreatePresaleRequest(_LedgerRequest):
    token_id: UUID
    presale_address: str
    target_amount: Decimal
    start_time_utc: datetime
    end_time_utc: datetime


class ContributePresaleRequest(_LedgerRequest):
    user_wallet: str
    amount: Decimal


class UpdatePresaleRequest(_LedgerRequest):
    status: str | None = None
    end_time_utc: datetime | None = None
