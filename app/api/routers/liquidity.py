"""Liquidity position router for add, remove and wallet position reads."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.adapters import PriceRange
from app.domain import InvalidInputError, LedgerError
from app.ledger import LiquidityChangeResult, LiquidityPositionService

from ..errors import api_error_response
from ..schemas import AddLiquidityRequest, RemoveLiquidityRequest
from ..serialization import api_build_success_payload, api_serialize_enriched_record, api_serialize_position


def api_create_liquidity_router(position_service: LiquidityPositionService) -> APIRouter:
    """Create liquidity router exposing position mutations and reads.

    Args:
        position_service: Ledger-layer position service.

    Returns:
        APIRouter: Router exposing `/liquidity` endpoints.

    Raises:
        ValueError: Raised when position_service is None.
    """

    if position_service is None:
        raise ValueError("position_service must not be None")

    router = APIRouter(prefix="/liquidity", tags=["liquidity"])

    @router.post("/remove")
    def api_liquidity_remove(request: RemoveLiquidityRequest) -> JSONResponse:
        """Remove LP units from one position, closing it when fully withdrawn.

        Returns:
            JSONResponse: Updated (or closed) position payload with optional `tx`.
        """

        try:
            result = position_service.ledger_position_remove_liquidity(
                position_id=request.position_id,
                lp_amount=request.amount,
                client_origin=request.client_origin,
            )
        except LedgerError as error:
            return api_error_response(error)
        return JSONResponse(content=_api_serialize_change(result), status_code=status.HTTP_200_OK)

    @router.post("/add")
    def api_liquidity_add(request: AddLiquidityRequest) -> JSONResponse:
        """Open or increase the wallet's position in one pool.

        Returns:
            JSONResponse: Position payload with optional `tx`.
        """

        try:
            price_range = _api_build_price_range(request)
            result = position_service.ledger_position_add_liquidity(
                user_wallet=request.user_wallet,
                pool_id=request.pool_id,
                amount_token_a=request.amount_token_a,
                amount_token_b=request.amount_token_b,
                lp_tokens=request.lp_tokens,
                client_origin=request.client_origin,
                price_range=price_range,
            )
        except LedgerError as error:
            return api_error_response(error)
        return JSONResponse(content=_api_serialize_change(result), status_code=status.HTTP_200_OK)

    @router.get("/user/{wallet}")
    def api_liquidity_list_for_wallet(wallet: str) -> JSONResponse:
        """Return enriched positions held by one wallet."""

        try:
            enriched_positions = position_service.ledger_position_list_for_wallet(wallet)
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload([api_serialize_enriched_record(item) for item in enriched_positions])
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/{position_id}")
    def api_liquidity_detail(position_id: UUID) -> JSONResponse:
        """Return one enriched position."""

        try:
            enriched_position = position_service.ledger_position_get(position_id)
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload(api_serialize_enriched_record(enriched_position))
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def _api_build_price_range(request: AddLiquidityRequest) -> PriceRange | None:
    if request.lower_price is None and request.upper_price is None:
        return None
    if request.lower_price is None or request.upper_price is None:
        raise InvalidInputError("lower_price and upper_price must be provided together", code="INVALID_PRICE_RANGE")
    return PriceRange(lower_price=request.lower_price, upper_price=request.upper_price)


def _api_serialize_change(result: LiquidityChangeResult) -> dict[str, object]:
    data = api_serialize_position(result.position)
    data["closed"] = result.closed
    return api_build_success_payload(data, result.settlement)
