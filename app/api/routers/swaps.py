"""Swap router for recording executed swaps and reading swap history."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.domain import LedgerError
from app.ledger import SwapLedgerService

from ..errors import api_error_response
from ..schemas import RecordSwapRequest
from ..serialization import api_build_success_payload, api_serialize_enriched_record, api_serialize_swap


def api_create_swaps_router(swap_service: SwapLedgerService) -> APIRouter:
    """Create swap router exposing `/swaps` endpoints.

    Args:
        swap_service: Ledger-layer swap service.

    Returns:
        APIRouter: Router exposing swap endpoints.

    Raises:
        ValueError: Raised when swap_service is None.
    """

    if swap_service is None:
        raise ValueError("swap_service must not be None")

    router = APIRouter(prefix="/swaps", tags=["swaps"])

    @router.post("/execute")
    def api_swaps_record(request: RecordSwapRequest) -> JSONResponse:
        """Record one executed swap."""

        try:
            result = swap_service.ledger_swap_record(
                pool_id=request.pool_id,
                user_wallet=request.user_wallet,
                token_in_id=request.token_in_id,
                token_out_id=request.token_out_id,
                amount_in=request.amount_in,
                amount_out=request.amount_out,
                tx_hash=request.tx_hash,
                client_origin=request.client_origin,
            )
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload(api_serialize_swap(result.swap), result.settlement)
        return JSONResponse(content=payload, status_code=status.HTTP_201_CREATED)

    @router.get("/pool/{pool_id}")
    def api_swaps_list_for_pool(pool_id: UUID) -> JSONResponse:
        """Return enriched swaps of one pool, oldest first."""

        try:
            enriched_swaps = swap_service.ledger_swap_list_for_pool(pool_id)
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload([api_serialize_enriched_record(item) for item in enriched_swaps])
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/user/{wallet}")
    def api_swaps_list_for_wallet(wallet: str) -> JSONResponse:
        """Return enriched swaps executed by one wallet."""

        try:
            enriched_swaps = swap_service.ledger_swap_list_for_wallet(wallet)
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload([api_serialize_enriched_record(item) for item in enriched_swaps])
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
