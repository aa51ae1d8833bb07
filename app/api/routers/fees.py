"""Fee router for claims, accruals and wallet fee reads."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.domain import LedgerError
from app.ledger import FeeSettlementService

from ..errors import api_error_response
from ..schemas import AccrueFeesRequest, ClaimFeesRequest
from ..serialization import (
    api_build_success_payload,
    api_format_decimal,
    api_serialize_enriched_record,
    api_serialize_fee_record,
)


def api_create_fees_router(fee_service: FeeSettlementService) -> APIRouter:
    """Create fee router exposing `/fees` endpoints.

    Args:
        fee_service: Ledger-layer fee settlement service.

    Returns:
        APIRouter: Router exposing fee endpoints.

    Raises:
        ValueError: Raised when fee_service is None.
    """

    if fee_service is None:
        raise ValueError("fee_service must not be None")

    router = APIRouter(prefix="/fees", tags=["fees"])

    @router.post("/claim")
    def api_fees_claim(request: ClaimFeesRequest) -> JSONResponse:
        """Claim all unclaimed fees of one (pool, wallet) pair.

        Returns:
            JSONResponse: Zeroed record, claimed amounts and optional `tx`.
        """

        try:
            result = fee_service.ledger_fee_claim(
                pool_id=request.pool_id,
                user_wallet=request.user_wallet,
                client_origin=request.client_origin,
            )
        except LedgerError as error:
            return api_error_response(error)

        data = api_serialize_fee_record(result.fee_record)
        data["claimed_fee_a"] = api_format_decimal(result.claimed_fee_a)
        data["claimed_fee_b"] = api_format_decimal(result.claimed_fee_b)
        payload = api_build_success_payload(data, result.settlement)
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/accrue")
    def api_fees_accrue(request: AccrueFeesRequest) -> JSONResponse:
        """Add accrued fees to one (pool, wallet) record."""

        try:
            fee_record = fee_service.ledger_fee_accrue(
                pool_id=request.pool_id,
                user_wallet=request.user_wallet,
                fee_a=request.fee_a,
                fee_b=request.fee_b,
            )
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload(api_serialize_fee_record(fee_record))
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/user/{wallet}")
    def api_fees_list_for_wallet(wallet: str) -> JSONResponse:
        """Return enriched, non-zero fee records of one wallet."""

        try:
            enriched_fees = fee_service.ledger_fee_list_for_wallet(wallet)
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload([api_serialize_enriched_record(item) for item in enriched_fees])
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
