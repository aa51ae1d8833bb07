"""Catalog routers for tokens, pools and presales."""
# pylint: disable=duplicate-code

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.domain import LedgerError
from app.ledger import LedgerCatalogService

from ..errors import api_error_response
from ..schemas import (
    ContributePresaleRequest,
    CreatePresaleRequest,
    CreateTokenRequest,
    RegisterPoolRequest,
    UpdatePresaleRequest,
)
from ..serialization import (
    api_build_success_payload,
    api_serialize_enriched_record,
    api_serialize_presale,
    api_serialize_presale_contribution,
    api_serialize_token,
)


def api_create_catalog_router(catalog_service: LedgerCatalogService) -> APIRouter:
    """Create catalog router exposing token, pool and presale endpoints.

    Args:
        catalog_service: Ledger-layer catalog service.

    Returns:
        APIRouter: Router exposing `/tokens`, `/pools` and `/presales` endpoints.

    Raises:
        ValueError: Raised when catalog_service is None.
    """

    if catalog_service is None:
        raise ValueError("catalog_service must not be None")

    router = APIRouter(tags=["catalog"])

    @router.post("/tokens")
    def api_tokens_create(request: CreateTokenRequest) -> JSONResponse:
        """Register one token; duplicate mint addresses are rejected with 409."""

        try:
            token = catalog_service.ledger_token_create(
                mint_address=request.mint_address,
                symbol=request.symbol,
                name=request.name,
                decimals=request.decimals,
                logo_uri=request.logo_uri,
            )
        except LedgerError as error:
            return api_error_response(error)
        return JSONResponse(
            content=api_build_success_payload(api_serialize_token(token)),
            status_code=status.HTTP_201_CREATED,
        )

    @router.get("/tokens")
    def api_tokens_list() -> JSONResponse:
        try:
            tokens = catalog_service.ledger_token_list()
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload([api_serialize_token(token) for token in tokens])
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/tokens/{token_id}")
    def api_tokens_detail(token_id: UUID) -> JSONResponse:
        try:
            token = catalog_service.ledger_token_get(token_id)
        except LedgerError as error:
            return api_error_response(error)
        return JSONResponse(content=api_build_success_payload(api_serialize_token(token)), status_code=status.HTTP_200_OK)

    @router.post("/pools")
    def api_pools_register(request: RegisterPoolRequest) -> JSONResponse:
        """Register one pool over two existing tokens."""

        try:
            enriched_pool = catalog_service.ledger_pool_register(
                pool_address=request.pool_address,
                token_a_id=request.token_a_id,
                token_b_id=request.token_b_id,
                lp_mint=request.lp_mint,
                tick_spacing=request.tick_spacing,
                fee_rate=request.fee_rate,
            )
        except LedgerError as error:
            return api_error_response(error)
        return JSONResponse(
            content=api_build_success_payload(api_serialize_enriched_record(enriched_pool)),
            status_code=status.HTTP_201_CREATED,
        )

    @router.get("/pools")
    def api_pools_list() -> JSONResponse:
        try:
            enriched_pools = catalog_service.ledger_pool_list()
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload([api_serialize_enriched_record(enriched) for enriched in enriched_pools])
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/pools/{pool_id}")
    def api_pools_detail(pool_id: UUID) -> JSONResponse:
        try:
            enriched_pool = catalog_service.ledger_pool_get(pool_id)
        except LedgerError as error:
            return api_error_response(error)
        return JSONResponse(
            content=api_build_success_payload(api_serialize_enriched_record(enriched_pool)),
            status_code=status.HTTP_200_OK,
        )

    @router.post("/presales")
    def api_presales_create(request: CreatePresaleRequest) -> JSONResponse:
        """Open one presale window for a token."""

        try:
            presale = catalog_service.ledger_presale_create(
                token_id=request.token_id,
                presale_address=request.presale_address,
                target_amount=request.target_amount,
                start_time_utc=request.start_time_utc,
                end_time_utc=request.end_time_utc,
            )
        except LedgerError as error:
            return api_error_response(error)
        return JSONResponse(
            content=api_build_success_payload(api_serialize_presale(presale)),
            status_code=status.HTTP_201_CREATED,
        )

    @router.get("/presales")
    def api_presales_list() -> JSONResponse:
        try:
            presales = catalog_service.ledger_presale_list()
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload([api_serialize_presale(presale) for presale in presales])
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/presales/{presale_ref}")
    def api_presales_detail(presale_ref: str) -> JSONResponse:
        """Return one presale, addressed by id or presale address, with its token."""

        try:
            presale, token = catalog_service.ledger_presale_get(presale_ref)
        except LedgerError as error:
            return api_error_response(error)
        data = {**api_serialize_presale(presale), "token": api_serialize_token(token)}
        return JSONResponse(content=api_build_success_payload(data), status_code=status.HTTP_200_OK)

    @router.patch("/presales/{presale_ref}")
    def api_presales_update(presale_ref: str, request: UpdatePresaleRequest) -> JSONResponse:
        """Complete, cancel or extend an active presale."""

        try:
            presale = catalog_service.ledger_presale_update(
                presale_ref=presale_ref,
                status=request.status,
                end_time_utc=request.end_time_utc,
            )
        except LedgerError as error:
            return api_error_response(error)
        return JSONResponse(
            content=api_build_success_payload(api_serialize_presale(presale)),
            status_code=status.HTTP_200_OK,
        )

    @router.get("/presales/{presale_ref}/contributions")
    def api_presales_contributions(presale_ref: str) -> JSONResponse:
        try:
            contributions = catalog_service.ledger_presale_list_contributions(presale_ref)
        except LedgerError as error:
            return api_error_response(error)
        payload = api_build_success_payload(
            [api_serialize_presale_contribution(contribution) for contribution in contributions]
        )
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/presales/{presale_ref}/contribute")
    def api_presales_contribute(presale_ref: str, request: ContributePresaleRequest) -> JSONResponse:
        """Contribute to an active presale addressed by id or presale address."""

        try:
            result = catalog_service.ledger_presale_contribute(
                presale_ref=presale_ref,
                user_wallet=request.user_wallet,
                amount=request.amount,
            )
        except LedgerError as error:
            return api_error_response(error)
        data = {
            "presale": api_serialize_presale(result.presale),
            "contribution": api_serialize_presale_contribution(result.contribution),
        }
        return JSONResponse(content=api_build_success_payload(data), status_code=status.HTTP_200_OK)

    return router
