"""FastAPI application factory for the ledger service."""

from dataclasses import dataclass

from fastapi import FastAPI

from app.config import AppSettings
from app.db import DatabaseHealthPort
from app.ledger import FeeSettlementService, LedgerCatalogService, LiquidityPositionService, SwapLedgerService

from .routers import (
    api_create_catalog_router,
    api_create_fees_router,
    api_create_health_router,
    api_create_liquidity_router,
    api_create_swaps_router,
)


@dataclass(frozen=True)
class LedgerServices:
    """Ledger-layer services exposed over HTTP.

    Attributes:
        positions: Liquidity position service.
        fees: Fee settlement service.
        swaps: Swap ledger service.
        catalog: Token, pool and presale catalog service.
    """

    positions: LiquidityPositionService
    fees: FeeSettlementService
    swaps: SwapLedgerService
    catalog: LedgerCatalogService


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    services: LedgerServices,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Ledger store health service used by health endpoints.
        services: Ledger-layer services backing the routers.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when services is None.
    """

    if services is None:
        raise ValueError("services must not be None")

    application = FastAPI(title="AMM Position Ledger")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service identity for bootstrap verification."""

        return {
            "service": "amm-position-ledger",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(
        api_create_health_router(
            db_health_service=db_health_service,
            store_backend=settings.ledger_store_backend,
        )
    )
    application.include_router(api_create_liquidity_router(position_service=services.positions))
    application.include_router(api_create_fees_router(fee_service=services.fees))
    application.include_router(api_create_swaps_router(swap_service=services.swaps))
    application.include_router(api_create_catalog_router(catalog_service=services.catalog))

    return application
