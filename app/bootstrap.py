"""Application bootstrap wiring for startup validation and dependency assembly."""

import logging

from fastapi import FastAPI

from app.adapters import ChainSettlementPort, PlaceholderChainSettlementAdapter
from app.api import LedgerServices, create_api_application
from app.config import AppSettings, config_configure_logging, config_load_settings
from app.db import (
    DatabaseHealthPort,
    InMemoryDatabaseHealthService,
    InMemoryLedgerStore,
    LedgerStorePort,
    SQLAlchemyDatabaseHealthService,
    SQLAlchemyLedgerStore,
    db_create_engine,
)
from app.ledger import (
    FeeSettlementService,
    LedgerCatalogService,
    LedgerEnrichmentService,
    LiquidityPositionService,
    SwapLedgerService,
)

logger = logging.getLogger(__name__)


def bootstrap_create_store(settings: AppSettings) -> tuple[LedgerStorePort, DatabaseHealthPort]:
    """Build the configured ledger store and its health service.

    Args:
        settings: Validated runtime settings.

    Returns:
        tuple[LedgerStorePort, DatabaseHealthPort]: Store and matching health service.
    """

    if settings.ledger_store_backend == "memory":
        logger.warning("using in-memory ledger store; state is lost on restart")
        return InMemoryLedgerStore(), InMemoryDatabaseHealthService()

    engine = db_create_engine(database_url=settings.database_url)
    return SQLAlchemyLedgerStore(engine=engine), SQLAlchemyDatabaseHealthService(engine=engine)


def bootstrap_create_services(
    settings: AppSettings,
    store: LedgerStorePort,
    settlement_adapter: ChainSettlementPort | None,
) -> LedgerServices:
    """Wire ledger-layer services around one store and adapter.

    Args:
        settings: Validated runtime settings.
        store: Ledger store shared by all services.
        settlement_adapter: Chain settlement adapter for interactive clients.

    Returns:
        LedgerServices: Service bundle consumed by the API factory.
    """

    enrichment_service = LedgerEnrichmentService(store=store, max_workers=settings.enrichment_max_workers)
    return LedgerServices(
        positions=LiquidityPositionService(
            store=store,
            enrichment_service=enrichment_service,
            settlement_adapter=settlement_adapter,
        ),
        fees=FeeSettlementService(
            store=store,
            enrichment_service=enrichment_service,
            settlement_adapter=settlement_adapter,
        ),
        swaps=SwapLedgerService(
            store=store,
            enrichment_service=enrichment_service,
            settlement_adapter=settlement_adapter,
        ),
        catalog=LedgerCatalogService(store=store, enrichment_service=enrichment_service),
    )


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    config_configure_logging(settings)
    store, db_health_service = bootstrap_create_store(settings)
    services = bootstrap_create_services(
        settings=settings,
        store=store,
        settlement_adapter=PlaceholderChainSettlementAdapter(),
    )
    logger.info(
        "ledger service assembled (environment=%s, store=%s)",
        settings.environment_name,
        settings.ledger_store_backend,
    )
    return create_api_application(settings=settings, db_health_service=db_health_service, services=services)
