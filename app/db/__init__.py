"""Database layer package for all SQL and persistence boundaries."""

from .health import InMemoryDatabaseHealthService, SQLAlchemyDatabaseHealthService
from .interfaces import (
	DatabaseHealthPort,
	FeeRepositoryPort,
	LedgerStorePort,
	PoolRepositoryPort,
	PositionRepositoryPort,
	PresaleRepositoryPort,
	SwapRepositoryPort,
	TokenRepositoryPort,
)
from .memory_store import InMemoryLedgerStore
from .session import db_create_engine
from .sql_store import SQLAlchemyLedgerStore

__all__ = [
	"DatabaseHealthPort",
	"FeeRepositoryPort",
	"LedgerStorePort",
	"PoolRepositoryPort",
	"PositionRepositoryPort",
	"PresaleRepositoryPort",
	"SwapRepositoryPort",
	"TokenRepositoryPort",
	"InMemoryDatabaseHealthService",
	"InMemoryLedgerStore",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyLedgerStore",
	"db_create_engine",
]
