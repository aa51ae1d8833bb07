"""Database health service implementations for connectivity checks."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from app.domain import HealthStatus

from .interfaces import DatabaseHealthPort


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Database health service backed by SQLAlchemy engine connectivity checks."""

    def __init__(self, engine: Engine):
        """Initialize database health service.

        Args:
            engine: SQLAlchemy engine used for connectivity checks.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the target database URL with the password masked."""

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Verify ledger database connectivity and schema presence.

        Returns:
            HealthStatus: Health payload with status and diagnostic detail.

        Raises:
            ConnectionError: Raised when connectivity check fails.
        """

        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1 FROM liquidity_position LIMIT 1"))
            return HealthStatus(status="ok", detail="ledger database connectivity verified")
        except SQLAlchemyError as error:
            raise ConnectionError("ledger database connectivity check failed") from error


class InMemoryDatabaseHealthService(DatabaseHealthPort):
    """Health service reported when the in-memory ledger store is active."""

    def db_connection_label(self) -> str:
        return "memory://ledger"

    def db_check_health(self) -> HealthStatus:
        return HealthStatus(status="ok", detail="in-memory ledger store active")
