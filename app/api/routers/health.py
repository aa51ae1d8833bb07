"""Health endpoint router reporting service and ledger store state."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.db import DatabaseHealthPort


def api_create_health_router(db_health_service: DatabaseHealthPort, store_backend: str) -> APIRouter:
    """Create health-check router with ledger store connectivity status.

    Args:
        db_health_service: Health service of the active ledger store.
        store_backend: Configured ledger store backend name.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and ledger store health state.

        Returns:
            JSONResponse: 200 when the store answers, 503 otherwise.
        """

        base_payload = {
            "app": "up",
            "store_backend": store_backend,
            "target": db_health_service.db_connection_label(),
        }
        try:
            store_health = db_health_service.db_check_health()
        except ConnectionError as error:
            payload = {**base_payload, "status": "degraded", "store": "down", "detail": str(error)}
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = {**base_payload, "status": "ok", "store": store_health.status, "detail": store_health.detail}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
