"""API layer package for FastAPI application and route composition."""

from .application import LedgerServices, create_api_application

__all__ = ["LedgerServices", "create_api_application"]
