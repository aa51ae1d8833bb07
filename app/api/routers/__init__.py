"""API router package for endpoint composition."""

from .catalog import api_create_catalog_router
from .fees import api_create_fees_router
from .health import api_create_health_router
from .liquidity import api_create_liquidity_router
from .swaps import api_create_swaps_router

__all__ = [
	"api_create_catalog_router",
	"api_create_fees_router",
	"api_create_health_router",
	"api_create_liquidity_router",
	"api_create_swaps_router",
]
