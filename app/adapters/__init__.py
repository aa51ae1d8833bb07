"""Adapter layer package for chain settlement boundaries."""

from .chain_errors import ChainSettlementConnectionError, ChainSettlementError, ChainSettlementRequestError
from .interfaces import (
	SWAP_DIRECTION_A_TO_B,
	SWAP_DIRECTION_B_TO_A,
	ChainSettlementPort,
	LiquidityChangeAmounts,
	PriceRange,
	SettlementReceipt,
)
from .placeholder_settlement import PlaceholderChainSettlementAdapter

__all__ = [
	"SWAP_DIRECTION_A_TO_B",
	"SWAP_DIRECTION_B_TO_A",
	"ChainSettlementConnectionError",
	"ChainSettlementError",
	"ChainSettlementPort",
	"ChainSettlementRequestError",
	"LiquidityChangeAmounts",
	"PlaceholderChainSettlementAdapter",
	"PriceRange",
	"SettlementReceipt",
]
