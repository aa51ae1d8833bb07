"""Ledger layer package for position, fee, swap and catalog accounting."""

from .catalog import LedgerCatalogService
from .enrichment import LedgerEnrichmentService
from .fee_settlement import FeeSettlementService
from .interfaces import FeeClaimResult, LiquidityChangeResult, PresaleContributionResult, SwapRecordResult
from .positions import LiquidityPositionService
from .swap_ledger import SwapLedgerService
from .validation import CLIENT_ORIGIN_UI, ledger_is_interactive_client
from .withdrawal import WithdrawalComputation, ledger_compute_withdrawal

__all__ = [
	"CLIENT_ORIGIN_UI",
	"FeeClaimResult",
	"FeeSettlementService",
	"LedgerCatalogService",
	"LedgerEnrichmentService",
	"LiquidityChangeResult",
	"LiquidityPositionService",
	"PresaleContributionResult",
	"SwapLedgerService",
	"SwapRecordResult",
	"WithdrawalComputation",
	"ledger_compute_withdrawal",
	"ledger_is_interactive_client",
]
