"""Chain settlement invocation helpers shared by ledger services.

Artifacts are requested before the ledger write they describe, so a failed or
unavailable adapter leaves stored state untouched.
"""

from __future__ import annotations

import logging
from typing import Callable

from app.adapters import ChainSettlementError, ChainSettlementPort, SettlementReceipt
from app.domain import UpstreamFailureError

logger = logging.getLogger(__name__)


def ledger_require_settlement_adapter(settlement_adapter: ChainSettlementPort | None) -> ChainSettlementPort:
    """Return the configured adapter or fail before any mutation.

    Raises:
        UpstreamFailureError: Raised when no adapter is configured.
    """

    if settlement_adapter is None:
        raise UpstreamFailureError("chain settlement adapter is not configured", code="SETTLEMENT_UNAVAILABLE")
    return settlement_adapter


def ledger_request_settlement(operation_label: str, submit: Callable[[], SettlementReceipt]) -> SettlementReceipt:
    """Run one adapter request and translate adapter failures.

    Args:
        operation_label: Operation name for diagnostics.
        submit: Zero-argument adapter call.

    Returns:
        SettlementReceipt: Adapter receipt.

    Raises:
        UpstreamFailureError: Raised when the adapter fails.
    """

    try:
        return submit()
    except ChainSettlementError as error:
        logger.error("chain settlement failed for %s: %s", operation_label, error)
        raise UpstreamFailureError(
            f"chain settlement failed for {operation_label}: {error}",
            code="SETTLEMENT_FAILED",
        ) from error
