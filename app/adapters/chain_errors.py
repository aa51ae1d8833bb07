"""Project-native typed exceptions for chain settlement adapter failures."""

from __future__ import annotations


class ChainSettlementError(Exception):
    """Base exception for adapter-level settlement failures.

    Attributes:
        error_code: Optional backend error code.
    """

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.error_code = error_code


class ChainSettlementConnectionError(ChainSettlementError, ConnectionError):
    """Transport-level connectivity failure while reaching the settlement backend."""


class ChainSettlementRequestError(ChainSettlementError, ValueError):
    """Settlement request rejected as malformed."""
