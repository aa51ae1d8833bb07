"""Project-native typed exceptions for ledger accounting failures.

Every failure carries a stable `kind` for coarse classification, a
deterministic `code` for clients, and a human-readable message.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base exception for ledger-level failures.

    Attributes:
        kind: Failure category (`not_found`, `invalid_input`, `invalid_state`,
            `conflict`, `upstream_failure`).
        code: Deterministic machine-readable error code.
        message: Human-readable failure message.
    """

    kind: str = "ledger_error"
    default_code: str = "LEDGER_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class NotFoundError(LedgerError, LookupError):
    """Entity or join target is absent."""

    kind = "not_found"
    default_code = "NOT_FOUND"


class InvalidInputError(LedgerError, ValueError):
    """Required field is missing or malformed, or an amount is out of range."""

    kind = "invalid_input"
    default_code = "INVALID_INPUT"


class InvalidStateError(LedgerError):
    """Persisted entity is in a state that does not admit the requested operation."""

    kind = "invalid_state"
    default_code = "INVALID_STATE"


class ConflictError(LedgerError):
    """Unique key already taken."""

    kind = "conflict"
    default_code = "CONFLICT"


class StaleWriteError(ConflictError):
    """Versioned write rejected because the entity changed after it was read."""

    default_code = "STALE_WRITE"


class UpstreamFailureError(LedgerError, RuntimeError):
    """Ledger Store or Chain Settlement Adapter failure."""

    kind = "upstream_failure"
    default_code = "UPSTREAM_FAILURE"
