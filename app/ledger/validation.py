"""Shared input validation helpers for ledger services.

Helpers raise `InvalidInputError` before any store access so that validation
failures never leave partial writes behind.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from app.domain import InvalidInputError

CLIENT_ORIGIN_UI = "ui"


def ledger_require_text(value: str | None, field_name: str) -> str:
    """Validate required text input and return stripped value.

    Args:
        value: Candidate string value.
        field_name: Field name for error reporting.

    Returns:
        str: Stripped non-empty value.

    Raises:
        InvalidInputError: Raised when value is missing or blank.
    """

    stripped_value = (value or "").strip()
    if not stripped_value:
        raise InvalidInputError(f"{field_name} must not be blank", code="MISSING_REQUIRED_FIELD")
    return stripped_value


def ledger_coerce_amount(value: object, field_name: str, code: str = "INVALID_AMOUNT") -> Decimal:
    """Convert one amount to a finite Decimal.

    Args:
        value: Candidate amount (Decimal, int or numeric string).
        field_name: Field name for error reporting.
        code: Error code used on failure.

    Returns:
        Decimal: Finite decimal amount.

    Raises:
        InvalidInputError: Raised when the value is missing, non-numeric or not finite.
    """

    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{field_name} is required", code=code)
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise InvalidInputError(f"{field_name} must be a decimal number", code=code) from error
    if not amount.is_finite():
        raise InvalidInputError(f"{field_name} must be finite", code=code)
    return amount


def ledger_require_positive_amount(value: object, field_name: str, code: str = "INVALID_AMOUNT") -> Decimal:
    """Validate a strictly positive amount.

    Args:
        value: Candidate amount.
        field_name: Field name for error reporting.
        code: Error code used on failure.

    Returns:
        Decimal: Positive amount.

    Raises:
        InvalidInputError: Raised when the amount is not strictly positive.
    """

    amount = ledger_coerce_amount(value, field_name, code)
    if amount <= 0:
        raise InvalidInputError(f"{field_name} must be > 0", code=code)
    return amount


def ledger_require_non_negative_amount(value: object, field_name: str, code: str = "INVALID_AMOUNT") -> Decimal:
    """Validate a non-negative amount.

    Args:
        value: Candidate amount.
        field_name: Field name for error reporting.
        code: Error code used on failure.

    Returns:
        Decimal: Non-negative amount.

    Raises:
        InvalidInputError: Raised when the amount is negative.
    """

    amount = ledger_coerce_amount(value, field_name, code)
    if amount < 0:
        raise InvalidInputError(f"{field_name} must be >= 0", code=code)
    return amount


def ledger_is_interactive_client(client_origin: str | None) -> bool:
    """Return whether the caller expects a transaction artifact to sign."""

    return (client_origin or "").strip().lower() == CLIENT_ORIGIN_UI
