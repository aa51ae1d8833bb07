"""Mapping of ledger errors to HTTP error payloads."""

from __future__ import annotations

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from app.domain import (
    ConflictError,
    InvalidInputError,
    InvalidStateError,
    LedgerError,
    NotFoundError,
    UpstreamFailureError,
)

logger = logging.getLogger(__name__)

_API_ERROR_STATUS_BY_TYPE: tuple[tuple[type[LedgerError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UpstreamFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def api_status_code_for_error(error: LedgerError) -> int:
    """Return the HTTP status code that represents one ledger error.

    Args:
        error: Ledger error raised by a service.

    Returns:
        int: HTTP status code; unknown subclasses map to 500.
    """

    for error_type, status_code in _API_ERROR_STATUS_BY_TYPE:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def api_error_response(error: LedgerError) -> JSONResponse:
    """Build the error envelope response for one ledger error.

    Args:
        error: Ledger error raised by a service.

    Returns:
        JSONResponse: `{"status": "error", "code": ..., "message": ...}` payload.
    """

    status_code = api_status_code_for_error(error)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.warning("request failed with %s (%s): %s", error.kind, error.code, error.message)
    payload = {
        "status": "error",
        "code": error.code,
        "message": error.message,
    }
    return JSONResponse(content=payload, status_code=status_code)
