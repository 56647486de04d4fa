"""Mapping of monetization errors to HTTP responses."""

from fastapi import HTTPException, status

from dramaverse.domain.errors import (
    ConcurrencyConflictError,
    InsufficientFundsError,
    MonetizationError,
    NotFoundError,
    ValidationError,
)


def to_http_exception(error: MonetizationError) -> HTTPException:
    if isinstance(error, InsufficientFundsError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "insufficient_funds",
                "message": str(error),
                "required": error.required,
                "available": error.available,
                "shortfall": error.shortfall,
            },
        )
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": error.code, "field": error.field, "message": error.message},
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ConcurrencyConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
