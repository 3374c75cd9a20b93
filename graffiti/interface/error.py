"""Interface layer errors and domain error translation."""

import math

from fastapi import HTTPException, status

from graffiti.domain.error import (
    DomainError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    StoreUnavailableError,
    ValidationError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class MissingClientIdError(InterfaceError):
    """Mutating request without an ``X-Client-Id`` header."""

    pass


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error onto the matching HTTP status."""
    if isinstance(error, ValidationError):
        return HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ForbiddenError):
        return HTTPException(status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, RateLimitedError):
        return HTTPException(
            status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(error),
            headers={"Retry-After": str(math.ceil(error.retry_after))},
        )
    if isinstance(error, StoreUnavailableError):
        return HTTPException(
            status.HTTP_503_SERVICE_UNAVAILABLE, detail="Tag store unavailable"
        )
    return HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(error))
