"""Unit tests for domain to HTTP error mapping."""

import pytest

from graffiti.domain.error import (
    DomainError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    StoreUnavailableError,
    ValidationError,
)
from graffiti.interface.error import to_http_exception


@pytest.mark.parametrize(
    "error,status_code",
    [
        (ValidationError("bad lat"), 400),
        (NotFoundError("Tag", "x"), 404),
        (ForbiddenError("tag", "x", "bob"), 403),
        (RateLimitedError("alice", 2.2), 429),
        (StoreUnavailableError("down"), 503),
        (DomainError("other"), 400),
    ],
)
def test_status_codes(error, status_code):
    assert to_http_exception(error).status_code == status_code


def test_rate_limit_sets_retry_after_rounded_up():
    exc = to_http_exception(RateLimitedError("alice", 2.2))

    assert exc.headers == {"Retry-After": "3"}


def test_store_failure_detail_hides_backend_message():
    exc = to_http_exception(StoreUnavailableError("password=hunter2"))

    assert "hunter2" not in exc.detail
