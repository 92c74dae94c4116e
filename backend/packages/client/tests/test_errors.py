"""Tests for client error classification and retry policy."""

import pytest

from marquee_client import ApiError, ClientErrorKind, Recovery, RetryPolicy, recovery_for


@pytest.mark.parametrize(
    ("code", "status", "kind", "recovery"),
    [
        ("NETWORK_ERROR", 0, ClientErrorKind.NETWORK, Recovery.RETRY),
        ("TIMEOUT_ERROR", 0, ClientErrorKind.TIMEOUT, Recovery.RETRY),
        ("INVALID_ENTRY_DATA", 400, ClientErrorKind.VALIDATION, Recovery.FIX_INPUT),
        ("HTTP_422", 422, ClientErrorKind.VALIDATION, Recovery.FIX_INPUT),
        ("ENTRY_NOT_FOUND", 404, ClientErrorKind.NOT_FOUND, Recovery.REFRESH_LIST),
        ("INVALID_CURSOR", 400, ClientErrorKind.STALE_CURSOR, Recovery.REFRESH_LIST),
        ("DUPLICATE_ENTRY", 409, ClientErrorKind.CONFLICT, Recovery.FIX_INPUT),
        ("RATE_LIMIT_EXCEEDED", 429, ClientErrorKind.RATE_LIMITED, Recovery.WAIT),
        ("FETCH_ENTRIES_ERROR", 500, ClientErrorKind.SERVER, Recovery.REPORT),
        ("HTTP_418", 418, ClientErrorKind.UNKNOWN, Recovery.REPORT),
    ],
)
def test_classification(code, status, kind, recovery):
    error = ApiError("message", code, status)

    assert error.kind is kind
    assert recovery_for(error) is recovery


def test_recovery_for_foreign_exception():
    assert recovery_for(RuntimeError("boom")) is Recovery.REPORT


def test_backoff_is_capped():
    policy = RetryPolicy()

    assert [policy.delay(n) for n in range(7)] == [1.0, 2.0, 4.0, 8.0, 16.0, 30.0, 30.0]


@pytest.mark.parametrize(
    ("code", "status", "expected"),
    [
        ("NETWORK_ERROR", 0, True),
        ("TIMEOUT_ERROR", 0, True),
        ("HTTP_503", 503, True),
        ("RATE_LIMIT_EXCEEDED", 429, True),
        ("HTTP_422", 422, False),
        ("INVALID_QUERY_PARAMS", 400, False),
        ("ENTRY_NOT_FOUND", 404, False),
    ],
)
def test_should_retry(code, status, expected):
    assert RetryPolicy().should_retry(ApiError("m", code, status), 0) is expected


def test_should_retry_stops_at_limit():
    error = ApiError("m", "NETWORK_ERROR", 0)
    policy = RetryPolicy(max_retries=2)

    assert policy.should_retry(error, 1) is True
    assert policy.should_retry(error, 2) is False
