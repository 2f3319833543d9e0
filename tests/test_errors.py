"""Tests for the status and transport classifiers."""

import pytest
import requests
from urllib3.exceptions import ReadTimeoutError

from reviews_client import errors
from reviews_client.errors import ReviewsError, raise_for_status, raise_for_transport


@pytest.mark.parametrize(
    "status, code, detail",
    [
        (404, errors.NOT_FOUND, "The requested resource was not found"),
        (400, errors.VALIDATION_ERROR, "Invalid request data"),
        (403, errors.PERMISSION_ERROR, "Insufficient permissions for this operation"),
        (409, errors.CONFLICT_ERROR, "Resource conflict occurred"),
        (429, errors.RATE_LIMIT_ERROR, "Too many requests. Please try again later."),
        (500, errors.SERVER_ERROR, "Reviews service is temporarily unavailable"),
        (503, errors.SERVER_ERROR, "Reviews service is temporarily unavailable"),
        (418, errors.HTTP_ERROR, "Unknown API error"),
        (302, errors.HTTP_ERROR, "Unknown API error"),
    ],
)
def test_status_mapping_defaults(status, code, detail):
    with pytest.raises(ReviewsError) as info:
        raise_for_status(status, None)
    assert info.value.code == code
    assert info.value.status == status
    assert info.value.details == detail


def test_authentication_error_uses_body_message():
    with pytest.raises(ReviewsError) as info:
        raise_for_status(401, {"error": {"message": "token expired"}})
    assert info.value.code == errors.AUTHENTICATION_ERROR
    assert info.value.status == 401
    assert info.value.details == "token expired"


def test_authentication_error_default_detail():
    with pytest.raises(ReviewsError) as info:
        raise_for_status(401, None)
    assert info.value.code == errors.AUTHENTICATION_ERROR
    assert info.value.details == "Check your API key configuration"


def test_body_message_overrides_detail():
    body = {"error": {"code": "NOT_FOUND", "message": "no such review", "timestamp": "t", "path": "/x"}}
    with pytest.raises(ReviewsError) as info:
        raise_for_status(404, body)
    assert info.value.code == errors.NOT_FOUND
    assert info.value.status == 404
    assert info.value.details == "no such review"


@pytest.mark.parametrize("body", [None, [], "oops", {"error": "flat"}, {"error": {"message": ""}}])
def test_malformed_error_body_falls_back(body):
    with pytest.raises(ReviewsError) as info:
        raise_for_status(409, body)
    assert info.value.details == "Resource conflict occurred"


def test_generic_http_error_message_uses_reason():
    with pytest.raises(ReviewsError) as info:
        raise_for_status(418, None, "I'm a teapot")
    assert info.value.message == "HTTP 418: I'm a teapot"


def test_timeout_classified():
    exc = requests.Timeout("read timed out")
    with pytest.raises(ReviewsError) as info:
        raise_for_transport(exc)
    assert info.value.code == errors.TIMEOUT_ERROR
    assert info.value.cause is exc
    assert info.value.__cause__ is exc
    assert info.value.status is None


def test_connect_timeout_is_a_timeout():
    with pytest.raises(ReviewsError) as info:
        raise_for_transport(requests.exceptions.ConnectTimeout("connect timed out"))
    assert info.value.code == errors.TIMEOUT_ERROR


def test_body_read_timeout_is_a_timeout():
    # requests re-raises a read timeout during the body download as a ConnectionError.
    exc = requests.ConnectionError(ReadTimeoutError(None, "http://api.example.com", "Read timed out."))
    with pytest.raises(ReviewsError) as info:
        raise_for_transport(exc)
    assert info.value.code == errors.TIMEOUT_ERROR
    assert info.value.cause is exc


def test_failure_after_deadline_is_a_timeout():
    exc = requests.exceptions.ChunkedEncodingError("Connection broken: IncompleteRead")
    with pytest.raises(ReviewsError) as info:
        raise_for_transport(exc, deadline_passed=True)
    assert info.value.code == errors.TIMEOUT_ERROR


def test_connection_error_classified():
    with pytest.raises(ReviewsError) as info:
        raise_for_transport(requests.ConnectionError("connection refused"))
    assert info.value.code == errors.NETWORK_ERROR


def test_unknown_transport_error_keeps_message():
    exc = requests.exceptions.InvalidURL("bad url")
    with pytest.raises(ReviewsError) as info:
        raise_for_transport(exc)
    assert info.value.code == errors.UNKNOWN_ERROR
    assert info.value.details == "bad url"
    assert info.value.cause is exc


def test_structured_error_passes_through():
    original = ReviewsError("Bad request", errors.VALIDATION_ERROR, "x", 400)
    with pytest.raises(ReviewsError) as info:
        raise_for_transport(original)
    assert info.value is original


def test_str_includes_code_and_details():
    err = ReviewsError("Resource not found", errors.NOT_FOUND, "no such review", 404)
    assert str(err) == "NOT_FOUND: Resource not found (no such review)"
    assert str(ReviewsError("Boom", errors.UNKNOWN_ERROR)) == "UNKNOWN_ERROR: Boom"
