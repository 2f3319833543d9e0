"""Shared fixtures: a mocked requests.Session and real requests.Response objects."""

import io
import json
from unittest.mock import Mock

import pytest
import requests

from reviews_client.clients.reviews import ReviewsClient


BASE_URL = "https://api.example.com"
API_KEY = "test-key"


def make_response(status=200, body=None, *, text=None, reason="OK"):
    """Build a requests.Response the way the transport would hand it back."""
    if text is not None:
        content = text.encode("utf-8")
    elif body is not None:
        content = json.dumps(body).encode("utf-8")
    else:
        content = b""

    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.encoding = "utf-8"
    resp._content = content
    resp.raw = io.BytesIO(content)
    return resp


def review_payload(review_id="r1", **overrides):
    review = {
        "id": review_id,
        "productId": "p1",
        "rating": 5,
        "title": "Love it",
        "description": "great",
        "customerName": "Jane",
        "isApproved": True,
        "submittedAt": "2024-06-01T10:00:00Z",
        "createdAt": "2024-06-01T10:00:00Z",
        "updatedAt": "2024-06-01T10:00:00Z",
    }
    review.update(overrides)
    return review


@pytest.fixture
def session():
    mock_session = Mock(spec=requests.Session)
    mock_session.request.return_value = make_response(200, {"success": True, "data": {}, "timestamp": "t"})
    return mock_session


@pytest.fixture
def client(session):
    return ReviewsClient(api_key=API_KEY, base_url=BASE_URL, session=session)


def sent(session):
    """Return (method, url, kwargs) of the single request sent on the mocked session."""
    assert session.request.call_count == 1
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs
