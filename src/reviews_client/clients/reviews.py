"""Reviews API client.

Endpoints (relative to the configured base URL):
- GET    /api/v1/reviews                 list (product or pending)
- GET    /api/v1/reviews/admin           list everything (admin)
- GET    /api/v1/reviews/{id}
- POST   /api/v1/reviews                 intent=create
- PATCH  /api/v1/reviews/{id}            intent=update
- DELETE /api/v1/reviews/{id}            intent=delete
- POST   /api/v1/reviews/{id}/approve    intent=approve

Every write body carries an `intent` field next to its data; the server relies on it.
Required inputs are checked before anything is sent.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

import requests

from ..config import DEFAULT_USER_AGENT, ClientConfig, Number, get_config
from ..errors import VALIDATION_ERROR, ReviewsError
from ..http import HttpClient, RequestOptions, build_session, request_json
from ..models import (
    CreateReviewData,
    DeleteReviewApiResponse,
    Review,
    ReviewFilters,
    ReviewsApiResponse,
    SingleReviewApiResponse,
    UpdateReviewData,
)


REVIEWS_PATH = "/api/v1/reviews"


def _require(value: Any, message: str, details: str) -> None:
    if not value:
        raise ReviewsError(message, VALIDATION_ERROR, details)


def _require_review_id(review_id: str) -> None:
    _require(review_id, "Review ID is required", "Please provide a valid review ID")


def _list_params(filters: ReviewFilters, *, default_limit: int) -> Dict[str, str]:
    return {
        "page": str(filters.page or 1),
        "limit": str(filters.limit or default_limit),
        "sortBy": filters.sort_by or "submittedAt",
        "sortOrder": filters.sort_order or "desc",
    }


def _add_rating(params: Dict[str, str], filters: ReviewFilters) -> None:
    # Ratings start at 1, so 0 means "no filter", the same as "all".
    if filters.rating and filters.rating != "all":
        params["exactRating"] = str(filters.rating)


def _write(method: str, payload: Dict[str, Any]) -> RequestOptions:
    return RequestOptions(method=method, body=json.dumps(payload))


class ReviewsClient:
    """Typed client for the product reviews REST API."""

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: Optional[str],
        timeout_ms: Optional[Number] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = ClientConfig.create(
            api_key=api_key,
            base_url=base_url,
            timeout_ms=timeout_ms,
            user_agent=user_agent,
        )
        self.http = HttpClient(
            session=session or build_session(user_agent=self.config.user_agent),
            config=self.config,
        )

    @classmethod
    def from_env(cls, *, session: Optional[requests.Session] = None) -> "ReviewsClient":
        cfg = get_config()
        return cls(
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout_ms=cfg.timeout_ms,
            user_agent=cfg.user_agent,
            session=session,
        )

    def _review_path(self, review_id: str, suffix: str = "") -> str:
        return f"{REVIEWS_PATH}/{quote(str(review_id), safe='')}{suffix}"

    # --- reads ---------------------------------------------------------------

    def get_by_product(self, product_id: str, filters: Optional[ReviewFilters] = None) -> ReviewsApiResponse:
        """List approved reviews for a product (newest first, 5 per page by default)."""

        _require(product_id, "Product ID is required", "Please provide a valid product ID")
        filters = filters or ReviewFilters()

        params = {"productId": str(product_id)}
        params.update(_list_params(filters, default_limit=5))
        params["isApproved"] = "true"
        _add_rating(params, filters)

        return request_json(self.http, f"{REVIEWS_PATH}?{urlencode(params)}")  # type: ignore[return-value]

    def get_by_id(self, review_id: str) -> SingleReviewApiResponse:
        _require_review_id(review_id)
        return request_json(self.http, self._review_path(review_id))  # type: ignore[return-value]

    def get_all(self, filters: Optional[ReviewFilters] = None) -> ReviewsApiResponse:
        """Admin listing: every review, approved or not."""

        filters = filters or ReviewFilters()
        params = _list_params(filters, default_limit=10)
        _add_rating(params, filters)
        return request_json(self.http, f"{REVIEWS_PATH}/admin?{urlencode(params)}")  # type: ignore[return-value]

    def get_pending(self, filters: Optional[ReviewFilters] = None) -> ReviewsApiResponse:
        """Admin listing of reviews waiting for approval. The rating filter is not applied."""

        filters = filters or ReviewFilters()
        params = _list_params(filters, default_limit=10)
        params["isApproved"] = "false"
        return request_json(self.http, f"{REVIEWS_PATH}?{urlencode(params)}")  # type: ignore[return-value]

    # --- writes --------------------------------------------------------------

    def create(self, data: CreateReviewData) -> SingleReviewApiResponse:
        _require(data.product_id, "Product ID is required", "Please provide a valid product ID")
        _require(data.customer_name, "Customer name is required", "Please provide a customer name")
        _require(data.rating, "Rating is required", "Please provide a rating")

        payload = data.to_payload()
        payload["intent"] = "create"
        return request_json(self.http, REVIEWS_PATH, _write("POST", payload))  # type: ignore[return-value]

    def update(self, review_id: str, data: UpdateReviewData) -> SingleReviewApiResponse:
        _require_review_id(review_id)
        payload = data.to_payload()
        _require(
            any(v != "" for v in payload.values()),
            "Update data is required",
            "Please provide at least one field to update",
        )

        payload["intent"] = "update"
        return request_json(self.http, self._review_path(review_id), _write("PATCH", payload))  # type: ignore[return-value]

    def delete(self, review_id: str) -> DeleteReviewApiResponse:
        _require_review_id(review_id)
        return request_json(  # type: ignore[return-value]
            self.http, self._review_path(review_id), _write("DELETE", {"intent": "delete"})
        )

    def approve(self, review_id: str) -> SingleReviewApiResponse:
        """Admin operation: mark a review as approved."""

        _require_review_id(review_id)
        return request_json(  # type: ignore[return-value]
            self.http, self._review_path(review_id, "/approve"), _write("POST", {"intent": "approve"})
        )

    # --- parsing -------------------------------------------------------------

    @staticmethod
    def parse_review(payload: Dict[str, Any]) -> Review:
        """Build a Review from either a raw review dict or a single-review envelope."""

        raw = payload
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("review"), dict):
            raw = data["review"]

        return Review(
            id=str(raw.get("id", "")),
            product_id=str(raw.get("productId", "")),
            rating=float(raw["rating"]) if raw.get("rating") is not None else 0.0,
            title=raw.get("title") or "",
            description=raw.get("description") or "",
            customer_name=raw.get("customerName") or "",
            is_approved=bool(raw.get("isApproved", False)),
            submitted_at=raw.get("submittedAt") or "",
            created_at=raw.get("createdAt") or "",
            updated_at=raw.get("updatedAt") or "",
            customer_email=raw.get("customerEmail"),
            customer_id=raw.get("customerId"),
        )

    @staticmethod
    def parse_reviews(payload: Dict[str, Any]) -> List[Review]:
        """Extract the reviews of a list envelope."""

        data = payload.get("data", {})
        if not isinstance(data, dict):
            return []
        reviews = data.get("reviews", [])
        if not isinstance(reviews, list):
            return []
        return [ReviewsClient.parse_review(r) for r in reviews if isinstance(r, dict)]
