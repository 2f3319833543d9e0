"""Request inputs and response shapes for the reviews API.

The `TypedDict`s describe the JSON the server returns (camelCase, as on the wire).
Operations return those envelopes unchanged; `Review` is an optional snake_case view
of a single review, built with `ReviewsClient.parse_review`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, TypedDict, Union


Rating = Union[int, float, str]
RatingFilter = Union[int, float, Literal["all"]]
SortBy = Literal["submittedAt", "rating"]
SortOrder = Literal["asc", "desc"]


# --- wire shapes -------------------------------------------------------------

class _ApiReviewRequired(TypedDict):
    id: str
    productId: str
    rating: float
    title: str
    description: str
    customerName: str
    isApproved: bool
    submittedAt: str
    createdAt: str
    updatedAt: str


class ApiReview(_ApiReviewRequired, total=False):
    customerEmail: str
    customerId: str


class ReviewsPage(TypedDict):
    reviews: List[ApiReview]
    totalCount: int
    totalPages: int
    currentPage: int


class ReviewsApiResponse(TypedDict):
    success: bool
    data: ReviewsPage
    timestamp: str


class SingleReviewData(TypedDict):
    review: ApiReview


class SingleReviewApiResponse(TypedDict):
    success: bool
    data: SingleReviewData
    timestamp: str


class DeleteReviewData(TypedDict):
    deleted: bool
    reviewId: str


class DeleteReviewApiResponse(TypedDict):
    success: bool
    data: DeleteReviewData
    timestamp: str


class ErrorBody(TypedDict, total=False):
    code: str
    message: str
    details: str
    timestamp: str
    path: str


class ReviewsErrorResponse(TypedDict):
    error: ErrorBody


# --- inputs ------------------------------------------------------------------

@dataclass(frozen=True)
class ReviewFilters:
    """Listing filters. Anything left as None falls back to the operation's default."""

    rating: Optional[RatingFilter] = None
    sort_by: Optional[SortBy] = None
    sort_order: Optional[SortOrder] = None
    page: Optional[int] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class CreateReviewData:
    product_id: str
    customer_name: str
    rating: Rating
    description: str = ""
    product_handle: Optional[str] = None
    title: Optional[str] = None
    customer_email: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "productId": self.product_id,
            "customerName": self.customer_name,
            "rating": self.rating,
            "description": self.description,
        }
        optional = {
            "productHandle": self.product_handle,
            "title": self.title,
            "customerEmail": self.customer_email,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        return payload


@dataclass(frozen=True)
class UpdateReviewData:
    rating: Optional[Rating] = None
    title: Optional[str] = None
    description: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        fields = {"rating": self.rating, "title": self.title, "description": self.description}
        return {k: v for k, v in fields.items() if v is not None}


# --- parsed view -------------------------------------------------------------

@dataclass(frozen=True)
class Review:
    """A review as returned by the server. Read-only on the client side."""

    id: str
    product_id: str
    rating: float
    title: str
    description: str
    customer_name: str
    is_approved: bool
    submitted_at: str
    created_at: str
    updated_at: str
    customer_email: Optional[str] = None
    customer_id: Optional[str] = None
