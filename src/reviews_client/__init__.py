"""Typed client for the product reviews REST API.

Usage example:
    from reviews_client import ReviewsClient, ReviewFilters
    client = ReviewsClient(api_key="...", base_url="https://shop.example.com")
    page = client.get_by_product("p1", ReviewFilters(rating=5))
"""
from .clients.reviews import ReviewsClient  # noqa: F401
from .config import ClientConfig, get_config  # noqa: F401
from .errors import ReviewsError  # noqa: F401
from .models import (  # noqa: F401
    ApiReview,
    CreateReviewData,
    DeleteReviewApiResponse,
    Review,
    ReviewFilters,
    ReviewsApiResponse,
    ReviewsErrorResponse,
    SingleReviewApiResponse,
    UpdateReviewData,
)
