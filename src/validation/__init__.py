"""Request validation helpers shared by the routes and services."""
from __future__ import annotations

from .errors import ValidationError
from .recommendations import (
    DEFAULT_LIMIT,
    LIMIT_ERROR_MESSAGE,
    RecommendationQuery,
    RecommendationQueryError,
    normalize_recommendation_query,
)

__all__ = [
    "DEFAULT_LIMIT",
    "LIMIT_ERROR_MESSAGE",
    "RecommendationQuery",
    "RecommendationQueryError",
    "ValidationError",
    "normalize_recommendation_query",
]
