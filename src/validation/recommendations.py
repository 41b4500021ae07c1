"""Normalisation of the query string accepted by the recommendation listing.

Query-string values reach the service weakly typed: strings from HTTP,
native booleans and numbers when the service is called programmatically.
:func:`normalize_recommendation_query` coerces them into a
:class:`RecommendationQuery` and then range-checks the page size.

Coercion never fails on its own. ``isRead`` is ``True`` only for the exact
string ``"true"`` (``"True"``, ``"1"`` and every other string give ``False``).
An unparseable ``limit`` becomes NaN and is rejected by the same check, and
with the same message, as an out-of-range one.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from .errors import ValidationError

__all__ = [
    "DEFAULT_LIMIT",
    "LIMIT_ERROR_MESSAGE",
    "MAX_LIMIT",
    "RecommendationQuery",
    "RecommendationQueryError",
    "normalize_recommendation_query",
]

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
LIMIT_ERROR_MESSAGE = "Limit must be a number from 1 to 100"

_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

Number = Union[int, float]


class RecommendationQueryError(ValidationError):
    """Raised when a recommendation listing query fails validation."""

    def __init__(self, field: str, detail: str) -> None:
        super().__init__({field: [detail]})
        self.field = field
        self.detail = detail


@dataclass(frozen=True)
class RecommendationQuery:
    """Validated filters for listing a user's recommendations."""

    is_read: Optional[bool] = None
    limit: Number = DEFAULT_LIMIT

    @property
    def page_size(self) -> int:
        # Fractional limits are accepted; the store only takes whole rows.
        return int(self.limit)

    def as_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"limit": self.limit}
        if self.is_read is not None:
            params["isRead"] = self.is_read
        return params


def normalize_recommendation_query(raw: Optional[Mapping[str, Any]]) -> RecommendationQuery:
    """Coerce and validate raw ``isRead``/``limit`` parameters.

    Unknown keys are ignored; a missing key and ``None`` both mean absent.
    Raises :class:`RecommendationQueryError` on the ``limit`` field when the
    coerced limit is not a number in ``(0, 100]``.
    """

    raw = raw or {}
    is_read = _coerce_is_read(raw.get("isRead"))
    limit = _validate_limit(_coerce_limit(raw.get("limit")))
    return RecommendationQuery(is_read=is_read, limit=limit)


def _coerce_is_read(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return value == "true"


def _coerce_limit(value: Any) -> Number:
    if value is None:
        return DEFAULT_LIMIT
    # bool is an int subclass but never a valid page size.
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL_PATTERN.match(text):
            return float(text)
    return math.nan


def _validate_limit(value: Number) -> Number:
    if (isinstance(value, float) and math.isnan(value)) or not 0 < value <= MAX_LIMIT:
        raise RecommendationQueryError("limit", LIMIT_ERROR_MESSAGE)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
