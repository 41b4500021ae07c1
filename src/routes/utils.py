"""Shared route utilities."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import jsonify, request

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error. Please try again later."


def error_response(status: int, message: str, details: Optional[Mapping[str, Any]] = None):
    payload = {"error": {"code": status, "message": message}}
    if details is not None:
        payload["error"]["details"] = dict(details)
    return jsonify(payload), status


def internal_error_response(error: BaseException):
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.path,
        exc_info=(type(error), error, error.__traceback__),
    )
    return error_response(500, INTERNAL_ERROR_MESSAGE)
