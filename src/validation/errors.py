"""Exceptions raised by request validators."""
from __future__ import annotations

from typing import Dict, List

__all__ = ["ValidationError"]


class ValidationError(Exception):
    """Raised when incoming payload validation fails."""

    def __init__(self, errors: Dict[str, List[str]], message: str = "Validation failed."):
        super().__init__(message)
        self.errors = errors
        self.message = message
