"""Validators for quote consistency and sales-response screening."""

from .consistency_checker import ConsistencyChecker, validate_consistency
from .response_validator import ResponseValidator, validate_response

__all__ = [
    "ConsistencyChecker",
    "validate_consistency",
    "ResponseValidator",
    "validate_response",
]
