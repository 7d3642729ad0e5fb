"""Input defense modules: sanitization, validation, and rate limiting."""

from .sanitizer import InputSanitizer
from .validator import InputValidator, FieldType, FormField, FormSubmission
from .rate_limiter import RateLimiter, RateLimitStatus, AttemptLog

__all__ = [
    "InputSanitizer",
    "InputValidator",
    "FieldType",
    "FormField",
    "FormSubmission",
    "RateLimiter",
    "RateLimitStatus",
    "AttemptLog"
]
