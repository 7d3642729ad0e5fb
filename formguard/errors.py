"""
Error taxonomy for the form defense pipeline.

None of these escape a public operation of the core: each one is raised
and caught at the nearest component boundary and turned into a safe
result. ``SubmissionVerdict.raise_for_status`` re-raises them for
callers that prefer exceptions over verdict objects.
"""

from typing import Optional


class FormGuardError(Exception):
    """Base class for all pipeline errors."""

    user_message: str = "Une erreur est survenue."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)


class InputTypeError(FormGuardError, TypeError):
    """A non-string value reached the sanitizer."""

    def __init__(self, value: object):
        self.value_type = type(value).__name__
        super().__init__(f"expected str, got {self.value_type}")


class PatternMismatch(FormGuardError, ValueError):
    """A sanitized value does not satisfy the rule of its field type."""

    def __init__(self, field_type: str, field_name: Optional[str] = None, message: Optional[str] = None):
        self.field_type = field_type
        self.field_name = field_name
        super().__init__(message or f"{field_name or field_type} invalide ou requis")


class RateLimitExceeded(FormGuardError):
    """Too many submission attempts inside the rate-limit window."""

    def __init__(self, retry_after_ms: int = 0, message: Optional[str] = None):
        self.retry_after_ms = retry_after_ms
        super().__init__(message or "Trop de tentatives.")


class InternalFault(FormGuardError):
    """Unexpected failure inside a pipeline component."""

    def __init__(self, component: str, cause: Optional[BaseException] = None):
        self.component = component
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{component} failed{detail}")
