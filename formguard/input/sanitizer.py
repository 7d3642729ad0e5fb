"""
Input sanitization: HTML-significant character escaping for form values.
"""

import re
from typing import Any, Optional

from formguard.errors import InputTypeError, InternalFault
from formguard.logging.security_logger import SecurityLogger, SecurityEventType


class InputSanitizer:
    """
    Escapes ``< > " ' &`` into named character references and trims whitespace.

    ``sanitize`` fails closed: anything that is not a string, and any
    unexpected failure, yields an empty string.
    """

    ESCAPE_MAP = {
        '<': '&lt;',
        '>': '&gt;',
        '"': '&quot;',
        "'": '&#x27;',
        '&': '&amp;',
    }

    # An ampersand that already opens one of our own references is left alone,
    # so sanitizing twice gives the same result as sanitizing once.
    ESCAPE_PATTERN = re.compile(r"""[<>"']|&(?!(?:lt|gt|quot|amp|#x27);)""")

    # Leading and trailing whitespace, including the byte order mark.
    TRIM_PATTERN = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")

    def __init__(self, logger: Optional[SecurityLogger] = None):
        self.logger = logger or SecurityLogger()

    def sanitize(self, value: Any, form_id: str = "unknown") -> str:
        """
        Sanitize a raw field value.

        Args:
            value: Raw value as submitted
            form_id: Form identifier for logging

        Returns:
            The escaped, trimmed string, or "" for non-string input
        """
        try:
            sanitized = self._escape(value)
        except InputTypeError as e:
            self.logger.log_event(
                event_type=SecurityEventType.INPUT_TYPE_REJECTED,
                form_id=form_id,
                details={"value_type": e.value_type},
                severity="debug"
            )
            return ""
        except Exception as e:
            self.logger.log_internal_fault(form_id, InternalFault("sanitizer", e))
            return ""

        if sanitized != value:
            self.logger.log_event(
                event_type=SecurityEventType.INPUT_SANITIZED,
                form_id=form_id,
                details={"original_length": len(value), "sanitized_length": len(sanitized)},
                severity="debug"
            )
        return sanitized

    def _escape(self, value: Any) -> str:
        if not isinstance(value, str):
            raise InputTypeError(value)
        escaped = self.ESCAPE_PATTERN.sub(lambda m: self.ESCAPE_MAP[m.group(0)], value)
        return self.TRIM_PATTERN.sub("", escaped)

    def is_clean(self, value: Any) -> bool:
        """
        Check whether a value is already in sanitized form.

        Args:
            value: Value to check

        Returns:
            True if sanitizing it would not change it
        """
        if not isinstance(value, str):
            return False
        return self._escape(value) == value
