"""
Field validation: pydantic form schemas and per-type pattern rules.
"""

import re
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from config.security_config import SECURITY_CONFIG, InputValidationConfig
from formguard.errors import InternalFault, PatternMismatch
from formguard.input.sanitizer import InputSanitizer
from formguard.logging.security_logger import SecurityLogger


class FieldType(str, Enum):
    """Semantic type of a form field; selects the validation rule."""
    EMAIL = "email"
    PHONE = "phone"
    NAME = "name"
    TEXT = "text"
    GENERIC = "generic"

    @classmethod
    def coerce(cls, value: Union["FieldType", str, None]) -> "FieldType":
        """Map a type name to a FieldType; unknown names become GENERIC."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.GENERIC


class FormField(BaseModel):
    """Schema for one submitted form control."""

    name: str = ""
    value: Any = Field(default="", description="Raw value; non-strings sanitize to an empty string")
    kind: str = Field(default="text", description="Control kind, e.g. email, tel, textarea")
    placeholder: str = ""
    required: bool = False
    field_type: Optional[FieldType] = Field(
        default=None,
        description="Explicit semantic type; when absent it is inferred from kind/name/placeholder"
    )

    @field_validator('kind')
    @classmethod
    def normalize_kind(cls, v: str) -> str:
        return v.strip().lower() or "text"

    @field_validator('field_type', mode='before')
    @classmethod
    def coerce_field_type(cls, v: Any) -> Optional[FieldType]:
        if v is None or v == "":
            return None
        return FieldType.coerce(v)


class FormSubmission(BaseModel):
    """Schema for a whole form submission."""

    form_id: str = Field(..., min_length=1)
    client_signature: Optional[str] = Field(
        default=None,
        description="Coarse client identity, e.g. a user agent; absent clients share one rate-limit key"
    )
    fields: List[FormField] = Field(default_factory=list)


class InputValidator:
    """
    Classifies sanitized values against the rule of their FieldType.

    ``validate`` never raises; ``ensure_valid`` raises PatternMismatch so
    callers can attach a message to the failing field.
    """

    EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

    def __init__(
        self,
        sanitizer: Optional[InputSanitizer] = None,
        config: Optional[InputValidationConfig] = None,
        logger: Optional[SecurityLogger] = None
    ):
        self.logger = logger or SecurityLogger()
        self.sanitizer = sanitizer or InputSanitizer(logger=self.logger)
        self.config = config or SECURITY_CONFIG.input_validation

        self.phone_pattern = re.compile(
            r"\+?[0-9\s\-()]{%d,%d}" % (self.config.phone_min_length, self.config.phone_max_length)
        )
        self.name_pattern = re.compile(
            r"[a-zA-ZÀ-ÿ\s\-']{%d,%d}" % (self.config.name_min_length, self.config.name_max_length)
        )

    def validate(self, value: Any, field_type: Union[FieldType, str] = FieldType.TEXT,
                 form_id: str = "unknown") -> bool:
        """
        Check a raw value against the rule of a field type.

        Returns:
            True if the sanitized value is acceptable, False otherwise
            (including on any internal error)
        """
        try:
            self.ensure_valid(value, field_type, form_id=form_id)
            return True
        except PatternMismatch:
            return False
        except Exception as e:
            self.logger.log_internal_fault(form_id, InternalFault("validator", e))
            return False

    def ensure_valid(self, value: Any, field_type: Union[FieldType, str] = FieldType.TEXT,
                     field_name: Optional[str] = None, form_id: str = "unknown") -> str:
        """
        Sanitize a value and check it against the rule of a field type.

        Returns:
            The sanitized value

        Raises:
            PatternMismatch: if the sanitized value breaks the rule
        """
        field_type = FieldType.coerce(field_type)
        sanitized = self.sanitizer.sanitize(value, form_id=form_id)

        if not self._matches(sanitized, field_type):
            raise PatternMismatch(field_type.value, field_name)
        return sanitized

    def _matches(self, sanitized: str, field_type: FieldType) -> bool:
        if field_type is FieldType.EMAIL:
            return self.EMAIL_PATTERN.fullmatch(sanitized) is not None
        if field_type is FieldType.PHONE:
            return self.phone_pattern.fullmatch(sanitized) is not None
        if field_type is FieldType.NAME:
            return (
                self.name_pattern.fullmatch(sanitized) is not None
                and len(sanitized) >= self.config.name_min_length
            )
        if field_type is FieldType.TEXT:
            return 0 < len(sanitized) <= self.config.text_max_length
        return len(sanitized) > 0
