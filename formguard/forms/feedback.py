"""
Live feedback for the email field while the visitor is typing.
"""

from dataclasses import dataclass
from typing import Optional

from formguard.forms.messages import FormMessages
from formguard.input.validator import FieldType, InputValidator


@dataclass(frozen=True)
class FieldFeedback:
    """Message to show under a field and the border cue that goes with it."""
    message: str
    is_valid: bool

    @property
    def border_color(self) -> str:
        return "#10b981" if self.is_valid else "#ef4444"


class EmailFeedback:
    """
    Computes the advisory message for an email input on input and blur events.

    A ``None`` result means any existing message and border cue are cleared.
    """

    def __init__(self, validator: Optional[InputValidator] = None):
        self.validator = validator or InputValidator()

    def on_input(self, value: str) -> Optional[FieldFeedback]:
        email = (value or "").strip()
        if not email:
            return None
        if self.validator.validate(email, FieldType.EMAIL):
            return FieldFeedback(FormMessages.EMAIL_VALID, True)
        return FieldFeedback(FormMessages.EMAIL_INVALID, False)

    def on_blur(self, value: str) -> Optional[FieldFeedback]:
        """Only complains; a valid or empty value leaves the current message as is."""
        email = (value or "").strip()
        if email and not self.validator.validate(email, FieldType.EMAIL):
            return FieldFeedback(FormMessages.EMAIL_FORMAT_HINT, False)
        return None
