"""Page-side helpers fed by the submission gate: messages, feedback, and simulated sending."""

from .messages import FormMessages
from .field_types import infer_field_type, display_name
from .feedback import EmailFeedback, FieldFeedback
from .submission import SimulatedSubmitter, SubmitButtonState
from .dates import format_display_date, current_year

__all__ = [
    "FormMessages",
    "infer_field_type",
    "display_name",
    "EmailFeedback",
    "FieldFeedback",
    "SimulatedSubmitter",
    "SubmitButtonState",
    "format_display_date",
    "current_year"
]
