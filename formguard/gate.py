"""
Submission gate - Central orchestrator for form submission checks.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union
from enum import Enum

from pydantic import ValidationError

from config.security_config import SECURITY_CONFIG, SecurityConfig
from formguard.errors import InternalFault, PatternMismatch, RateLimitExceeded
from formguard.forms.field_types import display_name, infer_field_type
from formguard.forms.messages import FormMessages
from formguard.input.sanitizer import InputSanitizer
from formguard.input.validator import FieldType, FormField, FormSubmission, InputValidator
from formguard.input.rate_limiter import RateLimiter
from formguard.logging.security_logger import SecurityLogger, SecurityEventType


class SubmissionReason(Enum):
    """Why a submission was allowed or refused."""
    RATE_LIMITED = "rate_limited"
    VALIDATION_FAILED = "validation_failed"
    ACCEPTED = "accepted"


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of checking one field."""
    is_valid: bool
    sanitized: str
    field_type: FieldType = FieldType.TEXT
    message: Optional[str] = None


@dataclass
class SubmissionVerdict:
    """Aggregate outcome of a form submission."""
    allowed: bool
    reason: SubmissionReason
    field_results: Dict[str, ValidationVerdict] = field(default_factory=dict)
    data: Dict[str, str] = field(default_factory=dict)
    retry_after_ms: int = 0
    message: Optional[str] = None

    @property
    def invalid_fields(self) -> List[str]:
        return [name for name, result in self.field_results.items() if not result.is_valid]

    def raise_for_status(self):
        """
        Raise the matching error if the submission was refused.

        Raises:
            RateLimitExceeded: if the rate limit refused the attempt
            PatternMismatch: if at least one required field failed
        """
        if self.reason is SubmissionReason.RATE_LIMITED:
            raise RateLimitExceeded(self.retry_after_ms, self.message)
        if self.reason is SubmissionReason.VALIDATION_FAILED:
            invalid = self.invalid_fields
            if invalid:
                first = self.field_results[invalid[0]]
                raise PatternMismatch(first.field_type.value, invalid[0], first.message)
            raise PatternMismatch(FieldType.GENERIC.value, message=self.message)


class SubmissionGate:
    """
    Runs a form submission through rate limiting, sanitization and validation.

    Pipeline:
    1. Rate limiting (the whole submission, before any field is looked at)
    2. Per field: sanitization, type inference, validation of required fields
    3. Aggregation into a SubmissionVerdict

    ``evaluate`` never raises.
    """

    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        config: Optional[SecurityConfig] = None,
        logger: Optional[SecurityLogger] = None,
        sanitizer: Optional[InputSanitizer] = None,
        validator: Optional[InputValidator] = None
    ):
        self.config = config or SECURITY_CONFIG
        self.logger = logger or SecurityLogger(self.config.logging)

        # Initialize components
        self.rate_limiter = rate_limiter or RateLimiter(self.config.rate_limit, logger=self.logger)
        self.sanitizer = sanitizer or InputSanitizer(logger=self.logger)
        self.validator = validator or InputValidator(
            sanitizer=self.sanitizer,
            config=self.config.input_validation,
            logger=self.logger
        )

    def evaluate(self, form: Union[FormSubmission, Mapping[str, Any]]) -> SubmissionVerdict:
        """
        Evaluate a form submission.

        Args:
            form: FormSubmission or a mapping with the same shape

        Returns:
            SubmissionVerdict with per-field results
        """
        try:
            submission = form if isinstance(form, FormSubmission) else FormSubmission.model_validate(form)
        except ValidationError as e:
            # error locations only; pydantic messages echo the submitted values
            self.logger.log_event(
                event_type=SecurityEventType.SUBMISSION_BLOCKED,
                form_id="unknown",
                details={"reason": "malformed_form", "errors": [list(err["loc"]) for err in e.errors()]},
                severity="warning"
            )
            return SubmissionVerdict(allowed=False, reason=SubmissionReason.VALIDATION_FAILED)

        form_id = submission.form_id
        try:
            return self._evaluate(submission)
        except Exception as e:
            self.logger.log_internal_fault(form_id, InternalFault("submission_gate", e))
            return SubmissionVerdict(allowed=False, reason=SubmissionReason.VALIDATION_FAILED)

    def _evaluate(self, submission: FormSubmission) -> SubmissionVerdict:
        form_id = submission.form_id

        self.logger.log_event(
            event_type=SecurityEventType.SUBMISSION_START,
            form_id=form_id,
            details={"field_count": len(submission.fields)}
        )

        # 1. Rate limiting
        status = self.rate_limiter.check(form_id, submission.client_signature)
        if not status.is_allowed:
            self.logger.log_submission_gate(form_id, False, SubmissionReason.RATE_LIMITED.value)
            return SubmissionVerdict(
                allowed=False,
                reason=SubmissionReason.RATE_LIMITED,
                retry_after_ms=status.retry_after_ms,
                message=FormMessages.rate_limited(self.rate_limiter.config.window_ms)
            )

        # 2. Field checks
        results: Dict[str, ValidationVerdict] = {}
        data: Dict[str, str] = {}
        all_valid = True

        for form_field in submission.fields:
            name = display_name(form_field)
            result = self._check_field(form_field, name, form_id)
            if result is None:
                continue
            # same-named controls (radio groups, unnamed textareas) keep one result each
            key = name
            position = 2
            while key in results:
                key = f"{name}#{position}"
                position += 1
            results[key] = result
            if result.is_valid:
                data[key] = result.sanitized
            else:
                all_valid = False

        # 3. Aggregate
        reason = SubmissionReason.ACCEPTED if all_valid else SubmissionReason.VALIDATION_FAILED
        verdict = SubmissionVerdict(
            allowed=all_valid,
            reason=reason,
            field_results=results,
            data=data
        )
        self.logger.log_submission_gate(form_id, all_valid, reason.value, verdict.invalid_fields)
        return verdict

    def _check_field(self, form_field: FormField, name: str, form_id: str) -> Optional[ValidationVerdict]:
        """Check one field; None means the field is skipped (optional and empty)."""
        field_type = FieldType.TEXT
        sanitized = ""
        try:
            field_type = infer_field_type(form_field, self.validator.config.name_hint_keywords)
            raw = form_field.value if form_field.value is not None else ""
            sanitized = self.sanitizer.sanitize(raw, form_id=form_id)

            if not form_field.required:
                if not sanitized:
                    return None
                return ValidationVerdict(is_valid=True, sanitized=sanitized, field_type=field_type)

            self.validator.ensure_valid(sanitized, field_type, field_name=name, form_id=form_id)
            return ValidationVerdict(
                is_valid=True,
                sanitized=sanitized,
                field_type=field_type,
                message=FormMessages.FIELD_VALID
            )
        except PatternMismatch:
            self.logger.log_event(
                event_type=SecurityEventType.VALIDATION_FAILED,
                form_id=form_id,
                details={"field": name, "field_type": field_type.value},
                severity="warning"
            )
        except Exception as e:
            self.logger.log_internal_fault(form_id, InternalFault("submission_gate", e))

        return ValidationVerdict(
            is_valid=False,
            sanitized=sanitized,
            field_type=field_type,
            message=FormMessages.field_invalid(name)
        )
