"""
Structured security event logging for the form defense pipeline.
"""

import json
import hashlib
import logging
from datetime import datetime, timezone
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict, Any
from pathlib import Path

from config.security_config import SECURITY_CONFIG, LoggingConfig
from formguard.errors import InternalFault


class SecurityEventType(Enum):
    """Types of security events."""
    # Input events
    INPUT_SANITIZED = "input_sanitized"
    INPUT_TYPE_REJECTED = "input_type_rejected"
    VALIDATION_FAILED = "validation_failed"

    # Rate limiting
    RATE_LIMIT = "rate_limit"

    # Faults absorbed at a component boundary
    INTERNAL_FAULT = "internal_fault"

    # Submission events
    SUBMISSION_START = "submission_start"
    SUBMISSION_ACCEPTED = "submission_accepted"
    SUBMISSION_BLOCKED = "submission_blocked"
    SUBMISSION_COMPLETED = "submission_completed"

    # Navigation
    NAVIGATION_CHANGED = "navigation_changed"


@dataclass
class SecurityEvent:
    """Structured security event for logging."""
    timestamp: str
    event_type: str
    form_id: str
    severity: str
    details: Dict[str, Any]
    input_hash: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


class SecurityLogger:
    """
    Structured security logger emitting one JSON line per event.
    """

    LOGGER_NAME = "formguard"

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or SECURITY_CONFIG.logging
        self._logger = None
        self._setup_logger()

    def _setup_logger(self):
        """Set up the Python logger."""
        self._logger = logging.getLogger(self.LOGGER_NAME)
        self._logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))

        # Avoid duplicate handlers
        if self._logger.handlers:
            return

        formatter = logging.Formatter('%(message)s')

        if self.config.enable_console_logging:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.DEBUG)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

        if not self.config.log_file:
            return

        try:
            log_dir = Path(self.config.log_file).parent
            log_dir.mkdir(parents=True, exist_ok=True)

            from logging.handlers import RotatingFileHandler
            file_handler = RotatingFileHandler(
                self.config.log_file,
                maxBytes=self.config.max_log_size_mb * 1024 * 1024,
                backupCount=self.config.backup_count,
                encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)
        except OSError:
            # If file logging fails, continue with console only
            self._logger.warning("file logging disabled: cannot open %s", self.config.log_file)

    def log_event(
        self,
        event_type: SecurityEventType,
        form_id: str,
        details: Optional[Dict[str, Any]] = None,
        severity: str = "info",
        input_text: Optional[str] = None
    ):
        """
        Log a security event.

        Args:
            event_type: Type of security event
            form_id: Form identifier the event belongs to
            details: Additional event details
            severity: Event severity (debug, info, warning, error)
            input_text: Optional raw input (only its hash is logged)
        """
        input_hash = None
        if input_text and self.config.hash_sensitive_data:
            input_hash = self.hash_value(input_text)

        event = SecurityEvent(
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            event_type=event_type.value,
            form_id=form_id,
            severity=severity,
            details=details or {},
            input_hash=input_hash
        )

        log_method = getattr(self._logger, severity.lower(), self._logger.info)
        log_method(event.to_json())

    @staticmethod
    def hash_value(text: str) -> str:
        """
        Create a hash of a value for logging without exposing content.

        Returns:
            SHA-256 hash prefix
        """
        return hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]

    def log_rate_limit(
        self,
        form_id: str,
        rate_key: str,
        retry_after_ms: int
    ):
        """Log a rate limit denial."""
        self.log_event(
            event_type=SecurityEventType.RATE_LIMIT,
            form_id=form_id,
            details={
                "key_hash": self.hash_value(rate_key),
                "retry_after_ms": retry_after_ms
            },
            severity="warning"
        )

    def log_internal_fault(
        self,
        form_id: str,
        fault: InternalFault
    ):
        """Log a fault that was absorbed at a component boundary."""
        cause = fault.cause if fault.cause is not None else fault
        self.log_event(
            event_type=SecurityEventType.INTERNAL_FAULT,
            form_id=form_id,
            details={
                "component": fault.component,
                "error_type": type(cause).__name__,
                "error": str(cause)
            },
            severity="error"
        )

    def log_submission_gate(
        self,
        form_id: str,
        allowed: bool,
        reason: str,
        invalid_fields: Optional[list] = None
    ):
        """Log the aggregate result of a submission gate evaluation."""
        event_type = (
            SecurityEventType.SUBMISSION_ACCEPTED
            if allowed
            else SecurityEventType.SUBMISSION_BLOCKED
        )
        self.log_event(
            event_type=event_type,
            form_id=form_id,
            details={
                "allowed": allowed,
                "reason": reason,
                "invalid_fields": invalid_fields or []
            },
            severity="info" if allowed else "warning"
        )
