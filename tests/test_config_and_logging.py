"""Tests for configuration, security logging and the error types."""

import json
import logging

from config.security_config import LoggingConfig, get_security_config
from formguard.errors import FormGuardError, InputTypeError, InternalFault, PatternMismatch, RateLimitExceeded
from formguard.logging.security_logger import SecurityEvent, SecurityEventType, SecurityLogger


def test_defaults():
    config = get_security_config()
    assert config.rate_limit.max_attempts == 5
    assert config.rate_limit.window_ms == 300_000
    assert config.rate_limit.signature_length == 50
    assert config.rate_limit.fail_open is True
    assert config.submission.submission_delay_ms == 2000
    assert config.input_validation.text_max_length == 1000
    assert config.navigation.section_offset_px == 100


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FORMGUARD_RATE_LIMIT_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("FORMGUARD_RATE_LIMIT_WINDOW_MS", "60000")
    monkeypatch.setenv("FORMGUARD_RATE_LIMIT_FAIL_OPEN", "false")
    monkeypatch.setenv("FORMGUARD_SUBMISSION_DELAY_MS", "0")
    monkeypatch.setenv("FORMGUARD_LOG_LEVEL", "WARNING")

    config = get_security_config()
    assert config.rate_limit.max_attempts == 3
    assert config.rate_limit.window_ms == 60_000
    assert config.rate_limit.fail_open is False
    assert config.submission.submission_delay_ms == 0
    assert config.logging.log_level == "WARNING"


def test_events_are_json_lines(logger, caplog):
    logger.log_event(
        SecurityEventType.VALIDATION_FAILED,
        form_id="contact",
        details={"field": "email"},
        severity="warning",
        input_text="secret@exemple.fr",
    )
    record = json.loads(caplog.records[-1].getMessage())
    assert record["event_type"] == "validation_failed"
    assert record["form_id"] == "contact"
    assert record["severity"] == "warning"
    assert record["details"] == {"field": "email"}
    assert record["input_hash"] == SecurityLogger.hash_value("secret@exemple.fr")
    assert record["timestamp"].endswith("Z")
    assert "secret@exemple.fr" not in caplog.text


def test_unknown_severity_falls_back_to_info(logger, caplog):
    logger.log_event(SecurityEventType.SUBMISSION_START, form_id="contact", severity="loud")
    assert caplog.records[-1].levelno == logging.INFO


def test_rotating_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "formguard.log"
    named = logging.getLogger(SecurityLogger.LOGGER_NAME)
    saved = named.handlers[:]
    named.handlers.clear()
    try:
        logger = SecurityLogger(LoggingConfig(enable_console_logging=False, log_file=str(log_file)))
        logger.log_event(SecurityEventType.SUBMISSION_ACCEPTED, form_id="quote")
        for handler in named.handlers:
            handler.flush()
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["event_type"] == "submission_accepted"
    finally:
        for handler in named.handlers:
            handler.close()
        named.handlers[:] = saved


def test_security_event_round_trip():
    event = SecurityEvent("2026-10-17T00:00:00Z", "rate_limit", "contact", "warning", {"retry_after_ms": 5})
    assert json.loads(event.to_json()) == event.to_dict()


def test_internal_fault_details(logger, caplog):
    logger.log_internal_fault("contact", InternalFault("rate_limiter", KeyError("k")))
    record = json.loads(caplog.records[-1].getMessage())
    assert caplog.records[-1].levelno == logging.ERROR
    assert record["details"]["component"] == "rate_limiter"
    assert record["details"]["error_type"] == "KeyError"


def test_error_taxonomy():
    assert isinstance(InputTypeError(3), TypeError)
    assert InputTypeError(3).value_type == "int"
    assert isinstance(PatternMismatch("email"), ValueError)
    assert str(PatternMismatch("phone")) == "phone invalide ou requis"
    assert RateLimitExceeded(1200).retry_after_ms == 1200
    assert str(InternalFault("sanitizer")) == "sanitizer failed"
    assert str(InternalFault("sanitizer", RuntimeError("boom"))) == "sanitizer failed: boom"
    for error in (InputTypeError(None), PatternMismatch("name"), RateLimitExceeded(), InternalFault("x")):
        assert isinstance(error, FormGuardError)
