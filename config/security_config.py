"""
Security configuration settings for the form defense pipeline.
Contains limits, timings, and logging settings for every component.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import os


@dataclass
class RateLimitConfig:
    """Rate limiting configuration."""
    max_attempts: int = 5
    window_ms: int = 300_000
    signature_length: int = 50
    fail_open: bool = True  # If True, allow submissions when the limiter itself fails


@dataclass
class InputValidationConfig:
    """Input validation settings."""
    text_max_length: int = 1000
    name_min_length: int = 2
    name_max_length: int = 50
    phone_min_length: int = 8
    phone_max_length: int = 20
    name_hint_keywords: Tuple[str, ...] = ("nom", "name")


@dataclass
class SubmissionConfig:
    """Simulated submission settings."""
    submission_delay_ms: int = 2000


@dataclass
class NavigationConfig:
    """Scroll-driven navigation highlight settings."""
    section_offset_px: int = 100
    scroll_throttle_ms: int = 150


@dataclass
class LoggingConfig:
    """Security logging configuration."""
    log_level: str = "INFO"
    log_file: Optional[str] = None
    enable_console_logging: bool = True
    hash_sensitive_data: bool = True
    max_log_size_mb: int = 100
    backup_count: int = 5


@dataclass
class SecurityConfig:
    """Main security configuration container."""
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    input_validation: InputValidationConfig = field(default_factory=InputValidationConfig)
    submission: SubmissionConfig = field(default_factory=SubmissionConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_security_config() -> SecurityConfig:
    """
    Get security configuration, optionally overriding from environment variables.
    """
    config = SecurityConfig()

    # Override from environment variables if present
    if os.getenv("FORMGUARD_RATE_LIMIT_MAX_ATTEMPTS"):
        config.rate_limit.max_attempts = int(os.getenv("FORMGUARD_RATE_LIMIT_MAX_ATTEMPTS"))

    if os.getenv("FORMGUARD_RATE_LIMIT_WINDOW_MS"):
        config.rate_limit.window_ms = int(os.getenv("FORMGUARD_RATE_LIMIT_WINDOW_MS"))

    if os.getenv("FORMGUARD_RATE_LIMIT_FAIL_OPEN"):
        config.rate_limit.fail_open = os.getenv("FORMGUARD_RATE_LIMIT_FAIL_OPEN").lower() == "true"

    if os.getenv("FORMGUARD_SUBMISSION_DELAY_MS"):
        config.submission.submission_delay_ms = int(os.getenv("FORMGUARD_SUBMISSION_DELAY_MS"))

    if os.getenv("FORMGUARD_LOG_LEVEL"):
        config.logging.log_level = os.getenv("FORMGUARD_LOG_LEVEL")

    if os.getenv("FORMGUARD_LOG_FILE"):
        config.logging.log_file = os.getenv("FORMGUARD_LOG_FILE")

    return config


# Global configuration instance
SECURITY_CONFIG = get_security_config()
