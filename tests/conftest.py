import pytest

from config.security_config import LoggingConfig, RateLimitConfig, SecurityConfig
from formguard.gate import SubmissionGate
from formguard.input.rate_limiter import RateLimiter
from formguard.input.sanitizer import InputSanitizer
from formguard.input.validator import InputValidator
from formguard.logging.security_logger import SecurityLogger


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start=1_000_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def logger():
    return SecurityLogger(LoggingConfig(enable_console_logging=False, log_level="DEBUG"))


@pytest.fixture
def sanitizer(logger):
    return InputSanitizer(logger=logger)


@pytest.fixture
def validator(sanitizer, logger):
    return InputValidator(sanitizer=sanitizer, logger=logger)


@pytest.fixture
def rate_limiter(clock, logger):
    return RateLimiter(RateLimitConfig(), logger=logger, clock=clock)


@pytest.fixture
def gate(rate_limiter, logger):
    return SubmissionGate(rate_limiter=rate_limiter, config=SecurityConfig(), logger=logger)
