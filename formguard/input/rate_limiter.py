"""
Sliding-window rate limiter for form submissions.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from threading import Lock

from config.security_config import SECURITY_CONFIG, RateLimitConfig
from formguard.errors import InternalFault
from formguard.logging.security_logger import SecurityLogger


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class RateLimitStatus:
    """Status of rate limit check."""
    is_allowed: bool
    remaining_attempts: int
    retry_after_ms: int = 0


@dataclass
class AttemptLog:
    """Timestamps (ms) of granted attempts for one rate-limit key, oldest first."""
    timestamps: List[int] = field(default_factory=list)

    def prune(self, now: int, window_ms: int) -> "AttemptLog":
        """Return a log holding only the attempts still inside the window."""
        return AttemptLog([t for t in self.timestamps if now - t < window_ms])

    def __len__(self) -> int:
        return len(self.timestamps)


class RateLimiter:
    """
    Rate limiter keyed by form identifier and a truncated client signature.

    Each check prunes, counts and appends under one lock. The client
    signature is spoofable, so this is abuse friction, not access control.
    """

    def __init__(
        self,
        config: Optional[RateLimitConfig] = None,
        logger: Optional[SecurityLogger] = None,
        clock: Callable[[], int] = _now_ms
    ):
        self.config = config or SECURITY_CONFIG.rate_limit
        self.logger = logger or SecurityLogger()
        self.clock = clock
        self.attempts: Dict[str, AttemptLog] = {}
        self.lock = Lock()

    def make_key(self, form_id: str, client_signature: Optional[str]) -> str:
        """Build the composite rate-limit key."""
        signature = client_signature or "unknown"
        return f"{form_id}_{signature[:self.config.signature_length]}"

    def check(self, form_id: str, client_signature: Optional[str] = None) -> RateLimitStatus:
        """
        Try to record a submission attempt.

        Args:
            form_id: Form identifier
            client_signature: Coarse client identity (e.g. user agent)

        Returns:
            RateLimitStatus; on internal failure the attempt is allowed
            when ``fail_open`` is configured
        """
        try:
            return self._check(form_id, client_signature)
        except Exception as e:
            self.logger.log_internal_fault(form_id, InternalFault("rate_limiter", e))
            return RateLimitStatus(
                is_allowed=self.config.fail_open,
                remaining_attempts=0
            )

    def _check(self, form_id: str, client_signature: Optional[str]) -> RateLimitStatus:
        key = self.make_key(form_id, client_signature)
        window = self.config.window_ms

        with self.lock:
            now = self.clock()
            log = self.attempts.get(key, AttemptLog()).prune(now, window)
            self.attempts[key] = log

            if len(log) >= self.config.max_attempts:
                oldest = log.timestamps[0] if log.timestamps else now
                retry_after = max(0, window - (now - oldest))
                denied = RateLimitStatus(
                    is_allowed=False,
                    remaining_attempts=0,
                    retry_after_ms=retry_after
                )
            else:
                log.timestamps.append(now)
                return RateLimitStatus(
                    is_allowed=True,
                    remaining_attempts=self.config.max_attempts - len(log)
                )

        self.logger.log_rate_limit(form_id, key, denied.retry_after_ms)
        return denied

    def try_acquire(self, form_id: str, client_signature: Optional[str] = None) -> bool:
        """
        Quick check if a submission attempt is allowed.

        Returns:
            True if allowed
        """
        return self.check(form_id, client_signature).is_allowed

    def reset(self, form_id: str, client_signature: Optional[str] = None):
        """
        Drop the attempt log of one key.
        """
        with self.lock:
            self.attempts.pop(self.make_key(form_id, client_signature), None)

    def clear(self):
        """Drop every attempt log (full state reset)."""
        with self.lock:
            self.attempts.clear()
