"""Tests for the sliding-window rate limiter."""

import threading

from config.security_config import RateLimitConfig
from formguard.input.rate_limiter import AttemptLog, RateLimiter

UA = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0"


def test_five_attempts_then_denied(rate_limiter):
    results = [rate_limiter.try_acquire("contact", UA) for _ in range(6)]
    assert results == [True] * 5 + [False]


def test_denied_attempt_is_not_recorded(rate_limiter):
    for _ in range(8):
        rate_limiter.try_acquire("contact", UA)
    key = rate_limiter.make_key("contact", UA)
    assert len(rate_limiter.attempts[key]) == 5


def test_window_expiry_allows_again(rate_limiter, clock):
    for _ in range(5):
        assert rate_limiter.try_acquire("contact", UA)
    assert not rate_limiter.try_acquire("contact", UA)

    clock.advance(300_001)
    assert rate_limiter.try_acquire("contact", UA)


def test_attempt_exactly_at_window_boundary_is_expired(rate_limiter, clock):
    for _ in range(5):
        rate_limiter.try_acquire("contact", UA)
    clock.advance(299_999)
    assert not rate_limiter.try_acquire("contact", UA)
    clock.advance(1)
    assert rate_limiter.try_acquire("contact", UA)


def test_sliding_window_expires_oldest_first(rate_limiter, clock):
    for _ in range(5):
        rate_limiter.try_acquire("contact", UA)
        clock.advance(60_000)
    # now = start + 300 000: the first attempt has just expired, the rest have not
    assert rate_limiter.try_acquire("contact", UA)
    assert not rate_limiter.try_acquire("contact", UA)


def test_pruning_happens_even_when_denied(rate_limiter, clock):
    rate_limiter.try_acquire("contact", UA)
    clock.advance(200_000)
    for _ in range(4):
        rate_limiter.try_acquire("contact", UA)
    clock.advance(100_000)
    # first attempt pruned, four remain, fifth slot is granted
    assert rate_limiter.try_acquire("contact", UA)
    assert not rate_limiter.try_acquire("contact", UA)
    key = rate_limiter.make_key("contact", UA)
    assert len(rate_limiter.attempts[key]) == 5


def test_keys_are_per_form_and_signature(rate_limiter):
    for _ in range(5):
        rate_limiter.try_acquire("contact", UA)
    assert not rate_limiter.try_acquire("contact", UA)
    assert rate_limiter.try_acquire("quote", UA)
    assert rate_limiter.try_acquire("contact", "curl/8.0")


def test_signature_is_truncated_to_fifty_characters(rate_limiter):
    for _ in range(5):
        rate_limiter.try_acquire("contact", UA)
    # same first 50 characters, different tail: same key
    assert not rate_limiter.try_acquire("contact", UA[:50] + "something else")
    assert rate_limiter.make_key("contact", UA) == "contact_" + UA[:50]


def test_missing_signature_uses_unknown(rate_limiter):
    assert rate_limiter.make_key("contact", None) == "contact_unknown"
    assert rate_limiter.make_key("contact", "") == "contact_unknown"


def test_check_reports_remaining_and_retry_after(rate_limiter, clock):
    first = rate_limiter.check("contact", UA)
    assert first.is_allowed and first.remaining_attempts == 4

    for _ in range(4):
        rate_limiter.check("contact", UA)
    clock.advance(120_000)
    denied = rate_limiter.check("contact", UA)
    assert not denied.is_allowed
    assert denied.remaining_attempts == 0
    assert denied.retry_after_ms == 180_000


def test_denial_is_logged_without_raw_signature(rate_limiter, caplog):
    for _ in range(6):
        rate_limiter.try_acquire("contact", UA)
    assert "rate_limit" in caplog.text
    assert UA not in caplog.text


def test_fails_open_on_internal_error(rate_limiter, monkeypatch, caplog):
    def broken(form_id, signature):
        raise RuntimeError("boom")

    monkeypatch.setattr(rate_limiter, "make_key", broken)
    assert rate_limiter.try_acquire("contact", UA) is True
    assert "internal_fault" in caplog.text


def test_fail_closed_when_configured(clock, logger):
    limiter = RateLimiter(RateLimitConfig(fail_open=False), logger=logger, clock=clock)

    def broken():
        raise RuntimeError("clock gone")

    limiter.clock = broken
    assert limiter.try_acquire("contact", UA) is False


def test_custom_limits(clock, logger):
    limiter = RateLimiter(RateLimitConfig(max_attempts=2, window_ms=1_000), logger=logger, clock=clock)
    assert limiter.try_acquire("contact", UA)
    assert limiter.try_acquire("contact", UA)
    assert not limiter.try_acquire("contact", UA)
    clock.advance(1_000)
    assert limiter.try_acquire("contact", UA)


def test_reset_and_clear(rate_limiter):
    for _ in range(5):
        rate_limiter.try_acquire("contact", UA)
        rate_limiter.try_acquire("quote", UA)

    rate_limiter.reset("contact", UA)
    assert rate_limiter.try_acquire("contact", UA)
    assert not rate_limiter.try_acquire("quote", UA)

    rate_limiter.clear()
    assert rate_limiter.attempts == {}
    assert rate_limiter.try_acquire("quote", UA)


def test_attempt_log_prune():
    log = AttemptLog([0, 100, 200])
    assert log.prune(now=300, window_ms=200).timestamps == [200]
    assert len(log) == 3


def test_concurrent_callers_never_exceed_the_limit(rate_limiter):
    barrier = threading.Barrier(20)
    granted = []

    def attempt():
        barrier.wait()
        granted.append(rate_limiter.try_acquire("contact", UA))

    threads = [threading.Thread(target=attempt) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert granted.count(True) == 5
    assert granted.count(False) == 15
