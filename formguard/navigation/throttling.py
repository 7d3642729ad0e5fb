"""Leading-edge throttle for high-frequency handlers such as scroll."""

import functools
import time
from threading import Lock
from typing import Callable, Optional


def throttle(limit_ms: int, clock: Callable[[], float] = time.monotonic):
    """
    Run the wrapped function at most once per ``limit_ms``.

    The first call runs immediately; calls arriving before the limit has
    elapsed are dropped (they return None), not deferred.
    """
    def decorator(func):
        lock = Lock()
        last_run: Optional[float] = None

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            nonlocal last_run
            with lock:
                now = clock()
                if last_run is not None and (now - last_run) * 1000 < limit_ms:
                    return None
                last_run = now
            return func(*args, **kwargs)

        return wrapper

    return decorator
