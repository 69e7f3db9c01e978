# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable
from functools import wraps

from flask import jsonify, request

from tracker.shared.config import SecurityConfig
from tracker.shared.logging import logger


class InMemoryRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._lock = threading.Lock()
        self._buckets: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._buckets)

    def _sweep(self, now: float) -> None:
        # Buckets whose newest hit left the window carry no state.
        stale = [
            key for key, hits in self._buckets.items() if not hits or now - hits[-1] > self._window
        ]
        for key in stale:
            del self._buckets[key]
        self._last_sweep = now

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            if now - self._last_sweep > self._window:
                self._sweep(now)

            hits = self._buckets.setdefault(key, deque(maxlen=self._limit))
            while hits and (now - hits[0]) > self._window:
                hits.popleft()
            if len(hits) >= self._limit:
                return False
            hits.append(now)
            return True


def limiter_from_config(security: SecurityConfig | None) -> InMemoryRateLimiter | None:
    if security is None or not security.enable_rate_limit:
        return None
    return InMemoryRateLimiter(security.rate_limit_requests, security.rate_limit_window)


def rate_limit(limiter: InMemoryRateLimiter | None):
    """Reject callers past the limiter's budget with 429; a ``None`` limiter disables the check."""

    def decorator(f: Callable):
        if limiter is None:
            return f

        @wraps(f)
        def wrapper(*args, **kwargs):
            key = f"{request.path}:{request.remote_addr or 'unknown'}"
            if not limiter.allow(key):
                logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                return jsonify({"error": "rate_limited"}), 429
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "limiter_from_config", "rate_limit"]
