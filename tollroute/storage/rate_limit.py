"""
Fixed-window request rate limiting per client IP and scope.

Like the cache, the counter store is selected by configuration
(`rate_limits.backend`). The "memory" backend is per process.
"""

import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Mapping

from ..config import ConfigurationError


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    retry_after_seconds: int = 0


def get_client_ip(headers: Mapping[str, str], trusted_hops: int = 1) -> str:
    """
    Resolve the client IP from proxy headers.

    With trusted_hops > 0 the address `trusted_hops` from the right end of
    x-forwarded-for is used; clients can only prepend to that header, so
    entries added by our own proxies cannot be spoofed. With 0 hops, or no
    x-forwarded-for, x-real-ip and then cf-connecting-ip are used.
    """
    forwarded_for = headers.get("x-forwarded-for")
    if forwarded_for and trusted_hops > 0:
        ips = [ip.strip() for ip in forwarded_for.split(",") if ip.strip()]
        if ips:
            return ips[max(0, len(ips) - trusted_hops)]
        return "unknown"

    return headers.get("x-real-ip") or headers.get("cf-connecting-ip") or "unknown"


class RateLimitBackend(ABC):
    """Counter store for fixed windows."""

    @abstractmethod
    def hit(self, key: str, max_requests: int, window_seconds: float) -> RateLimitResult:
        """Count one request against key and report whether it is allowed."""

    @abstractmethod
    def reset(self) -> None:
        ...


class MemoryRateLimitBackend(RateLimitBackend):
    """In-process fixed-window counters."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        # key -> (count, reset_at)
        self._buckets: dict[str, tuple[int, float]] = {}

    def _cleanup(self, now: float) -> None:
        expired = [key for key, (_, reset_at) in self._buckets.items() if reset_at <= now]
        for key in expired:
            del self._buckets[key]

    def hit(self, key: str, max_requests: int, window_seconds: float) -> RateLimitResult:
        now = self._clock()
        self._cleanup(now)

        bucket = self._buckets.get(key)
        if bucket is None:
            self._buckets[key] = (1, now + window_seconds)
            return RateLimitResult(allowed=True)

        count, reset_at = bucket
        if count >= max_requests:
            return RateLimitResult(allowed=False, retry_after_seconds=max(1, math.ceil(reset_at - now)))

        self._buckets[key] = (count + 1, reset_at)
        return RateLimitResult(allowed=True)

    def reset(self) -> None:
        self._buckets.clear()


RATE_LIMIT_BACKENDS: dict[str, Callable[[], RateLimitBackend]] = {
    "memory": MemoryRateLimitBackend,
}


def build_rate_limit_backend(name: str) -> RateLimitBackend:
    """Instantiate a rate limit backend by its configured name."""
    factory = RATE_LIMIT_BACKENDS.get(name)
    if factory is None:
        raise ConfigurationError(
            f"Unknown rate limit backend: {name}. Available: {sorted(RATE_LIMIT_BACKENDS)}"
        )
    return factory()


class FixedWindowRateLimiter:
    """Checks requests against per-scope limits, keyed by `scope:client_ip`."""

    def __init__(self, backend: RateLimitBackend, trusted_hops: int = 1):
        self.backend = backend
        self.trusted_hops = trusted_hops

    def check(
        self,
        headers: Mapping[str, str],
        scope: str,
        max_requests: int,
        window_seconds: float,
    ) -> RateLimitResult:
        ip = get_client_ip(headers, self.trusted_hops)
        return self.backend.hit(f"{scope}:{ip}", max_requests, window_seconds)
