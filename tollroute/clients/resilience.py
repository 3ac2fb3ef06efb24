"""
Retry and circuit-breaker wrapper around httpx.AsyncClient.

- Retries transient failures (5xx, 429, transport errors) with
  exponential backoff: base, 2*base, 4*base...
- Tracks consecutive failures per host. After `circuit_threshold`
  failures in a row the host is short-circuited for `circuit_cooldown`
  seconds, then one request is let through (half-open).
- Other 4xx responses are returned immediately.

Circuit state lives on the client instance, so each app (or test) gets
its own breakers.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from ..exceptions import CircuitOpenError, ProviderError, ProviderTimeoutError

logger = logging.getLogger(__name__)


def is_retryable_status(status_code: int) -> bool:
    return status_code >= 500 or status_code == 429


@dataclass
class CircuitState:
    failures: int = 0
    opened_at: Optional[float] = None


class CircuitBreaker:
    """Consecutive-failure circuit breaker keyed by host."""

    def __init__(
        self,
        threshold: int = 5,
        cooldown_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.threshold = threshold
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._circuits: dict[str, CircuitState] = {}

    def _state(self, host: str) -> CircuitState:
        return self._circuits.setdefault(host, CircuitState())

    def is_open(self, host: str) -> bool:
        state = self._state(host)
        if state.opened_at is None:
            return False
        if self._clock() - state.opened_at >= self.cooldown_seconds:
            # Half-open: let the next request through
            state.opened_at = None
            state.failures = 0
            return False
        return True

    def record_success(self, host: str) -> None:
        state = self._state(host)
        state.failures = 0
        state.opened_at = None

    def record_failure(self, host: str) -> None:
        state = self._state(host)
        state.failures += 1
        if state.failures >= self.threshold and state.opened_at is None:
            state.opened_at = self._clock()
            logger.warning(f"Circuit breaker opened for {host} after {state.failures} failures")


class ResilientHttpClient:
    """
    httpx.AsyncClient with retries and a per-host circuit breaker.

    Args:
        timeout: Per-attempt timeout in seconds
        max_retries: Retries after the first attempt (2 means up to 3 calls)
        base_delay: Backoff base in seconds
        breaker: Shared CircuitBreaker, one is created when omitted
        transport: Optional httpx transport (tests pass MockTransport)
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_retries: int = 2,
        base_delay: float = 0.2,
        breaker: Optional[CircuitBreaker] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable = asyncio.sleep,
    ):
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.breaker = breaker or CircuitBreaker()
        self._sleep = sleep
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Send a request with retries.

        Returns:
            The first non-retryable response, or the last response once
            retries are exhausted

        Raises:
            CircuitOpenError: Host is short-circuited
            ProviderTimeoutError: Every attempt timed out
            ProviderError: Every attempt failed at the transport level
        """
        host = httpx.URL(url).host
        if self.breaker.is_open(host):
            raise CircuitOpenError(f"Circuit breaker open for {host}. Service is temporarily unavailable.")

        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                response = await self._client.request(method, url, **kwargs)
            except httpx.TimeoutException:
                last_error = ProviderTimeoutError(f"Request to {host} timed out.")
                self.breaker.record_failure(host)
            except httpx.TransportError as e:
                last_error = ProviderError(f"Request to {host} failed: {e}")
                self.breaker.record_failure(host)
            else:
                if not is_retryable_status(response.status_code):
                    self.breaker.record_success(host)
                    return response

                self.breaker.record_failure(host)
                if attempt >= self.max_retries:
                    return response
                last_error = None
                logger.debug(f"Retrying {method} {url} after HTTP {response.status_code}")

            if attempt < self.max_retries:
                delay = self.base_delay * (2 ** attempt)
                await self._sleep(delay)

        raise last_error or ProviderError(f"All {self.max_retries + 1} attempts failed for {url}")

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("POST", url, **kwargs)
