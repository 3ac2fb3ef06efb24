"""
Test HTTP clients against httpx.MockTransport - no network access.

Coroutines are driven with asyncio.run so no async test plugin is needed.
"""

import asyncio

import httpx
import pytest

from ..clients.geocoding import Geocoder, parse_coordinates
from ..clients.openrouteservice import OpenRouteServiceClient
from ..clients.resilience import CircuitBreaker, ResilientHttpClient, is_retryable_status
from ..exceptions import (
    CircuitOpenError,
    GeocodingError,
    MissingApiKeyError,
    NoRouteError,
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from ..models.requests import RoutePoint
from ..storage.cache import MemoryCacheBackend, TTLCache
from .route_fixtures import FakeClock, make_ors_response

PARIS = RoutePoint(lat=48.85, lon=2.35)
LONDON = RoutePoint(lat=51.5, lon=-0.12)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records the requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def make_http(handler, max_retries=0, breaker=None, sleep=None) -> ResilientHttpClient:
    """Helper to build a client on a mock transport."""
    return ResilientHttpClient(
        max_retries=max_retries,
        base_delay=0.2,
        breaker=breaker,
        transport=httpx.MockTransport(handler),
        sleep=sleep or RecordingSleep(),
    )


def status_sequence(*statuses):
    """Handler answering with the given statuses in order, repeating the last."""
    calls = []

    def handler(request):
        status = statuses[min(len(calls), len(statuses) - 1)]
        calls.append(request)
        return httpx.Response(status, json={"ok": status == 200})

    return handler, calls


# ============================================================================
# Retries and circuit breaker
# ============================================================================

def test_retryable_statuses():
    assert is_retryable_status(500) is True
    assert is_retryable_status(503) is True
    assert is_retryable_status(429) is True
    assert is_retryable_status(404) is False
    assert is_retryable_status(200) is False


def test_retry_then_success():
    print("\n=== Testing Retry Then Success ===")

    handler, calls = status_sequence(503, 200)
    sleep = RecordingSleep()

    async def run():
        http = make_http(handler, max_retries=2, sleep=sleep)
        try:
            return await http.get("https://api.example.org/x")
        finally:
            await http.close()

    response = asyncio.run(run())

    assert response.status_code == 200
    assert len(calls) == 2
    assert sleep.delays == [0.2]

    print("✓ Transient 503 retried with backoff")


def test_retries_exhausted_returns_last_response():
    handler, calls = status_sequence(502)
    sleep = RecordingSleep()

    async def run():
        http = make_http(handler, max_retries=2, sleep=sleep)
        try:
            return await http.get("https://api.example.org/x")
        finally:
            await http.close()

    response = asyncio.run(run())

    assert response.status_code == 502
    assert len(calls) == 3
    assert sleep.delays == [0.2, 0.4]


def test_client_errors_not_retried():
    handler, calls = status_sequence(404)

    async def run():
        http = make_http(handler, max_retries=2)
        try:
            return await http.get("https://api.example.org/x")
        finally:
            await http.close()

    assert asyncio.run(run()).status_code == 404
    assert len(calls) == 1


def test_timeouts_raise_after_retries():
    print("\n=== Testing Timeouts ===")

    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async def run():
        http = make_http(handler, max_retries=1)
        try:
            await http.get("https://api.example.org/x")
        finally:
            await http.close()

    with pytest.raises(ProviderTimeoutError):
        asyncio.run(run())

    print("✓ Timeouts surface as ProviderTimeoutError")


def test_transport_errors_raise_provider_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def run():
        http = make_http(handler)
        try:
            await http.get("https://api.example.org/x")
        finally:
            await http.close()

    with pytest.raises(ProviderError):
        asyncio.run(run())


def test_circuit_breaker_opens_and_recovers():
    print("\n=== Testing Circuit Breaker ===")

    clock = FakeClock()
    breaker = CircuitBreaker(threshold=2, cooldown_seconds=30, clock=clock)
    handler, calls = status_sequence(500, 500, 200)

    async def run():
        http = make_http(handler, breaker=breaker)
        try:
            await http.get("https://api.example.org/x")
            await http.get("https://api.example.org/x")
            with pytest.raises(CircuitOpenError):
                await http.get("https://api.example.org/x")
            # Other hosts are unaffected
            assert breaker.is_open("other.example.org") is False

            clock.advance(30)
            return await http.get("https://api.example.org/x")
        finally:
            await http.close()

    response = asyncio.run(run())

    assert response.status_code == 200
    assert len(calls) == 3
    assert breaker.is_open("api.example.org") is False

    print("✓ Circuit opens after threshold and half-opens after cooldown")


# ============================================================================
# OpenRouteService
# ============================================================================

def _ors_client(handler, api_key="test-key"):
    return OpenRouteServiceClient(make_http(handler), api_key=api_key)


def test_directions_body():
    client = _ors_client(lambda request: httpx.Response(200))

    body = client.build_directions_body(PARIS, LONDON, avoid_tolls=True)

    assert body["coordinates"] == [[2.35, 48.85], [-0.12, 51.5]]
    assert body["extra_info"] == ["countryinfo", "waycategory"]
    assert body["options"] == {"avoid_features": ["tollways"]}
    assert "options" not in client.build_directions_body(PARIS, LONDON)


def test_directions_success():
    print("\n=== Testing ORS Directions ===")

    fixture = make_ors_response(country_ranges=[[0, 2, 70]])
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=fixture)

    async def run():
        client = _ors_client(handler)
        try:
            return await client.get_driving_route(PARIS, LONDON)
        finally:
            await client.close()

    assert asyncio.run(run()) == fixture
    assert seen[0].url.path == "/v2/directions/driving-car/geojson"
    assert seen[0].headers["Authorization"] == "test-key"

    print("✓ Route returned as parsed GeoJSON")


def test_directions_status_mapping():
    print("\n=== Testing ORS Status Mapping ===")

    cases = [
        (401, False, ProviderAuthError, "ORS_AUTH_FAILED"),
        (403, False, ProviderAuthError, "ORS_AUTH_FAILED"),
        (404, False, NoRouteError, "NO_ROUTE"),
        (404, True, NoRouteError, "NO_ROUTE_AVOID_TOLLS"),
        (400, False, NoRouteError, "NO_ROUTE"),
        (429, False, ProviderRateLimitError, "ORS_RATE_LIMITED"),
        (500, False, ProviderError, "ORS_ERROR"),
    ]
    for status, avoid_tolls, error_type, code in cases:
        async def run():
            client = _ors_client(lambda request: httpx.Response(status, json={}))
            try:
                await client.get_driving_route(PARIS, LONDON, avoid_tolls=avoid_tolls)
            finally:
                await client.close()

        with pytest.raises(error_type) as info:
            asyncio.run(run())
        assert info.value.code == code, status

    print("✓ Provider statuses map to typed errors")


def test_directions_require_api_key():
    client = _ors_client(lambda request: httpx.Response(200), api_key=None)

    assert client.is_available() is False
    with pytest.raises(MissingApiKeyError):
        asyncio.run(client.get_driving_route(PARIS, LONDON))


# ============================================================================
# Geocoding
# ============================================================================

def test_parse_coordinates():
    assert parse_coordinates("48.85, 2.35") == RoutePoint(lat=48.85, lon=2.35)
    assert parse_coordinates("Paris") is None
    assert parse_coordinates("95, 2") is None
    assert parse_coordinates("48.85, nan") is None
    assert parse_coordinates("1, 2, 3") is None


def _geocoder(handler, ors_api_key=None, contact_email=None):
    cache = TTLCache(MemoryCacheBackend(), namespace="geocode")
    return Geocoder(make_http(handler), cache, ors_api_key=ors_api_key, contact_email=contact_email)


def test_geocoder_falls_back_and_caches():
    print("\n=== Testing Geocoder Fallback ===")

    hosts = []

    def handler(request):
        hosts.append(request.url.host)
        if request.url.host == "api.openrouteservice.org":
            return httpx.Response(500)
        if request.url.host == "photon.komoot.io":
            return httpx.Response(200, json={"features": [{"geometry": {"coordinates": [16.37, 48.21]}}]})
        return httpx.Response(404)

    async def run():
        geocoder = _geocoder(handler, ors_api_key="test-key")
        try:
            first = await geocoder.geocode("Vienna")
            second = await geocoder.geocode("  vienna ")
            return first, second
        finally:
            await geocoder.close()

    first, second = asyncio.run(run())

    assert first == RoutePoint(lat=48.21, lon=16.37)
    assert second == first
    assert hosts == ["api.openrouteservice.org", "photon.komoot.io"]

    print("✓ Photon used after ORS failure, repeat served from cache")


def test_geocoder_nominatim_user_agent():
    agents = []

    def handler(request):
        if request.url.host == "nominatim.openstreetmap.org":
            agents.append(request.headers["User-Agent"])
            return httpx.Response(200, json=[{"lat": "45.81", "lon": "15.98"}])
        return httpx.Response(200, json={"features": []})

    async def run():
        geocoder = _geocoder(handler, contact_email="ops@tollroute.example")
        try:
            return await geocoder.geocode("Zagreb")
        finally:
            await geocoder.close()

    assert asyncio.run(run()) == RoutePoint(lat=45.81, lon=15.98)
    assert agents == ["TollRoute/1.0 (contact: ops@tollroute.example)"]


def test_geocoder_all_tiers_fail():
    def handler(request):
        if request.url.host == "nominatim.openstreetmap.org":
            return httpx.Response(200, json=[])
        return httpx.Response(503)

    async def run():
        geocoder = _geocoder(handler)
        try:
            await geocoder.geocode("Atlantis")
        finally:
            await geocoder.close()

    with pytest.raises(GeocodingError, match='Could not resolve "Atlantis"'):
        asyncio.run(run())


def test_resolve_location_skips_network_for_coordinates():
    def handler(request):
        raise AssertionError("no request expected")

    async def run():
        geocoder = _geocoder(handler)
        try:
            return await geocoder.resolve_location("51.5,-0.12")
        finally:
            await geocoder.close()

    assert asyncio.run(run()) == LONDON


def run_all_tests():
    """Run all client tests."""
    print("\n" + "=" * 60)
    print("HTTP CLIENTS - TEST SUITE")
    print("=" * 60)

    test_retryable_statuses()
    test_retry_then_success()
    test_retries_exhausted_returns_last_response()
    test_client_errors_not_retried()
    test_timeouts_raise_after_retries()
    test_transport_errors_raise_provider_error()
    test_circuit_breaker_opens_and_recovers()
    test_directions_body()
    test_directions_success()
    test_directions_status_mapping()
    test_directions_require_api_key()
    test_parse_coordinates()
    test_geocoder_falls_back_and_caches()
    test_geocoder_nominatim_user_agent()
    test_geocoder_all_tiers_fail()
    test_resolve_location_skips_network_for_coordinates()

    print("\n" + "=" * 60)
    print("✅ ALL CLIENT TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
