"""
End-to-end tests for the route analysis pipeline.

Uses fixture directions responses, no network access.
"""

import asyncio
import json

import pytest

from ..exceptions import MissingApiKeyError, RouteDataError
from ..models.requests import EmissionClass, PowertrainType, RoutePoint
from ..processing.pipeline import RouteAnalysisService, apply_country_rules
from .route_fixtures import make_ors_response, make_request, paris_london_response


def test_austria_scenario():
    print("\n=== Testing Austria Scenario ===")

    response = make_ors_response(country_ranges=[[0, 2, 11]], way_ranges=[[0, 2, 3]], distance=120_000)
    request = make_request(trip_date="2026-06-14", seats=5)

    result = apply_country_rules(response, request)

    austria = result.countries[0]
    assert austria.country_code == "AT"
    assert austria.requires_vignette is True
    assert austria.requires_section_toll is True
    assert [n.country_code for n in result.section_tolls] == ["AT"]

    estimate = result.trip_estimate
    assert estimate.total_distance_km == 120.0
    assert estimate.total_road_charges_eur > 0
    assert estimate.fuel is not None
    assert result.trip_readiness.timeline
    assert result.trip_readiness.checklist
    assert result.compliance.informational_only is True
    assert result.border_crossings == []

    print("✓ Austrian route yields vignette, section toll and estimate")


def test_croatia_scenario():
    response = make_ors_response(country_ranges=[[0, 2, 49]], way_ranges=[[0, 2, 1]], distance=80_000)
    result = apply_country_rules(response, make_request(start="Zagreb", end="Split"))

    croatia = result.countries[0]
    assert croatia.requires_vignette is False
    assert croatia.requires_section_toll is True
    assert result.section_tolls[0].label == "Croatia Motorway Toll"
    assert result.trip_estimate.section_toll_estimate_eur == 18.0


def test_france_avoid_tolls_scenario():
    print("\n=== Testing France Avoid-Tolls Scenario ===")

    response = make_ors_response(
        coordinates=[[2.35, 48.85], [3.5, 47.5], [4.83, 45.76]],
        country_ranges=[[0, 2, 70]],
        way_ranges=[[0, 2, 1]],
        distance=465_000,
    )
    request = make_request(start="Paris", end="Lyon", avoid_tolls=True, trip_date="2026-06-12")

    result = apply_country_rules(response, request)

    france = result.countries[0]
    assert france.requires_section_toll is False
    assert "Tolls avoided where possible on this route." in france.notices
    assert result.section_tolls == []
    assert result.trip_shield.toll_window_impact is None

    print("✓ No French section tolls when the route avoids them")


def test_france_weekend_scenario():
    response = make_ors_response(
        coordinates=[[2.35, 48.85], [3.5, 47.5], [4.83, 45.76]],
        country_ranges=[[0, 2, 70]],
        way_ranges=[[0, 2, 1]],
        distance=465_000,
    )
    request = make_request(start="Paris", end="Lyon", trip_date="2026-06-14")

    result = apply_country_rules(response, request)

    labels = [n.label for n in result.section_tolls]
    assert "France Flux Libre (Free-Flow)" in labels
    assert "France A1/A14 time-window pricing" in labels
    shield = result.trip_shield
    assert shield.has_free_flow_toll is True
    assert shield.toll_window_impact.level.value == "savings_opportunity"
    assert shield.departure_time_hint is not None
    assert any("72 hours" in w for w in shield.warnings)


def test_paris_to_london_scenario():
    print("\n=== Testing Paris to London Scenario ===")

    request = make_request(start="Paris", end="London")
    result = apply_country_rules(paris_london_response(), request)

    assert [c.country_code for c in result.countries] == ["FR", "GB"]
    labels = [n.label for n in result.section_tolls]
    assert "London ULEZ/Congestion" in labels
    assert "Channel Crossing Booking" in labels

    shield = result.trip_shield
    assert shield.has_border_crossing is True
    assert shield.has_major_urban_zone_risk is True
    assert [c.crossing_code for c in result.border_crossings] == ["FR-GB"]
    assert "Book the Channel crossing (ferry or Eurotunnel)." in result.trip_readiness.checklist

    print("✓ London and channel notices with border crossing")


def test_balkan_and_poland_scenarios():
    turkey = apply_country_rules(
        make_ors_response(country_ranges=[[0, 2, 206]], way_ranges=[[0, 2, 1]]),
        make_request(start="Edirne", end="Istanbul"),
    )
    assert turkey.countries[0].requires_section_toll is True
    assert turkey.countries[0].requires_vignette is False

    poland = apply_country_rules(
        make_ors_response(country_ranges=[[0, 2, 159]], way_ranges=[[0, 2, 2]]),
        make_request(start="Krakow", end="Katowice"),
    )
    assert poland.countries[0].requires_section_toll is True
    assert poland.section_tolls[0].label == "Poland Motorway Toll"


def test_heavy_vehicle_scenario():
    response = make_ors_response(country_ranges=[[0, 1, 11]], way_ranges=[[0, 1, 1]], distance=30_000)
    request = make_request(gross_weight_kg=4200, axles=2)

    result = apply_country_rules(response, request)

    assert any(">3.5t" in n for n in result.countries[0].notices)
    assert any("above 3.5t" in w for w in result.trip_shield.warnings)


def test_result_invariants():
    print("\n=== Testing Result Invariants ===")

    result = apply_country_rules(paris_london_response(), make_request(start="Paris", end="London"))
    parent = result.route_geojson.coordinates

    requiring = {c.country_code for c in result.countries if c.requires_section_toll}
    assert {n.country_code for n in result.section_tolls} <= requiring

    for country in result.countries:
        assert country.highway_distance_meters >= 0
        for segment in country.route_segments:
            piece = segment.coordinates
            assert any(parent[i:i + len(piece)] == piece for i in range(len(parent)))

    payload = json.loads(result.model_dump_json())
    assert payload["route_geojson"]["type"] == "LineString"
    assert payload["route_geojson"]["coordinates"][0] == [2.35, 48.85]
    assert "trip_estimate" in payload

    print("✓ Section tolls, segments and JSON shape hold")


def test_invalid_response_raises():
    with pytest.raises(RouteDataError):
        apply_country_rules({}, make_request())


# ============================================================================
# Service orchestration with fake clients
# ============================================================================

class FakeDirections:
    def __init__(self, response=None, configured=True):
        self.response = response
        self.configured = configured
        self.calls = []

    def ensure_configured(self):
        if not self.configured:
            raise MissingApiKeyError("OpenRouteService API key is not configured.")

    async def get_driving_route(self, start, end, avoid_tolls=False):
        self.calls.append((start, end, avoid_tolls))
        return self.response

    async def close(self):
        pass


class FakeGeocoder:
    def __init__(self):
        self.queries = []

    async def resolve_location(self, text):
        self.queries.append(text)
        return RoutePoint(lat=48.85, lon=2.35)

    async def close(self):
        pass


def test_service_analyze():
    print("\n=== Testing Service Orchestration ===")

    directions = FakeDirections(paris_london_response())
    geocoder = FakeGeocoder()
    service = RouteAnalysisService(directions, geocoder)
    request = make_request(
        start="Paris",
        end="London",
        end_point={"lat": 51.5, "lon": -0.12},
        powertrain=PowertrainType.ELECTRIC,
    )

    result = asyncio.run(service.analyze(request))

    # Only the start needed geocoding
    assert geocoder.queries == ["Paris"]
    assert directions.calls[0][1] == RoutePoint(lat=51.5, lon=-0.12)
    assert result.applied_preferences.powertrain == PowertrainType.ELECTRIC
    assert result.applied_preferences.emission_class == EmissionClass.ZERO_EMISSION
    assert result.trip_estimate.electric is not None

    print("✓ Service resolves points, fetches route and echoes preferences")


def test_service_requires_api_key():
    directions = FakeDirections(configured=False)
    geocoder = FakeGeocoder()
    service = RouteAnalysisService(directions, geocoder)

    with pytest.raises(MissingApiKeyError):
        asyncio.run(service.analyze(make_request()))

    assert geocoder.queries == []
    assert directions.calls == []


def run_all_tests():
    """Run all pipeline tests."""
    print("\n" + "=" * 60)
    print("ROUTE ANALYSIS PIPELINE - TEST SUITE")
    print("=" * 60)

    test_austria_scenario()
    test_croatia_scenario()
    test_france_avoid_tolls_scenario()
    test_france_weekend_scenario()
    test_paris_to_london_scenario()
    test_balkan_and_poland_scenarios()
    test_heavy_vehicle_scenario()
    test_result_invariants()
    test_invalid_response_raises()
    test_service_analyze()
    test_service_requires_api_key()

    print("\n" + "=" * 60)
    print("✅ ALL PIPELINE TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
