"""
Test vignette selection, road charge totals and energy estimates.
"""

import pytest

from ..data.energy import FUEL_PRICE_EUR_PER_LITER
from ..data.vignettes import VIGNETTE_CATALOG
from ..models.analysis import CountryTravelSummary
from ..models.requests import PowertrainType, VehicleClass
from ..processing.coverage import CountrySpan
from ..processing.trip_estimator import (
    build_trip_estimate,
    plan_stops,
    product_match_score,
    select_vignette_product,
)
from .route_fixtures import make_request


def create_test_country(
    code: str,
    highway_meters: int = 70_203,
    vignette: bool = False,
    section_toll: bool = False,
) -> CountryTravelSummary:
    """Helper to build a country summary."""
    return CountryTravelSummary(
        country_code=code,
        highway_distance_meters=highway_meters,
        requires_vignette=vignette,
        requires_section_toll=section_toll,
    )


def _product(country_code: str, product_id: str):
    return next(p for p in VIGNETTE_CATALOG[country_code].products if p.id == product_id)


def test_product_match_score():
    print("\n=== Testing Product Match Score ===")

    car = VehicleClass.PASSENGER_CAR_M1
    petrol = PowertrainType.PETROL

    assert product_match_score(_product("AT", "at-1d"), car, petrol) == 1
    assert product_match_score(_product("AT", "at-moto-10d"), car, petrol) == 0
    assert product_match_score(_product("AT", "at-moto-10d"), VehicleClass.MOTORCYCLE, petrol) == 3
    assert product_match_score(_product("CZ", "cz-zev"), car, PowertrainType.ELECTRIC) == 3
    assert product_match_score(_product("CZ", "cz-zev"), car, petrol) == 0

    print("✓ Generic products score 1, matching tags add 2")


def test_select_vignette_product():
    print("\n=== Testing Vignette Selection ===")

    car = VehicleClass.PASSENGER_CAR_M1
    petrol = PowertrainType.PETROL

    assert select_vignette_product("AT", car, petrol).id == "at-1d"
    assert select_vignette_product("AT", VehicleClass.MOTORCYCLE, petrol).id == "at-moto-10d"
    assert select_vignette_product("HU", car, petrol).id == "hu-d1-10d"
    assert select_vignette_product("HU", VehicleClass.VAN_OR_MPV, petrol).id == "hu-d2-10d"
    assert select_vignette_product("SI", VehicleClass.COMMERCIAL_N1, PowertrainType.DIESEL).id == "si-2b-7d"
    assert select_vignette_product("CZ", car, PowertrainType.ELECTRIC).id == "cz-zev"
    assert select_vignette_product("CZ", car, petrol).id == "cz-1d"
    assert select_vignette_product("DE", car, petrol) is None

    print("✓ Highest score wins, cheapest EUR price breaks ties")


def test_austria_fuel_estimate():
    print("\n=== Testing Austria Fuel Estimate ===")

    countries = [create_test_country("AT", vignette=True, section_toll=True)]
    estimate = build_trip_estimate(countries, 50_000, make_request())

    assert estimate.powertrain == "fuel"
    assert estimate.electric is None
    # Highway distance exceeds the provider total, so it wins
    assert estimate.total_distance_km == 70.2
    assert [item.product_id for item in estimate.vignette_breakdown] == ["at-1d"]
    assert estimate.vignette_estimate_eur == 9.3
    assert estimate.section_toll_estimate_eur == 12.5
    assert estimate.total_road_charges_eur == pytest.approx(21.8)

    fuel = estimate.fuel
    assert fuel.assumed_fuel_type == "petrol"
    assert fuel.consumption_liters_per_100km == 7.2
    assert fuel.liters_needed == 5.1
    assert fuel.average_price_per_liter_eur == 1.74
    assert fuel.estimated_fuel_cost_eur == pytest.approx(8.8)
    assert fuel.best_top_up_country_code == "AT"
    assert fuel.estimated_range_per_full_tank_km == 722
    assert fuel.suggested_top_up_countries == []
    assert fuel.refuel_plan.startswith("A single full tank")

    assert estimate.total_trip_estimate_eur == pytest.approx(
        estimate.total_road_charges_eur + fuel.estimated_fuel_cost_eur, abs=0.01
    )
    assert estimate.unpriced_countries == []

    print("✓ Road charges and fuel cost add up")


def test_electric_estimate():
    print("\n=== Testing Electric Estimate ===")

    countries = [create_test_country("AT", vignette=True)]
    request = make_request(powertrain=PowertrainType.ELECTRIC)
    estimate = build_trip_estimate(countries, 100_000, request)

    assert estimate.powertrain == "electric"
    assert estimate.fuel is None
    electric = estimate.electric
    assert electric.consumption_kwh_per_100km == 18.0
    assert electric.kwh_needed == 18.0
    assert electric.average_price_per_kwh_eur == 0.49
    assert electric.estimated_charging_cost_eur == pytest.approx(8.82)
    assert electric.best_charge_country_code == "AT"

    print("✓ Electric powertrain yields only a charging estimate")


def test_large_vehicle_assumptions():
    countries = [create_test_country("DE")]
    van = build_trip_estimate(countries, 100_000, make_request(vehicle_class=VehicleClass.VAN_OR_MPV))
    assert van.fuel.assumed_fuel_type == "diesel"
    assert van.fuel.consumption_liters_per_100km == 10.8

    hybrid = build_trip_estimate(countries, 100_000, make_request(powertrain=PowertrainType.HYBRID))
    assert hybrid.fuel.assumed_fuel_type == "petrol"
    assert hybrid.fuel.consumption_liters_per_100km == 5.2


def test_unpriced_countries_are_reported():
    print("\n=== Testing Unpriced Countries ===")

    countries = [
        create_test_country("XX", vignette=True),
        create_test_country("DE", section_toll=True),
    ]
    estimate = build_trip_estimate(countries, 100_000, make_request())

    assert estimate.unpriced_countries == ["XX", "DE"]
    assert estimate.vignette_estimate_eur == 0
    assert estimate.section_toll_estimate_eur == 0
    assert any("No standard price table for XX (XX)." == a for a in estimate.assumptions)
    assert any("No section-toll estimate for Germany" in a for a in estimate.assumptions)

    print("✓ Gaps are listed instead of raised")


def test_assumptions_carry_catalog_notes_and_dates():
    print("\n=== Testing Estimate Assumptions ===")

    austria = build_trip_estimate(
        [create_test_country("AT", vignette=True, section_toll=True)], 100_000, make_request()
    )
    assert (
        "Austria: Digital 2-month and annual products bought online start 18 days after purchase."
        in austria.assumptions
    )
    assert any("last updated 2026-02-12" in a for a in austria.assumptions)
    assert "Fuel prices are national petrol averages from 2026-02-12." in austria.assumptions
    # Austria prices in EUR, no conversion to report
    assert not any("exchange rates" in a for a in austria.assumptions)

    czech_ev = build_trip_estimate(
        [create_test_country("CZ", vignette=True)],
        100_000,
        make_request(powertrain=PowertrainType.ELECTRIC),
    )
    assert "Czech Republic: Foreign EVs must register the exemption before travel." in czech_ev.assumptions
    assert "Non-EUR prices use reference exchange rates from 2026-02-12." in czech_ev.assumptions
    assert "Charging prices are national public-charging averages from 2026-02-12." in czech_ev.assumptions

    print("✓ Product notes, catalog caveats and table dates are reported")


def test_fuel_average_without_route_prices():
    countries = [create_test_country("XX")]
    estimate = build_trip_estimate(countries, 100_000, make_request())

    expected = sum(FUEL_PRICE_EUR_PER_LITER.values()) / len(FUEL_PRICE_EUR_PER_LITER)
    assert estimate.fuel.average_price_per_liter_eur == round(expected, 3)
    assert estimate.fuel.best_top_up_country_code is None
    assert estimate.fuel.route_country_fuel_prices == []


def test_plan_stops_prefers_cheapest_reachable_country():
    print("\n=== Testing Stop Planning ===")

    spans = [
        CountrySpan("A", 0, 300),
        CountrySpan("B", 300, 700),
        CountrySpan("C", 700, 1000),
    ]
    prices = {"A": 1.8, "B": 1.5, "C": 1.6}

    stops = plan_stops(1000, 400, spans, prices)

    assert stops == [("B", 400), ("B", 700)]
    assert plan_stops(1000, 1200, spans, prices) == []
    assert plan_stops(1000, 0, spans, prices) == []

    print("✓ Stops land in the cheapest country inside each range window")


def test_plan_stops_keeps_unpriced_windows():
    spans = [CountrySpan("XX", 0, 600), CountrySpan("B", 600, 1000)]
    prices = {"B": 1.5}

    assert plan_stops(1000, 400, spans, prices) == [("", 400), ("B", 800)]


def test_long_trip_through_unpriced_countries_needs_stops():
    print("\n=== Testing Unpriced Long Trip ===")

    countries = [create_test_country("XX", highway_meters=1_500_000)]
    estimate = build_trip_estimate(countries, 1_500_000, make_request())
    fuel = estimate.fuel

    assert fuel.estimated_range_per_full_tank_km == 722
    assert fuel.suggested_top_up_countries == []
    assert fuel.refuel_plan == (
        "Plan 2 stop(s) for the 1500 km trip: "
        "top up en route (~722 km), then top up en route (~1444 km)."
    )

    print("✓ Range shorter than the trip never claims a single tank")


def test_long_trip_suggests_top_up_countries():
    countries = [
        create_test_country("FR", highway_meters=600_000, section_toll=True),
        create_test_country("AT", highway_meters=600_000, vignette=True),
    ]
    spans = [CountrySpan("FR", 0, 600), CountrySpan("AT", 600, 1200)]
    estimate = build_trip_estimate(countries, 1_200_000, make_request(), spans=spans)

    assert estimate.total_distance_km == 1200.0
    assert estimate.fuel.suggested_top_up_countries == ["AT"]
    assert estimate.fuel.best_top_up_country_code == "AT"
    assert estimate.fuel.refuel_plan.startswith("Plan 1 stop(s)")


def run_all_tests():
    """Run all trip estimator tests."""
    print("\n" + "=" * 60)
    print("TRIP ESTIMATOR - TEST SUITE")
    print("=" * 60)

    test_product_match_score()
    test_select_vignette_product()
    test_austria_fuel_estimate()
    test_electric_estimate()
    test_large_vehicle_assumptions()
    test_unpriced_countries_are_reported()
    test_assumptions_carry_catalog_notes_and_dates()
    test_fuel_average_without_route_prices()
    test_plan_stops_prefers_cheapest_reachable_country()
    test_plan_stops_keeps_unpriced_windows()
    test_long_trip_through_unpriced_countries_needs_stops()
    test_long_trip_suggests_top_up_countries()

    print("\n" + "=" * 60)
    print("✅ ALL TRIP ESTIMATOR TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
