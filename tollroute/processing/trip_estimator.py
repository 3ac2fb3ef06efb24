"""
Trip budget estimation.

Combines vignette products, flat section-toll estimates and fuel or
charging costs into one advisory TripEstimate. Gaps in the reference
tables are reported in the estimate, never raised.
"""

import logging
from statistics import mean
from typing import Optional, Sequence

from ..data.countries import country_name
from ..data.energy import (
    CHARGING_PRICE_EUR_PER_KWH,
    ENERGY_PRICES_LAST_UPDATED,
    FUEL_PRICE_EUR_PER_LITER,
    assumed_fuel_type,
    battery_capacity_kwh,
    ev_consumption_kwh_per_100km,
    fuel_consumption_l_per_100km,
    tank_capacity_liters,
)
from ..data.exchange_rates import EXCHANGE_RATES_LAST_UPDATED, convert_currency_to_eur
from ..data.section_tolls import SECTION_TOLL_ESTIMATES_EUR, SECTION_TOLL_ESTIMATES_LAST_UPDATED
from ..data.vignettes import PRICE_LAST_VERIFIED_AT, VIGNETTE_CATALOG, VignetteProduct
from ..models.analysis import CountryTravelSummary
from ..models.estimates import (
    CountryChargingPrice,
    CountryFuelPrice,
    ElectricEstimate,
    FuelEstimate,
    Money,
    SectionTollCostItem,
    TripEstimate,
    VignetteCostItem,
)
from ..models.requests import PowertrainType, RouteAnalysisRequest, VehicleClass
from .coverage import CountrySpan

logger = logging.getLogger(__name__)

# Upper bound on planned stops, reached only with absurd range inputs
MAX_PLANNED_STOPS = 50


def product_match_score(
    product: VignetteProduct,
    vehicle_class: VehicleClass,
    powertrain: PowertrainType,
) -> int:
    """
    Score how well a vignette product fits the vehicle.

    0 when the product's tags exclude the vehicle or powertrain, 1 for a
    generic product, +2 for each matching tag group.
    """
    vehicle_match = not product.vehicle_tags or vehicle_class.value in product.vehicle_tags
    powertrain_match = not product.powertrain_tags or powertrain.value in product.powertrain_tags
    if not vehicle_match or not powertrain_match:
        return 0

    score = 1
    if vehicle_class.value in product.vehicle_tags:
        score += 2
    if powertrain.value in product.powertrain_tags:
        score += 2
    return score


def select_vignette_product(
    country_code: str,
    vehicle_class: VehicleClass,
    powertrain: PowertrainType,
) -> Optional[VignetteProduct]:
    """Best-scoring product for a country, cheapest in EUR on ties."""
    pricing = VIGNETTE_CATALOG.get(country_code)
    if pricing is None:
        return None

    scored = [
        (product_match_score(product, vehicle_class, powertrain), product)
        for product in pricing.products
    ]
    scored = [(score, product) for score, product in scored if score > 0]
    if not scored:
        return None

    _, best = min(
        scored,
        key=lambda item: (-item[0], convert_currency_to_eur(item[1].price, item[1].currency)),
    )
    return best


def _fallback_spans(countries: Sequence[CountryTravelSummary], distance_km: float) -> list[CountrySpan]:
    """Split the distance across countries in route order, weighted by highway distance."""
    if not countries:
        return []
    weights = [country.highway_distance_meters for country in countries]
    if sum(weights) <= 0:
        weights = [1] * len(countries)
    total_weight = sum(weights)

    spans = []
    position = 0.0
    for country, weight in zip(countries, weights):
        length = distance_km * weight / total_weight
        spans.append(CountrySpan(country.country_code, position, position + length))
        position += length
    return spans


def plan_stops(
    distance_km: float,
    range_km: float,
    spans: Sequence[CountrySpan],
    prices: dict[str, float],
) -> list[tuple[str, float]]:
    """
    Greedy top-up plan along the route.

    From the last fill point, pick the cheapest priced country whose span
    overlaps the reachable window and fill as late as possible inside it.

    Returns:
        List of (country_code, km_from_start) stops; empty when one full
        tank or charge covers the distance. country_code is "" when no
        priced country overlaps the window.
    """
    if range_km <= 0 or range_km >= distance_km:
        return []

    stops: list[tuple[str, float]] = []
    position = 0.0

    while position + range_km < distance_km and len(stops) < MAX_PLANNED_STOPS:
        window_end = position + range_km
        candidates = [
            span for span in spans
            if span.country_code in prices and span.start_km < window_end and span.end_km > position
        ]
        if candidates:
            cheapest = min(candidates, key=lambda span: prices[span.country_code])
            stop_at = min(cheapest.end_km, window_end)
            if stop_at <= position:
                stop_at = window_end
            stops.append((cheapest.country_code, stop_at))
        else:
            stop_at = window_end
            stops.append(("", stop_at))
        position = stop_at

    return stops


def _suggested_countries(stops: list[tuple[str, float]]) -> list[str]:
    seen: list[str] = []
    for code, _ in stops:
        if code and code not in seen:
            seen.append(code)
    return seen


def _describe_leg(code: str, km: float) -> str:
    if not code:
        return f"top up en route (~{round(km)} km)"
    return f"{country_name(code)} (~{round(km)} km)"


def _describe_plan(stops: list[tuple[str, float]], distance_km: float, range_km: float, noun: str) -> str:
    if range_km >= distance_km:
        return (
            f"A single full {noun} (about {round(range_km)} km range) covers "
            f"the estimated {round(distance_km)} km."
        )
    if not stops:
        return f"Top up en route; no range estimate is available for the {round(distance_km)} km trip."
    legs = ", then ".join(_describe_leg(code, km) for code, km in stops)
    return f"Plan {len(stops)} stop(s) for the {round(distance_km)} km trip: {legs}."


def _route_prices(countries: Sequence[CountryTravelSummary], table: dict[str, float]) -> dict[str, float]:
    return {
        country.country_code: table[country.country_code]
        for country in countries
        if country.country_code in table
    }


def _build_fuel(request, distance_km, countries, spans) -> FuelEstimate:
    consumption = fuel_consumption_l_per_100km(request.vehicle_class, request.powertrain)
    tank = tank_capacity_liters(request.vehicle_class, request.powertrain)
    prices = _route_prices(countries, FUEL_PRICE_EUR_PER_LITER)
    average = mean(prices.values()) if prices else mean(FUEL_PRICE_EUR_PER_LITER.values())
    liters = consumption * distance_km / 100

    best_code = min(prices, key=prices.get) if prices else None
    range_km = tank / consumption * 100
    stops = plan_stops(distance_km, range_km, spans, prices)

    return FuelEstimate(
        assumed_fuel_type=assumed_fuel_type(request.vehicle_class, request.powertrain),
        consumption_liters_per_100km=consumption,
        liters_needed=round(liters, 1),
        average_price_per_liter_eur=round(average, 3),
        estimated_fuel_cost_eur=round(liters * average, 2),
        best_top_up_country_code=best_code,
        best_top_up_price_eur_per_liter=prices[best_code] if best_code else None,
        route_country_fuel_prices=[
            CountryFuelPrice(country_code=code, price_eur_per_liter=price) for code, price in prices.items()
        ],
        estimated_range_per_full_tank_km=round(range_km),
        suggested_top_up_countries=_suggested_countries(stops),
        refuel_plan=_describe_plan(stops, distance_km, range_km, "tank"),
    )


def _build_electric(request, distance_km, countries, spans) -> ElectricEstimate:
    consumption = ev_consumption_kwh_per_100km(request.vehicle_class)
    battery = battery_capacity_kwh(request.vehicle_class)
    prices = _route_prices(countries, CHARGING_PRICE_EUR_PER_KWH)
    average = mean(prices.values()) if prices else mean(CHARGING_PRICE_EUR_PER_KWH.values())
    kwh = consumption * distance_km / 100

    best_code = min(prices, key=prices.get) if prices else None
    range_km = battery / consumption * 100
    stops = plan_stops(distance_km, range_km, spans, prices)

    return ElectricEstimate(
        consumption_kwh_per_100km=consumption,
        kwh_needed=round(kwh, 1),
        average_price_per_kwh_eur=round(average, 3),
        estimated_charging_cost_eur=round(kwh * average, 2),
        best_charge_country_code=best_code,
        best_charge_price_eur_per_kwh=prices[best_code] if best_code else None,
        route_country_charging_prices=[
            CountryChargingPrice(country_code=code, price_eur_per_kwh=price) for code, price in prices.items()
        ],
        estimated_range_per_full_charge_km=round(range_km),
        suggested_charge_countries=_suggested_countries(stops),
        charge_plan=_describe_plan(stops, distance_km, range_km, "charge"),
    )


def build_trip_estimate(
    countries: Sequence[CountryTravelSummary],
    total_distance_meters: float,
    request: RouteAnalysisRequest,
    spans: Optional[Sequence[CountrySpan]] = None,
) -> TripEstimate:
    """
    Estimate road charges and energy cost for the whole trip.

    Args:
        countries: Country summaries in route order
        total_distance_meters: Provider or great-circle route length
        request: Vehicle and powertrain parameters
        spans: Per-country route spans for stop planning. When omitted the
            distance is split across countries by highway share.

    Returns:
        TripEstimate with exactly one of fuel / electric populated
    """
    assumptions: list[str] = [
        f"Vignette prices come from reference tables last verified {PRICE_LAST_VERIFIED_AT}.",
    ]
    unpriced: list[str] = []
    converted = False

    vignette_items = []
    for country in countries:
        if not country.requires_vignette:
            continue
        product = select_vignette_product(country.country_code, request.vehicle_class, request.powertrain)
        if product is None:
            unpriced.append(country.country_code)
            assumptions.append(
                f"No standard price table for {country_name(country.country_code)} ({country.country_code})."
            )
            continue
        price_eur = convert_currency_to_eur(product.price, product.currency)
        if product.currency != "EUR":
            converted = True
        name = country_name(country.country_code)
        if product.notes:
            assumptions.append(f"{name}: {product.notes}")
        for caveat in VIGNETTE_CATALOG[country.country_code].caveats:
            assumptions.append(f"{name}: {caveat}")
        vignette_items.append(
            VignetteCostItem(
                country_code=country.country_code,
                product_id=product.id,
                product_label=product.label,
                original_price=Money(amount=product.price, currency=product.currency),
                price_eur=round(price_eur, 2),
            )
        )

    toll_items = []
    for country in countries:
        if not country.requires_section_toll:
            continue
        estimate = SECTION_TOLL_ESTIMATES_EUR.get(country.country_code)
        if estimate is None:
            if country.country_code not in unpriced:
                unpriced.append(country.country_code)
            assumptions.append(
                f"No section-toll estimate for {country_name(country.country_code)}; not included in the total."
            )
            continue
        toll_items.append(SectionTollCostItem(country_code=country.country_code, estimated_eur=estimate))
    if toll_items:
        assumptions.append(
            "Section tolls use flat per-trip estimates (last updated "
            f"{SECTION_TOLL_ESTIMATES_LAST_UPDATED}); actual tolls depend on distance and class."
        )
    if converted:
        assumptions.append(f"Non-EUR prices use reference exchange rates from {EXCHANGE_RATES_LAST_UPDATED}.")

    highway_meters = sum(country.highway_distance_meters for country in countries)
    distance_km = max(total_distance_meters, highway_meters) / 1000
    if spans is None:
        spans = _fallback_spans(countries, distance_km)

    vignette_total = round(sum(item.price_eur for item in vignette_items), 2)
    toll_total = round(sum(item.estimated_eur for item in toll_items), 2)
    road_total = round(vignette_total + toll_total, 2)

    fuel = None
    electric = None
    if request.powertrain == PowertrainType.ELECTRIC:
        electric = _build_electric(request, distance_km, countries, spans)
        energy_cost = electric.estimated_charging_cost_eur
        assumptions.append(f"Charging prices are national public-charging averages from {ENERGY_PRICES_LAST_UPDATED}.")
    else:
        fuel = _build_fuel(request, distance_km, countries, spans)
        energy_cost = fuel.estimated_fuel_cost_eur
        assumptions.append(f"Fuel prices are national {fuel.assumed_fuel_type} averages from {ENERGY_PRICES_LAST_UPDATED}.")

    logger.debug(
        f"Trip estimate: {distance_km:.0f} km, road charges {road_total} EUR, "
        f"energy {energy_cost} EUR, unpriced {unpriced}"
    )

    return TripEstimate(
        powertrain="electric" if electric is not None else "fuel",
        total_distance_km=round(distance_km, 1),
        vignette_breakdown=vignette_items,
        vignette_estimate_eur=vignette_total,
        section_toll_breakdown=toll_items,
        section_toll_estimate_eur=toll_total,
        total_road_charges_eur=road_total,
        fuel=fuel,
        electric=electric,
        total_trip_estimate_eur=round(road_total + energy_cost, 2),
        unpriced_countries=unpriced,
        assumptions=assumptions,
    )
