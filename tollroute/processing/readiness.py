"""Trip readiness: confidence score, per-country timeline and checklist."""

from typing import Optional, Sequence

from ..data.countries import country_name
from ..data.links import HEAVY_VEHICLE_TOLL_LINKS
from ..models.analysis import CountryTravelSummary, SectionTollNotice
from ..models.estimates import TripEstimate
from ..models.insights import ConfidenceLevel, TimelineEntry, TripReadiness, TripShieldInsights
from ..models.requests import RouteAnalysisRequest, VehicleClass
from .country_rules import is_heavy_vehicle
from .trip_shield import FREE_FLOW_PATTERN, has_urban_zone_notice, notice_text

# Score deductions
UNPRICED_VIGNETTE_PENALTY = 10
MISSING_TOLL_ESTIMATE_PENALTY = 5
UNKNOWN_VEHICLE_PENALTY = 15
VAN_CATEGORY_PENALTY = 5
GREAT_CIRCLE_PENALTY = 10
NO_TRIP_DATE_PENALTY = 5
HEAVY_VEHICLE_PENALTY = 10

HIGH_CONFIDENCE = 80
MEDIUM_CONFIDENCE = 55

_URBAN_CHECKS = {
    "GB": "Check ULEZ compliance and pay the London Congestion Charge if driving into London.",
    "FR": "Order a Crit'Air sticker before entering French low-emission zones.",
    "DE": "Verify the Umweltplakette environmental sticker for German city zones.",
}


def confidence_level(score: int) -> ConfidenceLevel:
    if score >= HIGH_CONFIDENCE:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def _score(
    countries: Sequence[CountryTravelSummary],
    estimate: Optional[TripEstimate],
    request: RouteAnalysisRequest,
    distance_source: str,
) -> tuple[int, list[str]]:
    score = 100
    reasons = []

    priced_vignettes = {item.country_code for item in estimate.vignette_breakdown} if estimate else set()
    priced_tolls = {item.country_code for item in estimate.section_toll_breakdown} if estimate else set()

    for country in countries:
        name = country_name(country.country_code)
        if country.requires_vignette and country.country_code not in priced_vignettes:
            score -= UNPRICED_VIGNETTE_PENALTY
            reasons.append(f"No vignette price data for {name}.")
        if country.requires_section_toll and country.country_code not in priced_tolls:
            score -= MISSING_TOLL_ESTIMATE_PENALTY
            reasons.append(f"No section-toll estimate for {name}.")

    if request.vehicle_class == VehicleClass.UNKNOWN:
        score -= UNKNOWN_VEHICLE_PENALTY
        reasons.append("Vehicle class is unknown, so the toll category is a guess.")
    elif request.vehicle_class in (VehicleClass.VAN_OR_MPV, VehicleClass.COMMERCIAL_N1) and any(
        c.requires_vignette for c in countries
    ):
        score -= VAN_CATEGORY_PENALTY
        reasons.append("Vans and campers can land in a higher vignette category.")

    if distance_source == "great_circle":
        score -= GREAT_CIRCLE_PENALTY
        reasons.append("Route distance is estimated from the geometry, not reported by the router.")
    if request.trip_date is None:
        score -= NO_TRIP_DATE_PENALTY
        reasons.append("No trip date set; date-dependent pricing was not checked.")
    if is_heavy_vehicle(request):
        score -= HEAVY_VEHICLE_PENALTY
        reasons.append("Heavy-vehicle toll systems are only covered as notices.")

    return max(0, min(100, score)), reasons


def _timeline_entry(
    country: CountryTravelSummary,
    section_tolls: Sequence[SectionTollNotice],
    estimate: Optional[TripEstimate],
) -> TimelineEntry:
    code = country.country_code
    vignette = next((i for i in estimate.vignette_breakdown if i.country_code == code), None) if estimate else None
    toll = next((i for i in estimate.section_toll_breakdown if i.country_code == code), None) if estimate else None

    actions = []
    if country.requires_vignette:
        actions.append(f"Buy {vignette.product_label}" if vignette else "Buy a vignette before using motorways")
    if country.requires_section_toll:
        actions.append("Have payment ready for section tolls")
    if not actions:
        actions.append("No vignette or section toll expected")

    cost = None
    if vignette is not None or toll is not None:
        cost = round((vignette.price_eur if vignette else 0.0) + (toll.estimated_eur if toll else 0.0), 2)

    country_tolls = [notice_text(n) for n in section_tolls if n.country_code == code]
    return TimelineEntry(
        country_code=code,
        label=country_name(code),
        action="; ".join(actions) + ".",
        estimated_cost_eur=cost,
        requires_vignette=country.requires_vignette,
        requires_section_toll=country.requires_section_toll,
        has_urban_access_risk=has_urban_zone_notice(country.notices) or has_urban_zone_notice(country_tolls),
    )


def _checklist(
    countries: Sequence[CountryTravelSummary],
    section_tolls: Sequence[SectionTollNotice],
    estimate: Optional[TripEstimate],
    shield: Optional[TripShieldInsights],
    request: RouteAnalysisRequest,
) -> list[str]:
    items = []
    vignettes = {i.country_code: i for i in estimate.vignette_breakdown} if estimate else {}

    for country in countries:
        name = country_name(country.country_code)
        if country.requires_vignette:
            item = vignettes.get(country.country_code)
            if item is not None:
                items.append(f"Buy {item.product_label} for {name} (~{item.price_eur:.2f} EUR).")
            else:
                items.append(f"Buy the {name} vignette from the official portal.")
        if country.requires_section_toll:
            items.append(f"Prepare a card or toll tag for {name} section tolls.")
        if country.country_code in _URBAN_CHECKS and (
            has_urban_zone_notice(country.notices)
            or has_urban_zone_notice([notice_text(n) for n in section_tolls if n.country_code == country.country_code])
        ):
            items.append(_URBAN_CHECKS[country.country_code])

    if any(FREE_FLOW_PATTERN.search(notice_text(n)) for n in section_tolls):
        items.append("Pay free-flow tolls online within 72 hours of passage.")
    if any(n.label == "Channel Crossing Booking" for n in section_tolls):
        items.append("Book the Channel crossing (ferry or Eurotunnel).")
    if is_heavy_vehicle(request):
        heavy_links = [c.country_code for c in countries if c.country_code in HEAVY_VEHICLE_TOLL_LINKS]
        for code in heavy_links:
            items.append(
                f"Register with the {country_name(code)} heavy-vehicle toll system: {HEAVY_VEHICLE_TOLL_LINKS[code]}"
            )
        if not heavy_links:
            items.append("Register with the heavy-vehicle toll systems on your route before departure.")
    if shield is not None and shield.has_border_crossing:
        items.append("Pack passport or ID, vehicle registration and green card insurance.")
    if request.trip_date is None:
        items.append("Set a trip date to check time-window tolls and vignette validity.")

    return items


def build_trip_readiness(
    countries: Sequence[CountryTravelSummary],
    section_tolls: Sequence[SectionTollNotice],
    request: RouteAnalysisRequest,
    estimate: Optional[TripEstimate] = None,
    shield: Optional[TripShieldInsights] = None,
    distance_source: str = "provider",
) -> TripReadiness:
    """
    Combine the analysis into a confidence score, timeline and checklist.

    The score starts at 100 and drops for missing price data, uncertain
    vehicle categorization, a fallback distance, a missing date and heavy
    vehicles. It is clamped to 0..100.
    """
    score, reasons = _score(countries, estimate, request, distance_source)

    return TripReadiness(
        confidence_score=score,
        confidence_level=confidence_level(score),
        confidence_reasons=reasons,
        timeline=[_timeline_entry(c, section_tolls, estimate) for c in countries],
        checklist=_checklist(countries, section_tolls, estimate, shield, request),
    )
