"""
Trip Shield: cross-cutting risk signals for a route.

Derived purely from the country summaries, section-toll notices and the
trip date. Nothing here changes the vignette or toll decisions.
"""

import re
from typing import Optional, Sequence

from ..models.analysis import CountryTravelSummary, SectionTollNotice
from ..models.insights import TollWindowImpact, TollWindowLevel, TripShieldInsights
from ..models.requests import RouteAnalysisRequest
from .country_rules import is_heavy_vehicle

FREE_FLOW_PATTERN = re.compile(r"free-flow|flux libre|barrier-free|eflow|electronic toll", re.IGNORECASE)
URBAN_ZONE_PATTERN = re.compile(r"ulez|crit'air|umweltplakette|low-emission zone|\bzfe\b", re.IGNORECASE)

TIME_WINDOW_COUNTRY = "FR"


def notice_text(notice: SectionTollNotice) -> str:
    return f"{notice.label} {notice.description}"


def has_urban_zone_notice(notices: Sequence[str]) -> bool:
    return any(URBAN_ZONE_PATTERN.search(notice) for notice in notices)


def distinct_sequence(codes: Sequence[str]) -> list[str]:
    """Collapse consecutive repeats: FR, FR, CH, FR -> FR, CH, FR."""
    collapsed: list[str] = []
    for code in codes:
        if not collapsed or collapsed[-1] != code:
            collapsed.append(code)
    return collapsed


def classify_toll_window(
    countries: Sequence[CountryTravelSummary],
    request: RouteAnalysisRequest,
) -> Optional[TollWindowImpact]:
    """
    Weekday effect on French time-window tolls.

    Only applies when France requires a section toll and a trip date is set.
    """
    if request.trip_date is None:
        return None
    if not any(c.country_code == TIME_WINDOW_COUNTRY and c.requires_section_toll for c in countries):
        return None

    weekday = request.trip_date.weekday()
    if weekday == 4:
        return TollWindowImpact(
            level=TollWindowLevel.SURCHARGE_RISK,
            title="Friday toll surcharge window",
            details="French time-window tolls around Paris peak on Friday afternoons and evenings.",
            estimated_delta="+2 to +6 EUR",
        )
    if weekday in (5, 6):
        return TollWindowImpact(
            level=TollWindowLevel.SAVINGS_OPPORTUNITY,
            title="Weekend off-peak tolls",
            details="Weekend passages on French time-window sections are usually billed at off-peak rates.",
            estimated_delta="-1 to -4 EUR",
        )
    return TollWindowImpact(
        level=TollWindowLevel.NEUTRAL,
        title="Standard weekday tolls",
        details="Midweek trips pay the standard rate outside Paris rush hours.",
        estimated_delta="0 EUR",
    )


def _departure_hint(impact: Optional[TollWindowImpact], has_border_crossing: bool) -> Optional[str]:
    if impact is not None:
        if impact.level == TollWindowLevel.SURCHARGE_RISK:
            return "Depart before noon to avoid the Friday afternoon toll surcharge window."
        if impact.level == TollWindowLevel.SAVINGS_OPPORTUNITY:
            return "Weekend departure already falls in the off-peak toll window."
        return "Pass the Paris area outside 7-10h and 16-20h for the lowest time-window tolls."
    if has_border_crossing:
        return "Cross borders early in the morning to limit waiting times at busy checkpoints."
    return None


def build_trip_shield(
    countries: Sequence[CountryTravelSummary],
    section_tolls: Sequence[SectionTollNotice],
    request: RouteAnalysisRequest,
    route_sequence: Optional[Sequence[str]] = None,
) -> TripShieldInsights:
    """
    Collect trip-wide risk signals.

    Args:
        countries: Country summaries for the route
        section_tolls: Section-toll notices already resolved for the route
        request: Original request (trip date, tolls, weight)
        route_sequence: Country codes in route order, defaults to the
            summary order

    Returns:
        TripShieldInsights with flags, warnings and optional timing hints
    """
    sequence = list(route_sequence) if route_sequence is not None else [c.country_code for c in countries]
    has_border_crossing = len(set(sequence)) >= 2

    has_free_flow = any(FREE_FLOW_PATTERN.search(notice_text(n)) for n in section_tolls)
    has_urban_risk = (
        any(has_urban_zone_notice(c.notices) for c in countries)
        or has_urban_zone_notice([notice_text(n) for n in section_tolls])
    )

    impact = classify_toll_window(countries, request)

    warnings = []
    if has_border_crossing:
        warnings.append("Cross-border trip: carry passport or ID, vehicle registration and insurance papers.")
    if has_free_flow:
        warnings.append("Free-flow tolls have no booths: pay online within 72 hours of passage.")
    if has_urban_risk:
        warnings.append("Low-emission zones on this route may require a sticker or daily charge before entry.")
    if request.avoid_tolls and any(c.requires_section_toll for c in countries):
        warnings.append("Tolls could not be avoided everywhere; some tolled sections remain on this route.")
    if is_heavy_vehicle(request):
        warnings.append("Vehicle above 3.5t: heavy-vehicle toll systems can replace passenger vignettes.")

    return TripShieldInsights(
        has_border_crossing=has_border_crossing,
        has_free_flow_toll=has_free_flow,
        has_major_urban_zone_risk=has_urban_risk,
        warnings=warnings,
        departure_time_hint=_departure_hint(impact, has_border_crossing),
        toll_window_impact=impact,
    )
