"""
Route geometry and country coverage analysis.

Walks the directions-provider response once, attributing each coordinate
step to the country range it falls in and classifying it by way category.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import Callable, Literal, Optional

from ..data.countries import HIGHWAY_CATEGORIES, ORS_COUNTRY_ID_MAP, TOLLWAY_CATEGORIES
from ..exceptions import RouteDataError
from ..models.analysis import Coordinate, CountryTravelSummary, RouteLineString

logger = logging.getLogger(__name__)

# Planar degrees-to-meters factor for highway distance. Only locally
# accurate; downstream estimates are tuned against it.
METERS_PER_DEGREE = 111_000
EARTH_RADIUS_M = 6_371_000


@dataclass
class CoverageAccumulator:
    """Per-country running totals while scanning the route."""
    highway_distance_meters: float = 0.0
    has_highway: bool = False
    has_tollway: bool = False
    segment_ranges: list[tuple[int, int]] = field(default_factory=list)


@dataclass
class AnalysisDraft:
    """Intermediate analysis result before country rules are applied."""
    line_string: RouteLineString
    countries: dict[str, CoverageAccumulator]
    country_sequence: list[str]
    total_distance_meters: float
    distance_source: Literal["provider", "great_circle"] = "provider"


@dataclass(frozen=True)
class CountrySpan:
    """Stretch of the route inside one country, in km from the start."""
    country_code: str
    start_km: float
    end_km: float


def haversine_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two [lon, lat] points in meters."""
    lat1 = math.radians(a[1])
    lat2 = math.radians(b[1])
    dlat = lat2 - lat1
    dlon = math.radians(b[0] - a[0])

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_M * c


def _category_at(index: int, way_ranges: list) -> int:
    for start, end, category in way_ranges:
        if start <= index <= end:
            return category
    return 0


def _first_feature(response: dict) -> dict:
    features = response.get("features") or []
    if not features:
        raise RouteDataError("No route returned by OpenRouteService.")
    return features[0]


def analyze_route_requirements(response: dict, request=None) -> AnalysisDraft:
    """
    Build per-country coverage from an ORS GeoJSON directions response.

    Args:
        response: Parsed ORS response with countryinfo and waycategory extras
        request: Accepted for symmetry with the rule stage; unused here

    Returns:
        AnalysisDraft with one accumulator per recognized country

    Raises:
        RouteDataError: When the route, its geometry or its country ranges
            are missing
    """
    feature = _first_feature(response)

    raw_coordinates = (feature.get("geometry") or {}).get("coordinates") or []
    if not raw_coordinates:
        raise RouteDataError("Route geometry is missing.")
    # ORS may append elevation as a third value
    coordinates: list[Coordinate] = [(float(c[0]), float(c[1])) for c in raw_coordinates]

    properties = feature.get("properties") or {}
    extras = properties.get("extras") or {}
    country_ranges = (extras.get("countryinfo") or {}).get("values") or []
    way_ranges = (extras.get("waycategory") or {}).get("values") or []

    if not country_ranges:
        raise RouteDataError("Route metadata is missing country information.")

    countries: dict[str, CoverageAccumulator] = {}
    sequence: list[str] = []

    for start, end, country_id in country_ranges:
        country_code = ORS_COUNTRY_ID_MAP.get(country_id)
        if country_code is None:
            logger.debug(f"Skipping unknown ORS country id {country_id}")
            continue

        acc = countries.setdefault(country_code, CoverageAccumulator())
        acc.segment_ranges.append((start, end))
        sequence.append(country_code)

        for idx in range(start, end):
            if idx < 0 or idx + 1 >= len(coordinates):
                continue
            current = coordinates[idx]
            nxt = coordinates[idx + 1]
            rough_meters = math.hypot(nxt[0] - current[0], nxt[1] - current[1]) * METERS_PER_DEGREE

            category = _category_at(idx, way_ranges)
            if category in HIGHWAY_CATEGORIES:
                acc.has_highway = True
                acc.highway_distance_meters += rough_meters
            if category in TOLLWAY_CATEGORIES:
                acc.has_tollway = True

    summary = properties.get("summary") or {}
    provider_distance = summary.get("distance")
    if provider_distance is not None:
        total_distance = float(provider_distance)
        source = "provider"
    else:
        total_distance = float(round(route_distance_profile(coordinates)[-1]))
        source = "great_circle"

    return AnalysisDraft(
        line_string=RouteLineString(coordinates=coordinates),
        countries=countries,
        country_sequence=sequence,
        total_distance_meters=total_distance,
        distance_source=source,
    )


def map_country_summaries(
    draft: AnalysisDraft,
    decision_resolver: Callable[[str, bool, bool], "object"],
) -> list[CountryTravelSummary]:
    """
    Turn accumulators into country summaries in first-seen order.

    decision_resolver(country_code, has_highway, has_tollway) must return an
    object with requires_vignette, requires_section_toll and notices.
    """
    coordinates = draft.line_string.coordinates
    summaries = []

    for country_code, acc in draft.countries.items():
        decision = decision_resolver(country_code, acc.has_highway, acc.has_tollway)

        segments = []
        for start, end in acc.segment_ranges:
            piece = coordinates[start:end + 1]
            if len(piece) >= 2:
                segments.append(RouteLineString(coordinates=piece))

        summaries.append(
            CountryTravelSummary(
                country_code=country_code,
                highway_distance_meters=max(0, round(acc.highway_distance_meters)),
                requires_vignette=decision.requires_vignette,
                requires_section_toll=decision.requires_section_toll,
                notices=list(decision.notices),
                route_segments=segments,
            )
        )

    return summaries


def route_distance_profile(coordinates: list[Coordinate]) -> list[float]:
    """Cumulative great-circle distance in meters at each coordinate index."""
    profile = [0.0] if coordinates else []
    for a, b in zip(coordinates, coordinates[1:]):
        profile.append(profile[-1] + haversine_meters(a, b))
    return profile


def country_route_spans(
    draft: AnalysisDraft,
    profile: Optional[list[float]] = None,
) -> list[CountrySpan]:
    """
    Per-range country spans along the route, scaled to the total distance.

    Ranges are returned in route order, so a country entered twice
    appears twice.
    """
    if profile is None:
        profile = route_distance_profile(draft.line_string.coordinates)
    if not profile or profile[-1] <= 0:
        return []

    scale = (draft.total_distance_meters / profile[-1]) if draft.total_distance_meters > 0 else 1.0
    last = len(profile) - 1
    spans = []

    for country_code, acc in draft.countries.items():
        for start, end in acc.segment_ranges:
            lo = profile[min(max(start, 0), last)] * scale / 1000
            hi = profile[min(max(end, 0), last)] * scale / 1000
            spans.append(CountrySpan(country_code, lo, hi))

    spans.sort(key=lambda span: (span.start_km, span.end_km))
    return spans
