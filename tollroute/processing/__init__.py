"""Route analysis core: coverage, country rules, estimates and insights."""

from .coverage import AnalysisDraft, CoverageAccumulator, analyze_route_requirements, map_country_summaries
from .country_rules import CountryDecision, evaluate_country_requirement
from .section_tolls import get_section_toll_notices
from .trip_estimator import build_trip_estimate
from .trip_shield import build_trip_shield
from .readiness import build_trip_readiness
from .borders import build_border_crossings
from .pipeline import RouteAnalysisService, apply_country_rules

__all__ = [
    "AnalysisDraft",
    "CoverageAccumulator",
    "analyze_route_requirements",
    "map_country_summaries",
    "CountryDecision",
    "evaluate_country_requirement",
    "get_section_toll_notices",
    "build_trip_estimate",
    "build_trip_shield",
    "build_trip_readiness",
    "build_border_crossings",
    "RouteAnalysisService",
    "apply_country_rules",
]
