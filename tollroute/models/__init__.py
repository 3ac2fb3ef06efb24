"""Pydantic models for the route analysis pipeline."""

from .requests import (
    VehicleClass,
    PowertrainType,
    EmissionClass,
    ChannelCrossingPreference,
    RoutePoint,
    RouteAnalysisRequest,
)
from .estimates import (
    Money,
    VignetteCostItem,
    SectionTollCostItem,
    CountryFuelPrice,
    CountryChargingPrice,
    FuelEstimate,
    ElectricEstimate,
    TripEstimate,
)
from .insights import (
    TollWindowLevel,
    ConfidenceLevel,
    TollWindowImpact,
    TripShieldInsights,
    TimelineEntry,
    TripReadiness,
)
from .analysis import (
    RouteLineString,
    CountryTravelSummary,
    SectionTollNotice,
    ComplianceNotice,
    AppliedPreferences,
    BorderSource,
    BorderCrossing,
    RouteAnalysisResult,
)

__all__ = [
    # Requests
    "VehicleClass",
    "PowertrainType",
    "EmissionClass",
    "ChannelCrossingPreference",
    "RoutePoint",
    "RouteAnalysisRequest",
    # Estimates
    "Money",
    "VignetteCostItem",
    "SectionTollCostItem",
    "CountryFuelPrice",
    "CountryChargingPrice",
    "FuelEstimate",
    "ElectricEstimate",
    "TripEstimate",
    # Insights
    "TollWindowLevel",
    "ConfidenceLevel",
    "TollWindowImpact",
    "TripShieldInsights",
    "TimelineEntry",
    "TripReadiness",
    # Analysis result
    "RouteLineString",
    "CountryTravelSummary",
    "SectionTollNotice",
    "ComplianceNotice",
    "AppliedPreferences",
    "BorderSource",
    "BorderCrossing",
    "RouteAnalysisResult",
]
