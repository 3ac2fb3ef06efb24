"""Route analysis result models - the payload returned to API callers."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .estimates import TripEstimate
from .insights import TripReadiness, TripShieldInsights
from .requests import ChannelCrossingPreference, EmissionClass, PowertrainType, VehicleClass


Coordinate = tuple[float, float]


class RouteLineString(BaseModel):
    """GeoJSON LineString with [lon, lat] coordinate pairs."""
    model_config = ConfigDict(frozen=True)

    type: Literal["LineString"] = "LineString"
    coordinates: list[Coordinate]


class CountryTravelSummary(BaseModel):
    """Vignette and toll decision for one country on the route."""
    model_config = ConfigDict(frozen=True)

    country_code: str = Field(description="ISO 3166-1 alpha-2 code")
    highway_distance_meters: int = Field(ge=0)
    requires_vignette: bool
    requires_section_toll: bool
    notices: list[str] = Field(default_factory=list)
    route_segments: list[RouteLineString] = Field(
        default_factory=list,
        description="One LineString per coverage range, sliced from the route geometry",
    )


class SectionTollNotice(BaseModel):
    """Human-readable advisory about a distance-based or section toll."""
    model_config = ConfigDict(frozen=True)

    country_code: str
    label: str
    description: str
    official_url: Optional[str] = None


class ComplianceNotice(BaseModel):
    """Marks the result as advisory information only."""
    official_source: bool = True
    informational_only: bool = True
    price_last_verified_at: str


class AppliedPreferences(BaseModel):
    """Echo of the request preferences that shaped the analysis."""
    avoid_tolls: bool
    channel_crossing_preference: ChannelCrossingPreference
    vehicle_class: VehicleClass
    powertrain: PowertrainType
    gross_weight_kg: Optional[float] = None
    axles: Optional[int] = None
    emission_class: EmissionClass


class BorderSource(BaseModel):
    """Static link where travellers can check a border crossing."""
    label: str
    url: str
    kind: Literal["official", "aggregated"]


class BorderCrossing(BaseModel):
    """A country-to-country transition along the route."""
    crossing_code: str = Field(description="e.g. HU-RS")
    from_country: str
    to_country: str
    sources: list[BorderSource] = Field(default_factory=list)


class RouteAnalysisResult(BaseModel):
    """Complete route analysis handed back across the API boundary."""
    route_geojson: RouteLineString
    countries: list[CountryTravelSummary]
    section_tolls: list[SectionTollNotice]
    compliance: ComplianceNotice
    trip_estimate: Optional[TripEstimate] = None
    trip_shield: Optional[TripShieldInsights] = None
    trip_readiness: Optional[TripReadiness] = None
    border_crossings: list[BorderCrossing] = Field(default_factory=list)
    applied_preferences: Optional[AppliedPreferences] = None
