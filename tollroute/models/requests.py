"""API request models."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class VehicleClass(str, Enum):
    """Vehicle categories recognized by European toll operators."""
    PASSENGER_CAR_M1 = "PASSENGER_CAR_M1"
    COMMERCIAL_N1 = "COMMERCIAL_N1"
    MOTORCYCLE = "MOTORCYCLE"
    VAN_OR_MPV = "VAN_OR_MPV"
    UNKNOWN = "UNKNOWN"


class PowertrainType(str, Enum):
    """Powertrain types that affect pricing and energy estimates."""
    PETROL = "PETROL"
    DIESEL = "DIESEL"
    ELECTRIC = "ELECTRIC"
    HYBRID = "HYBRID"


class EmissionClass(str, Enum):
    """Emission classes used for vignette pricing in some countries."""
    ZERO_EMISSION = "ZERO_EMISSION"
    EURO_6 = "EURO_6"
    EURO_5_OR_LOWER = "EURO_5_OR_LOWER"
    UNKNOWN = "UNKNOWN"


class ChannelCrossingPreference(str, Enum):
    """Preferred way across the Channel for UK routes."""
    AUTO = "auto"
    FERRY = "ferry"
    TUNNEL = "tunnel"


class RoutePoint(BaseModel):
    """Latitude/longitude coordinate pair."""
    lat: float = Field(description="Latitude in decimal degrees", ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(description="Longitude in decimal degrees", ge=-180, le=180, allow_inf_nan=False)


class RouteAnalysisRequest(BaseModel):
    """Request body for route analysis."""
    start: str = Field(description="Start location text or 'lat,lon'", min_length=1, max_length=180)
    end: str = Field(description="Destination text or 'lat,lon'", min_length=1, max_length=180)
    start_point: Optional[RoutePoint] = Field(default=None, description="Pre-resolved start coordinates")
    end_point: Optional[RoutePoint] = Field(default=None, description="Pre-resolved end coordinates")
    trip_date: Optional[date] = Field(default=None, description="Trip date (YYYY-MM-DD)")
    vehicle_class: VehicleClass = VehicleClass.PASSENGER_CAR_M1
    powertrain: PowertrainType = PowertrainType.PETROL
    gross_weight_kg: Optional[float] = Field(default=None, gt=0, le=60_000)
    axles: Optional[int] = Field(default=None, ge=1, le=8)
    emission_class: EmissionClass = EmissionClass.UNKNOWN
    seats: Optional[int] = Field(default=None, ge=1, le=100)
    avoid_tolls: bool = False
    channel_crossing_preference: ChannelCrossingPreference = ChannelCrossingPreference.AUTO

    @field_validator("start", "end", mode="before")
    @classmethod
    def _strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("trip_date", mode="before")
    @classmethod
    def _iso_date_only(cls, value):
        # Only plain calendar dates; timestamps are rejected.
        if isinstance(value, str) and (len(value) != 10 or value[4] != "-" or value[7] != "-"):
            raise ValueError("Date must be in YYYY-MM-DD format.")
        return value

    @model_validator(mode="after")
    def _normalize(self) -> "RouteAnalysisRequest":
        if self.start.lower() == self.end.lower():
            raise ValueError("Start and destination must be different.")
        if self.powertrain == PowertrainType.ELECTRIC:
            self.emission_class = EmissionClass.ZERO_EMISSION
        return self

    @property
    def route_text(self) -> str:
        """Start and end text joined for keyword matching."""
        return f"{self.start} {self.end}"
