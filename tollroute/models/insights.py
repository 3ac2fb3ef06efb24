"""Trip shield and readiness models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TollWindowLevel(str, Enum):
    """Effect of the trip date on time-window toll pricing."""
    SAVINGS_OPPORTUNITY = "savings_opportunity"
    SURCHARGE_RISK = "surcharge_risk"
    NEUTRAL = "neutral"


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TollWindowImpact(BaseModel):
    level: TollWindowLevel
    title: str
    details: str
    estimated_delta: str = Field(description="Indicative EUR range, e.g. '+2 to +6 EUR'")


class TripShieldInsights(BaseModel):
    """Cross-cutting trip risk signals."""
    has_border_crossing: bool
    has_free_flow_toll: bool
    has_major_urban_zone_risk: bool
    warnings: list[str] = Field(default_factory=list)
    departure_time_hint: Optional[str] = None
    toll_window_impact: Optional[TollWindowImpact] = None


class TimelineEntry(BaseModel):
    """One country along the route with what to do there."""
    country_code: str
    label: str
    action: str
    estimated_cost_eur: Optional[float] = None
    requires_vignette: bool = False
    requires_section_toll: bool = False
    has_urban_access_risk: bool = False


class TripReadiness(BaseModel):
    """Confidence-scored summary of the whole trip."""
    confidence_score: int = Field(ge=0, le=100)
    confidence_level: ConfidenceLevel
    confidence_reasons: list[str] = Field(default_factory=list)
    timeline: list[TimelineEntry] = Field(default_factory=list)
    checklist: list[str] = Field(default_factory=list)
