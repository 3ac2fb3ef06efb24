"""Trip budget models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


class Money(BaseModel):
    """Amount in its original currency."""
    amount: float
    currency: str


class VignetteCostItem(BaseModel):
    """Selected vignette product for one country."""
    country_code: str
    product_id: str
    product_label: str
    original_price: Money
    price_eur: float


class SectionTollCostItem(BaseModel):
    """Flat per-trip section-toll estimate for one country."""
    country_code: str
    estimated_eur: float


class CountryFuelPrice(BaseModel):
    country_code: str
    price_eur_per_liter: float


class CountryChargingPrice(BaseModel):
    country_code: str
    price_eur_per_kwh: float


class FuelEstimate(BaseModel):
    """Fuel need and cost for combustion and hybrid vehicles."""
    assumed_fuel_type: Literal["petrol", "diesel"]
    consumption_liters_per_100km: float
    liters_needed: float
    average_price_per_liter_eur: float
    estimated_fuel_cost_eur: float
    best_top_up_country_code: Optional[str] = None
    best_top_up_price_eur_per_liter: Optional[float] = None
    route_country_fuel_prices: list[CountryFuelPrice] = Field(default_factory=list)
    estimated_range_per_full_tank_km: int
    suggested_top_up_countries: list[str] = Field(default_factory=list)
    refuel_plan: str


class ElectricEstimate(BaseModel):
    """Energy need and charging cost for electric vehicles."""
    consumption_kwh_per_100km: float
    kwh_needed: float
    average_price_per_kwh_eur: float
    estimated_charging_cost_eur: float
    best_charge_country_code: Optional[str] = None
    best_charge_price_eur_per_kwh: Optional[float] = None
    route_country_charging_prices: list[CountryChargingPrice] = Field(default_factory=list)
    estimated_range_per_full_charge_km: int
    suggested_charge_countries: list[str] = Field(default_factory=list)
    charge_plan: str


class TripEstimate(BaseModel):
    """Combined trip budget in EUR."""
    powertrain: Literal["fuel", "electric"]
    total_distance_km: float = Field(ge=0)
    vignette_breakdown: list[VignetteCostItem] = Field(default_factory=list)
    vignette_estimate_eur: float = 0.0
    section_toll_breakdown: list[SectionTollCostItem] = Field(default_factory=list)
    section_toll_estimate_eur: float = 0.0
    total_road_charges_eur: float = 0.0
    fuel: Optional[FuelEstimate] = None
    electric: Optional[ElectricEstimate] = None
    total_trip_estimate_eur: float = 0.0
    unpriced_countries: list[str] = Field(
        default_factory=list,
        description="Countries needing a payment but missing from the reference tables",
    )
    assumptions: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _one_energy_estimate(self) -> "TripEstimate":
        if self.powertrain == "electric":
            if self.electric is None or self.fuel is not None:
                raise ValueError("Electric estimates carry only the electric sub-estimate.")
        elif self.fuel is None or self.electric is not None:
            raise ValueError("Fuel estimates carry only the fuel sub-estimate.")
        return self
