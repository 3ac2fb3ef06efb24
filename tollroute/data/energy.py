"""
Fuel and charging reference prices plus vehicle energy assumptions.

Prices are national averages in EUR. Consumption and capacity figures are
rough per-class defaults, not manufacturer data.
"""

from ..models.requests import PowertrainType, VehicleClass


ENERGY_PRICES_LAST_UPDATED = "2026-02-12"

FUEL_PRICE_EUR_PER_LITER: dict[str, float] = {
    "DE": 1.82, "AT": 1.74, "CZ": 1.58, "SK": 1.60, "HU": 1.63, "SI": 1.67,
    "CH": 1.89, "RO": 1.52, "BG": 1.45, "HR": 1.63, "RS": 1.56, "DK": 1.94,
    "SE": 1.78, "NL": 2.02, "BE": 1.79, "FR": 1.88, "IT": 1.95, "BA": 1.49,
    "ME": 1.53, "MK": 1.47, "AL": 1.50, "PL": 1.56, "ES": 1.72, "PT": 1.79,
    "GB": 1.73, "IE": 1.81, "TR": 1.26, "GR": 1.90,
}

CHARGING_PRICE_EUR_PER_KWH: dict[str, float] = {
    "DE": 0.54, "AT": 0.49, "CZ": 0.43, "SK": 0.42, "HU": 0.39, "SI": 0.44,
    "CH": 0.58, "RO": 0.35, "BG": 0.33, "HR": 0.41, "RS": 0.37, "DK": 0.56,
    "SE": 0.47, "NL": 0.62, "BE": 0.55, "FR": 0.50, "IT": 0.57, "BA": 0.34,
    "ME": 0.35, "MK": 0.34, "AL": 0.35, "PL": 0.40, "ES": 0.46, "PT": 0.45,
    "GB": 0.58, "IE": 0.56, "TR": 0.29, "GR": 0.48,
}

_LARGE_CLASSES = (VehicleClass.VAN_OR_MPV, VehicleClass.COMMERCIAL_N1)


def fuel_consumption_l_per_100km(vehicle_class: VehicleClass, powertrain: PowertrainType) -> float:
    if powertrain == PowertrainType.HYBRID:
        if vehicle_class == VehicleClass.MOTORCYCLE:
            return 3.2
        return 8.5 if vehicle_class in _LARGE_CLASSES else 5.2
    if vehicle_class == VehicleClass.MOTORCYCLE:
        return 4.2
    return 10.8 if vehicle_class in _LARGE_CLASSES else 7.2


def assumed_fuel_type(vehicle_class: VehicleClass, powertrain: PowertrainType) -> str:
    """Diesel for diesel engines and vans, petrol otherwise (hybrids included)."""
    if powertrain == PowertrainType.DIESEL:
        return "diesel"
    if powertrain == PowertrainType.HYBRID:
        return "petrol"
    return "diesel" if vehicle_class in _LARGE_CLASSES else "petrol"


def tank_capacity_liters(vehicle_class: VehicleClass, powertrain: PowertrainType) -> float:
    if powertrain == PowertrainType.HYBRID:
        return 65.0 if vehicle_class in _LARGE_CLASSES else 45.0
    if vehicle_class == VehicleClass.MOTORCYCLE:
        return 16.0
    return 75.0 if vehicle_class in _LARGE_CLASSES else 52.0


def ev_consumption_kwh_per_100km(vehicle_class: VehicleClass) -> float:
    if vehicle_class == VehicleClass.MOTORCYCLE:
        return 7.5
    return 24.0 if vehicle_class in _LARGE_CLASSES else 18.0


def battery_capacity_kwh(vehicle_class: VehicleClass) -> float:
    if vehicle_class == VehicleClass.MOTORCYCLE:
        return 10.0
    return 77.0 if vehicle_class in _LARGE_CLASSES else 64.0
