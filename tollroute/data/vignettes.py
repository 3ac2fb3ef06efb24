"""
Vignette product catalogs for countries with a flat national vignette.

Prices are indicative reference values. Products without vehicle or
powertrain tags are generic and apply to any vehicle.
"""

from dataclasses import dataclass, field


PRICE_LAST_VERIFIED_AT = "2026-02-12"


@dataclass(frozen=True)
class VignetteProduct:
    """One purchasable vignette product."""
    id: str
    label: str
    price: float
    currency: str
    vehicle_tags: tuple[str, ...] = ()
    powertrain_tags: tuple[str, ...] = ()
    notes: str = ""


@dataclass(frozen=True)
class CountryPricing:
    country_code: str
    products: tuple[VignetteProduct, ...]
    caveats: tuple[str, ...] = field(default_factory=tuple)


VIGNETTE_CATALOG: dict[str, CountryPricing] = {
    "AT": CountryPricing(
        country_code="AT",
        products=(
            VignetteProduct("at-1d", "1-day digital vignette", 9.30, "EUR"),
            VignetteProduct("at-10d", "10-day vignette", 12.80, "EUR"),
            VignetteProduct("at-2m", "2-month vignette", 32.00, "EUR"),
            VignetteProduct("at-1y", "Annual vignette", 106.80, "EUR"),
            VignetteProduct("at-moto-10d", "Motorcycle 10-day vignette", 5.10, "EUR", vehicle_tags=("MOTORCYCLE",)),
        ),
        caveats=("Digital 2-month and annual products bought online start 18 days after purchase.",),
    ),
    "CZ": CountryPricing(
        country_code="CZ",
        products=(
            VignetteProduct("cz-1d", "1-day vignette", 210, "CZK"),
            VignetteProduct("cz-10d", "10-day vignette", 290, "CZK"),
            VignetteProduct("cz-30d", "30-day vignette", 470, "CZK"),
            VignetteProduct("cz-1y", "Annual vignette", 2440, "CZK"),
            VignetteProduct(
                "cz-zev",
                "Zero-emission exemption (registration required)",
                0,
                "CZK",
                powertrain_tags=("ELECTRIC",),
                notes="Foreign EVs must register the exemption before travel.",
            ),
        ),
    ),
    "SK": CountryPricing(
        country_code="SK",
        products=(
            VignetteProduct("sk-1d", "1-day vignette", 8.00, "EUR"),
            VignetteProduct("sk-10d", "10-day vignette", 12.00, "EUR"),
            VignetteProduct("sk-30d", "30-day vignette", 17.00, "EUR"),
            VignetteProduct("sk-1y", "Annual vignette", 60.00, "EUR"),
        ),
    ),
    "HU": CountryPricing(
        country_code="HU",
        products=(
            VignetteProduct("hu-d1-10d", "D1 10-day e-vignette", 6400, "HUF",
                            vehicle_tags=("PASSENGER_CAR_M1", "UNKNOWN")),
            VignetteProduct("hu-d1-1m", "D1 monthly e-vignette", 10360, "HUF",
                            vehicle_tags=("PASSENGER_CAR_M1", "UNKNOWN")),
            VignetteProduct("hu-d2-10d", "D2 10-day e-vignette", 9310, "HUF",
                            vehicle_tags=("VAN_OR_MPV", "COMMERCIAL_N1")),
            VignetteProduct("hu-d1m-10d", "D1M motorcycle 10-day e-vignette", 3200, "HUF",
                            vehicle_tags=("MOTORCYCLE",)),
        ),
    ),
    "SI": CountryPricing(
        country_code="SI",
        products=(
            VignetteProduct("si-2a-7d", "Class 2A weekly e-vignette", 16.00, "EUR"),
            VignetteProduct("si-2a-1m", "Class 2A monthly e-vignette", 32.00, "EUR"),
            VignetteProduct("si-2a-1y", "Class 2A annual e-vignette", 117.50, "EUR"),
            VignetteProduct("si-2b-7d", "Class 2B weekly e-vignette", 32.00, "EUR",
                            vehicle_tags=("VAN_OR_MPV", "COMMERCIAL_N1")),
            VignetteProduct("si-1-7d", "Motorcycle weekly e-vignette", 8.00, "EUR",
                            vehicle_tags=("MOTORCYCLE",)),
        ),
    ),
    "CH": CountryPricing(
        country_code="CH",
        products=(
            VignetteProduct("ch-1y", "Annual e-vignette", 40.00, "CHF"),
        ),
        caveats=("Only an annual product exists, valid until 31 January of the following year.",),
    ),
    "RO": CountryPricing(
        country_code="RO",
        products=(
            VignetteProduct("ro-1d", "1-day rovinieta", 3.50, "EUR"),
            VignetteProduct("ro-10d", "10-day rovinieta", 6.50, "EUR"),
            VignetteProduct("ro-30d", "30-day rovinieta", 11.00, "EUR"),
        ),
    ),
    "BG": CountryPricing(
        country_code="BG",
        products=(
            VignetteProduct("bg-weekend", "Weekend e-vignette", 5.11, "EUR"),
            VignetteProduct("bg-7d", "Weekly e-vignette", 7.67, "EUR"),
            VignetteProduct("bg-1m", "Monthly e-vignette", 15.34, "EUR"),
        ),
    ),
}
