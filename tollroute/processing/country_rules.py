"""
Per-country vignette and toll rules.

Each modeled country has its own rule function. The regimes are genuinely
different from one another, so they stay explicit instead of being folded
into one formula. Unknown countries fall back to a generic decision driven
by the highway/tollway flags.
"""

import re
from dataclasses import dataclass, field
from typing import Callable

from ..data.countries import country_name
from ..models.requests import ChannelCrossingPreference, RouteAnalysisRequest, VehicleClass

LONDON_PATTERN = re.compile(r"\blondon\b", re.IGNORECASE)
TOLLS_AVOIDED_NOTICE = "Tolls avoided where possible on this route."
HEAVY_VEHICLE_THRESHOLD_KG = 3500
MULTI_AXLE_THRESHOLD = 3

_LARGE_CLASSES = (VehicleClass.VAN_OR_MPV, VehicleClass.COMMERCIAL_N1)


@dataclass(frozen=True)
class CountryDecision:
    """Outcome of the rule table for one country."""
    requires_vignette: bool
    requires_section_toll: bool
    notices: list[str] = field(default_factory=list)


# rule(has_highway, has_tollway, request, notices) -> (vignette, section_toll)
CountryRule = Callable[[bool, bool, RouteAnalysisRequest, list[str]], tuple[bool, bool]]

COUNTRY_RULES: dict[str, CountryRule] = {}


def _rule(*country_codes: str):
    def register(func: CountryRule) -> CountryRule:
        for code in country_codes:
            COUNTRY_RULES[code] = func
        return func
    return register


def resolve_toll_country_requirement(
    has_highway: bool,
    has_tollway: bool,
    request: RouteAnalysisRequest,
    notices: list[str],
) -> bool:
    """
    Section-toll decision for distance-tolled countries.

    When tolls are avoided and the route only uses toll-free highway, the
    avoided-tolls notice is appended and no section toll is required.
    """
    if request.avoid_tolls and has_highway and not has_tollway:
        notices.append(TOLLS_AVOIDED_NOTICE)
        return False
    return has_highway or has_tollway


def is_heavy_vehicle(request: RouteAnalysisRequest) -> bool:
    return request.gross_weight_kg is not None and request.gross_weight_kg > HEAVY_VEHICLE_THRESHOLD_KG


def _append_vehicle_notices(country_code: str, request: RouteAnalysisRequest, notices: list[str]) -> None:
    if request.vehicle_class == VehicleClass.MOTORCYCLE:
        if country_code == "AT":
            notices.append("Motorcycle tariffs differ from car tariffs in Austria.")
        elif country_code == "HU":
            notices.append("Hungary often uses a separate motorcycle category (D1M).")
        elif country_code == "SI":
            notices.append("Slovenia motorcycles have a separate class with different pricing.")
        return

    if request.vehicle_class in _LARGE_CLASSES:
        if country_code == "SI":
            notices.append("Camper vans can fall into Slovenia class 2B based on first-axle height.")
        elif country_code == "HU":
            notices.append("Camper vans can be categorized as D2/N1 in Hungary with higher fees.")
        elif country_code == "AT":
            notices.append("Vehicles over 3.5t in Austria use separate heavy-vehicle toll systems.")
        elif country_code == "CH":
            notices.append("Heavier camper vehicles in Switzerland can fall under separate heavy-vehicle rules.")


HEAVY_VEHICLE_NOTICES: dict[str, str] = {
    "AT": "Vehicles >3.5t may also need a GO-Box for the Austrian GO-Maut distance toll.",
    "DE": "Vehicles >3.5t should check German Lkw-Maut (Toll Collect) liability; it applies from 7.5t.",
    "CH": "Vehicles >3.5t may also owe the Swiss heavy vehicle charge (LSVA).",
    "HU": "Vehicles >3.5t may also need to register with the HU-GO electronic toll system.",
    "CZ": "Vehicles >3.5t use Czech electronic distance tolling (myto CZ).",
    "SK": "Vehicles >3.5t use Slovak electronic distance tolling (eMyto).",
    "SI": "Vehicles >3.5t use Slovenian DarsGo electronic distance tolling.",
    "PL": "Vehicles >3.5t use Polish e-TOLL electronic distance tolling.",
}


def _append_weight_notices(country_code: str, request: RouteAnalysisRequest, notices: list[str]) -> None:
    if is_heavy_vehicle(request):
        notices.append(
            HEAVY_VEHICLE_NOTICES.get(
                country_code,
                f"Vehicles >3.5t can fall under separate heavy-vehicle toll rules in {country_name(country_code)}.",
            )
        )
    if request.axles is not None and request.axles >= MULTI_AXLE_THRESHOLD:
        notices.append(f"Vehicles with {request.axles} axles are usually charged in a higher toll class.")


# ---------------------------------------------------------------------------
# Flat national vignette countries
# ---------------------------------------------------------------------------

@_rule("DE")
def _germany(hw, tw, request, notices):
    notices.append("No passenger-car national vignette requirement.")
    notices.append("Environmental sticker (Umweltplakette) can be required for city low-emission zones.")
    return False, False


@_rule("AT")
def _austria(hw, tw, request, notices):
    if hw:
        notices.append("Digital 2-month and annual products may not start immediately in some flows.")
    if tw:
        notices.append("Section toll routes in Austria can require additional payment.")
    return hw, tw


@_rule("CZ")
def _czechia(hw, tw, request, notices):
    notices.append("Foreign EV exemptions may require pre-submitted documents.")
    return hw, False


@_rule("SK")
def _slovakia(hw, tw, request, notices):
    notices.append("10-day can be better value than two 1-day products.")
    return hw, False


@_rule("HU")
def _hungary(hw, tw, request, notices):
    notices.append("Check D1 vs D2 category using registration class and seat count.")
    if (request.seats or 0) > 7 or request.vehicle_class == VehicleClass.COMMERCIAL_N1:
        notices.append("Your inputs may indicate D2 pricing.")
    return hw, False


@_rule("SI")
def _slovenia(hw, tw, request, notices):
    notices.append("Vehicles >= 1.3m at first axle may be class 2B with higher price.")
    return hw, False


@_rule("CH")
def _switzerland(hw, tw, request, notices):
    notices.append("Switzerland generally requires annual vignette for national roads.")
    return hw or tw, False


@_rule("RO")
def _romania(hw, tw, request, notices):
    notices.append("Bridge tolls can be separate from the network vignette.")
    return hw, tw


@_rule("BG")
def _bulgaria(hw, tw, request, notices):
    # Friday, Saturday, Sunday
    if request.trip_date is not None and request.trip_date.weekday() in (4, 5, 6):
        notices.append("Weekend vignette may be cost-effective for short trips.")
    return hw, False


# ---------------------------------------------------------------------------
# Distance-tolled and crossing-tolled countries
# ---------------------------------------------------------------------------

@_rule("HR")
def _croatia(hw, tw, request, notices):
    notices.append("Croatia uses distance-based motorway toll collection (no national car vignette).")
    return False, hw or tw


@_rule("RS")
def _serbia(hw, tw, request, notices):
    notices.append("Serbia uses distance-based toll plazas on major corridors (no national car vignette).")
    return False, hw or tw


@_rule("DK")
def _denmark(hw, tw, request, notices):
    notices.append("No national vignette for cars, but Oresund and Storebaelt crossings are tolled.")
    return False, hw or tw


@_rule("SE")
def _sweden(hw, tw, request, notices):
    notices.append("No national vignette for cars; Oresund crossing from Denmark is tolled.")
    return False, tw


@_rule("NL", "BE")
def _benelux(hw, tw, request, notices):
    notices.append("No national passenger-car vignette on regular routes.")
    return False, False


@_rule("FR")
def _france(hw, tw, request, notices):
    notices.append("France motorways are usually distance-tolled instead of vignette-based.")
    notices.append("Crit'Air environmental sticker can be required in French low-emission zones (ZFE).")
    return False, resolve_toll_country_requirement(hw, tw, request, notices)


def _distance_tolled(notice: str) -> CountryRule:
    def rule(hw, tw, request, notices):
        notices.append(notice)
        return False, resolve_toll_country_requirement(hw, tw, request, notices)
    return rule


COUNTRY_RULES.update({
    "IT": _distance_tolled("Italy motorways are usually distance-tolled instead of vignette-based."),
    "BA": _distance_tolled("Bosnia and Herzegovina has toll sections on selected motorway corridors."),
    "ME": _distance_tolled("Montenegro has no national vignette; selected roads/tunnels can be tolled."),
    "MK": _distance_tolled("North Macedonia commonly uses toll plazas on major motorways."),
    "AL": _distance_tolled("Albania has no national vignette; selected motorways may be tolled."),
    "PL": _distance_tolled("Poland has no national passenger-car vignette; selected motorway sections are tolled."),
    "ES": _distance_tolled("Spain has no national passenger-car vignette; selected autopista routes are tolled."),
    "PT": _distance_tolled(
        "Portugal has no national passenger-car vignette; electronic tolling exists on selected motorways."
    ),
})


@_rule("XK")
def _kosovo(hw, tw, request, notices):
    notices.append("Kosovo has no standard national passenger-car vignette.")
    return False, False


@_rule("GB")
def _united_kingdom(hw, tw, request, notices):
    notices.append("United Kingdom has no national passenger-car vignette; selected crossings and roads are tolled.")
    if LONDON_PATTERN.search(request.route_text):
        notices.append("London driving can require ULEZ and Congestion Charge payments.")
    if request.channel_crossing_preference == ChannelCrossingPreference.TUNNEL:
        notices.append("Channel preference set to Eurotunnel for booking guidance.")
    elif request.channel_crossing_preference == ChannelCrossingPreference.FERRY:
        notices.append("Channel preference set to ferry (compare sailing times and booking requirements).")
    return False, hw or tw


@_rule("IE")
def _ireland(hw, tw, request, notices):
    notices.append(
        "Ireland has no national passenger-car vignette; selected motorways and urban crossings are tolled."
    )
    return False, hw or tw


@_rule("TR")
def _turkey(hw, tw, request, notices):
    notices.append("Turkey uses HGS/OGS toll systems on major motorways and bridges.")
    return False, hw or tw


@_rule("GR")
def _greece(hw, tw, request, notices):
    notices.append("Greece uses toll plazas on major motorway corridors.")
    return False, hw or tw


def evaluate_country_requirement(
    country_code: str,
    has_highway: bool,
    has_tollway: bool,
    request: RouteAnalysisRequest,
) -> CountryDecision:
    """
    Decide vignette and section-toll obligations for one country.

    Vehicle-class notices come first, then the country's own notices, then
    weight and axle notices. Calling this twice with the same arguments
    yields equal decisions.
    """
    notices: list[str] = []
    _append_vehicle_notices(country_code, request, notices)

    rule = COUNTRY_RULES.get(country_code)
    if rule is None:
        requires_vignette, requires_section_toll = has_highway, has_tollway
    else:
        requires_vignette, requires_section_toll = rule(has_highway, has_tollway, request, notices)

    _append_weight_notices(country_code, request, notices)

    return CountryDecision(
        requires_vignette=bool(requires_vignette),
        requires_section_toll=bool(requires_section_toll),
        notices=notices,
    )
