"""
Section-toll reference data.

Per-trip estimates are flat indicative amounts, not distance-priced quotes.
"""

from dataclasses import dataclass
from typing import Optional


SECTION_TOLL_ESTIMATES_LAST_UPDATED = "2026-02-12"

SECTION_TOLL_ESTIMATES_EUR: dict[str, float] = {
    "AT": 12.5,
    "RO": 4.0,
    "DK": 25.0,
    "SE": 30.0,
    "HR": 18.0,
    "RS": 14.0,
    "FR": 28.0,
    "IT": 30.0,
    "BA": 7.0,
    "ME": 5.0,
    "MK": 8.0,
    "AL": 5.0,
    "PL": 14.0,
    "ES": 12.0,
    "PT": 11.0,
    "GB": 18.0,
    "IE": 8.0,
    "TR": 15.0,
    "GR": 14.0,
}

SECTION_TOLL_LINKS: dict[str, str] = {
    "AT": "https://www.asfinag.at/en/toll/section-toll/",
    "RO": "https://www.roviniete.ro/en/",
    "DK": "https://storebaelt.dk/en/",
    "SE": "https://www.oresundsbron.com/en",
    "HR": "https://hac.hr/en",
    "RS": "https://www.putevi-srbije.rs/index.php/en/",
    "FR": "https://www.autoroutes.fr/en/",
    "IT": "https://www.autostrade.it/en/",
    "BA": "https://www.autoceste.ba/",
    "ME": "https://www.monteput.me/",
    "MK": "https://roads.org.mk/",
    "AL": "https://www.arrsh.gov.al/",
    "PL": "https://etoll.gov.pl/en/",
    "ES": "https://www.transportes.gob.es/carreteras",
    "PT": "https://www.portugaltolls.com/",
    "GB": "https://www.gov.uk/pay-dartford-crossing-charge",
    "IE": "https://www.eflow.ie/",
    "TR": "https://www.kgm.gov.tr/",
    "GR": "https://www.aodos.gr/",
}

LONDON_CHARGES_URL = "https://tfl.gov.uk/modes/driving/check-your-vehicle/"
CHANNEL_CROSSING_URL = "https://www.getlinkgroup.com/en/le-shuttle/"
FRANCE_FREE_FLOW_URL = "https://www.autoroutes.fr/en/free-flow.htm"


@dataclass(frozen=True)
class SectionTollEntry:
    label: str
    description: str
    official_url: Optional[str] = None


def _entry(country_code: str, label: str, description: str) -> SectionTollEntry:
    return SectionTollEntry(label, description, SECTION_TOLL_LINKS.get(country_code))


SECTION_TOLL_NOTICE_TABLE: dict[str, SectionTollEntry] = {
    "AT": _entry("AT", "Austria Section Toll",
                 "Specific alpine sections (e.g. Brenner, Tauern) can require extra tolls."),
    "RO": _entry("RO", "Romania Bridge Toll",
                 "Major Danube bridge crossings can require separate peaj payment."),
    "DK": _entry("DK", "Denmark Bridge Toll",
                 "Major crossings like Storebaelt and Oresund can require separate bridge toll payments."),
    "SE": _entry("SE", "Sweden Oresund Crossing",
                 "Driving between Denmark and Sweden via Oresund requires a bridge toll."),
    "HR": _entry("HR", "Croatia Motorway Toll",
                 "Croatia motorways are typically paid by distance at toll points or digital channels."),
    "RS": _entry("RS", "Serbia Motorway Toll",
                 "Serbia motorways commonly use distance-based toll plazas on transit routes."),
    "FR": _entry("FR", "France Motorway Toll",
                 "Most French autoroutes are toll roads with distance-based pricing."),
    "IT": _entry("IT", "Italy Motorway Toll",
                 "Most Italian autostrade use distance-based tolling."),
    "BA": _entry("BA", "Bosnia and Herzegovina Toll",
                 "Selected motorway sections are tolled."),
    "ME": _entry("ME", "Montenegro Road Toll",
                 "Some roads and tunnels in Montenegro can require toll payments."),
    "MK": _entry("MK", "North Macedonia Toll",
                 "North Macedonia uses toll plazas on major motorway segments."),
    "AL": _entry("AL", "Albania Road Toll",
                 "Selected Albanian motorway corridors can require toll payments."),
    "PL": _entry("PL", "Poland Motorway Toll",
                 "Selected Polish motorway sections are tolled for passenger cars."),
    "ES": _entry("ES", "Spain Motorway Toll",
                 "Selected Spanish autopista corridors use toll pricing."),
    "PT": _entry("PT", "Portugal Electronic Toll",
                 "Selected Portuguese motorways use electronic toll collection."),
    "GB": _entry("GB", "United Kingdom Toll",
                 "Selected UK crossings and routes (e.g. Dartford) require toll payment."),
    "IE": _entry("IE", "Ireland Toll",
                 "Ireland has selected toll roads and eFlow-operated crossings."),
    "TR": _entry("TR", "Turkey HGS/OGS Toll",
                 "Turkey motorway and bridge crossings use HGS/OGS toll systems."),
    "GR": _entry("GR", "Greece Motorway Toll",
                 "Greek motorways commonly use toll plazas on long-distance corridors."),
}
