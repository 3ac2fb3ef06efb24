"""Section-toll notice resolution for countries with distance or crossing tolls."""

import re
from typing import Iterable, Optional

from ..data.section_tolls import (
    CHANNEL_CROSSING_URL,
    FRANCE_FREE_FLOW_URL,
    LONDON_CHARGES_URL,
    SECTION_TOLL_LINKS,
    SECTION_TOLL_NOTICE_TABLE,
)
from ..models.analysis import SectionTollNotice
from ..models.requests import RouteAnalysisRequest
from .country_rules import LONDON_PATTERN

CONTINENTAL_APPROACH_COUNTRIES = frozenset({"FR", "BE", "NL"})
# A1 (Paris-Lille) and A14 (Paris-Normandy) use time-window pricing
FRANCE_TIME_WINDOW_PATTERN = re.compile(r"paris|ile-de-france|île-de-france|normand|lille", re.IGNORECASE)


def get_section_toll_notices(
    country_code: str,
    request: Optional[RouteAnalysisRequest] = None,
    route_countries: Iterable[str] = (),
) -> list[SectionTollNotice]:
    """
    Section-toll notices for one country.

    Args:
        country_code: ISO code of a country on the route
        request: Original request, used for route-text keyword matches
        route_countries: All country codes on the route

    Returns:
        Static table entry plus any conditional extras, or [] for countries
        without section tolls
    """
    entry = SECTION_TOLL_NOTICE_TABLE.get(country_code)
    if entry is None:
        return []

    notices = [
        SectionTollNotice(
            country_code=country_code,
            label=entry.label,
            description=entry.description,
            official_url=entry.official_url,
        )
    ]
    route_text = request.route_text if request is not None else ""

    if country_code == "GB":
        if LONDON_PATTERN.search(route_text):
            notices.append(SectionTollNotice(
                country_code=country_code,
                label="London ULEZ/Congestion",
                description="Driving in London can require ULEZ and Congestion Charge payments.",
                official_url=LONDON_CHARGES_URL,
            ))
        if CONTINENTAL_APPROACH_COUNTRIES.intersection(route_countries):
            notices.append(SectionTollNotice(
                country_code=country_code,
                label="Channel Crossing Booking",
                description="Trips to Great Britain from continental Europe require a ferry or Eurotunnel booking.",
                official_url=CHANNEL_CROSSING_URL,
            ))

    elif country_code == "FR":
        notices.append(SectionTollNotice(
            country_code=country_code,
            label="France Flux Libre (Free-Flow)",
            description=(
                "Barrier-free toll sections (A79, A13/A14) have no booths; "
                "pay online within 72 hours of passage to avoid penalties."
            ),
            official_url=FRANCE_FREE_FLOW_URL,
        ))
        if FRANCE_TIME_WINDOW_PATTERN.search(route_text):
            notices.append(SectionTollNotice(
                country_code=country_code,
                label="France A1/A14 time-window pricing",
                description=(
                    "Tolls around Paris on the A1 and A14 vary by day and hour; "
                    "weekend and off-peak passages can be cheaper."
                ),
                official_url=SECTION_TOLL_LINKS["FR"],
            ))

    return notices
