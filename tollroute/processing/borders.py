"""Border-crossing advisories built from static source tables."""

from typing import Sequence

from ..data.border_sources import BORDER_WAIT_LINKS, CROSSING_SOURCES, crossing_key
from ..models.analysis import BorderCrossing, BorderSource
from .trip_shield import distinct_sequence


def build_border_crossings(route_countries: Sequence[str]) -> list[BorderCrossing]:
    """
    One BorderCrossing per consecutive pair of distinct countries.

    Sources are the crossing-specific entries (looked up in either
    direction) followed by the national border-traffic pages of both
    countries, deduplicated by URL and ordered by priority.
    """
    crossings = []
    sequence = distinct_sequence(route_countries)

    for current, nxt in zip(sequence, sequence[1:]):
        ranked: list[tuple[int, BorderSource]] = []
        seen_urls = set()

        for source in CROSSING_SOURCES.get(crossing_key(current, nxt), ()):
            if source.url in seen_urls:
                continue
            seen_urls.add(source.url)
            ranked.append((source.priority, BorderSource(label=source.label, url=source.url, kind=source.kind)))

        # National pages rank after crossing-specific sources
        for code in (current, nxt):
            link = BORDER_WAIT_LINKS.get(code)
            if link is None or link[1] in seen_urls:
                continue
            seen_urls.add(link[1])
            ranked.append((10, BorderSource(label=link[0], url=link[1], kind="official")))

        ranked.sort(key=lambda item: item[0])
        crossings.append(
            BorderCrossing(
                crossing_code=f"{current}-{nxt}",
                from_country=current,
                to_country=nxt,
                sources=[source for _, source in ranked],
            )
        )

    return crossings
