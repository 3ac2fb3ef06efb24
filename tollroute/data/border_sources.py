"""
Static border-crossing information sources.

Links only. Wait times are never fetched or computed here.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CrossingSource:
    crossing_label: str
    label: str
    url: str
    priority: int
    kind: str  # "official" or "aggregated"


BORDER_WAIT_LINKS: dict[str, tuple[str, str]] = {
    "HU": ("Hungary border traffic (Police.hu)", "https://www.police.hu/en/content/border-information"),
    "RS": ("Serbia traffic info (AMSS)", "https://www.amss.org.rs/en"),
    "BG": ("Bulgaria border crossing info", "https://www.mvr.bg/en"),
    "RO": (
        "Romania border traffic",
        "https://www.politiadefrontiera.ro/en/main/traficonline-traffic-on-road-checkpoints-open-for-the-international-traffic-92.html",
    ),
    "TR": ("Turkey border gate status", "https://www.mfa.gov.tr/"),
}

_AMSS_CAMERAS = "https://www.amss.org.rs/stanje-na-putevima/kamere"

CROSSING_SOURCES: dict[str, tuple[CrossingSource, ...]] = {
    "HU-RS": (
        CrossingSource("HU-RS (Roszke / Horgos)", "Official wait times (Police.hu Hatarinfo)",
                       "https://www.police.hu/hu/hirek-es-informaciok/hatarinfo", 1, "official"),
        CrossingSource("HU-RS (Roszke / Horgos)", "Live cameras (AMSS / Serbian road cameras)",
                       _AMSS_CAMERAS, 2, "aggregated"),
    ),
    "RS-BG": (
        CrossingSource("RS-BG (Gradina / Kalotina)", "Live cameras (AMSS - Gradina corridor)",
                       _AMSS_CAMERAS, 1, "aggregated"),
    ),
    "BG-TR": (
        CrossingSource("BG-TR (Kapikule / Hamzabeyli)", "Official customs region sources (Trakya)",
                       "https://trakya.gtb.gov.tr/", 1, "official"),
        CrossingSource("BG-TR (Kapikule / Hamzabeyli)", "Live camera aggregator (border streams)",
                       "https://www.uzivokamere.com/granicni-prelazi", 2, "aggregated"),
    ),
}


def crossing_key(first: str, second: str):
    """Key into CROSSING_SOURCES for a pair in either direction, or None."""
    direct = f"{first}-{second}"
    if direct in CROSSING_SOURCES:
        return direct
    reverse = f"{second}-{first}"
    if reverse in CROSSING_SOURCES:
        return reverse
    return None
