"""
Forward geocoding with a three-tier fallback chain.

1. OpenRouteService geocode - needs the ORS key
2. Photon (Komoot) - free, no key
3. Nominatim (OpenStreetMap) - free, rate-limited, needs a contact User-Agent

Results are cached by the lowercased, trimmed query.
"""

import logging
import math
from typing import Optional

import httpx

from ..exceptions import GeocodingError, TollRouteError
from ..models.requests import RoutePoint
from ..storage.cache import TTLCache
from .resilience import ResilientHttpClient

logger = logging.getLogger(__name__)

ORS_GEOCODE_URL = "https://api.openrouteservice.org/geocode/search"
PHOTON_GEOCODE_URL = "https://photon.komoot.io/api/"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_CONTACT_EMAIL = "support@example.com"


def parse_coordinates(raw_value: str) -> Optional[RoutePoint]:
    """Parse "lat,lon" text into a RoutePoint, or None if it is not coordinates."""
    parts = [part.strip() for part in raw_value.split(",")]
    if len(parts) != 2:
        return None
    try:
        lat = float(parts[0])
        lon = float(parts[1])
    except ValueError:
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return RoutePoint(lat=lat, lon=lon)


def _point_from_geojson(data: dict, provider: str) -> RoutePoint:
    features = data.get("features") or []
    coordinates = (features[0].get("geometry") or {}).get("coordinates") if features else None
    if not coordinates or len(coordinates) != 2:
        raise GeocodingError(f"{provider} geocoding returned no result.")
    return RoutePoint(lon=float(coordinates[0]), lat=float(coordinates[1]))


class Geocoder:
    """
    Address-to-coordinate resolver.

    Args:
        http: Resilient HTTP client shared with other providers
        cache: Cache for resolved points
        ors_api_key: Enables the ORS tier when set
        contact_email: Contact address in the Nominatim User-Agent
    """

    def __init__(
        self,
        http: ResilientHttpClient,
        cache: TTLCache,
        ors_api_key: Optional[str] = None,
        contact_email: Optional[str] = None,
    ):
        self.http = http
        self.cache = cache
        self.ors_api_key = ors_api_key
        self.user_agent = f"TollRoute/1.0 (contact: {contact_email or DEFAULT_CONTACT_EMAIL})"

    async def close(self):
        await self.http.close()

    async def _geocode_with_ors(self, query: str) -> RoutePoint:
        response = await self.http.get(
            ORS_GEOCODE_URL,
            params={"text": query, "size": 1},
            headers={"Authorization": self.ors_api_key},
        )
        if response.status_code != 200:
            raise GeocodingError(f"ORS geocoding failed ({response.status_code}).")
        return _point_from_geojson(response.json(), "ORS")

    async def _geocode_with_photon(self, query: str) -> RoutePoint:
        response = await self.http.get(PHOTON_GEOCODE_URL, params={"q": query, "limit": 1})
        if response.status_code != 200:
            raise GeocodingError(f"Photon geocoding failed ({response.status_code}).")
        return _point_from_geojson(response.json(), "Photon")

    async def _geocode_with_nominatim(self, query: str) -> RoutePoint:
        response = await self.http.get(
            NOMINATIM_URL,
            params={"q": query, "format": "json", "limit": 1},
            headers={"User-Agent": self.user_agent},
        )
        if response.status_code != 200:
            raise GeocodingError(f"Geocoding failed ({response.status_code}).")
        data = response.json()
        if not data:
            raise GeocodingError("Could not resolve one of the locations.")
        return RoutePoint(lat=float(data[0]["lat"]), lon=float(data[0]["lon"]))

    async def geocode(self, query: str) -> RoutePoint:
        """
        Resolve an address, trying ORS, then Photon, then Nominatim.

        Raises:
            GeocodingError: When no provider can resolve the query
        """
        cache_key = query.strip().lower()
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        tiers = []
        if self.ors_api_key:
            tiers.append(("ors", self._geocode_with_ors))
        tiers.append(("photon", self._geocode_with_photon))
        tiers.append(("nominatim", self._geocode_with_nominatim))

        for name, tier in tiers:
            try:
                point = await tier(query)
            except (TollRouteError, httpx.HTTPError, ValueError, KeyError) as e:
                logger.info(f"Geocoder {name} could not resolve '{query}': {e}")
                continue
            self.cache.set(cache_key, point)
            return point

        raise GeocodingError(
            f'Could not resolve "{query}". Check spelling or try a more specific name (e.g., "Lyon, France").'
        )

    async def resolve_location(self, text: str) -> RoutePoint:
        """Parse "lat,lon" text directly, otherwise geocode it."""
        point = parse_coordinates(text)
        if point is not None:
            return point
        return await self.geocode(text)
