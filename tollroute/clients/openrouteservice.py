"""
OpenRouteService directions client for driving routes with country metadata.
FREE TIER: 2,000 directions requests/day.
"""

import logging
from typing import Optional

from ..exceptions import (
    MissingApiKeyError,
    NoRouteError,
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
)
from ..models.requests import RoutePoint
from .resilience import ResilientHttpClient

logger = logging.getLogger(__name__)

ORS_BASE_URL = "https://api.openrouteservice.org/v2"


class OpenRouteServiceClient:
    """
    Driving directions with countryinfo and waycategory extras.

    The raw GeoJSON response is returned as a dict; coverage analysis reads
    it directly.
    """

    def __init__(self, http: ResilientHttpClient, api_key: Optional[str] = None):
        self.api_key = api_key
        self.base_url = ORS_BASE_URL
        self.http = http

    async def close(self):
        """Close the HTTP client."""
        await self.http.close()

    def is_available(self) -> bool:
        """Check if ORS is configured."""
        return self.api_key is not None

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise MissingApiKeyError("The server is not configured for routing. Please contact the site operator.")

    def build_directions_body(self, start: RoutePoint, end: RoutePoint, avoid_tolls: bool = False) -> dict:
        # ORS uses [lon, lat] order
        body = {
            "coordinates": [[start.lon, start.lat], [end.lon, end.lat]],
            "instructions": False,
            "extra_info": ["countryinfo", "waycategory"],
        }
        if avoid_tolls:
            body["options"] = {"avoid_features": ["tollways"]}
        return body

    async def get_driving_route(self, start: RoutePoint, end: RoutePoint, avoid_tolls: bool = False) -> dict:
        """
        Request a driving-car route between two points.

        Args:
            start: Origin
            end: Destination
            avoid_tolls: Ask ORS to avoid tollways

        Returns:
            Parsed ORS GeoJSON FeatureCollection

        Raises:
            MissingApiKeyError: No ORS key configured
            ProviderAuthError: Key rejected (401/403)
            NoRouteError: No drivable route (404) or unroutable input (400)
            ProviderRateLimitError: ORS quota hit (429)
            ProviderError: Any other non-200 answer
        """
        self.ensure_configured()

        url = f"{self.base_url}/directions/driving-car/geojson"
        headers = {
            "Authorization": self.api_key,
            "Content-Type": "application/json",
        }
        body = self.build_directions_body(start, end, avoid_tolls)

        response = await self.http.post(url, headers=headers, json=body)
        status = response.status_code

        if status == 200:
            return response.json()

        logger.warning(f"ORS directions returned HTTP {status}")

        if status in (401, 403):
            raise ProviderAuthError("The routing service rejected the API key. Please contact the site operator.")
        if status == 404:
            if avoid_tolls:
                raise NoRouteError(
                    "No route found while avoiding toll roads. Try disabling 'Avoid toll roads' "
                    "or choose different locations.",
                    code="NO_ROUTE_AVOID_TOLLS",
                )
            raise NoRouteError(
                "No drivable route found between these locations. "
                "Make sure both points are on the European road network."
            )
        if status == 400:
            raise NoRouteError(
                "Could not build a route between these locations. Try more specific place names "
                'including the country (e.g., "Munich, Germany").'
            )
        if status == 429:
            raise ProviderRateLimitError(
                "The routing service is temporarily busy. Please wait a moment and try again."
            )
        raise ProviderError(
            f"The routing service returned an unexpected error ({status}). Please try again later."
        )
