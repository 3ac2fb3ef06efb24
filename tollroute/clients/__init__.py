"""API clients for external services."""

from .resilience import CircuitBreaker, ResilientHttpClient
from .openrouteservice import OpenRouteServiceClient
from .geocoding import Geocoder, parse_coordinates

__all__ = [
    "CircuitBreaker",
    "ResilientHttpClient",
    "OpenRouteServiceClient",
    "Geocoder",
    "parse_coordinates",
]
