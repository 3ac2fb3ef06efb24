"""
Error taxonomy for route analysis.

Every error carries a machine-readable ``code`` and the HTTP status the API
layer should answer with. Reference-data gaps are never raised; they degrade
to "no data" fields in the result instead.
"""


class TollRouteError(Exception):
    """Base error surfaced to API callers as ``{"error", "code"}`` JSON."""

    code = "UNKNOWN"
    status_code = 500

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class RouteDataError(TollRouteError):
    """Directions response lacks the feature, geometry or country metadata."""
    code = "ROUTE_DATA"
    status_code = 400


class GeocodingError(TollRouteError):
    """A location could not be resolved to coordinates."""
    code = "GEOCODE_ERROR"
    status_code = 400


class NoRouteError(TollRouteError):
    """The directions provider found no drivable route."""
    code = "NO_ROUTE"
    status_code = 400


class MissingApiKeyError(TollRouteError):
    code = "MISSING_API_KEY"
    status_code = 500


class ProviderAuthError(TollRouteError):
    code = "ORS_AUTH_FAILED"
    status_code = 502


class ProviderRateLimitError(TollRouteError):
    code = "ORS_RATE_LIMITED"
    status_code = 429


class ProviderError(TollRouteError):
    code = "ORS_ERROR"
    status_code = 502


class ProviderTimeoutError(TollRouteError):
    code = "TIMEOUT"
    status_code = 504


class CircuitOpenError(TollRouteError):
    """Outbound calls to a host are suspended after repeated failures."""
    code = "CIRCUIT_OPEN"
    status_code = 503
