"""
Route analysis pipeline.

apply_country_rules is the pure core: directions response in, annotated
result out. RouteAnalysisService wraps it with geocoding and the
directions call.
"""

import asyncio
import logging
import time
import uuid
from typing import Optional

from ..clients.geocoding import Geocoder
from ..clients.openrouteservice import OpenRouteServiceClient
from ..clients.resilience import CircuitBreaker, ResilientHttpClient
from ..config import Config
from ..data.vignettes import PRICE_LAST_VERIFIED_AT
from ..models.analysis import AppliedPreferences, ComplianceNotice, RouteAnalysisResult
from ..models.requests import RouteAnalysisRequest, RoutePoint
from ..storage.cache import TTLCache, build_cache_backend
from .borders import build_border_crossings
from .country_rules import evaluate_country_requirement
from .coverage import analyze_route_requirements, country_route_spans, map_country_summaries
from .readiness import build_trip_readiness
from .section_tolls import get_section_toll_notices
from .trip_estimator import build_trip_estimate
from .trip_shield import build_trip_shield

logger = logging.getLogger(__name__)


def apply_country_rules(response: dict, request: RouteAnalysisRequest) -> RouteAnalysisResult:
    """
    Annotate a directions response with country obligations and trip insights.

    Raises:
        RouteDataError: When the response lacks route, geometry or country info
    """
    draft = analyze_route_requirements(response, request)

    countries = map_country_summaries(
        draft,
        lambda code, has_highway, has_tollway: evaluate_country_requirement(
            code, has_highway, has_tollway, request
        ),
    )
    route_countries = [country.country_code for country in countries]

    section_tolls = [
        notice
        for country in countries
        if country.requires_section_toll
        for notice in get_section_toll_notices(country.country_code, request, route_countries)
    ]

    estimate = build_trip_estimate(
        countries,
        draft.total_distance_meters,
        request,
        spans=country_route_spans(draft),
    )
    shield = build_trip_shield(countries, section_tolls, request, route_sequence=draft.country_sequence)
    readiness = build_trip_readiness(
        countries,
        section_tolls,
        request,
        estimate=estimate,
        shield=shield,
        distance_source=draft.distance_source,
    )

    return RouteAnalysisResult(
        route_geojson=draft.line_string,
        countries=countries,
        section_tolls=section_tolls,
        compliance=ComplianceNotice(price_last_verified_at=PRICE_LAST_VERIFIED_AT),
        trip_estimate=estimate,
        trip_shield=shield,
        trip_readiness=readiness,
        border_crossings=build_border_crossings(draft.country_sequence),
    )


def applied_preferences(request: RouteAnalysisRequest) -> AppliedPreferences:
    """Echo of the normalized preferences (electric already forces zero emission)."""
    return AppliedPreferences(
        avoid_tolls=request.avoid_tolls,
        channel_crossing_preference=request.channel_crossing_preference,
        vehicle_class=request.vehicle_class,
        powertrain=request.powertrain,
        gross_weight_kg=request.gross_weight_kg,
        axles=request.axles,
        emission_class=request.emission_class,
    )


class RouteAnalysisService:
    """
    Complete route analysis: resolve locations, fetch directions, apply rules.
    """

    def __init__(self, directions: OpenRouteServiceClient, geocoder: Geocoder):
        self.directions = directions
        self.geocoder = geocoder

    @classmethod
    def from_config(cls, config: Config, cache: Optional[TTLCache] = None) -> "RouteAnalysisService":
        """Build the service and its HTTP clients from configuration."""
        breaker = CircuitBreaker(
            threshold=config.circuit_threshold,
            cooldown_seconds=config.circuit_cooldown_seconds,
        )
        directions_http = ResilientHttpClient(
            timeout=config.request_timeout_seconds,
            max_retries=config.max_retries,
            base_delay=config.retry_base_delay_seconds,
            breaker=breaker,
        )
        geocode_http = ResilientHttpClient(
            timeout=config.geocode_timeout_seconds,
            max_retries=config.max_retries,
            base_delay=config.retry_base_delay_seconds,
            breaker=breaker,
        )
        if cache is None:
            cache = TTLCache(
                build_cache_backend(config.cache_backend, max_entries=config.cache_max_entries),
                ttl_seconds=config.cache_ttl_seconds,
                namespace="geocode",
            )

        return cls(
            directions=OpenRouteServiceClient(directions_http, api_key=config.ors_api_key),
            geocoder=Geocoder(
                geocode_http,
                cache,
                ors_api_key=config.ors_api_key,
                contact_email=config.contact_email,
            ),
        )

    async def close(self):
        """Close all HTTP clients."""
        await self.directions.close()
        await self.geocoder.close()

    async def _resolve(self, point: Optional[RoutePoint], text: str) -> RoutePoint:
        if point is not None:
            return point
        return await self.geocoder.resolve_location(text)

    async def analyze(self, request: RouteAnalysisRequest) -> RouteAnalysisResult:
        """
        Run the full analysis for one request.

        Raises:
            TollRouteError subclasses for geocoding, provider and route-data
            failures
        """
        request_id = uuid.uuid4().hex[:8]
        started = time.perf_counter()
        logger.info(f"[{request_id}] Route analysis started: {request.start} -> {request.end}")

        # Checked before geocoding so no provider quota is spent
        self.directions.ensure_configured()

        try:
            start_point, end_point = await asyncio.gather(
                self._resolve(request.start_point, request.start),
                self._resolve(request.end_point, request.end),
            )
            response = await self.directions.get_driving_route(
                start_point, end_point, avoid_tolls=request.avoid_tolls
            )
            result = apply_country_rules(response, request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(f"[{request_id}] Route analysis failed after {elapsed_ms:.0f}ms: {e}")
            raise

        result.applied_preferences = applied_preferences(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"[{request_id}] Route analysis completed in {elapsed_ms:.0f}ms "
            f"({len(result.countries)} countries)"
        )
        return result
