"""FastAPI route definitions."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..config import Config
from ..data.countries import COUNTRY_NAMES
from ..data.links import OFFICIAL_LINKS
from ..data.section_tolls import SECTION_TOLL_ESTIMATES_EUR
from ..data.vignettes import PRICE_LAST_VERIFIED_AT, VIGNETTE_CATALOG
from ..exceptions import TollRouteError
from ..models.analysis import RouteAnalysisResult
from ..models.requests import RouteAnalysisRequest
from ..processing.pipeline import RouteAnalysisService
from ..storage.rate_limit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

router = APIRouter()

ROUTE_ANALYSIS_SCOPE = "route-analysis"


def json_error(message: str, status_code: int, code: str, headers: dict = None) -> JSONResponse:
    """Structured error body: human-readable message plus machine-readable code."""
    return JSONResponse({"error": message, "code": code}, status_code=status_code, headers=headers)


def format_validation_errors(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{field}: {message}" if field else message)
    return "; ".join(messages)


# Dependencies read services from app.state (set in main.py)
def get_config(request: Request) -> Config:
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(status_code=503, detail="Configuration not loaded")
    return config


def get_service(request: Request) -> RouteAnalysisService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Route analysis service not initialized")
    return service


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    limiter = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        raise HTTPException(status_code=503, detail="Rate limiter not initialized")
    return limiter


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint - does NOT call ORS to preserve the daily quota."""
    config = getattr(request.app.state, "config", None)
    return {
        "status": "ok",
        "service_ready": getattr(request.app.state, "service", None) is not None,
        "ors_configured": bool(config and config.ors_api_key),
        "price_last_verified_at": PRICE_LAST_VERIFIED_AT,
    }


@router.get("/countries")
async def list_countries():
    """List modeled countries and which reference data exists for each."""
    return [
        {
            "country_code": code,
            "name": name,
            "has_vignette_catalog": code in VIGNETTE_CATALOG,
            "section_toll_estimate_eur": SECTION_TOLL_ESTIMATES_EUR.get(code),
            "official_url": OFFICIAL_LINKS.get(code),
        }
        for code, name in sorted(COUNTRY_NAMES.items())
    ]


@router.post("/route-analysis", response_model=RouteAnalysisResult)
async def route_analysis(
    request: Request,
    config: Annotated[Config, Depends(get_config)],
    service: Annotated[RouteAnalysisService, Depends(get_service)],
    limiter: Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)],
):
    """Main route analysis endpoint."""
    rule = config.rate_limit_for(ROUTE_ANALYSIS_SCOPE)
    limit = limiter.check(request.headers, ROUTE_ANALYSIS_SCOPE, rule.max_requests, rule.window_seconds)
    if not limit.allowed:
        logger.warning(f"Rate limit hit for scope {ROUTE_ANALYSIS_SCOPE}")
        return json_error(
            "Too many route requests. Please wait and try again.",
            429,
            "RATE_LIMITED",
            headers={"Retry-After": str(limit.retry_after_seconds)},
        )

    # Check the actual body size; Content-Length can be missing or wrong
    raw_body = await request.body()
    if len(raw_body) > config.max_body_bytes:
        return json_error("Request payload too large.", 413, "PAYLOAD_TOO_LARGE")

    try:
        body = RouteAnalysisRequest.model_validate_json(raw_body)
    except ValidationError as e:
        if any(item.get("type") == "json_invalid" for item in e.errors()):
            return json_error(
                "Invalid request format. Please refresh the page and try again.", 400, "INVALID_JSON"
            )
        return json_error(format_validation_errors(e), 400, "VALIDATION_ERROR")

    try:
        return await service.analyze(body)
    except TollRouteError:
        raise
    except Exception:
        logger.exception("Route analysis failed")
        return json_error("An unexpected error occurred. Please try again later.", 500, "INTERNAL_ERROR")
