"""
TollRoute API - Entry Point

This module initializes the FastAPI application with strict configuration
validation on startup. Services live on app.state so tests can inject
their own.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Config, ConfigurationError, load_config
from .exceptions import TollRouteError
from .processing.pipeline import RouteAnalysisService
from .storage.rate_limit import FixedWindowRateLimiter, build_rate_limit_backend
from .api.routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown."""
    # Startup
    logger.info("=" * 60)
    logger.info("TOLLROUTE API - STARTING")
    logger.info("=" * 60)

    try:
        config = app.state.config
        if config is None:
            # Load configuration (will fail fast if env vars missing)
            config = load_config()
            app.state.config = config
        logger.info("Configuration loaded successfully")

        # Log which APIs are configured
        for api, available in config.validate_apis().items():
            status = "CONFIGURED" if available else "NOT CONFIGURED"
            logger.info(f"  {api}: {status}")

        if app.state.rate_limiter is None:
            app.state.rate_limiter = FixedWindowRateLimiter(
                build_rate_limit_backend(config.rate_limit_backend),
                trusted_hops=config.trusted_proxy_hops,
            )
        if app.state.service is None:
            app.state.service = RouteAnalysisService.from_config(config)
        logger.info("Route analysis service initialized")

        logger.info("=" * 60)
        logger.info(f"Server ready on {config.backend_host}:{config.backend_port}")
        logger.info("=" * 60)

    except ConfigurationError as e:
        logger.error("=" * 60)
        logger.error("CONFIGURATION ERROR")
        logger.error("=" * 60)
        logger.error(str(e))
        logger.error("")
        logger.error("Please ensure all required environment variables are set.")
        logger.error("See .env.example for required variables.")
        logger.error("=" * 60)
        sys.exit(1)

    yield

    # Shutdown
    logger.info("Shutting down...")
    if app.state.service is not None:
        await app.state.service.close()
    logger.info("Shutdown complete")


async def handle_tollroute_error(request: Request, exc: TollRouteError) -> JSONResponse:
    """Map domain errors to {"error", "code"} JSON with their HTTP status."""
    logger.warning(f"{exc.code} ({exc.status_code}): {exc.message}")
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def create_app(
    config: Optional[Config] = None,
    service: Optional[RouteAnalysisService] = None,
    rate_limiter: Optional[FixedWindowRateLimiter] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Configuration, loaded from the environment when omitted
        service: Route analysis service, built in the lifespan when omitted
        rate_limiter: Request limiter, built from config when omitted
    """
    if config is None:
        # Load config early to get CORS origins (will fail if config is invalid)
        try:
            config = load_config()
        except ConfigurationError:
            # Let lifespan handle the error with better messaging
            config = None

    if rate_limiter is None and config is not None:
        rate_limiter = FixedWindowRateLimiter(
            build_rate_limit_backend(config.rate_limit_backend),
            trusted_hops=config.trusted_proxy_hops,
        )

    app = FastAPI(
        title="TollRoute API",
        description="European vignette, toll and trip-cost annotations for driving routes",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.service = service
    app.state.rate_limiter = rate_limiter

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins if config else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TollRouteError, handle_tollroute_error)

    # Include API routes
    app.include_router(router, prefix="/api")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Load config to get port
    config = load_config()

    uvicorn.run(
        "tollroute.main:app",
        host=config.backend_host,
        port=config.backend_port,
        reload=False,
    )
