"""
Configuration module with strict environment variable validation.

Secrets and deployment settings come from the environment; tunables
(timeouts, cache, rate limits) are centralized in config.yaml.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Any

import yaml


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


# Load YAML config once at module level
_CONFIG_PATH = Path(__file__).parent / "config.yaml"
_YAML_CONFIG: dict = {}


def _load_yaml_config() -> dict:
    """Load configuration from config.yaml file."""
    global _YAML_CONFIG
    if not _YAML_CONFIG:
        if _CONFIG_PATH.exists():
            with open(_CONFIG_PATH, "r") as f:
                _YAML_CONFIG = yaml.safe_load(f) or {}
        else:
            raise ConfigurationError(f"Configuration file not found: {_CONFIG_PATH}")
    return _YAML_CONFIG


def get_yaml_setting(*keys: str, default: Any = None) -> Any:
    """
    Get a setting from config.yaml using dot notation.

    Example: get_yaml_setting("rate_limits", "route_analysis", "max_requests") -> 30
    """
    config = _load_yaml_config()
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


def get_required_env(key: str) -> str:
    """Get a required environment variable. Raises if not set."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        raise ConfigurationError(
            f"Missing required environment variable: {key}\n"
            f"Please set {key} in your .env file or environment."
        )
    return value.strip()


def get_optional_env(key: str) -> Optional[str]:
    """Get an optional environment variable. Returns None if not set."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return None
    return value.strip()


@dataclass(frozen=True)
class RateLimitRule:
    """Fixed-window limit for one request scope."""
    max_requests: int
    window_seconds: float


@dataclass(frozen=True)
class Config:
    """Application configuration - immutable after creation."""

    # Server settings - REQUIRED
    backend_port: int
    backend_host: str

    # CORS settings - REQUIRED
    cors_origins: list[str]

    # Optional settings (graceful degradation if missing)
    ors_api_key: Optional[str] = None
    contact_email: Optional[str] = None
    trusted_proxy_hops: int = 1

    # Tunables from config.yaml
    request_timeout_seconds: float = 15.0
    geocode_timeout_seconds: float = 8.0
    max_retries: int = 2
    retry_base_delay_seconds: float = 0.2
    circuit_threshold: int = 5
    circuit_cooldown_seconds: float = 30.0
    cache_backend: str = "memory"
    cache_ttl_seconds: float = 600.0
    cache_max_entries: int = 2000
    rate_limit_backend: str = "memory"
    rate_limits: Optional[dict[str, RateLimitRule]] = None
    max_body_bytes: int = 10_240

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables and config.yaml."""

        # Required settings
        try:
            backend_port = int(get_required_env("BACKEND_PORT"))
        except ValueError as e:
            raise ConfigurationError(f"BACKEND_PORT must be an integer: {e}")
        backend_host = get_required_env("BACKEND_HOST")

        cors_origins_str = get_required_env("CORS_ORIGINS")
        cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]

        # Optional settings
        ors_api_key = get_optional_env("ORS_API_KEY")
        contact_email = get_optional_env("APP_CONTACT_EMAIL")
        hops_raw = get_optional_env("TRUSTED_PROXY_HOPS")
        try:
            trusted_proxy_hops = max(0, int(hops_raw)) if hops_raw else 1
        except ValueError:
            trusted_proxy_hops = 1

        return cls(
            backend_port=backend_port,
            backend_host=backend_host,
            cors_origins=cors_origins,
            ors_api_key=ors_api_key,
            contact_email=contact_email,
            trusted_proxy_hops=trusted_proxy_hops,
            **load_tunables(),
        )

    def validate_apis(self) -> dict[str, bool]:
        """Return which APIs are configured."""
        return {
            "ors": bool(self.ors_api_key),
            "photon": True,  # Always available, no key needed
            "nominatim": True,
        }

    def rate_limit_for(self, scope: str) -> RateLimitRule:
        """Limit for a scope, falling back to the default rule."""
        rules = self.rate_limits or {}
        return rules.get(scope) or rules.get("default") or RateLimitRule(30, 60.0)


def load_tunables() -> dict[str, Any]:
    """Read the non-secret tunables from config.yaml."""
    rate_limits = {
        scope: RateLimitRule(
            max_requests=int(rule.get("max_requests", 30)),
            window_seconds=float(rule.get("window_seconds", 60)),
        )
        for scope, rule in (get_yaml_setting("rate_limits", "scopes", default={}) or {}).items()
    }
    return {
        "request_timeout_seconds": float(get_yaml_setting("http", "request_timeout_seconds", default=15)),
        "geocode_timeout_seconds": float(get_yaml_setting("http", "geocode_timeout_seconds", default=8)),
        "max_retries": int(get_yaml_setting("http", "max_retries", default=2)),
        "retry_base_delay_seconds": float(get_yaml_setting("http", "retry_base_delay_seconds", default=0.2)),
        "circuit_threshold": int(get_yaml_setting("http", "circuit_threshold", default=5)),
        "circuit_cooldown_seconds": float(get_yaml_setting("http", "circuit_cooldown_seconds", default=30)),
        "cache_backend": str(get_yaml_setting("cache", "backend", default="memory")),
        "cache_ttl_seconds": float(get_yaml_setting("cache", "ttl_seconds", default=600)),
        "cache_max_entries": int(get_yaml_setting("cache", "max_entries", default=2000)),
        "rate_limit_backend": str(get_yaml_setting("rate_limits", "backend", default="memory")),
        "rate_limits": rate_limits,
        "max_body_bytes": int(get_yaml_setting("request", "max_body_bytes", default=10_240)),
    }


def load_config() -> Config:
    """Load and validate configuration."""
    from dotenv import load_dotenv

    # Load .env file if present
    load_dotenv()

    return Config.from_env()
