"""Centralized configuration — all env vars in one place."""

import os
from zoneinfo import ZoneInfo

DEMO_API_KEY = "DEMO_KEY"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # NASA APOD upstream
        self.nasa_base_url: str = os.getenv("NASA_APOD_BASE_URL", "https://api.nasa.gov/planetary/apod")
        self.nasa_api_key: str | None = os.getenv("NASA_API_KEY")
        self.upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

        # Cache
        self.cache_max_size: int = int(os.getenv("CACHE_MAX_SIZE", "50"))
        self.cache_ttl_seconds: float = float(os.getenv("CACHE_TTL_SECONDS", str(60 * 60)))

        # "Today" is computed in this zone, never the server's local one
        self.timezone_name: str = os.getenv("APOD_TIMEZONE", "America/New_York")

        self.recent_default_days: int = int(os.getenv("RECENT_DEFAULT_DAYS", "10"))
        self.recent_max_days: int = int(os.getenv("RECENT_MAX_DAYS", "30"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def api_key(self) -> str:
        return self.nasa_api_key or DEMO_API_KEY

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    def validate(self) -> list[str]:
        """Return list of configuration warnings to log at startup."""
        warnings = []
        if not self.nasa_api_key:
            warnings.append(f"NASA_API_KEY not set, using rate-limited {DEMO_API_KEY}")
        if self.cache_max_size <= 0 or self.cache_ttl_seconds <= 0:
            warnings.append("Cache disabled (CACHE_MAX_SIZE or CACHE_TTL_SECONDS is 0)")
        if self.recent_max_days < 1:
            warnings.append(f"RECENT_MAX_DAYS={self.recent_max_days} is below 1, recent range is clamped to 1 day")
        return warnings


settings = Settings()
