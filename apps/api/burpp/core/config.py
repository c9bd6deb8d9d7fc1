from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/burpp"
    sql_echo: bool = False

    # Bearer tokens are issued by the hosted auth provider; we only verify them.
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = "authenticated"

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    # Rate limiting (per-user when authenticated, else per IP; multi-instance needs Redis later)
    rate_limit_enabled: bool = True
    search_rate_limit: str = "60/minute"
    review_rate_limit: str = "10/minute"
    message_rate_limit: str = "60/minute"

    search_default_limit: int = 12
    search_max_limit: int = 100

    # Geocoding (Nominatim / OpenStreetMap)
    geocoder_base_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "burpp-web/1.0"
    geocoder_timeout_seconds: float = 5.0
    geocoder_country_codes: str | None = None
    geocode_cache_ttl_seconds: int = 3600
    geocode_cache_max_entries: int = 5000

    # Shared geocode cache; in-process LRU when unset
    redis_url: str | None = None

    # Review moderation (OpenAI-compatible); skipped when base url is unset
    moderation_api_base_url: str | None = None
    moderation_api_key: str | None = None
    moderation_model: str = "gpt-4o-mini"

    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
