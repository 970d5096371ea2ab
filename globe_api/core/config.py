"""
Application configuration loaded from environment variables.

Uses pydantic-settings for type-safe env var parsing with automatic
.env file loading. The X API bearer token is injected via environment,
never hard-coded. Leaving it empty is a supported mode: the trends
endpoint then serves the embedded fallback dataset.

To extend: add new fields here and document them in .env.example.
See https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ─── Core ──────────────────────────────────────────────────────
    environment: str = "development"
    debug: bool = False

    # ─── CORS ──────────────────────────────────────────────────────
    # Comma-separated allowed origins. The globe frontend needs this.
    cors_origins_str: str = "http://localhost:3000"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_str.split(",") if o.strip()]

    # ─── X (Twitter) trends API ────────────────────────────────────
    # Bearer token from https://developer.x.com/. Empty = fallback mode.
    x_api_key: str = ""
    x_api_base_url: str = "https://api.x.com/2"
    x_max_trends: int = 20
    x_request_timeout_seconds: float = 8.0

    # ─── Hotspot engine ────────────────────────────────────────────
    trends_batch_size: int = 10
    trends_batch_delay_seconds: float = 0.1
    red_hotspot_limit: int = 15
    blue_zone_limit: int = 15
    trends_cache_ttl_seconds: float = 120.0
    trends_refresh_deadline_seconds: float = 30.0

    # Optional JSON file replacing the embedded location table.
    locations_file: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Don't fail on unknown env vars
    )


# Module-level singleton — import this everywhere instead of instantiating Settings()
settings = Settings()
