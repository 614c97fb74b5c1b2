"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="GREENPATH_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Green Path API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")

    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL for the Nominatim geocoding service.",
    )
    geocode_region_suffix: str = Field(
        default="Lucknow, India",
        description="Region appended to every forward geocoding query.",
    )
    geocode_user_agent: str = Field(default="green-path-api")

    osrm_base_url: str = Field(
        default="http://router.project-osrm.org",
        description="Base URL for the OSRM routing service.",
    )
    osrm_profile: Literal["driving", "driving-hgv"] = Field(
        default="driving",
        description="OSRM profile to use when requesting alternatives.",
    )

    waqi_base_url: str = Field(default="https://api.waqi.info")
    waqi_token: Optional[str] = Field(
        default=None,
        description="World Air Quality Index API token.",
    )
    default_aqi: int = Field(
        default=100,
        ge=0,
        description="AQI used when the provider answers without a usable reading.",
    )

    http_timeout_seconds: float = Field(default=15.0, gt=0.0)

    history_enabled: bool = True
    history_table: str = "routes"

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("waqi_token", "supabase_url", "supabase_key", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


settings = Settings()
