"""
config.py
Client-side settings (API location, acting user, external lookups), loaded from env vars + .env.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = Field(default="http://127.0.0.1:8000", alias="AREAMAP_API_URL")
    user_id: str = Field(default="user1", alias="AREAMAP_USER_ID")
    http_timeout_s: float = Field(default=10.0, alias="AREAMAP_HTTP_TIMEOUT_S")
    geolocation_timeout_s: float = Field(default=5.0, alias="AREAMAP_GEOLOCATION_TIMEOUT_S")

    nominatim_url: str = Field(
        default="https://nominatim.openstreetmap.org/search", alias="AREAMAP_NOMINATIM_URL"
    )
    user_agent: str = Field(default="areamap/1.0", alias="AREAMAP_USER_AGENT")
