"""
config.py
What this file does:
- Uses pydantic-settings (BaseSettings) to load env vars + .env automatically.
- MONGODB_URI has no default, so the process fails fast at import when it is missing.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend_host: str = Field(default="0.0.0.0", alias="AREAMAP_BACKEND_HOST")
    backend_port: int = Field(default=8000, alias="AREAMAP_BACKEND_PORT")

    mongo_uri: str = Field(alias="MONGODB_URI")
    mongo_db: str = Field(default="areamap", alias="AREAMAP_MONGO_DB")
    mongo_max_pool_size: int = Field(default=100, alias="AREAMAP_MONGO_MAX_POOL_SIZE")
    mongo_timeout_ms: int = Field(default=5000, alias="AREAMAP_MONGO_TIMEOUT_MS")

    cors_allow_origins: str = Field(default="*", alias="AREAMAP_CORS_ALLOW_ORIGINS")
    strict_validation: bool = Field(default=True, alias="AREAMAP_STRICT_VALIDATION")
    log_level: str = Field(default="INFO", alias="AREAMAP_LOG_LEVEL")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


settings = Settings()
