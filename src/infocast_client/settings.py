"""
infocast_client.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Offer a cached settings instance for the CLI and the composition root.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client configuration:
    - Remote API location and request timeout
    - Credential transport header and storage location
    - Logging controls
    """

    model_config = SettingsConfigDict(env_prefix="INFOCAST_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "infocast-client"
    log_level: str = "INFO"

    # Remote API
    api_base_url: str = "http://localhost:5000"
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    # Credential transport: the server reads the bearer token from this header.
    auth_header: str = "x-auth-token"

    # Durable client storage (holds the persisted credential only)
    storage_url: str = "sqlite+aiosqlite:///./infocast.db"
    token_storage_key: str = "token"

    # Home dashboard
    recent_limit: int = Field(default=5, ge=1, le=100)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(...)` directly instead of going through the cache.
