"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from faers_dashboard.constants import DEFAULT_TIMEOUT, OPENFDA_BASE_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # openFDA
    openfda_api_key: str = ""
    openfda_base_url: str = OPENFDA_BASE_URL
    request_timeout_seconds: float = DEFAULT_TIMEOUT

    # Dashboard -> proxy
    api_base_url: str = "http://localhost:8000"

    # Server
    host: str = "localhost"
    port: int = 8000

    # App Settings
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        frozen = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
