"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    fred_api_base: str = "https://api.stlouisfed.org"
    fred_api_key: str = ""

    # Service
    service_name: str = "fincalc-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Rate cache
    rate_cache_ttl_hours: int = 24


settings = Settings()
