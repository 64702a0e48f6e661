"""
Application settings using Pydantic.

Provides environment-based defaults with the GRAFANA_TFGEN_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GRAFANA_TFGEN_",
        extra="ignore",
    )

    # Grafana
    grafana_url: str | None = None
    grafana_auth: str | None = None

    # Grafana Cloud
    cloud_access_policy_token: str | None = None
    cloud_org: str | None = None
    cloud_api_url: str | None = None

    # Terraform
    terraform_binary: str = "terraform"
    provider_version: str | None = None

    # HTTP client settings
    http_timeout: float = 30.0

    # Logging
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
