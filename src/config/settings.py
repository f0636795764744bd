"""
Application settings using Pydantic.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Discovery engine configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # SNMP transport defaults
    snmp_timeout: int = 5
    snmp_retries: int = 2
    snmp_port: int = 161
    snmp_walk_max_rows: int | None = None  # None = walk whole column


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
