"""
Shared configuration management for the Windows Live token strategy.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Process-wide settings common to every strategy."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    service_name: str = Field(default="auth")


@lru_cache(maxsize=1)
def get_config() -> BaseConfig:
    """Load the shared configuration once per process."""
    return BaseConfig()
