"""
Configuration for the Windows Live token strategy.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.config import BaseConfig, get_config
from shared.logging import configure_logging

DEFAULT_AUTHORIZATION_URL = "https://login.live.com/oauth20_authorize.srf"
DEFAULT_TOKEN_URL = "https://login.live.com/oauth20_token.srf"
DEFAULT_PROFILE_URL = "https://apis.live.net/v5.0/me"


class StrategyOptions(BaseSettings):
    """Strategy options; anything not passed explicitly is read from WINDOWS_LIVE_* env vars."""

    model_config = SettingsConfigDict(
        env_prefix="WINDOWS_LIVE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    client_id: Optional[str] = None
    client_secret: str = ""
    pass_req_to_callback: bool = False
    access_token_field: str = Field(default="access_token", min_length=1)
    refresh_token_field: str = Field(default="refresh_token", min_length=1)

    # Endpoints
    profile_url: str = DEFAULT_PROFILE_URL
    authorization_url: str = DEFAULT_AUTHORIZATION_URL
    token_url: str = DEFAULT_TOKEN_URL

    # Profile fetch
    skip_user_profile: bool = False
    use_authorization_header: bool = True
    timeout: float = Field(default=10.0, gt=0)


def setup_logging(config: Optional[BaseConfig] = None) -> None:
    """Configure structured logging from the shared settings."""
    config = config or get_config()
    configure_logging(config.service_name, config.log_level)
