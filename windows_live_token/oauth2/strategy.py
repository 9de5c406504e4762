"""
Base strategy types for OAuth2-backed authentication.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shared.errors import ConfigurationError
from shared.logging import get_logger
from .client import OAuth2Client


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


@dataclass(frozen=True)
class AuthOutcome:
    """Result of a single ``authenticate`` call."""
    kind: OutcomeKind
    user: Any = None
    info: Any = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


@dataclass(frozen=True)
class Verified:
    """What a verify callback returns when it has info to pass along with the user."""
    user: Any
    info: Any = None


class Strategy:
    """
    Base class for authentication strategies.

    Subclasses implement ``authenticate`` and finish it by returning one of
    ``success``, ``fail`` or ``error``. Outcomes are values rather than
    instance state, so a single strategy can serve concurrent requests.
    """

    name: Optional[str] = None

    async def authenticate(self, request: Any, **options: Any) -> AuthOutcome:
        raise NotImplementedError("Strategy.authenticate must be overridden by subclass")

    def success(self, user: Any, info: Any = None) -> AuthOutcome:
        return AuthOutcome(OutcomeKind.SUCCESS, user=user, info=info)

    def fail(self, info: Any = None) -> AuthOutcome:
        return AuthOutcome(OutcomeKind.FAIL, info=info)

    def error(self, err: BaseException) -> AuthOutcome:
        return AuthOutcome(OutcomeKind.ERROR, error=err)


class OAuth2Options(BaseModel):
    """Options understood by every OAuth2 strategy."""

    model_config = ConfigDict(extra="ignore")

    client_id: str = Field(min_length=1)
    client_secret: str = ""
    authorization_url: str
    token_url: str
    skip_user_profile: bool = False
    use_authorization_header: bool = True
    timeout: float = 10.0


class OAuth2Strategy(Strategy):
    """
    Strategy backed by an OAuth2 provider.

    Owns the ``_oauth2`` client and the profile loading hook. The
    authorization-code handshake is not implemented here; subclasses
    authenticate requests that already carry an access token.
    """

    name = "oauth2"

    def __init__(
        self,
        options: Union[Mapping[str, Any], BaseModel],
        verify: Callable[..., Any],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if verify is None or not callable(verify):
            raise TypeError("OAuth2Strategy requires a verify callback")

        if isinstance(options, BaseModel):
            options = options.model_dump()
        try:
            parsed = OAuth2Options.model_validate(dict(options))
        except ValidationError as e:
            raise ConfigurationError(
                "OAuth2Strategy requires client_id, authorization_url and token_url options",
                details={"errors": str(e)}
            ) from e

        self._verify = verify
        self._skip_user_profile = parsed.skip_user_profile
        self._oauth2 = OAuth2Client(
            parsed.client_id,
            parsed.client_secret,
            parsed.authorization_url,
            parsed.token_url,
            use_authorization_header=parsed.use_authorization_header,
            timeout=parsed.timeout,
            transport=transport,
        )
        self.logger = get_logger("auth.strategy")

    async def user_profile(self, access_token: str) -> Any:
        """Retrieve the user profile from the provider."""
        return {"provider": "oauth2"}

    async def _load_user_profile(self, access_token: str) -> Any:
        if self._skip_user_profile:
            return None
        return await self.user_profile(access_token)
