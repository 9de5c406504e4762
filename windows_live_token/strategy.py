"""
Windows Live token strategy.

Authenticates requests that already carry a Windows Live OAuth2 access
token by loading the user's Live profile with it and handing the
normalized profile to an application ``verify`` callback.

Example::

    async def verify(access_token, refresh_token, profile):
        user = await users.find_or_create(windows_live_id=profile.id)
        return Verified(user, {"scope": "profile"})

    authenticator.use(WindowsLiveTokenStrategy({
        "client_id": "123-456-789",
        "client_secret": "shhh-its-a-secret",
    }, verify))

``verify`` may be a plain function or a coroutine function. It returns
the user (falsy when the credentials are not acceptable) or a
``Verified(user, info)`` carrying extra info, and raises to report an
error. Any other value, tuples included, is taken as the user itself. With
``pass_req_to_callback`` it receives the request as its first argument.
"""

import inspect
import json
from typing import Any, Callable, Mapping, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from shared.errors import ConfigurationError, InternalOAuthError
from .config import StrategyOptions
from .oauth2 import AuthOutcome, OAuth2RequestError, OAuth2Strategy, Verified
from .profile import NormalizedProfile, parse_profile


class WindowsLiveTokenStrategy(OAuth2Strategy):
    """Bearer-token strategy backed by the Live Connect profile endpoint."""

    name = "windows-live-token"

    def __init__(
        self,
        options: Union[Mapping[str, Any], StrategyOptions, None],
        verify: Callable[..., Any],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not isinstance(options, StrategyOptions):
            options = dict(options or {})
            unknown = sorted(set(options) - set(StrategyOptions.model_fields))
            if unknown:
                raise ConfigurationError(
                    "Unknown Windows Live strategy options",
                    details={"unknown": unknown}
                )
            try:
                options = StrategyOptions(**options)
            except ValidationError as e:
                raise ConfigurationError(
                    "Invalid Windows Live strategy options",
                    details={"errors": str(e)}
                ) from e

        super().__init__(options, verify, transport=transport)

        self._access_token_field = options.access_token_field
        self._refresh_token_field = options.refresh_token_field
        self._profile_url = options.profile_url
        self._pass_req_to_callback = options.pass_req_to_callback

    async def authenticate(self, request: Any, **options: Any) -> AuthOutcome:
        """Authenticate a request carrying an access token in its body or query."""
        access_token = self._lookup(request, self._access_token_field)
        refresh_token = self._lookup(request, self._refresh_token_field)

        if not access_token:
            self.logger.debug("Access token missing", field=self._access_token_field)
            return self.fail({"message": f"You should provide {self._access_token_field}"})

        try:
            profile = await self._load_user_profile(access_token)
        except Exception as e:
            return self.error(e)

        try:
            user, info = await self._call_verify(request, access_token, refresh_token, profile)
        except Exception as e:
            return self.error(e)

        if not user:
            self.logger.debug("Verify callback rejected credentials", strategy=self.name)
            return self.fail(info)

        return self.success(user, info)

    async def user_profile(self, access_token: str) -> NormalizedProfile:
        """
        Fetch and normalize the Live profile for ``access_token``.

        Raises:
            InternalOAuthError: the provider answered with an error or could
                not be reached.
            ValueError: the profile body is not a JSON object (a
                json.JSONDecodeError when it is not JSON at all).
        """
        try:
            body, _ = await self._oauth2.get(self._profile_url, access_token)
        except OAuth2RequestError as e:
            raise _provider_error(e) from e

        profile = parse_profile(body)
        self.logger.debug("Profile loaded", provider=profile.provider, profile_id=profile.id)
        return profile

    @staticmethod
    def _lookup(request: Any, field: str) -> Optional[str]:
        for source in (getattr(request, "body", None), getattr(request, "query", None)):
            if isinstance(source, Mapping):
                value = source.get(field)
                if value:
                    return value
        return None

    async def _call_verify(
        self,
        request: Any,
        access_token: str,
        refresh_token: Optional[str],
        profile: Any,
    ) -> Tuple[Any, Any]:
        if self._pass_req_to_callback:
            result = self._verify(request, access_token, refresh_token, profile)
        else:
            result = self._verify(access_token, refresh_token, profile)

        if inspect.isawaitable(result):
            result = await result

        if isinstance(result, Verified):
            return result.user, result.info
        return result, None


def _provider_error(error: OAuth2RequestError) -> InternalOAuthError:
    # Live reports failures as {"error": {"code": ..., "message": ...}}
    try:
        envelope = json.loads(error.data)
        return InternalOAuthError(envelope["error"]["message"], envelope["error"]["code"])
    except (TypeError, ValueError, KeyError):
        return InternalOAuthError("Failed to fetch user profile", error)
