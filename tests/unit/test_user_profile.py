"""
Unit tests for WindowsLiveTokenStrategy.user_profile().
"""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from shared.errors import InternalOAuthError
from windows_live_token import WindowsLiveTokenStrategy
from windows_live_token.oauth2 import OAuth2RequestError
from windows_live_token.profile import NormalizedProfile


class TestUserProfile:
    """Test cases for fetching and normalizing the Live profile."""

    @pytest.fixture
    def strategy(self, make_strategy):
        return make_strategy()

    @pytest.mark.asyncio
    async def test_fetch_profile(self, strategy, fake_profile):
        """Test a well-formed body is normalized."""
        strategy._oauth2.get = AsyncMock(return_value=(fake_profile, None))

        profile = await strategy.user_profile("accessToken")

        assert isinstance(profile, NormalizedProfile)
        assert profile.provider == "windows-live"
        assert profile.id == "8c8ce076ca27823f"
        assert profile.display_name == "Roberto Tamburello"
        assert profile.name.family_name == "Tamburello"
        assert profile.name.given_name == "Roberto"

        assert [(e.value, e.type) for e in profile.emails] == [
            ("Roberto@contoso.com", "account"),
            ("Roberto@fabrikam.com", "home"),
            ("Robert@adatum.com", "work"),
            ("Roberto@adventure-works.com", "other"),
        ]
        assert profile.emails[0].primary is True
        assert not profile.emails[1].primary
        assert not profile.emails[2].primary
        assert not profile.emails[3].primary

        assert profile.photos[0].value == "https://apis.live.net/v5.0/8c8ce076ca27823f/picture"
        assert isinstance(profile.raw, str)
        assert profile.raw == fake_profile
        assert isinstance(profile.json_data, dict)
        strategy._oauth2.get.assert_awaited_once_with("https://apis.live.net/v5.0/me", "accessToken")

    @pytest.mark.asyncio
    async def test_custom_profile_url(self, make_strategy, fake_profile):
        """Test the configured profile URL is fetched."""
        strategy = make_strategy(profile_url="https://example.test/v5.0/me")
        strategy._oauth2.get = AsyncMock(return_value=(fake_profile, None))

        await strategy.user_profile("accessToken")

        strategy._oauth2.get.assert_awaited_once_with("https://example.test/v5.0/me", "accessToken")

    @pytest.mark.asyncio
    async def test_non_json_body(self, strategy):
        """Test a non-JSON body raises a parse error."""
        strategy._oauth2.get = AsyncMock(return_value=("not a JSON", None))

        with pytest.raises(json.JSONDecodeError):
            await strategy.user_profile("accessToken")

    @pytest.mark.asyncio
    async def test_json_array_body(self, strategy):
        """Test a JSON body that is not an object is rejected."""
        strategy._oauth2.get = AsyncMock(return_value=("[1, 2]", None))

        with pytest.raises(ValueError):
            await strategy.user_profile("accessToken")

    @pytest.mark.asyncio
    async def test_provider_error_envelope(self, strategy):
        """Test the provider's error message and code are surfaced."""
        envelope = json.dumps({
            "error": {
                "code": "request_token_invalid",
                "message": "The access token isn't valid."
            }
        })
        strategy._oauth2.get = AsyncMock(side_effect=OAuth2RequestError(401, data=envelope))

        with pytest.raises(InternalOAuthError) as exc_info:
            await strategy.user_profile("accessToken")

        assert exc_info.value.message == "The access token isn't valid."
        assert exc_info.value.oauth_error == "request_token_invalid"
        assert isinstance(exc_info.value.__cause__, OAuth2RequestError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [None, "<html>Bad Gateway</html>", '{"error": "denied"}', "[]"])
    async def test_unreadable_provider_error(self, strategy, data):
        """Test errors without a readable envelope get the generic message."""
        request_error = OAuth2RequestError(502, data=data)
        strategy._oauth2.get = AsyncMock(side_effect=request_error)

        with pytest.raises(InternalOAuthError) as exc_info:
            await strategy.user_profile("accessToken")

        assert exc_info.value.message == "Failed to fetch user profile"
        assert exc_info.value.oauth_error is request_error

    @pytest.mark.asyncio
    async def test_over_the_wire(self, strategy_options, fake_profile):
        """Test the full fetch through the OAuth2 client and a mock transport."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=fake_profile)

        strategy = WindowsLiveTokenStrategy(
            strategy_options,
            lambda *args: None,
            transport=httpx.MockTransport(handler),
        )

        profile = await strategy.user_profile("live-token")

        assert profile.id == "8c8ce076ca27823f"
        assert str(seen[0].url) == "https://apis.live.net/v5.0/me"
        assert seen[0].headers["Authorization"] == "Bearer live-token"

    @pytest.mark.asyncio
    async def test_over_the_wire_error(self, strategy_options):
        """Test a provider error response is wrapped end to end."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                json={"error": {"code": "request_token_expired", "message": "The access token has expired."}},
            )

        strategy = WindowsLiveTokenStrategy(
            strategy_options,
            lambda *args: None,
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(InternalOAuthError) as exc_info:
            await strategy.user_profile("live-token")

        assert exc_info.value.message == "The access token has expired."
        assert exc_info.value.oauth_error == "request_token_expired"

    @pytest.mark.asyncio
    async def test_profiles_are_independent(self, strategy, fake_profile):
        """Test two fetches of the same body produce equal but separate profiles."""
        strategy._oauth2.get = AsyncMock(return_value=(fake_profile, None))

        first = await strategy.user_profile("accessToken")
        second = await strategy.user_profile("accessToken")

        assert first == second
        assert first is not second
        assert first.emails[0] is not second.emails[0]
