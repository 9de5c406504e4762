"""
Minimal OAuth2 resource client.
"""

from typing import Any, Dict, Optional, Tuple

import httpx

from shared.errors import AuthLayerException
from shared.logging import get_logger


class OAuth2RequestError(AuthLayerException):
    """Non-2xx response or transport failure from a protected resource."""

    def __init__(self, status_code: Optional[int], data: Optional[str] = None):
        self.status_code = status_code
        self.data = data
        message = (
            f"OAuth2 request failed with status {status_code}"
            if status_code is not None
            else "OAuth2 request failed"
        )
        super().__init__("OAUTH2_REQUEST_ERROR", message, {"status_code": status_code})


class OAuth2Client:
    """Holds the client credentials and endpoints, and fetches protected resources."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        authorize_url: str,
        access_token_url: str,
        *,
        use_authorization_header: bool = True,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorize_url = authorize_url
        self.access_token_url = access_token_url
        self.use_authorization_header = use_authorization_header
        self.timeout = timeout
        self.transport = transport
        self.logger = get_logger("auth.oauth2_client")

    async def get(self, url: str, access_token: str) -> Tuple[str, httpx.Response]:
        """
        GET a protected resource with the given access token.

        Returns the response body text and the response itself. Raises
        OAuth2RequestError for non-2xx statuses (with the body as ``data``)
        and for transport failures (chained from the httpx error).
        """
        headers = {"Accept": "application/json"}
        params: Optional[Dict[str, Any]] = None
        if self.use_authorization_header:
            headers["Authorization"] = f"Bearer {access_token}"
        else:
            params = {"access_token": access_token}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as e:
            self.logger.debug("Protected resource request failed", url=url, error=str(e))
            raise OAuth2RequestError(None) from e

        if not response.is_success:
            self.logger.debug(
                "Protected resource returned error status",
                url=url,
                status_code=response.status_code
            )
            raise OAuth2RequestError(response.status_code, data=response.text)

        return response.text, response
