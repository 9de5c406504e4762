"""
Authentication host for FastAPI applications.

Strategies register under their ``name``; routes then depend on
``authenticator.authenticate("<name>")`` to get the authenticated user.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from shared.errors import AuthLayerException, InternalOAuthError
from shared.logging import clear_context, get_logger, set_request_id
from .oauth2 import AuthOutcome, OutcomeKind, Strategy

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@dataclass
class AuthRequest:
    """Framework-neutral view of an inbound request."""
    body: Optional[Mapping[str, Any]] = None
    query: Optional[Mapping[str, Any]] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    raw: Any = None


async def build_auth_request(request: Request) -> AuthRequest:
    """Read query parameters and a JSON or form body from a Starlette request."""
    content_type = request.headers.get("content-type", "")
    body: Any = None

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Malformed JSON body") from e
    elif content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        body = dict(form)

    return AuthRequest(
        body=body if isinstance(body, Mapping) else None,
        query=dict(request.query_params),
        headers=dict(request.headers),
        raw=request,
    )


class Authenticator:
    """Registry of named strategies."""

    def __init__(self):
        self._strategies: Dict[str, Strategy] = {}
        self.logger = get_logger("auth.authenticator")

    def use(self, strategy: Strategy, name: Optional[str] = None) -> "Authenticator":
        name = name or strategy.name
        if not name:
            raise ValueError("Authentication strategies must have a name")

        self._strategies[name] = strategy
        self.logger.info("Strategy registered", strategy=name)
        return self

    def unuse(self, name: str) -> "Authenticator":
        self._strategies.pop(name, None)
        return self

    def get(self, name: str) -> Strategy:
        try:
            return self._strategies[name]
        except KeyError:
            raise KeyError(f'Unknown authentication strategy "{name}"') from None

    async def run(self, name: str, request: Any, **options: Any) -> AuthOutcome:
        """Run a registered strategy against an already built request view."""
        return await self.get(name).authenticate(request, **options)

    def authenticate(self, name: str, **options: Any):
        """
        Build a FastAPI dependency for the named strategy.

        success returns the user (also stored on ``request.state.user``),
        fail raises HTTP 401 and error re-raises the strategy's exception.
        """
        self.get(name)

        async def dependency(request: Request):
            request.state.request_id = set_request_id(request.headers.get("x-request-id"))
            try:
                auth_request = await build_auth_request(request)
                outcome = await self.run(name, auth_request, **options)
            finally:
                clear_context()

            if outcome.kind is OutcomeKind.ERROR:
                raise outcome.error
            if outcome.kind is OutcomeKind.FAIL:
                raise HTTPException(status_code=401, detail=_failure_message(outcome.info))

            request.state.user = outcome.user
            request.state.auth_info = outcome.info
            return outcome.user

        return dependency


def _failure_message(info: Any) -> str:
    if isinstance(info, Mapping) and info.get("message"):
        return str(info["message"])
    if isinstance(info, str) and info:
        return info
    return "Unauthorized"


def install_error_handlers(app: FastAPI) -> None:
    """Render strategy errors as ErrorResponse payloads."""
    logger = get_logger("auth.errors")

    @app.exception_handler(AuthLayerException)
    async def auth_layer_exception_handler(request: Request, exc: AuthLayerException):
        # The dependency has already cleared its context by now
        set_request_id(getattr(request.state, "request_id", None))
        try:
            logger.error(
                "Authentication error",
                code=exc.code,
                message=exc.message,
                details=exc.details
            )
        finally:
            clear_context()
        status_code = 502 if isinstance(exc, InternalOAuthError) else 500
        return JSONResponse(
            status_code=status_code,
            content=exc.to_response().model_dump()
        )
