"""
Shared error types for the Windows Live token strategy.
"""

from typing import Any, Dict, Optional

from opentelemetry import trace
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Serializable error payload."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class AuthLayerException(Exception):
    """Base exception carrying a stable error code."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to an error response tagged with the current trace id."""
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        return ErrorResponse(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class InternalOAuthError(AuthLayerException):
    """
    Failure while talking to the identity provider.

    ``oauth_error`` is whatever the provider (or transport) reported: an
    error code string from a provider error envelope, or the underlying
    exception when the envelope could not be read.
    """

    def __init__(self, message: str, oauth_error: Any = None):
        self.oauth_error = oauth_error
        details = {"oauth_error": str(oauth_error)} if oauth_error is not None else {}
        super().__init__("INTERNAL_OAUTH_ERROR", message, details)

    def __str__(self) -> str:
        if self.oauth_error is None:
            return self.message
        return f"{self.message} ({self.oauth_error})"


class ConfigurationError(AuthLayerException):
    """Invalid strategy configuration."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)
