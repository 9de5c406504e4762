"""
Shared utilities for the Windows Live token strategy.

This package aggregates the cross-cutting building blocks used by the
strategy and its OAuth2 collaborator:

- config: Process settings via pydantic-settings
- logging: Structured logging with trace correlation
- errors: Canonical error types and responses

Do not import from windows_live_token into shared/.
"""
