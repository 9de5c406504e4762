"""
OAuth2 collaborator package.

Supplies what provider strategies build on and reuse unchanged:

- client: OAuth2Client with the authenticated ``get`` primitive.
- strategy: Strategy base (success/fail/error outcomes) and
  OAuth2Strategy with the ``_load_user_profile`` hook.

No authorization-code, token exchange or refresh handling lives here.
"""

from .client import OAuth2Client, OAuth2RequestError
from .strategy import AuthOutcome, OAuth2Options, OAuth2Strategy, OutcomeKind, Strategy, Verified

__all__ = [
    "AuthOutcome",
    "OAuth2Client",
    "OAuth2Options",
    "OAuth2RequestError",
    "OAuth2Strategy",
    "OutcomeKind",
    "Strategy",
    "Verified",
]
