"""
Windows Live access-token authentication strategy.

- strategy: WindowsLiveTokenStrategy (also exported as ``Strategy``).
- profile: NormalizedProfile and the Live ``/me`` mapping.
- config: StrategyOptions, read from arguments or WINDOWS_LIVE_* env vars.
- oauth2: the OAuth2 client and base strategy the provider builds on.
- host: Authenticator, which registers strategies by name for FastAPI.

Importing the package performs no network IO.
"""

from .config import StrategyOptions
from .host import AuthRequest, Authenticator, install_error_handlers
from .oauth2 import AuthOutcome, OutcomeKind, Verified
from .profile import NormalizedProfile
from .strategy import WindowsLiveTokenStrategy

Strategy = WindowsLiveTokenStrategy

__version__ = "1.0.0"

__all__ = [
    "AuthOutcome",
    "AuthRequest",
    "Authenticator",
    "NormalizedProfile",
    "OutcomeKind",
    "Strategy",
    "StrategyOptions",
    "Verified",
    "WindowsLiveTokenStrategy",
    "install_error_handlers",
]
