"""
Shared fixtures for the Windows Live token strategy tests.
"""

import json
import os
from pathlib import Path

import pytest

from windows_live_token import WindowsLiveTokenStrategy

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer WINDOWS_LIVE_* / AUTH_* variables out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith(("WINDOWS_LIVE_", "AUTH_")):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(Path(__file__).parent)


@pytest.fixture
def fake_profile() -> str:
    """Raw Live /me response body."""
    return json.dumps(json.loads((FIXTURES_DIR / "profile.json").read_text()))


@pytest.fixture
def strategy_options():
    return {"client_id": "123", "client_secret": "123"}


@pytest.fixture
def make_strategy(strategy_options):
    """Factory for strategies with extra options merged in."""
    def _make(verify=lambda *args: None, **overrides):
        return WindowsLiveTokenStrategy({**strategy_options, **overrides}, verify)
    return _make
