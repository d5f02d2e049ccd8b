"""
Shared test configuration.

Clears CORNUCOPIA_MAX_SESSIONS for every test so a local ``.env`` cannot
cap the sessions an API test is allowed to create.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Run each test without a session cap unless it sets one itself."""
    monkeypatch.delenv("CORNUCOPIA_MAX_SESSIONS", raising=False)
    yield
