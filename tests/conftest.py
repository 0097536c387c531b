"""Shared test fixtures for octane-auth."""

import os

import pytest

from octane_auth import AuthSettings, OctaneAuth

# Long enough to keep HMAC key-length checks quiet
TEST_SECRET = "test-access-secret-0123456789abcdef"
TEST_REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from OCTANE_AUTH_* variables and stray .env files."""
    for name in list(os.environ):
        if name.upper().startswith("OCTANE_AUTH_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings():
    """Settings with a cheap bcrypt cost for fast tests."""
    return AuthSettings(
        jwt_secret=TEST_SECRET,
        refresh_secret=TEST_REFRESH_SECRET,
        token_expiration="1h",
        refresh_token_expiration="7d",
        salt_rounds=4,
    )


@pytest.fixture
def auth(settings):
    """Authenticator backed by the default in-memory registry."""
    return OctaneAuth(settings)


@pytest.fixture
def payload():
    """Sample token payload."""
    return {"userId": 1234, "role": "user"}


@pytest.fixture
def tokens(auth, payload):
    """Token pair issued for the sample payload."""
    return auth.generate_tokens(payload)


@pytest.fixture
def auth_headers(tokens):
    """Get authentication headers with a valid access token."""
    return {"Authorization": f"Bearer {tokens.access_token}"}
