"""octane-auth: password hashing and signed access/refresh tokens.

This package provides:
- Password hashing and verification (bcrypt)
- Access and refresh token issuing and verification (JWT)
- Refresh token revocation through an injectable registry
- Bearer token middleware and a Flask decorator for protected endpoints
"""

from .authenticator import OctaneAuth
from .config import AuthSettings
from .exceptions import (
    AuthenticationError,
    InvalidInput,
    InvalidRefreshToken,
    InvalidToken,
    OctaneAuthError,
)
from .registry import InMemoryRefreshTokenStore, RefreshTokenStore
from .schemas import TokenPair

__all__ = [
    "OctaneAuth",
    "AuthSettings",
    "TokenPair",
    "RefreshTokenStore",
    "InMemoryRefreshTokenStore",
    "OctaneAuthError",
    "InvalidInput",
    "InvalidToken",
    "InvalidRefreshToken",
    "AuthenticationError",
]
