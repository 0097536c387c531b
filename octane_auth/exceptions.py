"""Custom exceptions for octane-auth.

Every error raised by the library derives from OctaneAuthError, which carries
a human-readable message and an optional details dict. Only the Flask
decorator layer turns these into HTTP responses; everything else lets them
propagate to the caller.
"""


class OctaneAuthError(Exception):
    """Base exception for all octane-auth errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInput(OctaneAuthError):
    """Raised for empty, missing or malformed passwords, hashes and payloads."""


class InvalidToken(OctaneAuthError):
    """Raised when an access token fails signature, expiry or format checks."""


class InvalidRefreshToken(OctaneAuthError):
    """Raised when a refresh token is malformed, expired, or revoked.

    The cause is never encoded in the exception type; callers cannot tell an
    expired token from a revoked one.
    """


class AuthenticationError(OctaneAuthError):
    """Raised by the Flask decorator when a request cannot be authenticated."""

    status_code = 401
