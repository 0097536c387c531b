"""OctaneAuth: password hashing and access/refresh token lifecycle.

Refresh token lifecycle:

    ISSUED -> ACTIVE -> INVALIDATED   (removed from the registry)
                     -> EXPIRED       (exp claim elapsed)

A refresh token is ACTIVE while its signature verifies against the refresh
secret, it has not expired, and it is still present in the registry.
Refresh tokens are not rotated: refreshing returns a new access token
together with the original refresh token.
"""

import logging

import jwt

from . import password, token
from .config import AuthSettings
from .exceptions import InvalidRefreshToken, InvalidToken
from .middleware import make_authenticate_middleware
from .registry import InMemoryRefreshTokenStore, RefreshTokenStore
from .schemas import TokenPair

logger = logging.getLogger(__name__)


class OctaneAuth:
    """Authentication helper bound to one immutable configuration.

    Example:
    ```python
    auth = OctaneAuth(jwt_secret="...", refresh_secret="...")

    hashed = auth.hash_password("s3cret")
    auth.verify_password("s3cret", hashed)  # True

    tokens = auth.generate_tokens({"userId": 1234})
    auth.verify_token(tokens.access_token)["userId"]  # 1234
    ```
    """

    def __init__(
        self,
        settings: AuthSettings | None = None,
        *,
        store: RefreshTokenStore | None = None,
        **options,
    ):
        """
        Args:
            settings: Prebuilt settings. When omitted, settings are built from
                options and OCTANE_AUTH_* environment variables.
            store: Refresh token store, defaults to an in-memory store
            **options: AuthSettings fields (jwt_secret, refresh_secret,
                token_expiration, refresh_token_expiration, salt_rounds, ...)

        Raises:
            TypeError: If both settings and options are given
            pydantic.ValidationError: If the configuration is invalid
        """
        if settings is not None and options:
            raise TypeError("Pass either settings or keyword options, not both")

        self.settings = settings if settings is not None else AuthSettings(**options)
        self.refresh_tokens = store if store is not None else InMemoryRefreshTokenStore()

    # ========================================================================
    # Passwords
    # ========================================================================

    def hash_password(self, plain: str) -> str:
        """Hash a password with the configured bcrypt cost."""
        return password.hash_password(plain, rounds=self.settings.salt_rounds)

    def verify_password(self, candidate: str, hashed: str) -> bool:
        """Check a candidate password against a stored hash."""
        return password.verify_password(candidate, hashed)

    # ========================================================================
    # Token issuing
    # ========================================================================

    def _sign_access(self, payload) -> str:
        return token.encode_token(
            payload,
            self.settings.jwt_secret,
            self.settings.token_expiration,
            algorithm=self.settings.algorithm,
            issuer=self.settings.issuer,
        )

    def _sign_refresh(self, payload) -> str:
        return token.encode_token(
            payload,
            self.settings.refresh_secret,
            self.settings.refresh_token_expiration,
            algorithm=self.settings.algorithm,
            issuer=self.settings.issuer,
        )

    def generate_token(self, payload) -> str:
        """
        Generate a single access token.

        Nothing is registered: use generate_tokens() when the caller also
        needs a refresh token.

        Raises:
            InvalidInput: If payload is empty, not a mapping, or not serializable
        """
        return self._sign_access(payload)

    def generate_tokens(self, payload) -> TokenPair:
        """
        Generate an access/refresh token pair and register the refresh token.

        Raises:
            InvalidInput: If payload is empty, not a mapping, or not serializable
        """
        access_token = self._sign_access(payload)
        refresh_token = self._sign_refresh(payload)

        self.refresh_tokens.put(refresh_token, dict(payload))
        logger.debug("Issued token pair")

        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    # ========================================================================
    # Token verification
    # ========================================================================

    def verify_token(self, access_token: str) -> dict:
        """
        Verify an access token and return its decoded claims.

        Raises:
            InvalidToken: On a bad signature, malformed token, wrong issuer
                or expired token
        """
        try:
            return token.decode_token(
                access_token,
                self.settings.jwt_secret,
                algorithm=self.settings.algorithm,
                issuer=self.settings.issuer,
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidToken("Token has expired", {"code": "token_expired"}) from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken("Invalid token", {"code": "invalid_token"}) from e

    def verify_refresh_token(self, refresh_token: str) -> dict:
        """
        Verify a refresh token and return its decoded claims.

        The token must verify against the refresh secret, be unexpired, and
        still be present in the registry.

        Raises:
            InvalidRefreshToken: On any failure, whatever the cause
        """
        try:
            claims = token.decode_token(
                refresh_token,
                self.settings.refresh_secret,
                algorithm=self.settings.algorithm,
                issuer=self.settings.issuer,
            )
        except jwt.InvalidTokenError as e:
            raise InvalidRefreshToken("Invalid refresh token") from e

        if refresh_token not in self.refresh_tokens:
            raise InvalidRefreshToken("Invalid refresh token")

        return claims

    # ========================================================================
    # Refresh flow
    # ========================================================================

    def refresh_access_token(self, refresh_token: str) -> TokenPair:
        """
        Mint a new access token from an active refresh token.

        The returned pair carries the new access token and the original
        refresh token. The registry entry is left untouched.

        Raises:
            InvalidRefreshToken: If the refresh token is not active
        """
        claims = self.verify_refresh_token(refresh_token)
        payload = token.strip_reserved_claims(claims)

        access_token = self._sign_access(payload)

        logger.debug("Refreshed access token")
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def invalidate_refresh_token(self, refresh_token: str) -> None:
        """Revoke a refresh token. Unknown or already revoked tokens are ignored."""
        if not isinstance(refresh_token, str):
            return
        self.refresh_tokens.delete(refresh_token)
        logger.debug("Invalidated refresh token")

    # ========================================================================
    # Middleware
    # ========================================================================

    def authenticate(self):
        """Return a (request, response, next) middleware that requires a valid access token."""
        return make_authenticate_middleware(self)
