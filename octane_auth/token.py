"""JWT token encoding, validation and introspection.

This module is the only place that talks to PyJWT. It knows nothing about
access versus refresh tokens; callers choose the secret and lifetime. Each
token carries the caller's claims plus:
- iat: Issued at (Unix timestamp)
- exp: Expiration (Unix timestamp)
- iss: Issuer name, when one is configured

Validation functions raise PyJWT's own errors (jwt.ExpiredSignatureError,
jwt.InvalidTokenError); the authenticator maps them onto library errors.
"""

from collections.abc import Mapping
from datetime import timedelta

import jwt

from .exceptions import InvalidInput
from .utils import isodatetime

DEFAULT_ALGORITHM = "HS256"

# Claims owned by the issuer. Caller-supplied values are overwritten on
# encode and stripped before a payload is re-issued.
RESERVED_CLAIMS = frozenset({"iat", "exp", "nbf", "iss"})


def _prepare_payload(payload) -> dict:
    if not isinstance(payload, Mapping) or not payload:
        raise InvalidInput("Please provide a valid payload!")
    return dict(payload)


def strip_reserved_claims(claims: Mapping) -> dict:
    """Return a copy of claims without issuer-owned registered claims."""
    return {k: v for k, v in claims.items() if k not in RESERVED_CLAIMS}


# ============================================================================
# Token Generation
# ============================================================================


def encode_token(
    payload: Mapping,
    secret: str,
    expires_in: timedelta,
    algorithm: str = DEFAULT_ALGORITHM,
    issuer: str | None = None,
) -> str:
    """
    Sign a payload into a JWT.

    Args:
        payload: Non-empty mapping of JSON-serializable claims
        secret: Signing secret
        expires_in: Lifetime of the token
        algorithm: JWS algorithm name
        issuer: Value for the iss claim, omitted when None

    Returns:
        Encoded JWT string

    Raises:
        InvalidInput: If payload is empty, not a mapping, or not serializable
    """
    claims = _prepare_payload(payload)

    issued_at = isodatetime.now()
    claims["iat"] = issued_at
    claims["exp"] = issued_at + expires_in
    claims.pop("nbf", None)
    if issuer:
        claims["iss"] = issuer
    else:
        claims.pop("iss", None)

    try:
        return jwt.encode(claims, secret, algorithm=algorithm)
    except (TypeError, ValueError) as e:
        raise InvalidInput("Payload must be JSON-serializable", {"reason": str(e)}) from e


# ============================================================================
# Token Validation
# ============================================================================


def decode_token(
    token: str,
    secret: str,
    algorithm: str = DEFAULT_ALGORITHM,
    issuer: str | None = None,
) -> dict:
    """
    Validate and decode a JWT.

    Args:
        token: JWT string
        secret: Secret the token must be signed with
        algorithm: The only algorithm accepted
        issuer: Required iss claim value, unchecked when None

    Returns:
        Decoded claims dict

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid (bad signature, malformed,
            missing exp/iat, wrong issuer)
    """
    if not isinstance(token, str) or not token:
        raise jwt.DecodeError("Token must be a non-empty string")

    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        issuer=issuer,
        options={"require": ["exp", "iat"]},
    )


def decode_token_no_validation(token: str) -> dict:
    """
    Decode a JWT without checking its signature or expiry.

    WARNING: Only use this to inspect claims. Never trust the result for
    authentication.

    Raises:
        jwt.DecodeError: If the token is not a well-formed JWT
    """
    return jwt.decode(
        token,
        options={"verify_signature": False, "verify_exp": False},
    )


# ============================================================================
# Token Introspection
# ============================================================================


def get_token_expiry_remaining(
    token: str,
    secret: str,
    algorithm: str = DEFAULT_ALGORITHM,
    issuer: str | None = None,
) -> timedelta | None:
    """
    Get the time remaining until a token expires.

    The token is validated the same way decode_token() validates it,
    including the issuer when one is given.

    Returns:
        Remaining lifetime, or None if the token is invalid or expired
    """
    try:
        claims = decode_token(token, secret, algorithm=algorithm, issuer=issuer)
    except jwt.InvalidTokenError:
        return None

    remaining = isodatetime.from_unix(claims["exp"]) - isodatetime.now()
    if remaining <= timedelta(0):
        return None
    return remaining


def is_token_expired(
    token: str,
    secret: str,
    algorithm: str = DEFAULT_ALGORITHM,
    issuer: str | None = None,
) -> bool:
    """Check if a token is expired. Invalid tokens count as expired."""
    return get_token_expiry_remaining(token, secret, algorithm=algorithm, issuer=issuer) is None
