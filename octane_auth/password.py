"""Password hashing and verification.

Hashes are bcrypt strings with a random salt, so hashing the same password
twice never yields the same string. Always compare through verify_password().
"""

import bcrypt

from .exceptions import InvalidInput

# bcrypt only reads the first 72 bytes of a password. Recent releases raise
# instead of truncating, so truncate explicitly for consistent behaviour.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    try:
        encoded = password.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidInput("Please provide a valid password!", {"reason": str(e)}) from e
    return encoded[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor (4-31)

    Returns:
        Bcrypt hash string (60 characters)

    Raises:
        InvalidInput: If password is empty, None, not a string, or not
            encodable as UTF-8
    """
    if not isinstance(password, str) or not password:
        raise InvalidInput("Please provide a valid password!")

    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Verify a password against its bcrypt hash.

    Args:
        password: Plain text password to check
        hashed: Bcrypt hash from hash_password()

    Returns:
        True if password matches, False otherwise

    Raises:
        InvalidInput: If the hash is missing or malformed, or the
            password is not a UTF-8 encodable string
    """
    if not isinstance(hashed, str) or not hashed:
        raise InvalidInput("Please provide a valid password hash!")
    if not isinstance(password, str):
        raise InvalidInput("Please provide a valid password!")

    candidate = _encode(password)
    try:
        return bcrypt.checkpw(candidate, hashed.encode("utf-8"))
    except ValueError as e:
        raise InvalidInput("Malformed password hash", {"reason": str(e)}) from e
