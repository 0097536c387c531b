"""Bearer token authentication middleware.

The handler returned by make_authenticate_middleware() follows the
(request, response, next) calling convention:

- request exposes a ``headers`` mapping; the decoded token payload is stored
  on ``request.user`` after successful authentication
- response exposes ``status(code)``, returning the response, and
  ``json(body)``
- next is called with no arguments to continue the chain

Rejected requests receive a 401 with ``{"error": <message>}`` and next is
not called.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from .exceptions import InvalidToken

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "No token provided."
INVALID_TOKEN_MESSAGE = "Invalid token."

_BEARER_PREFIX = "bearer "


class RequestLike(Protocol):
    headers: Mapping[str, str]


class ResponseLike(Protocol):
    def status(self, code: int) -> "ResponseLike": ...

    def json(self, body: dict[str, Any]) -> Any: ...


def get_authorization_header(headers: Mapping[str, str]) -> str | None:
    """Look up the Authorization header case-insensitively."""
    if headers is None:
        return None
    value = headers.get("Authorization")
    if value is None:
        value = headers.get("authorization")
    if value is None:
        for name, header_value in headers.items():
            if name.lower() == "authorization":
                return header_value
    return value


def extract_bearer_token(header: str | None) -> str | None:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header value.

    Returns:
        The token, or None if the header is missing, uses another scheme,
        or carries no token
    """
    if not header or header[: len(_BEARER_PREFIX)].lower() != _BEARER_PREFIX:
        return None
    token_str = header[len(_BEARER_PREFIX):].strip()
    return token_str or None


def _reject(response: ResponseLike, message: str):
    return response.status(401).json({"error": message})


def make_authenticate_middleware(auth) -> Callable[[RequestLike, ResponseLike, Callable[[], Any]], Any]:
    """
    Build a middleware that requires a valid access token.

    Args:
        auth: OctaneAuth instance used to verify tokens

    Example:
    ```python
    handler = auth.authenticate()
    handler(request, response, lambda: view(request, response))
    ```
    """

    def authenticate(request: RequestLike, response: ResponseLike, next: Callable[[], Any]):
        token_str = extract_bearer_token(get_authorization_header(getattr(request, "headers", None)))
        if token_str is None:
            logger.warning("Unauthenticated request to protected endpoint")
            return _reject(response, NO_TOKEN_MESSAGE)

        try:
            payload = auth.verify_token(token_str)
        except InvalidToken as e:
            logger.warning(f"Rejected access token: {e.message}")
            return _reject(response, INVALID_TOKEN_MESSAGE)

        request.user = payload
        logger.debug("Bearer token authentication successful")

        # Outside the try block so downstream errors reach the caller
        return next()

    return authenticate
