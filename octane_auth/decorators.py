"""Flask integration for protected endpoints.

This module provides:
- @auth_required(auth) - Requires a valid access token
- register_error_handlers(app) - Renders AuthenticationError as JSON

Authenticated claims are stored in flask.g.user, mirroring request.user in
the (request, response, next) middleware.
"""

import logging
from functools import wraps

from flask import g, jsonify, request

from .exceptions import AuthenticationError, InvalidToken
from .middleware import INVALID_TOKEN_MESSAGE, NO_TOKEN_MESSAGE, extract_bearer_token

logger = logging.getLogger(__name__)


# ============================================================================
# Shared Authentication Logic
# ============================================================================


def _authenticate_request(auth):
    """
    Authenticate the current Flask request via Authorization: Bearer <token>.

    Stores the decoded claims in flask.g.user.

    Raises:
        AuthenticationError: If no token is provided or it fails verification
    """
    token_str = extract_bearer_token(request.headers.get("Authorization"))
    if token_str is None:
        logger.warning("Unauthenticated request to protected endpoint")
        raise AuthenticationError(NO_TOKEN_MESSAGE, {"code": "missing_auth"})

    try:
        g.user = auth.verify_token(token_str)
    except InvalidToken as e:
        logger.warning(f"Invalid JWT token: {e.message}")
        raise AuthenticationError(INVALID_TOKEN_MESSAGE, e.details) from e

    logger.debug("JWT authentication successful")


# ============================================================================
# Auth Required Decorator
# ============================================================================


def auth_required(auth):
    """
    Decorator factory requiring a valid access token for endpoint access.

    Args:
        auth: OctaneAuth instance used to verify tokens

    Raises:
        AuthenticationError: If no valid token is provided

    Example:
    ```python
    @app.get("/protected")
    @auth_required(auth)
    def protected_endpoint():
        return {"message": f"Hello, {g.user['userId']}!"}
    ```
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            _authenticate_request(auth)
            return f(*args, **kwargs)

        return wrapper

    return decorator


# ============================================================================
# Error Handlers
# ============================================================================


def handle_authentication_error(error: AuthenticationError):
    """Handle AuthenticationError exceptions."""
    return jsonify({"error": error.message}), error.status_code


def register_error_handlers(app) -> None:
    """Register octane-auth error handlers on a Flask app."""
    app.errorhandler(AuthenticationError)(handle_authentication_error)
