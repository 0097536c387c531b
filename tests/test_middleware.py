"""Tests for the (request, response, next) authentication middleware."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from octane_auth.middleware import (
    extract_bearer_token,
    get_authorization_header,
)


@pytest.fixture
def mock_req():
    return SimpleNamespace(headers={})


@pytest.fixture
def mock_res():
    res = Mock()
    res.status.return_value = res
    res.json.return_value = res
    return res


@pytest.fixture
def next_function():
    return Mock(return_value="next-result")


class TestExtractBearerToken:
    """Tests for extract_bearer_token."""

    def test_extracts_token(self):
        """Token after the Bearer scheme should be returned."""
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        """The Bearer scheme should match regardless of case."""
        assert extract_bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Basic dXNlcjpwYXNz", "abc"])
    def test_missing_token_returns_none(self, header):
        """Missing header, other schemes and empty tokens should return None."""
        assert extract_bearer_token(header) is None


class TestGetAuthorizationHeader:
    """Tests for get_authorization_header."""

    @pytest.mark.parametrize("name", ["Authorization", "authorization", "AUTHORIZATION"])
    def test_case_insensitive_lookup(self, name):
        """Header name should be matched case-insensitively."""
        assert get_authorization_header({name: "Bearer abc"}) == "Bearer abc"

    def test_missing_header(self):
        """Missing header should return None."""
        assert get_authorization_header({}) is None
        assert get_authorization_header(None) is None


class TestAuthenticateMiddleware:
    """Tests for OctaneAuth.authenticate()."""

    def test_valid_token_calls_next(self, auth, mock_req, mock_res, next_function):
        """Valid token should attach the user and call next()."""
        token = auth.generate_token({"userId": 123})
        mock_req.headers["authorization"] = f"Bearer {token}"

        result = auth.authenticate()(mock_req, mock_res, next_function)

        next_function.assert_called_once_with()
        assert result == "next-result"
        assert mock_req.user["userId"] == 123
        mock_res.status.assert_not_called()

    def test_missing_token_returns_401(self, auth, mock_req, mock_res, next_function):
        """Request without Authorization header should be rejected."""
        auth.authenticate()(mock_req, mock_res, next_function)

        mock_res.status.assert_called_once_with(401)
        mock_res.json.assert_called_once_with({"error": "No token provided."})
        next_function.assert_not_called()
        assert not hasattr(mock_req, "user")

    def test_bearer_without_token_returns_401(self, auth, mock_req, mock_res, next_function):
        """A bare Bearer scheme counts as no token."""
        mock_req.headers["Authorization"] = "Bearer "

        auth.authenticate()(mock_req, mock_res, next_function)

        mock_res.json.assert_called_once_with({"error": "No token provided."})
        next_function.assert_not_called()

    def test_invalid_token_returns_401(self, auth, mock_req, mock_res, next_function):
        """Request with an invalid token should be rejected."""
        mock_req.headers["Authorization"] = "Bearer invalid-token"

        auth.authenticate()(mock_req, mock_res, next_function)

        mock_res.status.assert_called_once_with(401)
        mock_res.json.assert_called_once_with({"error": "Invalid token."})
        next_function.assert_not_called()

    def test_refresh_token_rejected(self, auth, tokens, mock_req, mock_res, next_function):
        """Refresh tokens should not authenticate requests."""
        mock_req.headers["Authorization"] = f"Bearer {tokens.refresh_token}"

        auth.authenticate()(mock_req, mock_res, next_function)

        mock_res.json.assert_called_once_with({"error": "Invalid token."})
        next_function.assert_not_called()

    def test_downstream_errors_propagate(self, auth, auth_headers, mock_req, mock_res):
        """Errors raised by next() should not be swallowed."""
        mock_req.headers.update(auth_headers)
        failing_next = Mock(side_effect=RuntimeError("handler failed"))

        with pytest.raises(RuntimeError, match="handler failed"):
            auth.authenticate()(mock_req, mock_res, failing_next)

        mock_res.status.assert_not_called()
