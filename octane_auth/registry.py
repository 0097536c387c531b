"""Refresh token registry.

The registry maps every refresh token that is still allowed to mint access
tokens onto the payload it was issued with. Removing an entry revokes the
token. Entries are never expired proactively: token expiry is enforced by
the token's own exp claim, so an expired token's entry simply becomes
unreachable.

The authenticator depends only on the RefreshTokenStore protocol, so a
deployment running more than one process can inject a store backed by a
shared database or cache.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RefreshTokenStore(Protocol):
    """Storage capability required for refresh token revocation."""

    def put(self, key: str, value: dict[str, Any]) -> None:
        """Store value under key, replacing any existing entry."""

    def get(self, key: str) -> dict[str, Any] | None:
        """Return the value stored under key, or None."""

    def delete(self, key: str) -> None:
        """Remove key if present. Missing keys are not an error."""

    def __contains__(self, key: object) -> bool:
        """Return True if key is present."""


class InMemoryRefreshTokenStore:
    """Process-local refresh token store.

    Does not survive a restart and is not shared between processes.
    """

    def __init__(self):
        self._entries: dict[str, dict[str, Any]] = {}

    def put(self, key: str, value: dict[str, Any]) -> None:
        # Last write wins on key collisions
        self._entries[key] = value

    def get(self, key: str) -> dict[str, Any] | None:
        return self._entries.get(key)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
