"""UTC clock and Unix timestamp utilities.

This module centralizes every read of the wall clock so token issuing and
introspection agree on what "now" means.
"""

from datetime import datetime, UTC


def now() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def now_unix() -> int:
    """Get the current time as an integer Unix timestamp."""
    return int(now().timestamp())


def from_unix(ts: int | float) -> datetime:
    """Convert a Unix timestamp to an aware UTC datetime."""
    return datetime.fromtimestamp(ts, UTC)
