"""Utility functions for octane-auth.

Import convention: use module-level imports for clarity.

    from octane_auth.utils import duration, isodatetime
    ttl = duration.parse_duration("15m")
    now_ts = isodatetime.now_unix()
"""

from . import duration, isodatetime

__all__ = ["duration", "isodatetime"]
