"""Time-span parsing for token lifetimes.

Expirations may be configured the way most JWT tooling accepts them:

    parse_duration(3600)        # int: seconds
    parse_duration("15m")       # number + unit
    parse_duration("2 days")    # long unit names, optional space
    parse_duration("1.5h")      # fractional values
    parse_duration("500")       # bare numeric string: milliseconds

Supported units: ms, s, m, h, d, w, y (and their long forms).
"""

import re
from datetime import timedelta

_PATTERN = re.compile(
    r"^(?P<value>-?(?:\d+)?\.?\d+)\s*"
    r"(?P<unit>milliseconds?|msecs?|ms|seconds?|secs?|s|minutes?|mins?|m|"
    r"hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)?$",
    re.IGNORECASE,
)

_SECOND = 1
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

# Unit -> seconds. A year is 365.25 days.
_UNITS = {
    "ms": 0.001,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
    "d": _DAY,
    "w": 7 * _DAY,
    "y": 365.25 * _DAY,
}

_ALIASES = {
    "millisecond": "ms", "milliseconds": "ms", "msec": "ms", "msecs": "ms",
    "second": "s", "seconds": "s", "sec": "s", "secs": "s",
    "minute": "m", "minutes": "m", "min": "m", "mins": "m",
    "hour": "h", "hours": "h", "hr": "h", "hrs": "h",
    "day": "d", "days": "d",
    "week": "w", "weeks": "w",
    "year": "y", "years": "y", "yr": "y", "yrs": "y",
}


def parse_duration(value) -> timedelta:
    """
    Parse a time span into a timedelta.

    Args:
        value: timedelta, int/float seconds, or a time-span string

    Returns:
        Non-negative timedelta

    Raises:
        ValueError: If the value cannot be parsed, is negative, or is too
            large for a timedelta
        TypeError: If the value is of an unsupported type
    """
    try:
        if isinstance(value, timedelta):
            result = value
        elif isinstance(value, bool):
            raise TypeError("Duration must be a number, string or timedelta, not bool")
        elif isinstance(value, (int, float)):
            result = timedelta(seconds=value)
        elif isinstance(value, str):
            result = _parse_string(value)
        else:
            raise TypeError(
                f"Duration must be a number, string or timedelta, not {type(value).__name__}"
            )
    except OverflowError as e:
        raise ValueError(f"Duration out of range: {value!r}") from e

    if result < timedelta(0):
        raise ValueError(f"Duration must not be negative: {value!r}")
    return result


def _parse_string(text: str) -> timedelta:
    match = _PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Invalid duration: {text!r}")

    number = float(match.group("value"))
    unit = (match.group("unit") or "ms").lower()
    unit = _ALIASES.get(unit, unit)

    return timedelta(seconds=number * _UNITS[unit])
