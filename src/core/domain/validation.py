"""
Shared precondition checks for the marketplace and token engines.

Each check raises InvalidArgument naming the offending field. Values must be
real ints: bools and floats are rejected so that no fractional amount can
leak into the integer arithmetic.
"""

from typing import Any

from src.core.domain.errors import InvalidArgument
from src.core.math.weather import MAX_LAT_MICRODEG, MAX_LON_MICRODEG


def require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(name, value, "must be an integer")
    return value


def require_positive(value: Any, name: str) -> int:
    """
    Integer strictly greater than zero.

    Raises:
        InvalidArgument: If value is not an int or is <= 0
    """
    require_int(value, name)
    if value <= 0:
        raise InvalidArgument(name, value, "must be positive")
    return value


def require_non_negative(value: Any, name: str) -> int:
    require_int(value, name)
    if value < 0:
        raise InvalidArgument(name, value, "must be non-negative")
    return value


def require_in_range(value: Any, name: str, min_value: int, max_value: int) -> int:
    """
    Integer within [min_value, max_value].

    Raises:
        InvalidArgument: If value is not an int or out of range
    """
    require_int(value, name)
    if value < min_value or value > max_value:
        raise InvalidArgument(name, value, f"must be within {min_value}..{max_value}")
    return value


def require_cloud_percent(value: Any, name: str = "cloud_percent") -> int:
    return require_in_range(value, name, 0, 100)


def require_latitude(value: Any, name: str = "lat_microdeg") -> int:
    return require_in_range(value, name, -MAX_LAT_MICRODEG, MAX_LAT_MICRODEG)


def require_longitude(value: Any, name: str = "lon_microdeg") -> int:
    return require_in_range(value, name, -MAX_LON_MICRODEG, MAX_LON_MICRODEG)


def require_address(value: Any, name: str = "caller") -> str:
    """Participant identity: a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(name, value, "must be a non-empty address")
    return value
