"""
Map a Microsoft Graph custom timezone to an equivalent IANA timezone.

A custom timezone is described by a bias from UTC and the yearly rules for
entering and leaving daylight saving time. The `resolver` compares it with
the transition history of each IANA timezone and returns the first one that
behaves the same around a reference instant.
"""

from .custom_timezone import (
    CustomTimeZone,
    DaylightTimeZoneOffset,
    DayOfWeek,
    StandardTimeZoneOffset,
)
from .exceptions import CustomTimeZoneError, TimezoneInfoError, TimezoneMatchError
from .resolver import custom_timezone_to_iana, iter_compatible_timezones

__all__ = [
    "CustomTimeZone",
    "CustomTimeZoneError",
    "DayOfWeek",
    "DaylightTimeZoneOffset",
    "StandardTimeZoneOffset",
    "TimezoneInfoError",
    "TimezoneMatchError",
    "custom_timezone_to_iana",
    "iter_compatible_timezones",
    "matcher",
    "recurrence",
    "resolver",
    "timeline",
    "tzif",
]
