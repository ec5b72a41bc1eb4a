"""Data model for a Microsoft Graph custom timezone.

A calendar served by Microsoft Graph may reference a timezone that is not
a well known Windows timezone. In that case the timezone is described by
a `customTimeZone` resource: a bias from UTC and a pair of yearly rules for
entering and leaving daylight saving time.

```json
{
  "@odata.type": "#microsoft.graph.customTimeZone",
  "bias": 480,
  "name": "Customized Time Zone",
  "standardOffset": {
    "time": "02:00:00.0000000",
    "dayOccurrence": 1,
    "dayOfWeek": "sunday",
    "month": 11,
    "year": 0
  },
  "daylightOffset": {
    "daylightBias": -60,
    "time": "02:00:00.0000000",
    "dayOccurrence": 2,
    "dayOfWeek": "sunday",
    "month": 3,
    "year": 0
  }
}
```

The bias follows the Windows convention where the value is the number of
minutes added to local time to get UTC, so a zone behind UTC has a positive
bias. See https://learn.microsoft.com/en-us/graph/api/resources/customtimezone
"""

from __future__ import annotations

import enum
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

__all__ = [
    "CustomTimeZone",
    "DayOfWeek",
    "DaylightTimeZoneOffset",
    "StandardTimeZoneOffset",
]

_TIME_REGEX = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9]):([0-5][0-9])(?:\.([0-9]{1,7}))?$")
_FRACTION_DIGITS = 7


class DayOfWeek(enum.StrEnum):
    """Corresponds to a day of the week."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


class StandardTimeZoneOffset(BaseModel):
    """A yearly rule for the transition into standard time."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    time: str
    """The local time of day of the transition, formatted as HH:MM:SS.fffffff."""

    day_occurrence: int = Field(ge=1, le=5)
    """The occurrence of the day of week within the month, 5 is the last occurrence."""

    day_of_week: DayOfWeek
    """The day of the week of the transition."""

    month: int = Field(ge=1, le=12)
    """The month of the year of the transition."""

    year: int = 0
    """The year the rule takes effect, not used when matching timezones."""

    @field_validator("day_of_week", mode="before")
    @classmethod
    def parse_day_of_week(cls, value: Any) -> Any:
        """Accept the day of the week in any case."""
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("time")
    @classmethod
    def parse_time(cls, value: str) -> str:
        """Validate the time of day and normalize the fractional seconds."""
        if not (match := _TIME_REGEX.fullmatch(value)):
            raise ValueError(f"Expected time to match HH:MM:SS.fffffff: {value}")
        hours, minutes, seconds, fraction = match.groups()
        fraction = (fraction or "").ljust(_FRACTION_DIGITS, "0")
        return f"{hours}:{minutes}:{seconds}.{fraction}"


class DaylightTimeZoneOffset(StandardTimeZoneOffset):
    """A yearly rule for the transition into daylight saving time."""

    daylight_bias: Optional[int] = None
    """Minutes added to the bias during daylight saving time, typically -60."""


class CustomTimeZone(BaseModel):
    """A timezone described by a bias and daylight saving time rules."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    bias: Optional[int] = None
    """Minutes added to local standard time to get UTC."""

    name: Optional[str] = None
    """A display name for the timezone."""

    standard_offset: Optional[StandardTimeZoneOffset] = None
    """When the timezone transitions from daylight saving time to standard time."""

    daylight_offset: Optional[DaylightTimeZoneOffset] = None
    """When the timezone transitions from standard time to daylight saving time."""

    @property
    def observes_dst(self) -> bool:
        """Return True if the timezone has a daylight saving time shift."""
        return self.daylight_offset is not None and bool(
            self.daylight_offset.daylight_bias
        )
