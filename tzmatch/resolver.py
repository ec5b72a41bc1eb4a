"""Find the IANA timezone for a custom timezone.

Every known IANA timezone is compared with the custom timezone in sorted order
of the timezone keys and the first compatible timezone is returned. When more
than one timezone is compatible, the sort order decides which one is used.

```python
from tzmatch import custom_timezone_to_iana

name = custom_timezone_to_iana(
    {
        "bias": -60,
        "standardOffset": {
            "time": "03:00:00.0000000",
            "dayOccurrence": 5,
            "dayOfWeek": "sunday",
            "month": 10,
        },
        "daylightOffset": {
            "daylightBias": -60,
            "time": "02:00:00.0000000",
            "dayOccurrence": 5,
            "dayOfWeek": "sunday",
            "month": 3,
        },
    }
)
print(name)
```

The above example will output `Africa/Ceuta`.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from .custom_timezone import CustomTimeZone
from .exceptions import CustomTimeZoneError, TimezoneInfoError
from .matcher import is_compatible
from .timeline import read_timeline, timeline_end_year
from .tzif.timezoneinfo import available_timezones
from .util import to_epoch_millis

__all__ = [
    "custom_timezone_to_iana",
    "iter_compatible_timezones",
]

_LOGGER = logging.getLogger(__name__)

Reference = datetime.datetime | int | float | None


def _parse_custom_timezone(ctz: CustomTimeZone | Mapping[str, Any]) -> CustomTimeZone:
    """Validate a custom timezone from the Microsoft Graph json representation."""
    if isinstance(ctz, CustomTimeZone):
        return ctz
    try:
        return CustomTimeZone.model_validate(ctz)
    except ValidationError as err:
        message = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in err.errors()
        )
        raise CustomTimeZoneError(
            f"Invalid custom timezone: {message}", detailed_error=str(err)
        ) from err


def iter_compatible_timezones(
    ctz: CustomTimeZone | Mapping[str, Any], reference: Reference = None
) -> Iterator[str]:
    """Yield the keys of all IANA timezones compatible with the custom timezone.

    The reference is the instant the timezone rules are compared around, either
    a datetime (naive values are UTC) or milliseconds since the epoch. The
    default is the current time.
    """
    custom_timezone = _parse_custom_timezone(ctz)
    reference_ms = to_epoch_millis(reference)
    end_year = timeline_end_year(reference_ms)
    for key in available_timezones():
        try:
            timeline = read_timeline(key, end_year)
        except TimezoneInfoError as err:
            _LOGGER.debug("Skipping timezone %s: %s", key, err)
            continue
        if is_compatible(timeline, custom_timezone, reference_ms):
            yield key


def custom_timezone_to_iana(
    ctz: CustomTimeZone | Mapping[str, Any], reference: Reference = None
) -> str | None:
    """Return the key of an IANA timezone with the same rules as the custom timezone.

    Returns None if no IANA timezone is compatible. Raises `CustomTimeZoneError`
    if the custom timezone is not valid.
    """
    result = next(iter_compatible_timezones(ctz, reference), None)
    _LOGGER.debug("Resolved custom timezone to %s", result)
    return result
