"""Test fixtures."""

from collections.abc import Callable
import copy
import datetime
import math
from typing import Any

import pytest

from tzmatch.custom_timezone import CustomTimeZone
from tzmatch.timeline import ZoneTimeline
from tzmatch.util import to_epoch_millis

TimelineFactory = Callable[[list[tuple[datetime.datetime, float]], float], ZoneTimeline]

_PACIFIC_CTZ: dict[str, Any] = {
    "bias": 480,
    "name": "Customized Time Zone",
    "standardOffset": {
        "time": "02:00:00.0000000",
        "dayOccurrence": 1,
        "dayOfWeek": "sunday",
        "month": 11,
        "year": 0,
    },
    "daylightOffset": {
        "daylightBias": -60,
        "time": "02:00:00.0000000",
        "dayOccurrence": 2,
        "dayOfWeek": "sunday",
        "month": 3,
        "year": 0,
    },
}

_CENTRAL_EUROPE_CTZ: dict[str, Any] = {
    "bias": -60,
    "name": "Customized Time Zone",
    "standardOffset": {
        "time": "03:00:00.0000000",
        "dayOccurrence": 5,
        "dayOfWeek": "sunday",
        "month": 10,
        "year": 0,
    },
    "daylightOffset": {
        "daylightBias": -60,
        "time": "02:00:00.0000000",
        "dayOccurrence": 5,
        "dayOfWeek": "sunday",
        "month": 3,
        "year": 0,
    },
}


@pytest.fixture
def pacific_ctz_json() -> dict[str, Any]:
    """Fixture for the json of a custom timezone with US pacific time rules."""
    return copy.deepcopy(_PACIFIC_CTZ)


@pytest.fixture
def central_europe_ctz_json() -> dict[str, Any]:
    """Fixture for the json of a custom timezone with central european time rules."""
    return copy.deepcopy(_CENTRAL_EUROPE_CTZ)


@pytest.fixture
def pacific_ctz() -> CustomTimeZone:
    """Fixture for a custom timezone with US pacific time rules."""
    return CustomTimeZone.model_validate(_PACIFIC_CTZ)


@pytest.fixture
def central_europe_ctz() -> CustomTimeZone:
    """Fixture for a custom timezone with central european time rules."""
    return CustomTimeZone.model_validate(_CENTRAL_EUROPE_CTZ)


@pytest.fixture
def make_timeline() -> TimelineFactory:
    """Fixture that creates a timeline from UTC transition times.

    Each transition is the end of a period and the offset (in minutes, negated
    UTC offset) of that period. The final offset is the open ended period.
    """

    def _make(
        periods: list[tuple[datetime.datetime, float]], last_offset: float
    ) -> ZoneTimeline:
        untils = [to_epoch_millis(until) for (until, _) in periods] + [math.inf]
        offsets = [offset for (_, offset) in periods] + [last_offset]
        return ZoneTimeline("Test/Zone", tuple(untils), tuple(offsets))

    return _make
