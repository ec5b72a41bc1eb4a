"""Decide whether an IANA timezone behaves like a custom timezone.

A custom timezone only describes the current yearly rules of a timezone, while
an IANA timezone has a full history of offset changes. The two are considered
compatible when the offset of the IANA timezone around a reference instant is
the same as the custom timezone bias, and the transitions into and out of
daylight saving time nearest the reference instant happen on the same weekday
occurrence, month and local time of day as the custom rules describe.

Offsets on both sides use the Windows sign convention: the number of minutes
added to local time to get UTC.
"""

from __future__ import annotations

import datetime
import math

from .custom_timezone import CustomTimeZone, DayOfWeek, StandardTimeZoneOffset
from .recurrence import occurrence_of
from .timeline import ZoneTimeline
from .util import from_epoch_millis

__all__ = ["is_compatible"]

_LAST_OCCURRENCE = 5

# Indexed by datetime.weekday()
_WEEKDAYS = (
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
    DayOfWeek.SATURDAY,
    DayOfWeek.SUNDAY,
)

# Both standard -> DST and DST -> standard transitions are needed
_MIN_PERIODS = 3


def is_compatible(
    timeline: ZoneTimeline, ctz: CustomTimeZone, reference: float
) -> bool:
    """Return True if the timezone follows the same rules as the custom timezone.

    The reference is the instant in epoch milliseconds that the rules are
    compared around. Historical rule changes are not considered.
    """
    if (current_idx := timeline.find_period(reference)) is None:
        return False

    tz_observes_dst = timeline.untils[current_idx] != math.inf
    if not ctz.observes_dst:
        return not tz_observes_dst and timeline.offsets[current_idx] == ctz.bias

    if not tz_observes_dst or len(timeline.untils) < _MIN_PERIODS:
        return False

    # Use the next pair of transitions when there is no previous period
    curr_idx = max(current_idx, 1)
    return _is_transition_compatible(
        curr_idx - 1, curr_idx, timeline, ctz
    ) and _is_transition_compatible(curr_idx, curr_idx + 1, timeline, ctz)


def _format_time(value: datetime.datetime) -> str:
    """Format the time of day with the 7 digit precision used by custom timezones."""
    return f"{value:%H:%M:%S}.{value.microsecond * 10:07d}"


def _day_occurrence(rule: StandardTimeZoneOffset, nth: int, is_last: bool) -> int:
    """Return the occurrence of the transition day to compare with the rule.

    A rule for the last weekday of the month matches a 4th occurrence when
    there is no 5th occurrence in that month.
    """
    if rule.day_occurrence == _LAST_OCCURRENCE and nth == 4 and is_last:
        return _LAST_OCCURRENCE
    return nth


def _is_transition_compatible(
    before_idx: int, after_idx: int, timeline: ZoneTimeline, ctz: CustomTimeZone
) -> bool:
    """Return True if the transition between two periods matches the custom rules."""
    if (
        ctz.bias is None
        or ctz.standard_offset is None
        or ctz.daylight_offset is None
        or not ctz.daylight_offset.daylight_bias
    ):
        return False

    offset = timeline.offsets[before_idx]
    offset_diff = -(timeline.offsets[after_idx] - offset)

    # Local wall clock time of the transition, as observed before the change
    change = from_epoch_millis(
        timeline.untils[before_idx], datetime.timedelta(minutes=-offset)
    )
    time = _format_time(change)
    (nth, is_last) = occurrence_of(change)
    day_of_week = _WEEKDAYS[change.weekday()]

    daylight_bias = ctz.daylight_offset.daylight_bias
    if offset_diff > 0:
        # Standard -> DST
        rule: StandardTimeZoneOffset = ctz.daylight_offset
        expected_offset = ctz.bias
        expected_diff = -daylight_bias
    else:
        # DST -> Standard
        rule = ctz.standard_offset
        expected_offset = ctz.bias + daylight_bias
        expected_diff = daylight_bias

    return (
        offset == expected_offset
        and offset_diff == expected_diff
        and time == rule.time
        and _day_occurrence(rule, nth, is_last) == rule.day_occurrence
        and day_of_week == rule.day_of_week
        and change.month == rule.month
    )
