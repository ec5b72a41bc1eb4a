"""The offset history of an IANA timezone.

A `ZoneTimeline` is a compact view of a timezone used for matching: a list of
instants at which each offset period ends and a parallel list of offsets for
each period. The representation follows the common packed zone format used by
javascript timezone libraries:

  - `untils[i]` is the end of period `i` in milliseconds since the epoch. The
    last period never ends and has an until of `math.inf`.
  - `offsets[i]` is the offset of period `i` in minutes, with the sign inverted
    from the usual UTC offset. A zone at UTC-08:00 has an offset of 480, which
    is directly comparable to the bias of a Windows style timezone.

TZif files compiled in "slim" mode only contain transitions until the point
that the footer TZ rule can describe the rest. The timeline expands the
footer rule through `TIMELINE_END_YEAR`, or through the year after a later
reference instant, so that transitions around the reference are always
available.
"""

from __future__ import annotations

import datetime
import logging
import math
from dataclasses import dataclass
from functools import cache

from .tzif import timezoneinfo
from .tzif.model import TimezoneInfo
from .util import from_epoch_millis, to_epoch_millis

__all__ = [
    "TIMELINE_END_YEAR",
    "ZoneTimeline",
    "read_timeline",
    "timeline_end_year",
]

_LOGGER = logging.getLogger(__name__)

TIMELINE_END_YEAR = 2037
"""The last year of transitions generated from the footer TZ rule."""

_EPOCH_YEAR = 1970
# Leaves room for the offset of transitions at the end of the year
_MAX_END_YEAR = datetime.MAXYEAR - 1
_MIN_TRANSITION_TIME = -62135596800 + 86400  # 0001-01-02T00:00:00Z


@dataclass(frozen=True)
class ZoneTimeline:
    """The ordered offset periods of an IANA timezone."""

    name: str
    """The IANA key of the timezone e.g. America/Los_Angeles."""

    untils: tuple[float, ...]
    """Ascending end instants of each period in epoch milliseconds, last is infinite."""

    offsets: tuple[float, ...]
    """Offset of each period in minutes, the negated UTC offset."""

    def __post_init__(self) -> None:
        """Verify the periods are co-indexed."""
        if len(self.untils) != len(self.offsets):
            raise ValueError(
                f"Timeline untils and offsets mismatched ({len(self.untils)}, {len(self.offsets)})"
            )
        if not self.untils or self.untils[-1] != math.inf:
            raise ValueError("Timeline must end with an open ended period")

    def find_period(self, reference: float) -> int | None:
        """Return the index of the period that contains the reference instant."""
        return next(
            (idx for idx, until in enumerate(self.untils) if until > reference),
            None,
        )

    @classmethod
    def from_timezoneinfo(
        cls,
        name: str,
        info: TimezoneInfo,
        end_year: int = TIMELINE_END_YEAR,
    ) -> ZoneTimeline:
        """Create a timeline from TZif records, expanding the footer rule."""
        changes: list[tuple[int, int]] = [
            (transition.transition_time, transition.utoff)
            for transition in info.transitions
            if transition.transition_time >= _MIN_TRANSITION_TIME
        ]
        if info.rule is not None:
            last_time = changes[-1][0] if changes else None
            start_year = _EPOCH_YEAR
            if last_time is not None:
                start_year = datetime.datetime.fromtimestamp(
                    last_time, tz=datetime.UTC
                ).year
            for year in range(start_year, end_year + 1):
                for when, occurrence in info.rule.transitions(year):
                    transition_time = int(to_epoch_millis(when) // 1000)
                    if last_time is not None and transition_time <= last_time:
                        continue
                    changes.append(
                        (transition_time, int(occurrence.offset.total_seconds()))
                    )
            changes.sort()

        if info.initial is not None:
            utoff = info.initial.utoff
        elif info.rule is not None:
            utoff = int(info.rule.std.offset.total_seconds())
        else:
            utoff = changes[0][1] if changes else 0

        untils: list[float] = []
        offsets: list[float] = []
        for transition_time, next_utoff in changes:
            untils.append(transition_time * 1000)
            offsets.append(-utoff / 60)
            utoff = next_utoff
        untils.append(math.inf)
        offsets.append(-utoff / 60)
        return cls(name, tuple(untils), tuple(offsets))


def timeline_end_year(reference: float) -> int:
    """Return the last year of footer rule transitions needed for the reference.

    This is `TIMELINE_END_YEAR` or the year after the reference instant, so the
    transition that ends the period containing the reference is known.
    """
    if not math.isfinite(reference):
        return TIMELINE_END_YEAR
    try:
        year = from_epoch_millis(reference).year
    except OverflowError:
        return _MAX_END_YEAR if reference > 0 else TIMELINE_END_YEAR
    return max(TIMELINE_END_YEAR, min(year + 1, _MAX_END_YEAR))


@cache
def read_timeline(key: str, end_year: int = TIMELINE_END_YEAR) -> ZoneTimeline:
    """Read the timeline for the IANA timezone key.

    Raises `TimezoneInfoError` if the timezone data can't be loaded.
    """
    timeline = ZoneTimeline.from_timezoneinfo(key, timezoneinfo.read(key), end_year)
    _LOGGER.debug("Loaded timeline for %s with %d periods", key, len(timeline.untils))
    return timeline
