"""Interpret a date as an nth weekday of its month.

Windows style timezone rules describe a transition as a recurring weekday
within a month, for example the 2nd Sunday of March or the last Sunday of
October. This module finds the occurrence of an actual date so it can be
compared with such a rule.
"""

from __future__ import annotations

import datetime

from dateutil import rrule
from dateutil.relativedelta import relativedelta

__all__ = ["occurrence_of"]

_ONE_WEEK = relativedelta(weeks=1)


def occurrence_of(value: datetime.date) -> tuple[int, bool]:
    """Return the occurrence of the weekday of the value within its month.

    The result is a tuple of the ordinal occurrence (1 to 5), e.g. 3 for the
    3rd Tuesday of the month, and whether it is the last occurrence of that
    weekday in the month.
    """
    cursor = value.replace(day=1) + relativedelta(
        weekday=rrule.weekdays[value.weekday()]
    )
    nth = 0
    while cursor <= value:
        nth += 1
        cursor += _ONE_WEEK
    return (nth, cursor.month != value.month)
