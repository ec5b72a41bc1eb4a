"""Utility methods used by multiple components."""

from __future__ import annotations

import datetime

__all__ = [
    "now_factory",
    "to_epoch_millis",
    "from_epoch_millis",
]

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.UTC)


def now_factory() -> datetime.datetime:
    """Factory method for the current time to facilitate mocking."""
    return datetime.datetime.now(tz=datetime.UTC)


def to_epoch_millis(value: datetime.datetime | int | float | None) -> float:
    """Convert a reference instant to milliseconds since the epoch.

    A naive datetime is interpreted as UTC and None is the current time.
    """
    if value is None:
        value = now_factory()
    if not isinstance(value, datetime.datetime):
        return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.UTC)
    return (value - _EPOCH) / datetime.timedelta(milliseconds=1)


def from_epoch_millis(
    value: float, offset: datetime.timedelta | None = None
) -> datetime.datetime:
    """Return the naive wall clock time of an epoch millisecond value.

    The offset is added to UTC to determine the local time.
    """
    result = _EPOCH + datetime.timedelta(milliseconds=value)
    if offset is not None:
        result += offset
    return result.replace(tzinfo=None)
