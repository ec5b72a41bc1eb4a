"""Data model for the tzif library."""

from dataclasses import dataclass
from typing import Optional

from .tz_rule import Rule


@dataclass
class LocalTimeType:
    """A local time type record referenced by transitions."""

    utoff: int
    """Number of seconds added to UTC to determine local time."""

    dst: bool
    """Determines if local time is Daylight Savings Time (else Standard time)."""

    designation: str
    """A designation string e.g. PST."""


@dataclass
class Transition:
    """A change of the local time offset."""

    transition_time: int
    """Seconds since the epoch at which the new offset goes into effect."""

    utoff: int
    """Number of seconds added to UTC to determine local time after the transition."""


@dataclass
class TimezoneInfo:
    """The offset history read from a TZif file."""

    transitions: list[Transition]
    """Local time changes in ascending order."""

    rule: Optional[Rule] = None
    """A rule for computing local time changes after the last transition."""

    initial: Optional[LocalTimeType] = None
    """The local time type in effect before the first transition."""
