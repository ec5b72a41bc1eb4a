"""Tests for parsing and expanding TZ footer rules."""

import datetime

import pytest

from tzmatch.tzif import tz_rule


@pytest.mark.parametrize(
    "tz_string,name,offset",
    [
        ("EST5", "EST", datetime.timedelta(hours=-5)),
        ("EST+5", "EST", datetime.timedelta(hours=-5)),
        ("EX05:30", "EX", datetime.timedelta(hours=-5, minutes=-30)),
        (
            "EX05:30:20",
            "EX",
            datetime.timedelta(hours=-5, minutes=-30, seconds=-20),
        ),
        ("JST-9", "JST", datetime.timedelta(hours=9)),
        ("<+0545>-5:45", "<+0545>", datetime.timedelta(hours=5, minutes=45)),
        ("UTC0", "UTC", datetime.timedelta(0)),
    ],
)
def test_standard(tz_string: str, name: str, offset: datetime.timedelta) -> None:
    """Test standard time with no daylight savings time."""
    rule = tz_rule.parse_tz_rule(tz_string)
    assert rule.std.name == name
    assert rule.std.offset == offset
    assert rule.dst is None
    assert rule.dst_start is None
    assert rule.dst_end is None
    assert rule.transitions(2024) == []


@pytest.mark.parametrize(
    "tz_string,expected_offset",
    [
        ("EST5EDT", datetime.timedelta(hours=-4)),
        ("EST5EDT4", datetime.timedelta(hours=-4)),
        ("PST8PDT", datetime.timedelta(hours=-7)),
    ],
)
def test_dst_offset(tz_string: str, expected_offset: datetime.timedelta) -> None:
    """Test daylight savings time with an implicit or explicit offset."""
    rule = tz_rule.parse_tz_rule(tz_string)
    assert rule.dst
    assert rule.dst.offset == expected_offset
    assert rule.dst_start is None
    assert rule.dst_end is None
    assert rule.transitions(2024) == []


@pytest.mark.parametrize(
    "tz_string",
    [
        "EST+5EDT,M3.2.0/2,M11.1.0/2",
        "EST+5EDT,M3.2.0,M11.1.0",
    ],
)
def test_dst_rules(tz_string: str) -> None:
    """Test daylight savings start/end values with explicit and default times."""
    rule = tz_rule.parse_tz_rule(tz_string)
    assert rule.std.name == "EST"
    assert rule.std.offset == datetime.timedelta(hours=-5)
    assert rule.dst
    assert rule.dst.name == "EDT"
    assert rule.dst.offset == datetime.timedelta(hours=-4)
    assert isinstance(rule.dst_start, tz_rule.RuleDate)
    assert rule.dst_start.month == 3
    assert rule.dst_start.week_of_month == 2
    assert rule.dst_start.day_of_week == 0
    assert rule.dst_start.time == datetime.timedelta(hours=2)
    assert isinstance(rule.dst_end, tz_rule.RuleDate)
    assert rule.dst_end.month == 11
    assert rule.dst_end.week_of_month == 1
    assert rule.dst_end.day_of_week == 0
    assert rule.dst_end.time == datetime.timedelta(hours=2)

    assert rule.dst_start.occurrence(2022) == datetime.datetime(2022, 3, 13, 2, 0, 0)
    assert rule.dst_end.occurrence(2022) == datetime.datetime(2022, 11, 6, 2, 0, 0)

    assert rule.transitions(2022) == [
        (datetime.datetime(2022, 3, 13, 7, 0, 0), rule.dst),
        (datetime.datetime(2022, 11, 6, 6, 0, 0), rule.std),
    ]


@pytest.mark.parametrize(
    "tz_string",
    [
        "",
        "1234",
        "EST+5EDT,M3.2.0/2",
        "EST+5EDT,M3.2.0/2,M11.1.0/2,M3",
        "EST+5EDT,M3.2/2,M11.1.0/2",
        "EST+5EDT,M3.2.0.4/2,M11.1.0/2",
    ],
)
def test_invalid(tz_string: str) -> None:
    """Test an invalid rule occurrence"""
    with pytest.raises(ValueError, match="Unable to parse TZ string"):
        tz_rule.parse_tz_rule(tz_string)


@pytest.mark.parametrize(
    "tz_string,match",
    [
        ("EST+5EDT,M13.2.0/2,M11.1.0/2", "Invalid month.week.day"),
        ("EST+5EDT,M3.6.0/2,M11.1.0/2", "Invalid month.week.day"),
        ("EST+5EDT,M3.2.7/2,M11.1.0/2", "Invalid month.week.day"),
        ("EST+5EDT,J0,J300", "Julian day out of range"),
        ("EST+5EDT,J79,J366", "Julian day out of range"),
        ("EST+5EDT,79,366", "Julian day out of range"),
        ("EST+168", "hour value out of range"),
    ],
)
def test_out_of_range(tz_string: str, match: str) -> None:
    """Test rule values that parse but are out of range."""
    with pytest.raises(ValueError, match=match):
        tz_rule.parse_tz_rule(tz_string)


def test_tz_offset() -> None:
    """Test negative rule times move the transition to the previous day."""
    rule = tz_rule.parse_tz_rule("<-03>3<-02>,M3.5.0/-2,M10.5.0/-1")
    assert rule.std.name == "<-03>"
    assert rule.std.offset == datetime.timedelta(hours=-3)
    assert rule.dst
    assert rule.dst.name == "<-02>"
    assert rule.dst.offset == datetime.timedelta(hours=-2)
    assert isinstance(rule.dst_start, tz_rule.RuleDate)
    assert rule.dst_start.week_of_month == 5
    assert rule.dst_start.time == datetime.timedelta(hours=-2)
    assert isinstance(rule.dst_end, tz_rule.RuleDate)
    assert rule.dst_end.week_of_month == 5
    assert rule.dst_end.time == datetime.timedelta(hours=-1)

    # Last Sunday of March 2024 is the 31st
    assert rule.dst_start.occurrence(2024) == datetime.datetime(2024, 3, 30, 22, 0, 0)
    # Last Sunday of October 2024 is the 27th
    assert rule.dst_end.occurrence(2024) == datetime.datetime(2024, 10, 26, 23, 0, 0)
    assert rule.transitions(2024) == [
        (datetime.datetime(2024, 3, 31, 1, 0, 0), rule.dst),
        (datetime.datetime(2024, 10, 27, 1, 0, 0), rule.std),
    ]


def test_time_past_midnight() -> None:
    """Test rule times of 24 hours or more move the transition to a later day."""
    rule = tz_rule.parse_tz_rule("IST-2IDT,M3.4.4/26,M10.5.0")
    assert isinstance(rule.dst_start, tz_rule.RuleDate)
    # 4th Thursday of March 2024 is the 28th
    assert rule.dst_start.occurrence(2024) == datetime.datetime(2024, 3, 29, 2, 0, 0)

    rule = tz_rule.parse_tz_rule("<-04>4<-03>,M9.1.6/24,M4.1.6/24")
    assert isinstance(rule.dst_start, tz_rule.RuleDate)
    # 1st Saturday of September 2024 is the 7th
    assert rule.dst_start.occurrence(2024) == datetime.datetime(2024, 9, 8, 0, 0, 0)


def test_zero_time() -> None:
    """Test an explicit midnight rule time is not replaced with the default."""
    rule = tz_rule.parse_tz_rule("EET-2EEST,M4.5.5/0,M10.5.4/24")
    assert isinstance(rule.dst_start, tz_rule.RuleDate)
    assert rule.dst_start.time == datetime.timedelta(0)
    # Last Friday of April 2024 is the 26th
    assert rule.dst_start.occurrence(2024) == datetime.datetime(2024, 4, 26, 0, 0, 0)


def test_southern_hemisphere_transitions() -> None:
    """Test transitions are sorted when DST spans the new year."""
    rule = tz_rule.parse_tz_rule("AEST-10AEDT,M10.1.0,M4.1.0/3")
    assert rule.transitions(2024) == [
        (datetime.datetime(2024, 4, 6, 16, 0, 0), rule.std),
        (datetime.datetime(2024, 10, 5, 16, 0, 0), rule.dst),
    ]


def test_negative_dst() -> None:
    """Test a rule where the daylight offset is behind standard time."""
    rule = tz_rule.parse_tz_rule("IST-1GMT0,M10.5.0,M3.5.0/1")
    assert rule.std.offset == datetime.timedelta(hours=1)
    assert rule.dst
    assert rule.dst.offset == datetime.timedelta(0)
    assert rule.transitions(2024) == [
        (datetime.datetime(2024, 3, 31, 1, 0, 0), rule.std),
        (datetime.datetime(2024, 10, 27, 1, 0, 0), rule.dst),
    ]


def test_julian_day_rule() -> None:
    """Test julian day rules with and without leap days."""
    rule = tz_rule.parse_tz_rule("<+0330>-3:30<+0430>,J79/24,J263/24")
    assert rule.std.name == "<+0330>"
    assert rule.std.offset == datetime.timedelta(hours=3, minutes=30)
    assert rule.dst
    assert rule.dst.name == "<+0430>"
    assert rule.dst.offset == datetime.timedelta(hours=4, minutes=30)
    assert isinstance(rule.dst_start, tz_rule.RuleDay)
    assert rule.dst_start.day_of_year == 79
    assert rule.dst_start.time == datetime.timedelta(hours=24)
    assert isinstance(rule.dst_end, tz_rule.RuleDay)
    assert rule.dst_end.day_of_year == 263
    assert rule.dst_end.time == datetime.timedelta(hours=24)

    # Day 79 is March 20th and Feb 29th is never counted
    assert rule.dst_start.occurrence(2023) == datetime.datetime(2023, 3, 21, 0, 0, 0)
    assert rule.dst_start.occurrence(2024) == datetime.datetime(2024, 3, 21, 0, 0, 0)

    rule = tz_rule.parse_tz_rule("XST-3XDT,59,300")
    assert isinstance(rule.dst_start, tz_rule.RuleDay)
    assert rule.dst_start.leap_days
    # Zero based day 59 is Feb 29th in a leap year
    assert rule.dst_start.occurrence(2023) == datetime.datetime(2023, 3, 1, 2, 0, 0)
    assert rule.dst_start.occurrence(2024) == datetime.datetime(2024, 2, 29, 2, 0, 0)
