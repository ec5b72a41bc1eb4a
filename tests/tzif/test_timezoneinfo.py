"""Tests for reading IANA timezone data."""

import datetime

import pytest

from tzmatch.exceptions import TimezoneInfoError
from tzmatch.timeline import read_timeline
from tzmatch.tzif import timezoneinfo


def test_invalid_zoneinfo() -> None:
    """Verify exception handling for an invalid timezone."""

    with pytest.raises(TimezoneInfoError, match="Unable to find timezone"):
        timezoneinfo.read("invalid")


def test_available_timezones() -> None:
    """Test the snapshot of timezone keys is sorted and only has real zones."""
    keys = timezoneinfo.available_timezones()
    assert isinstance(keys, tuple)
    assert list(keys) == sorted(keys)
    assert "America/Los_Angeles" in keys
    assert "Africa/Ceuta" in keys
    assert "localtime" not in keys
    assert "posixrules" not in keys
    assert "Factory" not in keys


def test_read() -> None:
    """Test reading the transitions and footer rule of a timezone."""
    result = timezoneinfo.read("America/Los_Angeles")
    assert len(result.transitions) > 0
    assert result.initial
    assert result.initial.designation == "LMT"
    assert result.rule
    assert result.rule.std.name == "PST"
    assert result.rule.std.offset == datetime.timedelta(hours=-8)
    assert result.rule.dst
    assert result.rule.dst.name == "PDT"
    assert result.rule.dst.offset == datetime.timedelta(hours=-7)


def test_read_fixed_offset() -> None:
    """Test reading a timezone without DST."""
    result = timezoneinfo.read("Asia/Tokyo")
    assert result.rule
    assert result.rule.std.name == "JST"
    assert result.rule.std.offset == datetime.timedelta(hours=9)
    assert result.rule.dst is None


@pytest.mark.parametrize("key", timezoneinfo.available_timezones())
def test_all_timezones(key: str) -> None:
    """Verify that all available timezones have a valid timeline."""
    timeline = read_timeline(key)
    assert timeline.untils == tuple(sorted(timeline.untils))
    assert len(timeline.untils) == len(timeline.offsets)
