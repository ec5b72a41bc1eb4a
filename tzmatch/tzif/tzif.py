"""Library for reading TZif files.

Matching a custom timezone needs the full transition history of each IANA
zone, which python's zoneinfo package does not expose. This module reads the
compiled TZif files directly, from either the tzdata package or the system
zoneinfo directory, so the transition times and offsets can be inspected.

Only the records needed to follow the offset of a zone over time are kept:
transition times, local time types and the footer TZ rule. Leap second
records and the standard/wall and UT/local indicators are skipped.

See rfc8536 for the TZif file format.
"""

import io
import logging
import struct
from dataclasses import dataclass
from typing import Any

from .model import LocalTimeType, TimezoneInfo, Transition
from .tz_rule import parse_tz_rule

__all__ = ["read_tzif"]

_LOGGER = logging.getLogger(__name__)

_MAGIC = b"TZif"
_VERSION_1 = b"\x00"

# magic, version, unused, isutccnt, isstdcnt, leapcnt, timecnt, typecnt, charcnt
_HEADER_FORMAT = ">4sc15x6l"
_HEADER_SIZE = struct.calcsize(_HEADER_FORMAT)

# utoff, is dst, index into the designation octets
_LOCAL_TIME_TYPE_FORMAT = ">l?B"

# Transition times are 32-bit in the version 1 block and 64-bit after that
_V1_TIME_FORMAT = "l"
_V2_TIME_FORMAT = "q"

# A leap second record is a transition time followed by a 32-bit correction
_LEAP_CORRECTION_SIZE = 4


def _unpack(buf: io.BytesIO, fmt: str) -> tuple[Any, ...]:
    """Read and unpack the next record from the buffer."""
    size = struct.calcsize(fmt)
    content = buf.read(size)
    if len(content) != size:
        raise ValueError("zoneinfo data block was truncated")
    return struct.unpack(fmt, content)


@dataclass
class _Header:
    """Record counts of the data block that follows a TZif header."""

    version: bytes
    isutccnt: int
    isstdcnt: int
    leapcnt: int
    timecnt: int
    typecnt: int
    charcnt: int

    @classmethod
    def read(cls, buf: io.BytesIO) -> "_Header":
        """Read and validate the next header from the buffer."""
        content = buf.read(_HEADER_SIZE)
        if len(content) != _HEADER_SIZE:
            raise ValueError("zoneinfo file header was truncated")
        (magic, version, *counts) = struct.unpack(_HEADER_FORMAT, content)
        if magic != _MAGIC:
            raise ValueError("zoneinfo file did not contain magic header")
        header = cls(version, *counts)
        if header.isutccnt not in (0, header.typecnt):
            raise ValueError(
                f"UTC/local indicators in datablock mismatched ({header.isutccnt}, {header.typecnt})"
            )
        if header.isstdcnt not in (0, header.typecnt):
            raise ValueError(
                f"standard/wall indicators in datablock mismatched ({header.isstdcnt}, {header.typecnt})"
            )
        return header

    def skipped_size(self, time_format: str) -> int:
        """Return the size of the records after the designations."""
        time_size = struct.calcsize(f">{time_format}")
        return (
            self.leapcnt * (time_size + _LEAP_CORRECTION_SIZE)
            + self.isstdcnt
            + self.isutccnt
        )

    def datablock_size(self, time_format: str) -> int:
        """Return the size of the whole data block."""
        time_size = struct.calcsize(f">{time_format}")
        return (
            self.timecnt * (time_size + 1)
            + self.typecnt * struct.calcsize(_LOCAL_TIME_TYPE_FORMAT)
            + self.charcnt
            + self.skipped_size(time_format)
        )


def _designation(designations: bytes, idx: int) -> str:
    """Return the NUL terminated designation starting at the index."""
    end = designations.find(b"\x00", idx)
    if end < 0:
        end = len(designations)
    return designations[idx:end].decode("UTF-8")


def _read_datablock(header: _Header, time_format: str, buf: io.BytesIO) -> TimezoneInfo:
    """Read the transitions and local time types of a data block."""
    if header.typecnt == 0:
        raise ValueError("Local time records in block is zero")
    if header.charcnt == 0:
        raise ValueError("Total number of octets is zero")

    transition_times = _unpack(buf, f">{header.timecnt}{time_format}")
    transition_types = _unpack(buf, f">{header.timecnt}B")
    records = [_unpack(buf, _LOCAL_TIME_TYPE_FORMAT) for _ in range(header.typecnt)]
    designations = buf.read(header.charcnt)
    buf.seek(header.skipped_size(time_format), io.SEEK_CUR)

    local_time_types = [
        LocalTimeType(utoff, dst, _designation(designations, idx))
        for (utoff, dst, idx) in records
    ]
    transitions: list[Transition] = []
    for transition_time, time_type in zip(transition_times, transition_types):
        if time_type >= len(local_time_types):
            raise ValueError(
                f"transition_type out of bounds {time_type} >= {len(local_time_types)}"
            )
        transitions.append(
            Transition(transition_time, local_time_types[time_type].utoff)
        )

    # Local time before the first transition uses the first time type record
    return TimezoneInfo(transitions, initial=local_time_types[0])


def read_tzif(content: bytes) -> TimezoneInfo:
    """Read the TZif file and parse and return the timezone records."""
    buf = io.BytesIO(content)

    header = _Header.read(buf)
    if header.version == _VERSION_1:
        return _read_datablock(header, _V1_TIME_FORMAT, buf)

    # Version 2+ files repeat the data block with 64-bit times
    buf.seek(header.datablock_size(_V1_TIME_FORMAT), io.SEEK_CUR)
    header = _Header.read(buf)
    result = _read_datablock(header, _V2_TIME_FORMAT, buf)

    footer = buf.read()
    parts = footer.decode("UTF-8").split("\n")
    if len(parts) != 3:
        raise ValueError("Failed to read TZ footer")
    if parts[1]:
        result.rule = parse_tz_rule(parts[1])
    _LOGGER.debug(
        "Read TZif with %d transitions, rule=%s", len(result.transitions), parts[1]
    )
    return result
