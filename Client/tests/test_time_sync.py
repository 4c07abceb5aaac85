"""
Tests for device time conversion in ClockPanel Client

Tests the timezone offset convention, the adjusted time and its
serialization.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import (
    timezone_offset_minutes,
    compute_device_time,
    serialize_device_time,
    build_time_payload
)


UTC_PLUS_2 = timezone(timedelta(hours=2))
UTC_MINUS_5 = timezone(timedelta(hours=-5))


def test_offset_sign_convention():
    """Offset is positive when local time is behind UTC"""
    assert timezone_offset_minutes(datetime(2024, 5, 1, 14, 30, tzinfo=UTC_PLUS_2)) == -120
    assert timezone_offset_minutes(datetime(2024, 5, 1, 14, 30, tzinfo=UTC_MINUS_5)) == 300
    assert timezone_offset_minutes(datetime(2024, 5, 1, 14, 30, tzinfo=timezone.utc)) == 0

    india = timezone(timedelta(hours=5, minutes=30))
    assert timezone_offset_minutes(datetime(2024, 5, 1, 14, 30, tzinfo=india)) == -330


def test_naive_datetime_rejected():
    """A naive datetime has no offset to cancel"""
    with pytest.raises(ValueError):
        timezone_offset_minutes(datetime(2024, 5, 1, 14, 30))


def test_adjusted_time_preserves_local_reading():
    """14:30 at UTC+2 is transmitted as 14:30 UTC"""
    now = datetime(2024, 5, 1, 14, 30, tzinfo=UTC_PLUS_2)

    device_time = compute_device_time(now)

    assert device_time == datetime(2024, 5, 1, 14, 30, tzinfo=timezone.utc)
    assert device_time.utcoffset() == timedelta(0)
    # Absolute instant moved by -offset: 12:30Z + 120 min
    assert device_time - now == timedelta(minutes=120)


def test_adjusted_time_equals_now_minus_offset():
    """Adjusted time is T - Z for a spread of zones"""
    for hours, minutes in [(2, 0), (-5, 0), (5, 30), (-9, -30), (0, 0), (14, 0)]:
        zone = timezone(timedelta(hours=hours, minutes=minutes))
        now = datetime(2024, 11, 3, 23, 59, 59, 999000, tzinfo=zone)
        offset = timezone_offset_minutes(now)

        expected = now.astimezone(timezone.utc) - timedelta(minutes=offset)

        assert compute_device_time(now) == expected
        assert compute_device_time(now).replace(tzinfo=None) == now.replace(tzinfo=None)


def test_adjusted_time_keeps_local_date():
    """Just after local midnight east of UTC the local date is kept"""
    now = datetime(2024, 5, 2, 0, 30, tzinfo=UTC_PLUS_2)

    assert compute_device_time(now) == datetime(2024, 5, 2, 0, 30, tzinfo=timezone.utc)


def test_serialization_matches_browser_json():
    """Serialized value is a quoted ISO string with milliseconds and Z"""
    now = datetime(2024, 5, 1, 14, 30, tzinfo=UTC_PLUS_2)

    assert serialize_device_time(compute_device_time(now)) == '"2024-05-01T14:30:00.000Z"'
    assert build_time_payload(now) == '"2024-05-01T14:30:00.000Z"'


def test_serialization_truncates_to_milliseconds():
    """Microseconds are truncated, not rounded"""
    now = datetime(2024, 1, 9, 7, 5, 3, 123999, tzinfo=UTC_MINUS_5)

    assert build_time_payload(now) == '"2024-01-09T07:05:03.123Z"'


def test_offset_read_at_dst_boundary():
    """Each reading uses the offset in force at that moment"""
    berlin = ZoneInfo("Europe/Berlin")
    # Clocks jump from 02:00 CET to 03:00 CEST on 2024-03-31
    before = datetime(2024, 3, 31, 1, 30, tzinfo=berlin)
    after = datetime(2024, 3, 31, 3, 30, tzinfo=berlin)

    assert timezone_offset_minutes(before) == -60
    assert timezone_offset_minutes(after) == -120

    assert build_time_payload(before) == '"2024-03-31T01:30:00.000Z"'
    assert build_time_payload(after) == '"2024-03-31T03:30:00.000Z"'


def test_offset_read_at_dst_fall_back():
    """Repeated wall-clock hour maps to the same visible reading"""
    berlin = ZoneInfo("Europe/Berlin")
    # 02:30 happens twice on 2024-10-27
    first = datetime(2024, 10, 27, 2, 30, tzinfo=berlin, fold=0)
    second = datetime(2024, 10, 27, 2, 30, tzinfo=berlin, fold=1)

    assert timezone_offset_minutes(first) == -120
    assert timezone_offset_minutes(second) == -60
    assert build_time_payload(first) == build_time_payload(second) == '"2024-10-27T02:30:00.000Z"'


def test_offset_with_seconds_keeps_local_reading():
    """Historical offsets with seconds still preserve the wall clock"""
    # New York local mean time before 1883: UTC-4:56:02
    lmt = timezone(-timedelta(hours=4, minutes=56, seconds=2))
    now = datetime(1880, 6, 1, 12, 0, 0, tzinfo=lmt)

    assert timezone_offset_minutes(now) == 296
    assert compute_device_time(now) == datetime(1880, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert build_time_payload(now) == '"1880-06-01T12:00:00.000Z"'
