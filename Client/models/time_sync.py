"""
ClockPanel Client - Time Sync Model

Converts the local wall-clock time into the representation the device
expects: a UTC-encoded timestamp whose clock fields equal the local reading.

The timezone offset follows the browser convention (minutes, positive when
local time is behind UTC), so the adjusted time is

    adjusted = now_utc - offset_minutes

Author: ClockPanel Project
"""

import json
from datetime import datetime, timezone


def timezone_offset_minutes(now: datetime) -> int:
    """
    Get the timezone offset in force at a given moment.

    Args:
        now: Timezone-aware datetime

    Returns:
        Offset in minutes, positive when local time is behind UTC
        (e.g. -120 for UTC+2)

    Raises:
        ValueError: If now is naive
    """
    utc_offset = now.utcoffset()
    if utc_offset is None:
        raise ValueError("Timezone-aware datetime required")
    # Truncate toward zero so sub-minute (LMT) offsets keep their sign
    return -int(utc_offset.total_seconds() / 60)


def compute_device_time(now: datetime) -> datetime:
    """
    Shift a local time so that its UTC encoding shows the local clock reading.

    Args:
        now: Timezone-aware local datetime

    Returns:
        Aware UTC datetime with the same wall-clock fields as now
    """
    utc_offset = now.utcoffset()
    if utc_offset is None:
        raise ValueError("Timezone-aware datetime required")
    # now_utc - offset_minutes, applied as a timedelta so offsets with seconds stay exact
    return now.astimezone(timezone.utc) + utc_offset


def serialize_device_time(device_time: datetime) -> str:
    """
    Serialize an adjusted time as a JSON string literal.

    Output matches a browser's JSON.stringify(Date), e.g.
    '"2024-05-01T14:30:00.000Z"' (quotes included).

    Args:
        device_time: Aware UTC datetime from compute_device_time()

    Returns:
        JSON-encoded ISO 8601 timestamp with millisecond precision
    """
    utc_time = device_time.astimezone(timezone.utc)
    iso = utc_time.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc_time.microsecond // 1000:03d}Z"
    return json.dumps(iso)


def build_time_payload(now: datetime) -> str:
    """Compute and serialize the device time for a clock reading."""
    return serialize_device_time(compute_device_time(now))
