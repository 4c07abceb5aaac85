"""
ClockPanel Client - Models Package

Contains data models and helpers used by the client.

Author: ClockPanel Project
"""

from .selected_file import SelectedFile
from .upload_request import UploadRequest
from .action_result import ActionResult, FailureKind, get_failure_kind
from .time_sync import (
    timezone_offset_minutes,
    compute_device_time,
    serialize_device_time,
    build_time_payload
)

__all__ = [
    'SelectedFile',
    'UploadRequest',
    'ActionResult',
    'FailureKind',
    'get_failure_kind',
    'timezone_offset_minutes',
    'compute_device_time',
    'serialize_device_time',
    'build_time_payload'
]
