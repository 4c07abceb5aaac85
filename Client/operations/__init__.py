"""
ClockPanel Client - Operations Package

Contains the device action orchestration.
"""

from .device_actions import (
    DeviceActions,
    ACTIONS,
    ACTION_UPLOAD,
    ACTION_FORMAT,
    ACTION_SET_TIME,
    ACTION_LIST_FILES,
    ACTION_PLAY_SOUND
)

__all__ = [
    'DeviceActions',
    'ACTIONS',
    'ACTION_UPLOAD',
    'ACTION_FORMAT',
    'ACTION_SET_TIME',
    'ACTION_LIST_FILES',
    'ACTION_PLAY_SOUND'
]
