"""
ClockPanel Client - API Error Exception

Base exception class for all device API errors.

Author: ClockPanel Project
"""


class ClockPanelAPIError(Exception):
    """Base exception for device API errors."""
    pass
