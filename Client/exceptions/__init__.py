"""
ClockPanel Client - Exceptions Package

Contains all exception classes for the ClockPanel client.

Author: ClockPanel Project
"""

from .api_error import ClockPanelAPIError
from .http_error import ClockPanelHTTPError
from .connection_error import ClockPanelConnectionError
from .parse_error import ClockPanelParseError

__all__ = [
    'ClockPanelAPIError',
    'ClockPanelHTTPError',
    'ClockPanelConnectionError',
    'ClockPanelParseError'
]
