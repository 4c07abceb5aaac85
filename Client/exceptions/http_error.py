"""
ClockPanel Client - HTTP Error Exception

Exception raised when the device answers with a non-OK status.

Author: ClockPanel Project
"""

from typing import Optional

from .api_error import ClockPanelAPIError


class ClockPanelHTTPError(ClockPanelAPIError):
    """Exception for responses whose status indicates failure."""

    def __init__(self, message: str, status_code: int, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
