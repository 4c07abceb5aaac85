"""
ClockPanel Client - Parse Error Exception

Exception raised when a successful response body is not valid JSON.

Author: ClockPanel Project
"""

from .api_error import ClockPanelAPIError


class ClockPanelParseError(ClockPanelAPIError):
    """Exception for response bodies that cannot be parsed."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body
