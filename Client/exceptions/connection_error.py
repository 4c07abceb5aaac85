"""
ClockPanel Client - Connection Error Exception

Exception raised when a request could not complete (network, DNS, timeout).

Author: ClockPanel Project
"""

from .api_error import ClockPanelAPIError


class ClockPanelConnectionError(ClockPanelAPIError):
    """Exception for transport-level failures."""
    pass
