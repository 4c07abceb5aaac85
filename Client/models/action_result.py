"""
ClockPanel Client - Action Result Model

Outcome of a single device request.

Author: ClockPanel Project
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from exceptions import (
    ClockPanelAPIError,
    ClockPanelHTTPError,
    ClockPanelParseError
)


class FailureKind(Enum):
    """
    Failure categories for a device request.

    Kinds:
    - HTTP: response received but status is not OK
    - TRANSPORT: request could not complete (network, DNS, timeout)
    - PARSE: response received but body is not valid JSON
    """
    HTTP = "http"
    TRANSPORT = "transport"
    PARSE = "parse"


def get_failure_kind(error: ClockPanelAPIError) -> FailureKind:
    """
    Map an API exception to its failure category.

    Args:
        error: Exception raised by the API client

    Returns:
        FailureKind for the exception
    """
    if isinstance(error, ClockPanelParseError):
        return FailureKind.PARSE
    if isinstance(error, ClockPanelHTTPError):
        return FailureKind.HTTP
    # ClockPanelConnectionError and anything else that stopped the exchange
    return FailureKind.TRANSPORT


@dataclass
class ActionResult:
    """Ephemeral result of one request; never persisted."""
    action: str
    success: bool
    body: Any = None
    failure: Optional[FailureKind] = None
    error: Optional[str] = None
    filename: Optional[str] = None  # Only set for uploads

    @classmethod
    def succeeded(cls, action: str, body: Any, filename: Optional[str] = None) -> "ActionResult":
        return cls(action=action, success=True, body=body, filename=filename)

    @classmethod
    def failed(cls, action: str, error: ClockPanelAPIError,
               filename: Optional[str] = None) -> "ActionResult":
        return cls(
            action=action,
            success=False,
            failure=get_failure_kind(error),
            error=str(error),
            filename=filename
        )
