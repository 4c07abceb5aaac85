"""
ClockPanel Client - API Communication Module

Handles all communication with the device via its HTTP API.
Each public method sends exactly one request and either returns the
response body or raises a ClockPanelAPIError subclass.

Author: ClockPanel Project
"""

import logging
import requests
from typing import Optional, Any
from urllib.parse import urlsplit, urlunsplit

from exceptions import (
    ClockPanelHTTPError,
    ClockPanelConnectionError,
    ClockPanelParseError
)
from models import UploadRequest

# Configure logging
logger = logging.getLogger(__name__)


# Device endpoints
FILE_ENDPOINT = "/file"
FORMAT_ENDPOINT = "/format"
TIME_ENDPOINT = "/time"
FILES_ENDPOINT = "/files"
SOUND_ENDPOINT = "/sound"

# Multipart field names expected by the device
FILE_FIELD = "file"
OVERWRITE_FIELD = "overwrite_html"


def build_base_url(device_url: str, device_port: Optional[int] = None) -> str:
    """
    Combine the device URL and port into the request base URL.

    A port already present in device_url wins over device_port.
    Any path in device_url is kept as a prefix for the endpoints.

    Args:
        device_url: Device URL, e.g. "http://192.168.4.1" or "http://clock.local:8080/api"
        device_port: Port used when device_url has none

    Returns:
        Base URL without a trailing slash
    """
    parts = urlsplit(device_url.strip())
    netloc = parts.netloc
    if device_port and parts.port is None:
        netloc = f"{netloc}:{device_port}"
    return urlunsplit((parts.scheme, netloc, parts.path.rstrip("/"), "", ""))


class ClockPanelAPI:
    """
    API client for communicating with the clock device.

    Responsibilities:
    - Build one HTTP request per device operation
    - Treat any non-OK status as a failure, even when a body is present
    - Map transport exceptions to ClockPanelConnectionError
    - Parse the file listing as JSON
    """

    def __init__(self, device_url: str, device_port: Optional[int] = None,
                 timeout: Optional[float] = None):
        """
        Initialize API client.

        Args:
            device_url: Base URL of the device (e.g., "http://192.168.4.1")
            device_port: Device port number, omitted from the URL when None
            timeout: Request timeout in seconds, None waits indefinitely
        """
        self.base_url = build_base_url(device_url, device_port)
        self.timeout = timeout
        # Shared session for connection pooling across concurrent uploads
        self.session = requests.Session()
        logger.debug(f"Initialized API client for {self.base_url}")

    def close(self):
        """
        Close the session and release resources.

        Should be called when done using the API client.
        """
        if hasattr(self, 'session') and self.session:
            self.session.close()
            logger.debug("API client session closed")

    def __del__(self):
        """Cleanup on deletion."""
        self.close()

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Send a request to the device.

        Args:
            method: HTTP method (GET, POST)
            endpoint: Device endpoint (e.g., "/files")
            **kwargs: Additional arguments for the request

        Returns:
            Response with an OK status

        Raises:
            ClockPanelHTTPError: If the status is not OK
            ClockPanelConnectionError: If the request could not complete
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"API request: {method} {endpoint}")

        if "timeout" not in kwargs:
            kwargs["timeout"] = self.timeout

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Cannot connect to device at {self.base_url}: {e}")
            raise ClockPanelConnectionError(f"Cannot connect to device at {self.base_url}")
        except requests.exceptions.Timeout:
            logger.error(f"Request to {endpoint} timed out")
            raise ClockPanelConnectionError(f"Request to {endpoint} timed out")
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error: {str(e)}")
            raise ClockPanelConnectionError(f"Request error: {str(e)}")

        if not response.ok:
            logger.error(f"{method} {endpoint} failed with status {response.status_code}: {response.text}")
            raise ClockPanelHTTPError(
                f"{method} {endpoint} failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text
            )

        return response

    # ==================== Filesystem ====================

    def upload_file(self, upload: UploadRequest) -> str:
        """
        Upload one file to the device filesystem.

        Args:
            upload: File content, filename and overwrite flag

        Returns:
            Response body text

        Raises:
            ClockPanelHTTPError: If the device rejects the upload
            ClockPanelConnectionError: If the device cannot be reached
        """
        files = {FILE_FIELD: (upload.filename, upload.content, upload.content_type)}
        data = {OVERWRITE_FIELD: upload.overwrite_field}
        response = self._make_request("POST", FILE_ENDPOINT, files=files, data=data)
        return response.text

    def format_filesystem(self) -> str:
        """
        Wipe and reinitialize the device filesystem.

        Returns:
            Response body text

        Raises:
            ClockPanelHTTPError: If the format request fails
            ClockPanelConnectionError: If the device cannot be reached
        """
        return self._make_request("GET", FORMAT_ENDPOINT).text

    def list_files(self) -> Any:
        """
        Retrieve the device's file listing.

        Returns:
            Parsed JSON listing

        Raises:
            ClockPanelHTTPError: If the request fails
            ClockPanelConnectionError: If the device cannot be reached
            ClockPanelParseError: If the body is not valid JSON
        """
        response = self._make_request("GET", FILES_ENDPOINT)
        try:
            return response.json()
        except requests.exceptions.JSONDecodeError as e:
            logger.error(f"Invalid JSON in file listing: {e}")
            raise ClockPanelParseError(f"Invalid JSON in file listing: {e}", body=response.text)

    # ==================== Clock ====================

    def set_time(self, payload: str) -> str:
        """
        Set the device's real-time clock.

        Args:
            payload: JSON-serialized timestamp (see models.time_sync)

        Returns:
            Response body text

        Raises:
            ClockPanelHTTPError: If the device rejects the time
            ClockPanelConnectionError: If the device cannot be reached
        """
        headers = {"Content-Type": "text/plain;charset=UTF-8"}
        response = self._make_request(
            "POST",
            TIME_ENDPOINT,
            data=payload.encode("utf-8"),
            headers=headers
        )
        return response.text

    # ==================== Audio ====================

    def play_sound(self) -> str:
        """
        Ask the device to play its audio cue.

        Returns:
            Response body text

        Raises:
            ClockPanelHTTPError: If the request fails
            ClockPanelConnectionError: If the device cannot be reached
        """
        return self._make_request("GET", SOUND_ENDPOINT).text
