"""
Shared fixtures for ClockPanel client tests.
"""

import sys
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api import ClockPanelAPI
from exceptions import ClockPanelHTTPError, ClockPanelConnectionError, ClockPanelParseError


def build_response(status_code: int = 200, body: bytes = b"OK") -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    return response


class FakeDeviceAPI:
    """
    Stand-in for ClockPanelAPI that records calls.

    Filenames in fail_uploads answer with HTTP 500; unreachable makes
    every call fail at the transport level.
    """

    def __init__(self, fail_uploads=(), unreachable=False, listing=None):
        self.fail_uploads = set(fail_uploads)
        self.unreachable = unreachable
        self.listing = listing if listing is not None else ["alarm.wav"]
        self.lock = threading.Lock()
        self.calls = []

    def _record(self, *call):
        with self.lock:
            self.calls.append(call)
        if self.unreachable:
            raise ClockPanelConnectionError("Cannot connect to device at http://device")

    def upload_file(self, upload):
        self._record("upload_file", upload)
        if upload.filename in self.fail_uploads:
            raise ClockPanelHTTPError("POST /file failed with status 500: full",
                                      status_code=500, body="full")
        return f"Uploaded {upload.filename}"

    def format_filesystem(self):
        self._record("format_filesystem")
        return "Formatted"

    def set_time(self, payload):
        self._record("set_time", payload)
        return "Time set"

    def list_files(self):
        self._record("list_files")
        if self.listing == "malformed":
            raise ClockPanelParseError("Invalid JSON in file listing", body="[oops")
        return self.listing

    def play_sound(self):
        self._record("play_sound")
        return "Playing"

    def calls_named(self, name):
        with self.lock:
            return [call for call in self.calls if call[0] == name]


@pytest.fixture
def make_response():
    """Factory for requests.Response objects."""
    return build_response


@pytest.fixture
def api():
    """ClockPanelAPI whose session is a mock."""
    client = ClockPanelAPI("http://192.168.4.1", 80)
    client.session = MagicMock()
    client.session.request.return_value = build_response()
    return client


@pytest.fixture
def fake_api():
    """Recording FakeDeviceAPI that always succeeds."""
    return FakeDeviceAPI()


@pytest.fixture
def make_fake_api():
    """Factory for FakeDeviceAPI with custom failures."""
    return FakeDeviceAPI
