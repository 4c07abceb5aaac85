"""
Tests for device API communication in ClockPanel Client

Tests request construction and the mapping of responses to results
and exceptions. The requests session is mocked.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api import ClockPanelAPI
from exceptions import (
    ClockPanelAPIError,
    ClockPanelHTTPError,
    ClockPanelConnectionError,
    ClockPanelParseError
)
from models import UploadRequest


def test_base_url_with_and_without_port():
    """Port is appended only when given, trailing slash removed"""
    assert ClockPanelAPI("http://192.168.4.1/", 80).base_url == "http://192.168.4.1:80"
    assert ClockPanelAPI("http://clock.local").base_url == "http://clock.local"


def test_upload_sends_multipart_file_and_overwrite(api):
    """Upload posts the file and the stringified overwrite flag"""
    upload = UploadRequest(content=b"\x00\x01wav", filename="alarm.wav", overwrite=False)

    result = api.upload_file(upload)

    assert result == "OK"
    args, kwargs = api.session.request.call_args
    assert args == ("POST", "http://192.168.4.1:80/file")
    filename, content, _ = kwargs["files"]["file"]
    assert (filename, content) == ("alarm.wav", b"\x00\x01wav")
    assert kwargs["data"] == {"overwrite_html": "false"}
    assert kwargs["timeout"] is None


def test_upload_overwrite_true_and_unknown_type(api):
    """Overwrite is sent as "true"; unknown types fall back to octet-stream"""
    api.upload_file(UploadRequest(content=b"x", filename="config.bin.zzz", overwrite=True))

    _, kwargs = api.session.request.call_args
    assert kwargs["data"] == {"overwrite_html": "true"}
    assert kwargs["files"]["file"][2] == "application/octet-stream"


def test_format_and_sound_are_plain_gets(api, make_response):
    """Format and sound send a GET with no payload"""
    api.session.request.return_value = make_response(200, b"formatted")
    assert api.format_filesystem() == "formatted"
    api.session.request.assert_called_with("GET", "http://192.168.4.1:80/format", timeout=None)

    api.session.request.return_value = make_response(200, b"beep")
    assert api.play_sound() == "beep"
    api.session.request.assert_called_with("GET", "http://192.168.4.1:80/sound", timeout=None)


def test_set_time_posts_serialized_body(api):
    """Set time posts the JSON string as a text body"""
    api.set_time('"2024-05-01T14:30:00.000Z"')

    args, kwargs = api.session.request.call_args
    assert args == ("POST", "http://192.168.4.1:80/time")
    assert kwargs["data"] == b'"2024-05-01T14:30:00.000Z"'
    assert kwargs["headers"] == {"Content-Type": "text/plain;charset=UTF-8"}


def test_list_files_parses_json(api, make_response):
    """Listing body is parsed as JSON"""
    api.session.request.return_value = make_response(200, b'["alarm.wav", "chime.wav"]')

    assert api.list_files() == ["alarm.wav", "chime.wav"]
    api.session.request.assert_called_with("GET", "http://192.168.4.1:80/files", timeout=None)


def test_list_files_malformed_json_is_parse_error(api, make_response):
    """A 200 with malformed JSON is a parse failure, not an HTTP failure"""
    api.session.request.return_value = make_response(200, b'["alarm.wav", ')

    with pytest.raises(ClockPanelParseError) as exc_info:
        api.list_files()

    assert not isinstance(exc_info.value, ClockPanelHTTPError)
    assert exc_info.value.body == '["alarm.wav", '


def test_non_ok_status_is_http_error_even_with_body(api, make_response):
    """Any non-OK status fails, whatever the body says"""
    api.session.request.return_value = make_response(500, b"File exists")

    with pytest.raises(ClockPanelHTTPError) as exc_info:
        api.upload_file(UploadRequest(content=b"x", filename="a.txt", overwrite=False))

    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "File exists"


def test_listing_error_status_is_http_error(api, make_response):
    """A valid JSON body on a 404 is still an HTTP failure"""
    api.session.request.return_value = make_response(404, b'{"error": "missing"}')

    with pytest.raises(ClockPanelHTTPError) as exc_info:
        api.list_files()

    assert exc_info.value.status_code == 404


@pytest.mark.parametrize("exception", [
    requests.exceptions.ConnectionError("unreachable"),
    requests.exceptions.Timeout("slow"),
    requests.exceptions.TooManyRedirects("loop"),
])
def test_transport_errors_are_connection_errors(api, exception):
    """Transport exceptions map to ClockPanelConnectionError"""
    api.session.request.side_effect = exception

    with pytest.raises(ClockPanelConnectionError) as exc_info:
        api.play_sound()

    assert isinstance(exc_info.value, ClockPanelAPIError)


def test_configured_timeout_is_passed(make_response):
    """Configured timeout reaches every request"""
    client = ClockPanelAPI("http://192.168.4.1", 80, timeout=5)
    client.session = MagicMock()
    client.session.request.return_value = make_response()

    client.format_filesystem()

    _, kwargs = client.session.request.call_args
    assert kwargs["timeout"] == 5
