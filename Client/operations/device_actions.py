"""
ClockPanel Client - Device Actions Module

Implements the five user-triggered device actions: upload, format,
set time, list files and play sound.

Every request runs on its own background thread and settles a Future
with an ActionResult. Nothing waits for a previous request, nothing is
retried, and one request's failure never affects another.

Author: ClockPanel Project
"""

import logging
import threading
from concurrent.futures import Future
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from exceptions import ClockPanelAPIError
from models import ActionResult, SelectedFile, UploadRequest, build_time_payload

# Configure logging
logger = logging.getLogger(__name__)


# Action names used for trigger binding
ACTION_UPLOAD = "upload"
ACTION_FORMAT = "format"
ACTION_SET_TIME = "set_time"
ACTION_LIST_FILES = "list_files"
ACTION_PLAY_SOUND = "play_sound"

ACTIONS = [ACTION_UPLOAD, ACTION_FORMAT, ACTION_SET_TIME, ACTION_LIST_FILES, ACTION_PLAY_SOUND]


def local_now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


class DeviceActions:
    """
    Translates user actions into device requests.

    Responsibilities:
    - Upload each selected file with a shared overwrite flag
    - Trigger format and sound playback
    - Convert the local clock reading and push it to the device
    - Fetch and parse the file listing
    - Report every outcome through logging and a Future
    - Bind the handlers to a trigger surface (GUI or CLI)
    """

    def __init__(self, api_client, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize device actions.

        Args:
            api_client: ClockPanelAPI instance for device communication
            clock: Callable returning the current aware local datetime
        """
        self.api = api_client
        self.clock = clock or local_now

    def bind(self, surface):
        """
        Register every action handler with a trigger surface.

        Args:
            surface: Object exposing bind_action(name, handler)
        """
        surface.bind_action(ACTION_UPLOAD, self.upload_files)
        surface.bind_action(ACTION_FORMAT, self.format_filesystem)
        surface.bind_action(ACTION_SET_TIME, self.set_time)
        surface.bind_action(ACTION_LIST_FILES, self.list_files)
        surface.bind_action(ACTION_PLAY_SOUND, self.play_sound)

    def _dispatch(self, action: str, request: Callable[[], object],
                  filename: Optional[str] = None) -> "Future[ActionResult]":
        """
        Run one request on a background thread.

        Args:
            action: Action name for reporting
            request: Callable performing the request and returning its body
            filename: Uploaded file name, if any

        Returns:
            Future settled with the ActionResult
        """
        # One thread per request instead of an executor: a bounded pool would
        # queue uploads behind each other
        future: "Future[ActionResult]" = Future()
        future.set_running_or_notify_cancel()

        def run():
            try:
                body = request()
            except ClockPanelAPIError as e:
                logger.error(f"Error: {action}{self._label(filename)}: {e}")
                future.set_result(ActionResult.failed(action, e, filename=filename))
            except Exception as e:
                logger.exception(f"Unexpected error in {action}{self._label(filename)}: {e}")
                future.set_exception(e)
            else:
                logger.info(f"Success: {action}{self._label(filename)}: {body}")
                future.set_result(ActionResult.succeeded(action, body, filename=filename))

        thread = threading.Thread(target=run, name=f"clockpanel-{action}", daemon=True)
        thread.start()
        return future

    @staticmethod
    def _label(filename: Optional[str]) -> str:
        return f" [{filename}]" if filename else ""

    def upload_files(self, files: Sequence[SelectedFile],
                     overwrite: bool) -> List["Future[ActionResult]"]:
        """
        Upload every selected file, one independent request each.

        Args:
            files: Selected files in selection order
            overwrite: Overwrite preference shared by all files

        Returns:
            One Future per file, in selection order (empty for no selection)
        """
        if not files:
            logger.debug("Upload requested with no files selected")
            return []

        logger.info(f"Uploading {len(files)} file(s) (overwrite={overwrite})")

        futures = []
        for selected in files:
            upload = UploadRequest.from_selection(selected, overwrite)
            futures.append(self._dispatch(
                ACTION_UPLOAD,
                lambda upload=upload: self.api.upload_file(upload),
                filename=upload.filename
            ))
        return futures

    def format_filesystem(self) -> "Future[ActionResult]":
        """Request that the device wipe its filesystem."""
        logger.info("Requesting filesystem format")
        return self._dispatch(ACTION_FORMAT, self.api.format_filesystem)

    def set_time(self) -> "Future[ActionResult]":
        """Push the current local time to the device."""
        # Read the clock on every call; the offset may change between calls (DST)
        payload = build_time_payload(self.clock())
        logger.info(f"Setting device time to {payload}")
        return self._dispatch(ACTION_SET_TIME, lambda: self.api.set_time(payload))

    def list_files(self) -> "Future[ActionResult]":
        """Fetch the device's file listing."""
        logger.info("Requesting file listing")
        return self._dispatch(ACTION_LIST_FILES, self.api.list_files)

    def play_sound(self) -> "Future[ActionResult]":
        """Ask the device to play its sound."""
        logger.info("Requesting sound playback")
        return self._dispatch(ACTION_PLAY_SOUND, self.api.play_sound)
