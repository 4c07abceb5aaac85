"""
ClockPanel Client - CLI Mode Module

Implements command-line interface mode for headless/scripted device control.
Runs one action, waits for every request to settle, and logs to a
timestamped file.

Author: ClockPanel Project
"""

import sys
import json
import logging
from concurrent.futures import wait
from pathlib import Path
from datetime import datetime
from typing import Callable, Dict, List, Optional

from managers import ConfigManager, get_base_dir
from models import SelectedFile
from operations import (
    DeviceActions,
    ACTION_UPLOAD,
    ACTION_FORMAT,
    ACTION_SET_TIME,
    ACTION_LIST_FILES,
    ACTION_PLAY_SOUND
)


# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

# Command-line operation names mapped to action names
CLI_OPERATIONS = {
    "upload": ACTION_UPLOAD,
    "format": ACTION_FORMAT,
    "set-time": ACTION_SET_TIME,
    "list-files": ACTION_LIST_FILES,
    "play-sound": ACTION_PLAY_SOUND
}


def setup_cli_logging(config_manager: ConfigManager) -> Path:
    """
    Setup logging for CLI mode with timestamped log file.

    Creates log file with format: clockpanel-YYYY-MM-DD-HH-MM-SS.log
    in a "logs" subdirectory next to the executable or in the current directory.

    Args:
        config_manager: ConfigManager instance for log settings

    Returns:
        Path to the created log file
    """
    log_level = config_manager.get("log_level", "INFO")

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_filename = f"clockpanel-{timestamp}.log"

    log_dir = get_base_dir() / "logs"
    log_dir.mkdir(exist_ok=True)

    log_file = log_dir / log_filename

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)  # Also output to console
        ]
    )

    logger = logging.getLogger(__name__)
    logger.info(f"ClockPanel CLI Mode - Log file: {log_file}")
    logger.info(f"Log level: {log_level}")

    return log_file


def cleanup_old_logs(config_manager: ConfigManager, current_log: Path,
                     patterns: Optional[List[str]] = None):
    """
    Delete log files older than retention period.

    Args:
        config_manager: ConfigManager instance for retention settings
        current_log: Path to current log file (don't delete this)
        patterns: Glob patterns of log files to consider
    """
    logger = logging.getLogger(__name__)
    retention_days = config_manager.get("log_retention_days", 30)

    if retention_days <= 0:
        return  # Retention disabled

    logger.info(f"Cleaning up log files older than {retention_days} days")

    log_dir = current_log.parent
    cutoff_time = datetime.now().timestamp() - (retention_days * 86400)

    deleted_count = 0
    for pattern in patterns or ["clockpanel-*.log"]:
        for log_file in log_dir.glob(pattern):
            if log_file == current_log:
                continue  # Don't delete current log

            try:
                if log_file.stat().st_mtime < cutoff_time:
                    log_file.unlink()
                    deleted_count += 1
            except OSError as e:
                logger.warning(f"Failed to delete old log file {log_file}: {e}")

    if deleted_count > 0:
        logger.info(f"Deleted {deleted_count} old log file(s)")


class CLISurface:
    """
    Trigger surface for command-line mode.

    Collects the handlers bound by DeviceActions and fires one of them
    per invocation.
    """

    def __init__(self):
        self.handlers: Dict[str, Callable] = {}

    def bind_action(self, name: str, handler: Callable):
        self.handlers[name] = handler

    def fire(self, name: str, *args):
        """
        Fire a bound action.

        Returns:
            List of Futures started by the action
        """
        result = self.handlers[name](*args)
        return result if isinstance(result, list) else [result]


def run_actions(actions: DeviceActions, operation: str, file_paths: Optional[List[str]] = None,
                overwrite: bool = False) -> int:
    """
    Fire one operation and wait for all of its requests.

    Args:
        actions: DeviceActions bound to the device
        operation: CLI operation name (see CLI_OPERATIONS)
        file_paths: Local files to upload (upload only)
        overwrite: Overwrite preference (upload only)

    Returns:
        Exit code (0 when every request succeeded)
    """
    logger = logging.getLogger(__name__)

    surface = CLISurface()
    actions.bind(surface)

    action = CLI_OPERATIONS[operation]
    if action == ACTION_UPLOAD:
        try:
            selection = [SelectedFile.from_path(path) for path in file_paths or []]
        except OSError as e:
            logger.error(f"Cannot read file to upload: {e}")
            return EXIT_CONFIG_ERROR
        futures = surface.fire(action, selection, overwrite)
    else:
        futures = surface.fire(action)

    if not futures:
        logger.info("Nothing to do")
        return EXIT_SUCCESS

    # No timeout here; requests settle on their own
    wait(futures)

    failed = 0
    for future in futures:
        # Unexpected errors were already logged with a traceback by the worker
        if future.exception() is not None or not future.result().success:
            failed += 1

    if failed:
        logger.error(f"{failed} of {len(futures)} request(s) failed")
        return EXIT_FAILURE

    logger.info(f"{len(futures)} request(s) completed successfully")
    return EXIT_SUCCESS


def run_cli_operation(operation: str, file_paths: Optional[List[str]] = None,
                      overwrite: bool = False, device_url: Optional[str] = None,
                      device_port: Optional[int] = None) -> int:
    """
    Execute CLI operation without GUI.

    Process:
    1. Load configuration
    2. Setup logging to timestamped file
    3. Create API client for the configured (or overridden) device
    4. Execute requested operation and wait for the results
    5. Return appropriate exit code

    Args:
        operation: Operation to perform (see CLI_OPERATIONS)
        file_paths: Files to upload (upload only)
        overwrite: Overwrite existing files on the device (upload only)
        device_url: Optional device URL override
        device_port: Optional device port override

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logger = None
    api_client = None

    try:
        config_mgr = ConfigManager()
        try:
            config_mgr.load_config()
        except (OSError, json.JSONDecodeError) as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        log_file = setup_cli_logging(config_mgr)
        logger = logging.getLogger(__name__)

        cleanup_old_logs(config_mgr, log_file)

        logger.info("=" * 60)
        logger.info(f"Starting ClockPanel CLI: {operation.upper()}")
        logger.info("=" * 60)

        api_client = config_mgr.create_api(device_url, device_port)
        logger.info(f"Device: {api_client.base_url}")

        exit_code = run_actions(DeviceActions(api_client), operation, file_paths, overwrite)

        if exit_code == EXIT_SUCCESS:
            logger.info(f"{operation.upper()} COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"{operation.upper()} FAILED")
        return exit_code

    except KeyboardInterrupt:
        if logger:
            logger.warning("Operation cancelled by user (Ctrl+C)")
        else:
            print("\nOperation cancelled by user", file=sys.stderr)
        return EXIT_FAILURE

    except Exception as e:
        if logger:
            logger.exception(f"Unexpected error: {e}")
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    finally:
        if api_client:
            api_client.close()
