"""
ClockPanel Client - GUI Log Handler Module

Forwards log records to the GUI log panel, tagged by device outcome,
and sets up GUI-mode logging.

Author: ClockPanel Project
"""

import logging
from pathlib import Path
from datetime import datetime
from typing import Callable, Optional

from cli import cleanup_old_logs
from managers import ConfigManager, get_base_dir


# Log panel tags
TAG_ERROR = "error"
TAG_SUCCESS = "success"


def get_record_tag(record: logging.LogRecord) -> Optional[str]:
    """
    Pick the log panel tag for a record.

    Args:
        record: LogRecord to classify

    Returns:
        TAG_ERROR for errors and failed device requests, TAG_SUCCESS for
        completed device requests, None otherwise
    """
    message = record.getMessage()
    if record.levelno >= logging.ERROR or message.startswith("Error:"):
        return TAG_ERROR
    if message.startswith("Success:"):
        return TAG_SUCCESS
    return None


class GUILogHandler(logging.Handler):
    """
    Logging handler feeding the GUI log panel.

    Records may come from request threads, so writes are scheduled on the
    tkinter thread with after(). The panel itself is only written by the
    writer callable (ClockPanelGUI.log_message).
    """

    def __init__(self, writer: Callable[[str, Optional[str]], None], root_widget):
        """
        Initialize the GUI log handler.

        Args:
            writer: Callable taking (message, tag) that appends to the panel
            root_widget: The root tkinter window for thread-safe updates
        """
        super().__init__()
        self.writer = writer
        self.root_widget = root_widget

    def emit(self, record):
        try:
            msg = self.format(record)
            tag = get_record_tag(record)
            self.root_widget.after(0, lambda: self.writer(msg, tag))
        except Exception:
            self.handleError(record)


def setup_gui_logging(config_manager: ConfigManager, writer, root_widget) -> Path:
    """
    Setup logging for GUI mode with both file and GUI panel output.

    Creates log file with format: clockpanel-gui-YYYY-MM-DD-HH-MM-SS.log
    in a "logs" subdirectory next to the executable or in the current directory.

    Args:
        config_manager: ConfigManager instance for log settings
        writer: Callable taking (message, tag) that appends to the log panel
        root_widget: The root tkinter window

    Returns:
        Path to the created log file
    """
    log_level = config_manager.get("log_level", "INFO")
    level = getattr(logging, log_level.upper(), logging.INFO)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_filename = f"clockpanel-gui-{timestamp}.log"

    log_dir = get_base_dir() / "logs"
    log_dir.mkdir(exist_ok=True)

    log_file = log_dir / log_filename

    # Configure logging with multiple handlers
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    gui_handler = GUILogHandler(writer, root_widget)
    gui_handler.setLevel(level)
    gui_handler.setFormatter(formatter)
    root_logger.addHandler(gui_handler)

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info(f"ClockPanel GUI Mode - Log file: {log_file}")
    logger.info(f"Log level: {log_level}")
    logger.info("=" * 60)

    return log_file

