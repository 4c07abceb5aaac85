"""
ClockPanel Client - GUI Package

This package contains the GUI components for the ClockPanel client.
"""

from .clockpanel_gui import ClockPanelGUI, launch_gui
from .settings_dialog import SettingsDialog
from .log_handler import GUILogHandler, setup_gui_logging, cleanup_old_logs

__all__ = [
    'ClockPanelGUI',
    'SettingsDialog',
    'GUILogHandler',
    'setup_gui_logging',
    'cleanup_old_logs',
    'launch_gui'
]
