"""
ClockPanel Client - Managers Package

Contains the configuration manager.

Author: ClockPanel Project
"""

from .config_manager import ConfigManager, DEFAULT_CONFIG, get_base_dir

__all__ = [
    'ConfigManager',
    'DEFAULT_CONFIG',
    'get_base_dir'
]
