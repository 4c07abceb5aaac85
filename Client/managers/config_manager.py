"""
ClockPanel Client - Configuration Manager

Handles loading and saving client configuration from/to config.json.

Author: ClockPanel Project
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

# Configure logging
logger = logging.getLogger(__name__)


# Default configuration values
DEFAULT_CONFIG = {
    "device_url": "http://192.168.4.1",  # ESP32 access-point address
    "device_port": 80,
    "request_timeout": None,  # Seconds; None waits indefinitely
    "log_level": "INFO",
    "log_retention_days": 30,
    "show_log_on_startup": True,
    "confirm_before_format": True
}


def get_base_dir() -> Path:
    """
    Directory holding config.json and the logs folder.

    Returns:
        Executable's directory when frozen, current directory otherwise
    """
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        return Path(sys.executable).parent
    # Running as script
    return Path.cwd()


class ConfigManager:
    """
    Manages client configuration.

    Responsibilities:
    - Load/save config.json next to the executable (same location as logs folder)
    - Fill in defaults for missing keys
    - Provide configuration values to other modules
    """

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit config path, defaults to config.json in the base directory
        """
        self.config_file = Path(config_file) if config_file else get_base_dir() / "config.json"
        self.config: Dict[str, Any] = {}

    def load_config(self) -> Dict[str, Any]:
        """
        Load configuration from config.json.
        Creates default config if file doesn't exist.

        Returns:
            Configuration dictionary

        Raises:
            json.JSONDecodeError: If config.json is not valid JSON
        """
        if self.config_file.exists():
            logger.debug(f"Loading configuration from {self.config_file}")
            with open(self.config_file, 'r') as f:
                self.config = json.load(f)
            # Merge with defaults for any missing keys
            for key, value in DEFAULT_CONFIG.items():
                if key not in self.config:
                    self.config[key] = value
            logger.info("Configuration loaded successfully")
        else:
            logger.info(f"Configuration file not found, creating default at {self.config_file}")
            self.config = DEFAULT_CONFIG.copy()
            self.save_config()

        return self.config

    def save_config(self):
        """Save current configuration to config.json."""
        logger.debug(f"Saving configuration to {self.config_file}")
        with open(self.config_file, 'w') as f:
            json.dump(self.config, f, indent=2)
        logger.debug("Configuration saved successfully")

    def get(self, key: str, default=None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        """
        Set configuration value and save to file.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value
        self.save_config()

    def create_api(self, device_url: Optional[str] = None, device_port: Optional[int] = None):
        """
        Build an API client from the configured device address.

        Args:
            device_url: Override for the configured device_url
            device_port: Override for the configured device_port

        Returns:
            ClockPanelAPI instance
        """
        from api import ClockPanelAPI

        return ClockPanelAPI(
            device_url or self.get("device_url"),
            device_port or self.get("device_port"),
            timeout=self.get("request_timeout")
        )
