"""
Tests for configuration handling in ClockPanel Client

Tests config.json creation, default merging and API construction.
"""

import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from managers import ConfigManager, DEFAULT_CONFIG, get_base_dir


def test_missing_config_is_created_with_defaults(tmp_path):
    """Loading without a file writes the defaults"""
    config_file = tmp_path / "config.json"
    config_mgr = ConfigManager(config_file)

    config = config_mgr.load_config()

    assert config == DEFAULT_CONFIG
    assert json.loads(config_file.read_text()) == DEFAULT_CONFIG


def test_existing_config_merged_with_defaults(tmp_path):
    """Keys missing from the file fall back to defaults"""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"device_url": "http://clock.local", "device_port": 8080}))

    config_mgr = ConfigManager(config_file)
    config_mgr.load_config()

    assert config_mgr.get("device_url") == "http://clock.local"
    assert config_mgr.get("device_port") == 8080
    assert config_mgr.get("log_level") == "INFO"
    assert config_mgr.get("request_timeout") is None


def test_set_persists_value(tmp_path):
    """set() writes through to config.json"""
    config_file = tmp_path / "config.json"
    config_mgr = ConfigManager(config_file)
    config_mgr.load_config()

    config_mgr.set("confirm_before_format", False)

    reloaded = ConfigManager(config_file)
    reloaded.load_config()
    assert reloaded.get("confirm_before_format") is False


def test_default_location_is_working_directory(tmp_path, monkeypatch):
    """Without an explicit path, config.json sits in the base directory"""
    monkeypatch.chdir(tmp_path)

    assert get_base_dir() == tmp_path
    assert ConfigManager().config_file == tmp_path / "config.json"


def test_create_api_uses_config_and_overrides(tmp_path):
    """API client is built from config, command-line values win"""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"device_url": "http://clock.local", "request_timeout": 7}))
    config_mgr = ConfigManager(config_file)
    config_mgr.load_config()

    api = config_mgr.create_api()
    assert api.base_url == "http://clock.local:80"
    assert api.timeout == 7

    api = config_mgr.create_api("http://10.0.0.5", 8080)
    assert api.base_url == "http://10.0.0.5:8080"


def test_device_url_with_port_keeps_its_port(tmp_path):
    """A port written into device_url is not doubled by the default device_port"""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"device_url": "http://clock.local:8080"}))
    config_mgr = ConfigManager(config_file)
    config_mgr.load_config()

    assert config_mgr.get("device_port") == 80
    assert config_mgr.create_api().base_url == "http://clock.local:8080"


def test_device_url_path_kept_as_prefix(tmp_path):
    """A path in device_url stays after the inserted port"""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"device_url": "http://clock.local/panel/"}))
    config_mgr = ConfigManager(config_file)
    config_mgr.load_config()

    api = config_mgr.create_api()

    assert api.base_url == "http://clock.local:80/panel"
    assert config_mgr.create_api("http://10.0.0.5:9000/panel").base_url == "http://10.0.0.5:9000/panel"
