"""
Configuration management for canvasapi.

This module handles loading and accessing configuration values from config.yaml.
Values that change how documents are built (summary length, default content
format) or that wire in collaborators (database file, global template source)
live here rather than in the environment.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
import logging


class ConfigManager:
    """
    Manages configuration loading and access for canvasapi.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "database": {
                "filename": "canvas.db"
            },
            "canvas": {
                "native_version": "1.0.0",
                "type": "http://sharejs.org/types/JSONv0",
                "summary_length": 140
            },
            "templates": {
                "global_source_id": None
            },
            "web": {
                "base_url": "http://localhost:4000"
            },
            "notifications": {
                "create_delay": 300
            },
            "paths": {
                "log_file": "canvasapi.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "web.base_url")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("canvas.summary_length")  # Returns 140
            config.get("templates.global_source_id")  # Returns None unless configured
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def database_filename(self) -> str:
        """Get database filename."""
        return self.get("database.filename", "canvas.db")

    @property
    def native_version(self) -> str:
        """Get the native version stamped on new canvases."""
        return self.get("canvas.native_version", "1.0.0")

    @property
    def canvas_type(self) -> str:
        """Get the content-format tag stamped on new canvases."""
        return self.get("canvas.type", "http://sharejs.org/types/JSONv0")

    @property
    def summary_length(self) -> int:
        """Get the maximum summary length in characters."""
        return self.get("canvas.summary_length", 140)

    @property
    def global_template_source_id(self) -> Optional[str]:
        """Get the ID of the user whose templates are shared with everyone."""
        return self.get("templates.global_source_id")

    @property
    def web_base_url(self) -> str:
        """Get the base URL of the web client."""
        return self.get("web.base_url", "http://localhost:4000")

    @property
    def notification_create_delay(self) -> int:
        """Get the delay (seconds) before notifying channels of a new canvas."""
        return self.get("notifications.create_delay", 300)

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "canvasapi.log")


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
