"""
Configuration management for Notionpage.

This module handles loading and accessing configuration values from config.yaml.
The decoding core takes its settings as arguments; this configuration is
read by the command line entry point and passed down.
"""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Notionpage.
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
            logging.warning(f"Failed to load configuration, using defaults: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "decoding": {
                "max_workers": 1,
                "fail_fast": False
            },
            "output": {
                "indent": 2,
                "include_raw": False
            },
            "paths": {
                "log_file": "notionpage.log"
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
            key_path: Dot-separated path to the configuration value (e.g., "decoding.max_workers")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("decoding.max_workers")  # Returns 1
            config.get("logging.level")  # Returns "INFO"
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
    def max_workers(self) -> int:
        """Get number of block decoding threads."""
        return int(self.get("decoding.max_workers", 1))

    @property
    def fail_fast(self) -> bool:
        """Get whether the first block failure aborts page decoding."""
        return bool(self.get("decoding.fail_fast", False))

    @property
    def output_indent(self) -> int:
        """Get JSON output indentation."""
        return int(self.get("output.indent", 2))

    @property
    def include_raw(self) -> bool:
        """Get whether raw properties and format payloads are written to output."""
        return bool(self.get("output.include_raw", False))

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "notionpage.log")


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
