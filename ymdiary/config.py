"""
Configuration management for YMDiary.

This module handles loading and accessing configuration values from config.yaml.
Missing or unreadable files fall back to built-in defaults so the parser can
always run.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from .models import ParserOptions


class ConfigManager:
    """
    Manages configuration loading and access for YMDiary.
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
                loaded = yaml.safe_load(f) or {}

            if not isinstance(loaded, dict):
                logging.warning(
                    f"Configuration in {self.config_path} is a {type(loaded).__name__}, "
                    f"expected a mapping; using defaults"
                )
                self._config = self._get_default_config()
                return

            self._config = loaded
            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Failed to load configuration: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "parser": {
                "enable_long_memo": True,
                "enable_event_parsing": True,
                "enable_tag_extraction": True
            },
            "output": {
                "format": "summary"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "paths": {
                "log_file": None
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "parser.enable_long_memo")
            default: Default value if key is not found

        Returns:
            The configuration value
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
        return self._config.get(section) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    @property
    def parser_options(self) -> ParserOptions:
        """Get parser feature switches."""
        return ParserOptions(**self.get_section("parser"))

    @property
    def output_format(self) -> str:
        """Get CLI output format ('summary' or 'json')."""
        return self.get("output.format", "summary")

    @property
    def log_filename(self) -> Optional[str]:
        """Get log file name, None to log to stderr only."""
        return self.get("paths.log_file")

    @property
    def log_level(self) -> str:
        return self.get("logging.level", "INFO")

    @property
    def log_format(self) -> str:
        return self.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")


# Global configuration instance
config = ConfigManager()
