"""
Configuration management for comptree.
"""
from typing import Any


class Configuration:
    """Process-wide defaults for comptree."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Configuration, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize the configuration with defaults."""
        self._config = {
            'scanner': {
                'extensions': ['js', 'jsx'],
            },
            'debug': {
                'log_dir': '.redez/logs/componentASTs',
            },
            'logging': {
                'level': 'WARNING',
            }
        }

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        try:
            return self._config[section][key]
        except KeyError:
            return default

    def set(self, section: str, key: str, value: Any):
        """Set a configuration value."""
        if section not in self._config:
            self._config[section] = {}
        self._config[section][key] = value

    def reset(self):
        """Restore every section to its default values."""
        self._initialize()

# Initialize configuration
config = Configuration()
