"""
Configuration loading for the stroom command line.

The CLI reads an optional YAML file with logging settings and demo
parameters, for example:

    logging:
      level: info
      renderer: console
    demos:
      filter:
        threshold: 7
"""

from typing import Any, Dict, Optional
import os

import yaml


class Config:
    """
    A read-only wrapper around a dictionary of settings.

    Nested values are reached with dot-notation keys (e.g., 'logging.level').
    """

    def __init__(self, config_data: Optional[Dict[str, Any]] = None):
        self._config = config_data or {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Access a config value using dot notation.

        Example:
            >>> config = Config({'demos': {'filter': {'threshold': 7}}})
            >>> config.get('demos.filter.threshold')
            7
            >>> config.get('demos.generate.limit', 5)
            5
        """
        value: Any = self._config
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def get_int(self, key: str, default: int) -> int:
        """Like `get`, but insists on an integer value."""
        value = self.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Config value '{key}' must be an integer, got {value!r}")
        return value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._config)

    def __repr__(self) -> str:
        return f"Config(config_data={self._config})"


def load_config(path: Optional[str]) -> Config:
    """
    Loads a YAML configuration file from the given path.

    If the path is None or does not exist, it returns an empty Config object.
    A file whose top level is not a mapping is rejected with a ValueError;
    malformed YAML raises `yaml.YAMLError`.
    """
    if not path or not os.path.exists(path):
        return Config({})

    with open(path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    if config_data is not None and not isinstance(config_data, dict):
        raise ValueError(f"Config file '{path}' must contain a mapping at the top level")

    return Config(config_data)
