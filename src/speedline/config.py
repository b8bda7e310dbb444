"""Configuration management for speedline."""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict

# Default configuration
DEFAULT_CONFIG = {
    "timeline": {
        # Substring matched against the event category,
        # e.g. "disabled-by-default-devtools.screenshot"
        "screenshot_category": "screenshot",
        "snapshot_arg": "snapshot",
        "synthesize_white_frame": True,
        "white_frame_quality": 90,
    },
    "histogram": {
        "channels": 3,
    },
}

CONFIG_PATH_ENV = "SPEEDLINE_CONFIG"


class Config:
    """Configuration manager for speedline."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. If None, uses
                $SPEEDLINE_CONFIG or the default location.
        """
        self.config_path = Path(config_path) if config_path else self.get_default_config_path()
        self.config = self._load_config()

    @staticmethod
    def get_default_config_path() -> Path:
        """Get default configuration file path."""
        env_path = os.getenv(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()
        return Path.home() / ".config" / "speedline" / "settings.json"

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file, falling back to defaults."""
        config = copy.deepcopy(DEFAULT_CONFIG)
        if self.config_path.exists():
            with open(self.config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)
            self._deep_merge(config, user_config)
        return config

    def _deep_merge(self, base: Dict, update: Dict) -> None:
        """Deep merge update dict into base dict."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-notation key.

        Args:
            key: Configuration key in dot notation (e.g., 'timeline.snapshot_arg')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dot-notation key.

        Args:
            key: Configuration key in dot notation (e.g., 'histogram.channels')
            value: Value to set
        """
        keys = key.split(".")
        config = self.config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self.config, f, indent=2)

    def reset_all(self) -> None:
        """Reset configuration to defaults."""
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        self.save()


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
