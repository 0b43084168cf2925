"""Configuration management for TaskLock."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from .debounce import FOCUS_TEXT_DEBOUNCE, WINDOW_HEIGHT_SETTLE, WINDOW_POSITION_DEBOUNCE
from .layout import STARTUP_GRACE_PERIOD
from .sound_effects import DEFAULT_SOUND_EFFECT_ID

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TaskLock"

DEFAULT_CONFIG = {
    "verbose_logging": True,
    "log_level": "INFO",
    "data_dir": "",
    "sound_directories": [],
    "default_sound_effect_id": DEFAULT_SOUND_EFFECT_ID,
    "focus_text_debounce": FOCUS_TEXT_DEBOUNCE,
    "window_position_debounce": WINDOW_POSITION_DEBOUNCE,
    "window_height_settle": WINDOW_HEIGHT_SETTLE,
    "startup_grace_period": STARTUP_GRACE_PERIOD,
}


class Config:
    """Configuration manager for TaskLock."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Custom configuration directory path
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = APP_SUPPORT_DIR / "config"

        self.config_file = self.config_dir / "settings.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or create default."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    config = json.load(f)
                if not isinstance(config, dict):
                    raise ValueError("settings must be a JSON object")
                # Merge with defaults to ensure all keys exist
                merged_config = DEFAULT_CONFIG.copy()
                merged_config.update(config)
                return merged_config
            except (json.JSONDecodeError, OSError, ValueError) as e:
                logger.warning("Could not load config file: %s", e)
                logger.warning("Using default configuration.")

        return DEFAULT_CONFIG.copy()

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning("Could not save config file: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self._config[key] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update multiple configuration values."""
        self._config.update(config_dict)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = DEFAULT_CONFIG.copy()

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values.

        Returns:
            Complete configuration dictionary
        """
        return self._config.copy()

    def _get_delay(self, key: str) -> float:
        value = self.get(key, DEFAULT_CONFIG[key])
        try:
            delay = float(value)
        except (TypeError, ValueError):
            return DEFAULT_CONFIG[key]
        return delay if delay >= 0 else DEFAULT_CONFIG[key]

    # Convenience properties for common settings
    @property
    def verbose_logging(self) -> bool:
        """Get verbose logging setting."""
        return bool(self.get("verbose_logging", True))

    @verbose_logging.setter
    def verbose_logging(self, value: bool) -> None:
        """Set verbose logging setting."""
        self.set("verbose_logging", value)

    @property
    def log_level(self) -> str:
        return str(self.get("log_level", "INFO")).upper()

    @property
    def default_sound_effect_id(self) -> str:
        return self.get("default_sound_effect_id") or DEFAULT_SOUND_EFFECT_ID

    @property
    def sound_directories(self) -> List[Path]:
        """Get extra directories scanned for sound effects."""
        directories = self.get("sound_directories") or []
        if isinstance(directories, str):
            directories = [directories]
        return [Path(d).expanduser() for d in directories if d]

    @property
    def focus_text_debounce(self) -> float:
        return self._get_delay("focus_text_debounce")

    @property
    def window_position_debounce(self) -> float:
        return self._get_delay("window_position_debounce")

    @property
    def window_height_settle(self) -> float:
        return self._get_delay("window_height_settle")

    @property
    def startup_grace_period(self) -> float:
        return self._get_delay("startup_grace_period")

    @property
    def data_dir(self) -> Path:
        """Get data directory path."""
        data_dir = self.get("data_dir")
        if data_dir:
            return Path(data_dir).expanduser()
        return get_default_data_dir()


def load_config_from_env() -> Dict[str, Any]:
    """Load configuration from environment variables.

    Returns:
        Configuration dictionary from environment
    """
    env_config: Dict[str, Any] = {}

    env_mappings = {
        "TASKLOCK_DATA_DIR": "data_dir",
        "TASKLOCK_SOUND_DIRS": "sound_directories",
        "TASKLOCK_VERBOSE": "verbose_logging",
        "TASKLOCK_LOG_LEVEL": "log_level",
        "TASKLOCK_DEFAULT_SOUND": "default_sound_effect_id",
    }

    for env_var, config_key in env_mappings.items():
        value = os.getenv(env_var)
        if value is None:
            continue
        if config_key == "verbose_logging":
            env_config[config_key] = value.lower() in ("true", "1", "yes", "on")
        elif config_key == "sound_directories":
            env_config[config_key] = [p for p in value.split(os.pathsep) if p]
        else:
            env_config[config_key] = value

    return env_config


def get_default_data_dir() -> Path:
    """Get the default data directory for the current user.

    Returns:
        Path to default data directory
    """
    return APP_SUPPORT_DIR


# Global config instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance.

    Returns:
        Global Config instance
    """
    global _global_config
    if _global_config is None:
        _global_config = Config()
        # Apply environment variable overrides
        env_config = load_config_from_env()
        if env_config:
            _global_config.update(env_config)
    return _global_config


def reload_config() -> Config:
    """Reload configuration from file.

    Returns:
        Reloaded Config instance
    """
    global _global_config
    _global_config = None
    return get_config()
