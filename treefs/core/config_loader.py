"""
treefs Configuration Loader

Dataclass-backed configuration with:
- JSON configuration file loading
- Default value handling
- Validation of loaded and updated values
- Dot-notation runtime access and updates
"""

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from treefs.exceptions import ConfigLoadError, ConfigValidationError
from treefs.logger import LogLevel, get_logger


DEFAULT_CAPACITY_LIMIT = 1073741824  # 1 GiB


@dataclass
class FilesystemConfig:
    """Namespace configuration settings."""
    capacity_limit: int = DEFAULT_CAPACITY_LIMIT


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = True


@dataclass
class Config:
    """Main configuration container."""
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    A process-wide singleton: every ``ConfigLoader()`` call returns the same
    instance, so a configuration loaded once is seen by every namespace
    created afterwards.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('treefs.json')
        >>> config.filesystem.capacity_limit
        1048576
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._logger = get_logger('config')
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Keys missing from the file keep their defaults.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigLoadError: If the file cannot be read or parsed
            ConfigValidationError: If a loaded value is invalid
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigLoadError(
                f"Configuration file not found: {config_path}",
                config_path=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(
                f"Invalid JSON in configuration file: {e}",
                config_path=config_path
            ) from e
        except OSError as e:
            raise ConfigLoadError(
                f"Cannot read configuration file: {e}",
                config_path=config_path
            ) from e

        config = self._parse_config(data)
        self.validate(config)
        self._config = config
        self._logger.info("Configuration loaded", context={'path': config_path})
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        if 'filesystem' in data:
            fs_data = data['filesystem']
            config.filesystem = FilesystemConfig(
                capacity_limit=fs_data.get('capacity_limit', config.filesystem.capacity_limit),
            )

        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
            )

        return config

    @staticmethod
    def validate(config: Config) -> None:
        """
        Check configuration values.

        Raises:
            ConfigValidationError: On the first invalid value found
        """
        capacity = config.filesystem.capacity_limit
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise ConfigValidationError(
                f"capacity_limit must be a non-negative integer, got {capacity!r}",
                key='filesystem.capacity_limit'
            )

        if config.logging.level not in LogLevel.__members__:
            raise ConfigValidationError(
                f"Unknown log level: {config.logging.level!r}",
                key='logging.level'
            )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'filesystem.capacity_limit')
            default: Default value if key not found
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        The change is validated and rolled back if invalid. Namespaces
        already constructed keep the capacity limit they were built with.

        Raises:
            ConfigValidationError: If the key is unknown or the value invalid
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if not hasattr(obj, final_key):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            self.validate(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def reset(self) -> None:
        """Restore the default configuration."""
        self._config = Config()

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            return obj

        return dataclass_to_dict(self._config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
