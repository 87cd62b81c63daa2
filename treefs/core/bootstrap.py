"""
Namespace Bootstrap

Loads configuration, sets up logging from it and builds a namespace,
for embedders that want the whole stack configured in one call.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

from treefs.core.config_loader import Config, ConfigLoader, get_config
from treefs.logger import Logger, LogLevel, get_logger

if TYPE_CHECKING:
    from treefs.filesystem.vfs import VirtualFileSystem


def configure_logging(config: Optional[Config] = None, use_colors: bool = True) -> None:
    """
    Initialize the treefs loggers from the logging section of a config.

    Args:
        config: Configuration to read, defaults to the active one
        use_colors: Whether console output may use ANSI colors
    """
    config = config or get_config()
    level = LogLevel.__members__.get(config.logging.level, LogLevel.INFO)

    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        use_colors=use_colors,
        console_output=config.logging.console_output
    )


def create_filesystem(
    config_path: Optional[str] = None,
    init_logging: bool = True
) -> 'VirtualFileSystem':
    """
    Build a namespace from a configuration file.

    A missing configuration file is not fatal: defaults are used. Invalid
    JSON or invalid values still raise.

    Args:
        config_path: Optional JSON configuration file
        init_logging: Whether to initialize logging from the configuration

    Returns:
        A fresh VirtualFileSystem using the configured capacity limit
    """
    # Imported here to avoid a circular import with treefs.filesystem.vfs
    from treefs.filesystem.vfs import VirtualFileSystem

    loader = ConfigLoader()
    missing_config = bool(config_path) and not Path(config_path).exists()
    if config_path and not missing_config:
        loader.load(config_path)

    if init_logging:
        configure_logging(loader.config)

    logger = get_logger('bootstrap')
    if missing_config:
        logger.warning("Configuration file not found, using defaults", context={'path': config_path})

    vfs = VirtualFileSystem(capacity_limit=loader.config.filesystem.capacity_limit)
    logger.info(
        "Namespace created",
        context={'capacity_limit': vfs.capacity_limit}
    )
    return vfs
