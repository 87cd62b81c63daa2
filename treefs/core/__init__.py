"""
treefs Core Module

Configuration loading and namespace bootstrap.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    FilesystemConfig,
    LoggingConfig,
    DEFAULT_CAPACITY_LIMIT,
    get_config,
)
from .bootstrap import configure_logging, create_filesystem

__all__ = [
    # Config
    'ConfigLoader',
    'Config',
    'FilesystemConfig',
    'LoggingConfig',
    'DEFAULT_CAPACITY_LIMIT',
    'get_config',
    # Bootstrap
    'configure_logging',
    'create_filesystem',
]
