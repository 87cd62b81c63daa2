"""
treefs - An in-memory hierarchical namespace

A tree of directories and files addressed by POSIX-style paths, for
embedding in sandboxed shells, test harnesses and simulations where a real
filesystem is undesirable.
"""

__version__ = "1.0.0"

from .filesystem import VirtualFileSystem, Directory, File, NodeType, NodeInfo, PathResolver
from .core import create_filesystem, get_config, ConfigLoader
from .exceptions import FileSystemException

__all__ = [
    'VirtualFileSystem',
    'Directory',
    'File',
    'NodeType',
    'NodeInfo',
    'PathResolver',
    'create_filesystem',
    'get_config',
    'ConfigLoader',
    'FileSystemException',
]
