"""
treefs Virtual File System Module

Provides the in-memory namespace:
- Directory and File tree nodes
- POSIX path normalization
- The VirtualFileSystem with all public operations
"""

from .nodes import (
    Directory,
    File,
    NodeType,
    node_path,
    byte_length,
    ROOT_PATH,
    MOVE_UP_PATHS,
    CURRENT_DIR_PATHS,
)
from .path_resolver import PathResolver, ParsedPath
from .vfs import VirtualFileSystem, NodeInfo

__all__ = [
    # Nodes
    'Directory',
    'File',
    'NodeType',
    'node_path',
    'byte_length',
    'ROOT_PATH',
    'MOVE_UP_PATHS',
    'CURRENT_DIR_PATHS',
    # Path Resolver
    'PathResolver',
    'ParsedPath',
    # VFS
    'VirtualFileSystem',
    'NodeInfo',
]
