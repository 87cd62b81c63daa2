"""
treefs Exception Hierarchy

Architecture:
    FileSystemException (Base)
    ├── NotFoundError
    ├── FileNotFoundError
    ├── FileExistsError
    ├── DirectoryNotFoundError
    ├── DirectoryExistsError
    ├── AmbiguousPathError
    ├── CannotUpdateRootError
    ├── MissingPathError
    ├── OutOfMemoryError
    └── InvalidMoveError
    ConfigException (Base)
    ├── ConfigLoadError
    └── ConfigValidationError

Note that ``FileNotFoundError`` and ``FileExistsError`` shadow the builtins
of the same name when imported unqualified.
"""

from .fs_exceptions import (
    FileSystemException,
    NotFoundError,
    FileNotFoundError,
    FileExistsError,
    DirectoryNotFoundError,
    DirectoryExistsError,
    AmbiguousPathError,
    CannotUpdateRootError,
    MissingPathError,
    OutOfMemoryError,
    InvalidMoveError,
)

from .config_exceptions import (
    ConfigException,
    ConfigLoadError,
    ConfigValidationError,
)

__all__ = [
    # Filesystem exceptions
    "FileSystemException",
    "NotFoundError",
    "FileNotFoundError",
    "FileExistsError",
    "DirectoryNotFoundError",
    "DirectoryExistsError",
    "AmbiguousPathError",
    "CannotUpdateRootError",
    "MissingPathError",
    "OutOfMemoryError",
    "InvalidMoveError",
    # Configuration exceptions
    "ConfigException",
    "ConfigLoadError",
    "ConfigValidationError",
]
