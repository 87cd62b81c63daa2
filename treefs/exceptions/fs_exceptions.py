"""
Filesystem Exceptions

Exceptions raised by the in-memory namespace: path resolution misses,
name collisions, root protection and capacity exhaustion.

Tree primitives raise these without an operation attached; the
VirtualFileSystem stamps the public operation name and the offending
path onto them with ``annotate`` before they reach the caller.
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all namespace errors.

    Attributes:
        message: Human-readable error description
        path: Path associated with the error (if applicable)
        operation: Public operation that detected the error (if known)
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    kind = "FileSystemError"

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.operation = operation
        self.error_code = error_code or 4000
        self.context = context or {}
        if path is not None:
            self.context["path"] = path

    def annotate(self, operation: str, path: Optional[str] = None) -> 'FileSystemException':
        """
        Attach the public operation name (and path) to this error.

        Returns the exception itself so callers can ``raise exc.annotate(...)``.
        """
        self.operation = operation
        if path is not None:
            self.path = path
            self.context["path"] = path
        return self

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        details = []
        if self.operation:
            details.append(f"operation={self.operation}")
        if self.path is not None:
            details.append(f"path={self.path}")
        if details:
            base = f"{base} ({', '.join(details)})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"path={self.path!r}, "
            f"operation={self.operation!r}, "
            f"error_code={self.error_code})"
        )


class NotFoundError(FileSystemException):
    """
    Neither a directory nor a file exists at the path.

    Raised by combined lookups that accept either node kind.

    Example:
        >>> raise NotFoundError("/missing", operation="stat")
    """

    kind = "NotFound"

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="Directory or File not found",
            path=path,
            operation=operation,
            error_code=4000,
            context=context
        )


class FileNotFoundError(FileSystemException):
    """
    The specified file does not exist.

    Example:
        >>> raise FileNotFoundError("/path/to/file", operation="read_file")
    """

    kind = "FileNotFound"

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File not found: {path}",
            path=path,
            operation=operation,
            error_code=4001,
            context=context
        )


class FileExistsError(FileSystemException):
    """
    A file with this name already exists.

    Reserved for strict-create callers; the namespace itself replaces a
    same-named file instead of raising this.
    """

    kind = "FileExists"

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File with this name already exists: {path}",
            path=path,
            operation=operation,
            error_code=4002,
            context=context
        )


class DirectoryNotFoundError(FileSystemException):
    """
    The specified directory does not exist.

    Also raised when an intermediate segment of a path is missing.

    Example:
        >>> raise DirectoryNotFoundError("/a/b", operation="change_directory")
    """

    kind = "DirectoryNotFound"

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Directory not found: {path}",
            path=path,
            operation=operation,
            error_code=4003,
            context=context
        )


class DirectoryExistsError(FileSystemException):
    """
    Attempt to create a directory under a name that always exists.

    The root sentinel ``/`` as well as ``.`` and ``..`` can never be
    created as children.
    """

    kind = "DirectoryExists"

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Directory already exists: {path}",
            path=path,
            operation=operation,
            error_code=4004,
            context=context
        )


class AmbiguousPathError(FileSystemException):
    """
    A directory and a file would share a name under one parent.

    Example:
        >>> raise AmbiguousPathError("notes")
    """

    kind = "AmbiguousPath"

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Directory or File exists with this name: {path}",
            path=path,
            operation=operation,
            error_code=4005,
            context=context
        )


class CannotUpdateRootError(FileSystemException):
    """
    Attempt to remove, rename or move the root directory.

    Example:
        >>> raise CannotUpdateRootError("/", operation="remove_directory")
    """

    kind = "CannotUpdateRoot"

    def __init__(
        self,
        path: str = "/",
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="Cannot update root directory",
            path=path,
            operation=operation,
            error_code=4006,
            context=context
        )


class MissingPathError(FileSystemException):
    """An empty path (or name) was given where one is required."""

    kind = "MissingPath"

    def __init__(
        self,
        path: str = "",
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="Missing path",
            path=path,
            operation=operation,
            error_code=4007,
            context=context
        )


class OutOfMemoryError(FileSystemException):
    """
    Not enough capacity left for this operation.

    Example:
        >>> raise OutOfMemoryError("/a", requested=1024, available=0)
    """

    kind = "OutOfMemory"

    def __init__(
        self,
        path: str,
        requested: Optional[int] = None,
        available: Optional[int] = None,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if requested is not None:
            ctx["requested"] = requested
        if available is not None:
            ctx["available"] = available
        super().__init__(
            message="Not enough memory for this operation",
            path=path,
            operation=operation,
            error_code=4008,
            context=ctx
        )
        self.requested = requested
        self.available = available


class InvalidMoveError(FileSystemException):
    """
    A directory cannot be moved into itself or one of its descendants.

    Example:
        >>> raise InvalidMoveError("/a", target="/a/b")
    """

    kind = "InvalidMove"

    def __init__(
        self,
        path: str,
        target: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if target is not None:
            ctx["target"] = target
        super().__init__(
            message=f"Cannot move directory into itself: {path}",
            path=path,
            operation=operation,
            error_code=4009,
            context=ctx
        )
        self.target = target
