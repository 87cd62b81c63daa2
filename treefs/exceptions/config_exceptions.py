"""
Configuration Exceptions

Exceptions raised while loading or updating treefs configuration.
"""

from typing import Optional, Any


class ConfigException(Exception):
    """
    Base exception for configuration errors.

    Attributes:
        message: Human-readable error description
        key: Dot-notation configuration key involved (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.key = key
        self.error_code = error_code or 1000
        self.context = context or {}
        if key:
            self.context["key"] = key

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base


class ConfigLoadError(ConfigException):
    """The configuration file is missing, unreadable or not valid JSON."""

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if config_path:
            ctx["config_path"] = config_path
        super().__init__(message, error_code=1001, context=ctx)
        self.config_path = config_path


class ConfigValidationError(ConfigException):
    """A configuration key is unknown or holds an invalid value."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, key=key, error_code=1002, context=context)
