"""
Kernel Exceptions

Exceptions raised while bringing the interpreter up: configuration
loading and validation.

Version: 1.0.0
"""

from typing import Optional, Any


class KernelException(Exception):
    """
    Base exception for start-up and configuration errors.
    
    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        recoverable: Whether the error can be recovered from
        context: Additional context about the error
    
    Example:
        >>> raise KernelException("Bad start-up state", error_code=1001)
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        recoverable: bool = False,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 0
        self.recoverable = recoverable
        self.context = context or {}
    
    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code}, "
            f"recoverable={self.recoverable})"
        )


class BootFailureError(KernelException):
    """
    The interpreter could not start.
    
    Raised when the configuration file is missing, unreadable or not
    valid JSON.
    
    Example:
        >>> raise BootFailureError("Configuration file not found", subsystem="config")
    """
    
    def __init__(
        self,
        message: str,
        subsystem: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if subsystem:
            ctx["subsystem"] = subsystem
        super().__init__(
            message=message,
            error_code=1002,
            recoverable=False,
            context=ctx
        )
        self.subsystem = subsystem


class ConfigValidationError(KernelException):
    """Raised when a configuration key or value is invalid."""
    
    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(
            message=message,
            error_code=1003,
            recoverable=True,
            context=ctx
        )
        self.key = key
