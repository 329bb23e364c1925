"""
Process Exceptions

Exceptions raised by process creation and program replacement.

Version: 1.0.0
"""

from typing import Optional, Any


class ProcessException(Exception):
    """
    Base exception for all process-related errors.
    
    Attributes:
        message: Human-readable error description
        pid: Process ID associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """
    
    def __init__(
        self,
        message: str,
        pid: Optional[int] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.pid = pid
        self.error_code = error_code or 2000
        self.context = context or {}
        if pid is not None:
            self.context["pid"] = pid
    
    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.pid is not None:
            base = f"{base} (pid={self.pid})"
        return base


class ForkError(ProcessException):
    """
    Error during fork().
    
    Raised when no new process can be created, usually because the
    process limit has been reached or memory is exhausted. The shell
    reports it and carries on.
    
    Example:
        >>> raise ForkError("Resource temporarily unavailable", parent_pid=1)
    """
    
    def __init__(
        self,
        message: str,
        parent_pid: int,
        errno: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if errno is not None:
            ctx["errno"] = errno
        super().__init__(
            message=message,
            pid=parent_pid,
            error_code=2005,
            context=ctx
        )
        self.parent_pid = parent_pid
        self.errno = errno


class ExecError(ProcessException):
    """
    Error during exec().
    
    Raised in a child process whose image could not be replaced:
    file not found, permission denied, bad executable format.
    The child must terminate after reporting it.
    
    Example:
        >>> raise ExecError("No such file or directory", pid=42, path="/bin/nope")
    """
    
    def __init__(
        self,
        message: str,
        pid: int,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            pid=pid,
            error_code=2006,
            context=ctx
        )
        self.path = path
