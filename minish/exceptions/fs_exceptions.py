"""
Filesystem Exceptions

Exceptions related to opening scripts and validating directories.

Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.
    
    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """
    
    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path
    
    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base


class FileNotFoundError(FileSystemException):
    """
    The specified file does not exist or cannot be opened.
    
    Example:
        >>> raise FileNotFoundError("/path/to/script")
    """
    
    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File not found: {path}",
            path=path,
            error_code=4001,
            context=context
        )


class NotADirectoryError(FileSystemException):
    """
    Path is not an existing directory.
    
    Raised by the ``cd`` builtin. The message is the diagnostic
    shown to the user.
    
    Example:
        >>> raise NotADirectoryError("/missing")
    """
    
    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"no such directory: {path}",
            path=path,
            error_code=4010,
            context=context
        )
