"""
minish Exception Hierarchy

Each subsystem has its own base exception. All of them carry a
human-readable message, a numeric error code and a context dict.

Architecture:
    KernelException
    ├── BootFailureError
    └── ConfigValidationError
    ProcessException
    ├── ForkError
    └── ExecError
    FileSystemException
    ├── FileNotFoundError
    └── NotADirectoryError
"""

from .kernel_exceptions import (
    KernelException,
    BootFailureError,
    ConfigValidationError,
)

from .process_exceptions import (
    ProcessException,
    ForkError,
    ExecError,
)

from .fs_exceptions import (
    FileSystemException,
    FileNotFoundError,
    NotADirectoryError,
)

__all__ = [
    # Kernel exceptions
    "KernelException",
    "BootFailureError",
    "ConfigValidationError",
    # Process exceptions
    "ProcessException",
    "ForkError",
    "ExecError",
    # Filesystem exceptions
    "FileSystemException",
    "FileNotFoundError",
    "NotADirectoryError",
]
