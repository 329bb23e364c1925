"""
minish System Services Module

The operating-system interface the interpreter runs on.
"""

from .services import (
    KernelServices,
    HostKernelServices,
    FD_STDIN,
    FD_STDOUT,
    FD_STDERR,
)

__all__ = [
    'KernelServices',
    'HostKernelServices',
    'FD_STDIN',
    'FD_STDOUT',
    'FD_STDERR',
]
