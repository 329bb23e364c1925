"""
minish - a minimal command interpreter

Reads commands from script files and then from standard input, runs
``cd`` and ``exit`` itself and everything else as a child process.
"""

__version__ = "1.0.0"

# Import main components for convenience
from .shell.shell import Shell, create_shell
from .syscalls.services import KernelServices, HostKernelServices

__all__ = [
    'Shell',
    'create_shell',
    'KernelServices',
    'HostKernelServices',
]
