"""
Process States Module

Defines the outcomes of waiting for a child and the exec search modes.

Version: 1.0.0
"""

from enum import Enum


class WaitOutcome(Enum):
    """
    Classified result of waiting for a child process.
    
    Values mirror the status codes of the waitpid call the shell was
    designed around.
    """
    
    SUCCESS = 0
    """Child ran to completion."""
    
    INTERRUPTED = 65531
    """The wait was interrupted before the child finished."""
    
    NO_SUCH_PROCESS = 65532
    """No child with that id exists (or it was already reaped)."""
    
    KILLED = 65534
    """Child was terminated by a signal."""
    
    TIMEOUT = 65535
    """Timeout elapsed while the child was still running."""
    
    @property
    def completed(self) -> bool:
        """True if the child ran to completion normally."""
        return self is WaitOutcome.SUCCESS

    @property
    def reaped(self) -> bool:
        """True if the child is gone and no longer needs waiting for."""
        return self in (
            WaitOutcome.SUCCESS,
            WaitOutcome.KILLED,
            WaitOutcome.NO_SUCH_PROCESS,
        )


class ExecSearchMode(Enum):
    """How exec interprets the program name in argv[0]."""
    LITERAL = 0  # use argv[0] as a path as-is
    SEARCH = 1   # resolve argv[0] through the search path
