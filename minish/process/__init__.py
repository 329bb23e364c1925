"""
minish Process Management Module

- Wait outcomes and exec search modes
- Process manager (spawn, replace program image, wait)
"""

from .states import WaitOutcome, ExecSearchMode
from .process_manager import ProcessManager

__all__ = [
    'WaitOutcome',
    'ExecSearchMode',
    'ProcessManager',
]
