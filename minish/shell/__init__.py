"""
minish Shell Module

- Line buffer and in-place tokenizer
- Built-in commands
- Interpreter loop
"""

from .parser import ArgumentVector, LineBuffer, LineTokenizer
from .builtins import BuiltinCommands, BuiltinResult
from .shell import Shell, create_shell

__all__ = [
    'ArgumentVector',
    'LineBuffer',
    'LineTokenizer',
    'BuiltinCommands',
    'BuiltinResult',
    'Shell',
    'create_shell',
]
