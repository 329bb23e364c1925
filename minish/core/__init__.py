"""
minish Core Module

Configuration loading and access.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    ShellConfig,
    ProcessConfig,
    LoggingConfig,
    get_config,
)

__all__ = [
    'ConfigLoader',
    'Config',
    'ShellConfig',
    'ProcessConfig',
    'LoggingConfig',
    'get_config',
]
