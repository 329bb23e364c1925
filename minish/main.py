#!/usr/bin/env python3
"""
minish entry point.

Start-up sequence:
1. Load configuration (config.json beside the package, if present)
2. Initialize logging
3. Run each script argument, then standard input

Usage:
    minish [script ...]
"""

import os
import sys
from typing import List, Optional

from minish.core.config_loader import ConfigLoader
from minish.exceptions import KernelException
from minish.logger import Logger, LogLevel
from minish.shell.shell import Shell
from minish.syscalls.services import HostKernelServices


DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.json')


def load_config(config_path: str = DEFAULT_CONFIG_PATH):
    """Load the configuration file if there is one, else use defaults."""
    loader = ConfigLoader()
    if os.path.exists(config_path):
        return loader.load(config_path)
    return loader.config


def init_logging(config) -> None:
    level = LogLevel[config.logging.level.upper()]
    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        console_output=config.logging.console_output,
        use_colors=config.logging.use_colors,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for minish.
    
    Args:
        argv: Script names (defaults to sys.argv[1:])
    
    Returns:
        Process exit status
    """
    if argv is None:
        argv = sys.argv[1:]
    
    try:
        config = load_config()
        init_logging(config)
    except (KernelException, KeyError) as e:
        sys.stderr.write(f"minish: cannot start: {e}\n")
        return 1
    
    shell = Shell(HostKernelServices(), config)
    return shell.run(argv)


if __name__ == '__main__':
    sys.exit(main())
