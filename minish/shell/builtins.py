"""
Shell Built-in Commands

Commands executed by the interpreter itself instead of a child
process: ``exit`` and ``cd``.

Version: 1.0.0
"""

from enum import Enum, auto
from typing import Callable

from .parser import ArgumentVector
from minish.exceptions import FileSystemException, NotADirectoryError
from minish.filesystem.path_resolver import PathResolver
from minish.logger import get_logger


class BuiltinResult(Enum):
    """What the interpreter loop should do after dispatch."""
    NOT_BUILTIN = auto()  # spawn a child for it
    HANDLED = auto()      # read the next line
    EXIT = auto()         # stop processing all input sources


class BuiltinCommands:
    """
    Built-in shell commands.
    
    These commands are executed directly by the shell without
    creating a new process.
    """
    
    def __init__(self, shell):
        """
        Initialize built-in commands.
        
        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._logger = get_logger('shell')
        self._commands: dict[str, Callable[[ArgumentVector], BuiltinResult]] = {
            'exit': self.cmd_exit,
            'cd': self.cmd_cd,
        }
    
    def get_commands(self) -> dict[str, Callable[[ArgumentVector], BuiltinResult]]:
        """Get all built-in commands."""
        return self._commands
    
    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands
    
    def try_builtin(self, args: ArgumentVector) -> BuiltinResult:
        """
        Run args as a built-in command if its name is reserved.
        
        Args:
            args: Tokenized command line
        
        Returns:
            NOT_BUILTIN if the command is not built in, otherwise the
            command's result
        """
        cmd = self._commands.get(args.command)
        if cmd is None:
            return BuiltinResult.NOT_BUILTIN
        
        try:
            return cmd(args)
        except FileSystemException as e:
            self._logger.debug(f"{args.command}: {e}")
            self._shell.write(f"{e.message}\n")
            return BuiltinResult.HANDLED
    
    # Command implementations
    
    def cmd_exit(self, args: ArgumentVector) -> BuiltinResult:
        """Stop the interpreter. Arguments are ignored."""
        return BuiltinResult.EXIT
    
    def cmd_cd(self, args: ArgumentVector) -> BuiltinResult:
        """
        Change the working directory.
        
        With no argument the configured home directory is used. A
        relative argument is taken relative to the working directory;
        the search path is never consulted.
        
        Raises:
            NotADirectoryError: If the target is not an existing directory
        """
        if args.argc < 2:
            target = self._shell.config.shell.home_directory
        else:
            target = PathResolver.absolute_path(args[1], self._shell.cwd)
        
        services = self._shell.services
        if not services.is_dir(target):
            raise NotADirectoryError(target)
        
        services.set_pwd(target)
        self._shell.cwd = target
        self._logger.debug(f"Working directory is now {target}")
        return BuiltinResult.HANDLED
