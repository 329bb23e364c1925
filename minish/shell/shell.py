"""
minish Shell Module

The command interpreter: reads lines, runs built-ins in process and
everything else in a child process, one at a time.

Two modes:
- batch: one per script argument, silent, end of input moves on to
  the next source
- interactive: standard input, prompts with the working directory,
  end of input ends the program

Version: 1.0.0
"""

from typing import Iterable, Optional

from .parser import ArgumentVector, LineBuffer, LineTokenizer
from .builtins import BuiltinCommands, BuiltinResult
from minish.core.config_loader import Config, get_config
from minish.exceptions import (
    ExecError,
    ForkError,
    FileNotFoundError,
    NotADirectoryError,
)
from minish.filesystem.path_resolver import PathResolver
from minish.logger import get_logger
from minish.process.process_manager import ProcessManager
from minish.process.states import ExecSearchMode
from minish.syscalls.services import (
    FD_STDIN,
    FD_STDOUT,
    HostKernelServices,
    KernelServices,
)


# Exit status after Ctrl-C, 128 + SIGINT
INTERRUPTED_STATUS = 130


class Shell:
    """
    minish command interpreter.
    
    Owns the line buffer and the working-directory state for the
    lifetime of the program.
    
    Example:
        >>> shell = Shell(HostKernelServices())
        >>> shell.run(["setup.sh"])
        0
    """
    
    def __init__(
        self,
        services: Optional[KernelServices] = None,
        config: Optional[Config] = None
    ):
        self._services = services or HostKernelServices()
        self._config = config or get_config()
        self._logger = get_logger('shell')
        
        self._resolver = PathResolver(self._services.file_exists)
        self._buffer = LineBuffer(self._config.shell.line_buffer_size)
        self._tokenizer = LineTokenizer(self._config.shell.comment_char)
        self._builtins = BuiltinCommands(self)
        self._process_manager = ProcessManager(self._services, self._resolver)
        
        self._cwd = self._services.get_pwd()
    
    @property
    def services(self) -> KernelServices:
        return self._services
    
    @property
    def config(self) -> Config:
        return self._config
    
    @property
    def cwd(self) -> str:
        return self._cwd
    
    @cwd.setter
    def cwd(self, value: str):
        self._cwd = value
    
    @property
    def process_manager(self) -> ProcessManager:
        return self._process_manager
    
    def write(self, text: str) -> None:
        """Write text to standard output."""
        self._services.write(FD_STDOUT, text)
    
    def run(self, scripts: Iterable[str] = ()) -> int:
        """
        Run each script in batch mode, then standard input interactively.
        
        A script that runs ``exit`` stops everything: no further
        scripts are run and standard input is not read.
        
        Args:
            scripts: Script names, resolved like commands
        
        Returns:
            Exit status for the program, INTERRUPTED_STATUS if a script
            was interrupted with Ctrl-C
        """
        self._publish_cwd()

        try:
            for script in scripts:
                if not self.run_script(script):
                    return 0

            self.run_fd(FD_STDIN, interactive=True)
        except KeyboardInterrupt:
            self._logger.info("Interrupted")
            self.write("\n")
            return INTERRUPTED_STATUS
        return 0
    
    def run_script(self, script: str) -> bool:
        """
        Run one script in batch mode.
        
        Scripts that cannot be opened are skipped silently.
        
        Returns:
            False if the script ran ``exit``, True otherwise
        """
        path = self._resolver.resolve_command_path(
            script, self._cwd, self._services.get_path()
        )
        
        try:
            fd = self._services.open_read_only(path)
        except FileNotFoundError as e:
            self._logger.debug(f"Skipping script: {e}")
            return True
        
        self._logger.debug(f"Running script {path}", context={'fd': fd})
        try:
            return self.run_fd(fd, interactive=False)
        finally:
            self._services.close(fd)
    
    def run_fd(self, fd: int, interactive: bool) -> bool:
        """
        Read and execute commands from fd until it is exhausted.
        
        Args:
            fd: Input source
            interactive: Prompt before each line, and re-prompt instead
                of giving up when a child cannot be created
        
        Returns:
            False if ``exit`` was run, True to go on to the next source
        """
        offset = 0
        prompt_suffix = self._config.shell.prompt_suffix
        
        while True:
            if interactive:
                self.write(self._cwd + prompt_suffix)
            
            try:
                chunk = self._services.read_line(fd, offset, self._buffer.capacity)
            except KeyboardInterrupt:
                if not interactive:
                    raise
                self.write("\n")
                continue
            except OSError as e:
                self._logger.error(f"Read failed: {e}", context={'fd': fd})
                break
            
            if not chunk:
                break
            offset += len(chunk)
            
            self._buffer.fill(chunk)
            self._buffer.strip_newline()
            args = self._tokenizer.tokenize(self._buffer)
            
            result = self._builtins.try_builtin(args)
            if result is BuiltinResult.EXIT:
                return False
            if result is BuiltinResult.HANDLED:
                continue
            
            if not self._run_external(args):
                if interactive:
                    continue
                # abandon the rest of this source
                return True
        
        return True
    
    def _run_external(self, args: ArgumentVector) -> bool:
        """
        Run a command in a child process and wait for it.
        
        Returns:
            False if no child could be created
        """
        try:
            pid = self._process_manager.spawn()
        except ForkError:
            self.write("could not fork\n")
            return False
        
        if pid == 0:
            self._exec_child(args)
        
        self._process_manager.wait(pid, self._config.process.wait_timeout)
        return True
    
    def _exec_child(self, args: ArgumentVector) -> None:
        """Become the command. Never returns to the interpreter loop."""
        try:
            self._process_manager.replace_program(args.tokens(), ExecSearchMode.SEARCH)
        except ExecError:
            self.write("could not exec\n")
        finally:
            self._process_manager.terminate(self._config.process.exec_failure_status)
    
    def _publish_cwd(self) -> None:
        """Hand our working directory back to the environment so children inherit it."""
        try:
            self._services.set_pwd(self._cwd)
        except NotADirectoryError as e:
            self._logger.warning(f"Cannot publish working directory: {e}")


def create_shell(services: Optional[KernelServices] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(services)
