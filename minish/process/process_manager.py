"""
Process Manager Module

Runs external commands for the shell:
- Creates a child process (fork)
- Replaces the child's program image (exec), resolving the program
  through the search path when asked to
- Waits for the child and classifies how it ended

At most one foreground child exists at a time.

Version: 1.0.0
"""

from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

from .states import WaitOutcome, ExecSearchMode
from minish.exceptions import ExecError, ForkError
from minish.filesystem.path_resolver import PathResolver
from minish.logger import get_logger

if TYPE_CHECKING:
    from minish.syscalls.services import KernelServices


class ProcessManager:
    """
    Process management for the interpreter.
    
    Example:
        >>> pm = ProcessManager(HostKernelServices())
        >>> pid = pm.spawn()
        >>> if pid == 0:
        ...     pm.replace_program(["ls", "-l"], ExecSearchMode.SEARCH)
        >>> outcome = pm.wait(pid)
    """
    
    def __init__(
        self,
        services: KernelServices,
        resolver: Optional[PathResolver] = None
    ):
        self._services = services
        self._resolver = resolver or PathResolver(services.file_exists)
        self._logger = get_logger('process')
        self._foreground_pid: Optional[int] = None
    
    @property
    def foreground_pid(self) -> Optional[int]:
        """Pid of the child being waited on, if any."""
        return self._foreground_pid
    
    def spawn(self) -> int:
        """
        Create a child process.
        
        Returns:
            0 in the child, the child's pid in the parent
        
        Raises:
            ForkError: If the process limit is reached
        """
        try:
            pid = self._services.fork()
        except ForkError as e:
            self._logger.debug(f"fork failed: {e}")
            raise
        
        if pid > 0:
            self._foreground_pid = pid
            self._logger.debug("Spawned child", pid=pid)
        
        return pid
    
    def resolve_program(
        self,
        name: str,
        search_mode: ExecSearchMode = ExecSearchMode.SEARCH
    ) -> str:
        """Work out which file exec should load for argv[0]."""
        if search_mode is ExecSearchMode.LITERAL:
            return name
        return self._resolver.resolve_command_path(
            name,
            self._services.get_pwd(),
            self._services.get_path()
        )
    
    def replace_program(
        self,
        argv: Sequence[str],
        search_mode: ExecSearchMode = ExecSearchMode.SEARCH
    ) -> None:
        """
        Replace the current process image.
        
        Only meaningful in a child returned by spawn(). On success this
        never returns.
        
        Args:
            argv: Program name followed by its arguments
            search_mode: Whether argv[0] is looked up on the search path
        
        Raises:
            ExecError: If the program could not be started. The caller
                must terminate the process.
        """
        pid = self._services.get_pid()
        
        if len(argv) == 0:
            raise ExecError("Empty argument vector", pid=pid)
        
        path = self.resolve_program(argv[0], search_mode)
        self._logger.debug(
            f"exec {path}",
            pid=pid,
            context={'argc': len(argv), 'mode': search_mode.name}
        )
        
        try:
            self._services.exec(path, list(argv))
        except ExecError as e:
            self._logger.debug(f"exec failed: {e.message}", pid=pid, context={'path': path})
            raise
        
        # exec only comes back on failure
        raise ExecError("exec returned", pid=pid, path=path)
    
    def wait(self, pid: int, timeout_seconds: int = 0) -> WaitOutcome:
        """
        Wait for a child to terminate.
        
        Args:
            pid: Child to wait for
            timeout_seconds: 0 waits indefinitely
        
        Returns:
            How the wait ended
        """
        outcome = self._services.waitpid(pid, timeout_seconds)
        
        if outcome.reaped and pid == self._foreground_pid:
            self._foreground_pid = None
        
        if outcome.completed:
            self._logger.debug("Child finished", pid=pid)
        else:
            self._logger.info(
                "Child did not complete normally",
                pid=pid,
                context={'outcome': outcome.name}
            )
        
        return outcome
    
    def terminate(self, status: int) -> None:
        """Terminate the calling process with the given status."""
        self._logger.debug("Terminating", pid=self._services.get_pid(), context={'status': status})
        self._services.exit(status)
