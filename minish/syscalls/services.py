"""
Kernel Services Module

The operating-system primitives the interpreter is built on, behind a
single interface: line reads and writes on file descriptors, file and
directory queries, the working directory and search path, and
fork/exec/wait/exit.

``HostKernelServices`` implements them with the ``os`` module.

Version: 1.0.0
"""

import os
import signal
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import List, MutableMapping, Optional

from minish.exceptions import (
    ExecError,
    ForkError,
    FileNotFoundError,
    NotADirectoryError,
)
from minish.logger import get_logger
from minish.process.states import WaitOutcome


FD_STDIN = 0
FD_STDOUT = 1
FD_STDERR = 2

# Seconds between polls when waiting with a timeout
WAIT_POLL_INTERVAL = 0.05


class KernelServices(ABC):
    """
    Interface to the operating system used by the interpreter.
    
    Implementations must not buffer reads beyond the current line:
    unread input stays in the stream for child processes.
    """
    
    # Byte-stream I/O
    
    @abstractmethod
    def read_line(self, fd: int, offset: int, capacity: int) -> bytes:
        """
        Read up to and including the next newline.
        
        Args:
            fd: Source descriptor
            offset: Bytes already consumed from this source
            capacity: Maximum number of bytes to return
        
        Returns:
            The bytes read; empty when the source is exhausted
        """
    
    @abstractmethod
    def write(self, fd: int, text: str) -> None:
        """Write text to a descriptor without buffering."""
    
    # Files and directories
    
    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Check that path names an existing file."""
    
    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check that path names an existing directory."""
    
    @abstractmethod
    def open_read_only(self, path: str) -> int:
        """
        Open a file for reading.
        
        Raises:
            FileNotFoundError: If the file cannot be opened
        """
    
    @abstractmethod
    def close(self, fd: int) -> None:
        """Close a descriptor returned by open_read_only."""
    
    # Environment
    
    @abstractmethod
    def get_pwd(self) -> str:
        """Get the process-wide working directory."""
    
    @abstractmethod
    def set_pwd(self, path: str) -> None:
        """
        Publish a new working directory to the environment.
        
        Raises:
            NotADirectoryError: If the directory cannot be entered
        """
    
    @abstractmethod
    def get_path(self) -> str:
        """Get the colon-separated search path."""
    
    # Processes
    
    @abstractmethod
    def get_pid(self) -> int:
        """Get the id of the calling process."""
    
    @abstractmethod
    def fork(self) -> int:
        """
        Create a child process.
        
        Returns:
            0 in the child, the child's pid in the parent
        
        Raises:
            ForkError: If no process can be created
        """
    
    @abstractmethod
    def exec(self, path: str, argv: List[str]) -> None:
        """
        Replace the calling process image with the program at path.
        
        Never returns on success.
        
        Raises:
            ExecError: If the image could not be replaced
        """
    
    @abstractmethod
    def waitpid(self, pid: int, timeout_seconds: int = 0) -> WaitOutcome:
        """
        Block until the child terminates or the timeout elapses.
        
        A timeout of 0 waits indefinitely.
        """
    
    @abstractmethod
    def exit(self, status: int) -> None:
        """Terminate the calling process immediately."""


class HostKernelServices(KernelServices):
    """
    KernelServices backed by the host operating system.
    
    Example:
        >>> services = HostKernelServices()
        >>> services.write(FD_STDOUT, services.get_pwd() + "\\n")
    """
    
    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ
        self._logger = get_logger('syscalls')
    
    @staticmethod
    def _is_seekable(fd: int) -> bool:
        try:
            os.lseek(fd, 0, os.SEEK_CUR)
        except OSError:
            return False
        return True
    
    def read_line(self, fd: int, offset: int, capacity: int) -> bytes:
        # Seekable sources are read from the given position; the
        # descriptor offset still advances so children see the rest.
        if self._is_seekable(fd):
            os.lseek(fd, offset, os.SEEK_SET)
        
        data = bytearray()
        while len(data) < capacity:
            byte = os.read(fd, 1)
            if not byte:
                break
            data += byte
            if byte == b'\n':
                break
        return bytes(data)
    
    def write(self, fd: int, text: str) -> None:
        data = text.encode('utf-8', 'surrogateescape')
        while data:
            written = os.write(fd, data)
            data = data[written:]
    
    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)
    
    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)
    
    def open_read_only(self, path: str) -> int:
        if os.path.isdir(path):
            raise FileNotFoundError(path, context={'reason': 'is a directory'})
        try:
            fd = os.open(path, os.O_RDONLY)
        except OSError as e:
            raise FileNotFoundError(path, context={'reason': e.strerror})
        self._logger.debug(f"Opened {path}", context={'fd': fd})
        return fd
    
    def close(self, fd: int) -> None:
        os.close(fd)
    
    def get_pwd(self) -> str:
        try:
            return os.getcwd()
        except OSError:
            # Working directory was removed underneath us
            return self._environ.get('PWD', '/')
    
    def set_pwd(self, path: str) -> None:
        try:
            os.chdir(path)
        except OSError as e:
            raise NotADirectoryError(path, context={'reason': e.strerror})
        self._environ['PWD'] = path
    
    def get_path(self) -> str:
        return self._environ.get('PATH', '')
    
    def get_pid(self) -> int:
        return os.getpid()
    
    def fork(self) -> int:
        try:
            pid = os.fork()
        except OSError as e:
            raise ForkError(
                e.strerror or str(e),
                parent_pid=os.getpid(),
                errno=e.errno
            )
        return pid
    
    def exec(self, path: str, argv: List[str]) -> None:
        try:
            os.execve(path, argv, self._environ)
        except (OSError, ValueError) as e:
            message = getattr(e, 'strerror', None) or str(e)
            raise ExecError(message, pid=os.getpid(), path=path)
    
    def waitpid(self, pid: int, timeout_seconds: int = 0) -> WaitOutcome:
        """
        Wait for the child, handing any SIGINT we receive on to it.

        The wait itself is never abandoned because of Ctrl-C: the child
        decides whether the interrupt ends it, and is reaped either way.
        """
        try:
            with self._forward_interrupts(pid):
                if timeout_seconds <= 0:
                    _, status = os.waitpid(pid, 0)
                else:
                    deadline = time.monotonic() + timeout_seconds
                    while True:
                        waited, status = os.waitpid(pid, os.WNOHANG)
                        if waited != 0:
                            break
                        if time.monotonic() >= deadline:
                            return WaitOutcome.TIMEOUT
                        time.sleep(WAIT_POLL_INTERVAL)
        except ChildProcessError:
            return WaitOutcome.NO_SUCH_PROCESS
        except KeyboardInterrupt:
            return WaitOutcome.INTERRUPTED
        
        if os.WIFSIGNALED(status):
            self._logger.debug(
                "Child killed by signal",
                pid=pid,
                context={'signal': os.WTERMSIG(status)}
            )
            return WaitOutcome.KILLED
        
        self._logger.debug(
            "Child exited",
            pid=pid,
            context={'status': os.waitstatus_to_exitcode(status)}
        )
        return WaitOutcome.SUCCESS
    
    def exit(self, status: int) -> None:
        os._exit(status)

    @contextmanager
    def _forward_interrupts(self, pid: int):
        """Route SIGINT to the child while the block runs."""
        def forward(signum, frame):
            self._logger.debug("Forwarding interrupt", pid=pid)
            try:
                os.kill(pid, signum)
            except ProcessLookupError:
                pass  # already exited, the wait will collect it

        try:
            previous = signal.signal(signal.SIGINT, forward)
        except ValueError:
            # Signal handlers can only be set from the main thread
            previous = None
            installed = False
        else:
            installed = True

        try:
            yield
        finally:
            if installed:
                signal.signal(
                    signal.SIGINT,
                    previous if previous is not None else signal.default_int_handler
                )
