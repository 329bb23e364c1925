"""
Path Resolver Module

Turns user-typed command names, script names and ``cd`` targets into
absolute paths.

Version: 1.0.0
"""

from typing import Callable, List

SEPARATOR = '/'
SEARCH_PATH_DELIMITER = ':'


class PathResolver:
    """
    Resolves paths the way the shell interprets them.
    
    Handles:
    - Absolute paths (copied verbatim)
    - Search-path lookup for commands and scripts
    - Paths relative to the working directory
    
    No normalization is done: ``.`` and ``..`` components are left
    for the operating system to interpret.
    """
    
    def __init__(self, file_exists: Callable[[str], bool]):
        """
        Args:
            file_exists: Predicate used to test search-path candidates
        """
        self._file_exists = file_exists
    
    @staticmethod
    def is_absolute(path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith(SEPARATOR)
    
    @staticmethod
    def join(directory: str, name: str) -> str:
        """Join a directory and a name with exactly one separator added."""
        return directory + SEPARATOR + name
    
    @staticmethod
    def split_search_path(search_path: str) -> List[str]:
        """
        Split a colon-separated search path into its directories.
        
        Empty entries are kept; they produce candidates such as
        ``/ls`` exactly as a plain string join would.
        
        Args:
            search_path: e.g. "/bin:/usr/bin"
        
        Returns:
            Directories in search order
        """
        if not search_path:
            return []
        return search_path.split(SEARCH_PATH_DELIMITER)
    
    @staticmethod
    def absolute_path(path: str, pwd: str) -> str:
        """
        Make a path absolute against the working directory.
        
        This is the simple rule used by ``cd``: the search path is
        never consulted.
        
        Args:
            path: Path to resolve
            pwd: Current working directory
        
        Returns:
            ``path`` if already absolute, else ``pwd + "/" + path``
        """
        if PathResolver.is_absolute(path):
            return path
        return PathResolver.join(pwd, path)
    
    def resolve_command_path(self, raw_path: str, pwd: str, search_path: str) -> str:
        """
        Resolve a command or script name to a path.
        
        Args:
            raw_path: Name as typed by the user
            pwd: Current working directory
            search_path: Colon-separated list of directories
        
        Returns:
            The first search-path candidate that exists, otherwise
            ``pwd + "/" + raw_path``. The final fallback is returned
            without checking that it exists; exec reports the error.
        """
        if self.is_absolute(raw_path):
            return raw_path
        
        for directory in self.split_search_path(search_path):
            candidate = self.join(directory, raw_path)
            if self._file_exists(candidate):
                return candidate
        
        return self.join(pwd, raw_path)
