"""
minish Filesystem Module

Path resolution for commands, scripts and directory changes.
"""

from .path_resolver import PathResolver, SEPARATOR, SEARCH_PATH_DELIMITER

__all__ = [
    'PathResolver',
    'SEPARATOR',
    'SEARCH_PATH_DELIMITER',
]
