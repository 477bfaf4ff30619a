"""
memfs - An in-memory hierarchical filesystem with a Unix-style shell

This package provides a virtual filesystem held entirely in memory and
an interactive shell to drive it, implemented in Python 3.10+ using
only the standard library.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

# Import main components for convenience
from .filesystem.vfs import VirtualFileSystem
from .shell.shell import Shell, create_shell

__all__ = [
    'VirtualFileSystem',
    'Shell',
    'create_shell',
]
