"""
memfs Filesystem Module

The in-memory tree in three layers:
- Node (one file or directory)
- TreeStore (structural primitives over the node graph)
- PathResolver (path strings to nodes)
- VirtualFileSystem (the verbs a session runs)
"""

from .node import Node, FileType, Permission
from .tree import TreeStore
from .path_resolver import PathResolver, ParsedPath, Cursor, Location
from .vfs import VirtualFileSystem

__all__ = [
    'Node',
    'FileType',
    'Permission',
    'TreeStore',
    'PathResolver',
    'ParsedPath',
    'Cursor',
    'Location',
    'VirtualFileSystem',
]
