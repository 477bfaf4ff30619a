"""
Node Module

A node is one entry of the in-memory tree: either a regular file holding
bytes or a directory holding named children.

Author: YSNRFD
Version: 1.0.0
"""

import time
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Optional, List


class FileType(Enum):
    """Types of nodes."""
    REGULAR = 1
    DIRECTORY = 2


class Permission(Flag):
    """File permission bits."""
    OWNER_READ = 0o400
    OWNER_WRITE = 0o200
    OWNER_EXEC = 0o100

    GROUP_READ = 0o040
    GROUP_WRITE = 0o020
    GROUP_EXEC = 0o010

    OTHER_READ = 0o004
    OTHER_WRITE = 0o002
    OTHER_EXEC = 0o001

    OWNER_RW = OWNER_READ | OWNER_WRITE
    OWNER_RWX = OWNER_READ | OWNER_WRITE | OWNER_EXEC

    DEFAULT_FILE = OWNER_RW | GROUP_READ | OTHER_READ
    DEFAULT_DIR = OWNER_RWX | GROUP_READ | GROUP_EXEC | OTHER_READ | OTHER_EXEC


# Display order of the nine rwx characters in a mode string
_MODE_BITS = (
    (Permission.OWNER_READ, 'r'), (Permission.OWNER_WRITE, 'w'), (Permission.OWNER_EXEC, 'x'),
    (Permission.GROUP_READ, 'r'), (Permission.GROUP_WRITE, 'w'), (Permission.GROUP_EXEC, 'x'),
    (Permission.OTHER_READ, 'r'), (Permission.OTHER_WRITE, 'w'), (Permission.OTHER_EXEC, 'x'),
)


@dataclass(eq=False)
class Node:
    """
    A file or directory in the virtual tree.

    Nodes compare by identity. ``parent`` is a back-reference only: a
    node belongs to the ``children`` map of its parent, and that map is
    the one place a node is removed from.
    """

    name: str
    file_type: FileType
    mode: int = 0o644
    size: int = 0

    mtime: float = field(default_factory=time.time)
    ctime: float = field(default_factory=time.time)

    content: bytes = field(default=b'', repr=False)
    children: dict[str, 'Node'] = field(default_factory=dict, repr=False)
    parent: Optional['Node'] = field(default=None, repr=False)

    @property
    def is_directory(self) -> bool:
        return self.file_type == FileType.DIRECTORY

    @property
    def is_regular_file(self) -> bool:
        return self.file_type == FileType.REGULAR

    def touch(self) -> None:
        """Update the modification time."""
        self.mtime = time.time()

    # File operations

    def read(self) -> bytes:
        """Return the file content; directories have none."""
        if not self.is_regular_file:
            return b''
        return self.content

    def write(self, data: bytes, append: bool = False) -> int:
        """
        Replace or extend the file content.

        Args:
            data: Bytes to store
            append: Add to the end instead of replacing

        Returns:
            Number of bytes written
        """
        if not self.is_regular_file:
            raise ValueError("Not a regular file")

        self.content = self.content + data if append else bytes(data)
        self.size = len(self.content)
        self.mtime = time.time()
        self.ctime = self.mtime

        return len(data)

    # Directory operations

    def get_child(self, name: str) -> Optional['Node']:
        """Look up a child by name."""
        if not self.is_directory:
            return None
        return self.children.get(name)

    def list_children(self) -> List['Node']:
        """Children sorted by name."""
        if not self.is_directory:
            return []
        return [self.children[name] for name in sorted(self.children)]

    def mode_string(self) -> str:
        """Render type and permissions the way ``ls -l`` does."""
        type_char = 'd' if self.is_directory else '-'
        perms = ''.join(
            char if self.mode & bit.value else '-'
            for bit, char in _MODE_BITS
        )
        return type_char + perms

