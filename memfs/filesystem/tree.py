"""
Tree Store Module

Structural primitives over the node graph: node creation, attaching a
node under a directory, detaching it, walking and cloning subtrees.
Nothing here knows how to parse a path.

Author: YSNRFD
Version: 1.0.0
"""

import time
from typing import Iterator, Optional

from .node import Node, FileType, Permission
from memfs.exceptions import (
    AlreadyExistsError,
    NotADirectoryError,
    CannotRemoveRootError,
)
from memfs.logger import get_logger


class TreeStore:
    """
    Owner of the node graph.

    The root directory is created with the store and can never be
    detached. Every other node is reachable only through the ``children``
    map of its parent.

    Example:
        >>> tree = TreeStore()
        >>> home = tree.create_node('home', FileType.DIRECTORY)
        >>> tree.attach(tree.root, home)
        >>> tree.path_of(home)
        '/home'
    """

    def __init__(
        self,
        file_mode: int = Permission.DEFAULT_FILE.value,
        dir_mode: int = Permission.DEFAULT_DIR.value
    ):
        self._logger = get_logger('tree')
        self._file_mode = file_mode
        self._dir_mode = dir_mode
        self._root = self.create_node('/', FileType.DIRECTORY)

    @property
    def root(self) -> Node:
        return self._root

    def create_node(self, name: str, file_type: FileType) -> Node:
        """
        Allocate a new, detached node.

        Args:
            name: Final path segment of the node
            file_type: Regular file or directory

        Returns:
            Node with empty content, no children and current timestamps
        """
        mode = self._dir_mode if file_type == FileType.DIRECTORY else self._file_mode
        now = time.time()
        return Node(name=name, file_type=file_type, mode=mode, mtime=now, ctime=now)

    def attach(self, parent: Node, node: Node) -> None:
        """
        Insert ``node`` into ``parent``'s children.

        Raises:
            NotADirectoryError: If ``parent`` is a file
            AlreadyExistsError: If ``parent`` already has a child of that name
        """
        if not parent.is_directory:
            raise NotADirectoryError(self.path_of(parent))

        if node.name in parent.children:
            raise AlreadyExistsError(self.join(self.path_of(parent), node.name))

        node.parent = parent
        parent.children[node.name] = node
        parent.touch()

    def detach(self, node: Node) -> None:
        """
        Remove ``node`` from its parent. Descendants stay attached to
        ``node`` and disappear from the tree along with it.

        Raises:
            CannotRemoveRootError: If ``node`` has no parent
        """
        parent = node.parent
        if parent is None:
            raise CannotRemoveRootError(self.path_of(node))

        del parent.children[node.name]
        node.parent = None
        parent.touch()

    def path_of(self, node: Node) -> str:
        """Absolute path of ``node``, built by walking parent links."""
        if node is self._root:
            return '/'

        parts = []
        current: Optional[Node] = node
        while current is not None and current is not self._root:
            parts.append(current.name)
            current = current.parent

        return '/' + '/'.join(reversed(parts))

    @staticmethod
    def join(directory: str, name: str) -> str:
        return directory.rstrip('/') + '/' + name

    @staticmethod
    def is_ancestor(candidate: Node, node: Node) -> bool:
        """Whether ``candidate`` is ``node`` itself or one of its ancestors."""
        current: Optional[Node] = node
        while current is not None:
            if current is candidate:
                return True
            current = current.parent
        return False

    @staticmethod
    def walk(node: Node) -> Iterator[Node]:
        """Pre-order traversal of the subtree rooted at ``node``."""
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            # Reversed so children come out in name order
            stack.extend(reversed(current.list_children()))

    def clone(self, node: Node, name: Optional[str] = None) -> Node:
        """
        Deep-copy the subtree rooted at ``node``.

        The copy is detached, has fresh timestamps, the same permission
        bits and its own content buffers.

        Args:
            node: Subtree root to copy
            name: Name for the copy (defaults to ``node.name``)

        Returns:
            Root of the copied subtree
        """
        copy_root = self._copy_one(node, name if name is not None else node.name)

        stack = [(node, copy_root)]
        while stack:
            source, target = stack.pop()
            for child in source.children.values():
                child_copy = self._copy_one(child, child.name)
                child_copy.parent = target
                target.children[child.name] = child_copy
                if child.is_directory:
                    stack.append((child, child_copy))

        return copy_root

    def _copy_one(self, node: Node, name: str) -> Node:
        copy = self.create_node(name, node.file_type)
        copy.mode = node.mode
        if node.is_regular_file:
            copy.content = bytes(node.content)
            copy.size = len(copy.content)
        return copy

    def count(self, node: Optional[Node] = None) -> dict[str, int]:
        """Count the files, directories and content bytes below ``node``."""
        files = directories = total_bytes = 0
        for current in self.walk(node or self._root):
            if current.is_directory:
                directories += 1
            else:
                files += 1
                total_bytes += current.size
        return {
            'nodes': files + directories,
            'files': files,
            'directories': directories,
            'bytes': total_bytes,
        }
