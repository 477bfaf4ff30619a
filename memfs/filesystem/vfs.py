"""
Virtual File System (VFS) Module

The filesystem handle of a session and every verb the shell exposes:
- Navigation (pwd, cd)
- Creation (mkdir, touch, write)
- Removal (rm, rmdir)
- Copy and move (cp, mv)
- Reading and listing (cat, ls)

Every verb validates before it mutates, so a failed call leaves the tree
exactly as it was.

Author: YSNRFD
Version: 1.0.0
"""

import threading
import time
from functools import wraps
from typing import Optional, Any, List, Tuple, Union

from .node import Node, FileType
from .tree import TreeStore
from .path_resolver import PathResolver, Cursor
from memfs.core.subsystem import Subsystem, SubsystemState
from memfs.core.config_loader import Config, get_config
from memfs.exceptions import (
    FilesystemNotInitializedError,
    PathResolutionError,
    NotFoundError,
    NotADirectoryError,
    IsADirectoryError,
    OmittingDirectoryError,
    AlreadyExistsError,
    DirectoryNotEmptyError,
    CannotRemoveRootError,
    InvalidDestinationError,
    MissingOperandError,
)


def operation(func):
    """Run a verb under the filesystem lock, once the tree exists."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            if self._tree is None:
                raise FilesystemNotInitializedError(context={'operation': func.__name__})
            return func(self, *args, **kwargs)
    return wrapper


class VirtualFileSystem(Subsystem):
    """
    Virtual File System Subsystem.

    Holds the tree, the resolver and the cursor (current and previous
    directory) of one session.

    Example:
        >>> vfs = VirtualFileSystem()
        >>> vfs.initialize()
        >>> vfs.pwd()
        '/home/user'
        >>> vfs.write('Hello World', 'README.txt')
        >>> vfs.cat('README.txt')
        b'Hello World\\n'
    """

    def __init__(self, config: Optional[Config] = None):
        super().__init__('filesystem')
        self._config = config or get_config()
        self._tree: Optional[TreeStore] = None
        self._resolver: Optional[PathResolver] = None
        self._cursor: Optional[Cursor] = None
        self._lock = threading.RLock()

    def initialize(self) -> None:
        """Build the root and the home directory scaffold."""
        fs_config = self._config.filesystem
        self._logger.info("Initializing virtual filesystem")

        with self._lock:
            self._tree = TreeStore(file_mode=fs_config.file_mode, dir_mode=fs_config.dir_mode)
            self._resolver = PathResolver(self._tree, home_path=fs_config.home_path)

            current = self._tree.root
            for component in self._resolver.parse(fs_config.home_path).components:
                child = self._tree.create_node(component, FileType.DIRECTORY)
                self._tree.attach(current, child)
                current = child

            self._cursor = Cursor(cwd=current, previous=self._tree.root)

        self.set_state(SubsystemState.INITIALIZED)
        self._logger.info(
            "Virtual filesystem initialized",
            context={'home': fs_config.home_path}
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def tree(self) -> TreeStore:
        return self._tree

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    @property
    def root(self) -> Node:
        return self._tree.root

    @property
    def cwd(self) -> Node:
        return self._cursor.cwd

    @property
    def previous(self) -> Optional[Node]:
        return self._cursor.previous

    @property
    def home_path(self) -> str:
        return self._config.filesystem.home_path

    def path_of(self, node: Node) -> str:
        return self._tree.path_of(node)

    # Lookups

    @operation
    def resolve(self, path: str) -> Node:
        """Resolve ``path`` against the live cursor."""
        return self._resolver.resolve(path, self._cursor)

    def stat(self, path: str) -> Node:
        """The node at ``path``; raises if it does not exist."""
        return self.resolve(path)

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        try:
            self.resolve(path)
        except PathResolutionError:
            return False
        return True

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        return self.exists(path) and self.resolve(path).is_directory

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        return self.exists(path) and self.resolve(path).is_regular_file

    # Navigation

    @operation
    def pwd(self) -> str:
        """Absolute path of the current directory."""
        return self._tree.path_of(self._cursor.cwd)

    @operation
    def cd(self, path: str = '~') -> Node:
        """
        Change the current directory.

        Args:
            path: Target directory; ``-`` returns to the previous one

        Returns:
            The new current directory

        Raises:
            NotADirectoryError: If the target is a file
            NoPreviousDirectoryError: For ``-`` with no previous directory
        """
        target = self._resolver.resolve(path, self._cursor)
        if not target.is_directory:
            raise NotADirectoryError(path)

        self._cursor.previous = self._cursor.cwd
        self._cursor.cwd = target
        return target

    # Creation

    @operation
    def mkdir(self, path: str, parents: bool = False) -> Node:
        """
        Create a directory.

        Args:
            path: Directory to create
            parents: Create missing intermediate directories

        Returns:
            The created (or, in parents mode, already existing) directory

        Raises:
            AlreadyExistsError: If the name is taken (see
                ``filesystem.mkdir_parents_exist_ok`` for parents mode)
            NotFoundError: If the parent is missing and ``parents`` is off
            NotADirectoryError: If a path segment is a file
        """
        if not path:
            raise MissingOperandError('mkdir')

        if parents:
            return self._mkdir_parents(path)

        location = self._resolver.locate(path, self._cursor)
        if location.node is not None:
            raise AlreadyExistsError(path)

        node = self._tree.create_node(location.name, FileType.DIRECTORY)
        self._tree.attach(location.parent, node)

        self._logger.debug("Created directory", context={'path': self._tree.path_of(node)})
        return node

    def _mkdir_parents(self, path: str) -> Node:
        if path == '-':
            # Names the previous directory, never a new entry
            previous = self._resolver.resolve(path, self._cursor)
            if not self._config.filesystem.mkdir_parents_exist_ok:
                raise AlreadyExistsError(path)
            return previous

        parsed = self._resolver.parse(path)
        current = self._resolver.start_of(parsed, self._cursor)
        # Directories created directly under a pre-existing one; detaching
        # them undoes the whole call
        created: List[Node] = []
        created_any = False

        try:
            for component in parsed.components:
                if component == '.':
                    continue
                if component == '..':
                    if current.parent is not None:
                        current = current.parent
                    continue

                child = current.get_child(component)
                if child is None:
                    child = self._tree.create_node(component, FileType.DIRECTORY)
                    if not any(self._tree.is_ancestor(top, current) for top in created):
                        created.append(child)
                    self._tree.attach(current, child)
                    created_any = True
                elif not child.is_directory:
                    raise NotADirectoryError(path, component=component)
                current = child
        except NotADirectoryError:
            for top in reversed(created):
                self._tree.detach(top)
            raise

        if not created_any and not self._config.filesystem.mkdir_parents_exist_ok:
            raise AlreadyExistsError(path)

        self._logger.debug(
            "Created directory with parents",
            context={'path': self._tree.path_of(current), 'created': created_any}
        )
        return current

    @operation
    def touch(self, path: str) -> Node:
        """
        Create an empty file, or refresh the modification time of an
        existing one.

        Raises:
            IsADirectoryError: If the path names a directory
        """
        if not path:
            raise MissingOperandError('touch')

        location = self._resolver.locate(path, self._cursor)
        if location.node is not None:
            if location.node.is_directory:
                raise IsADirectoryError(path)
            location.node.touch()
            return location.node

        node = self._tree.create_node(location.name, FileType.REGULAR)
        self._tree.attach(location.parent, node)

        self._logger.debug("Created file", context={'path': self._tree.path_of(node)})
        return node

    @operation
    def write(
        self,
        text: Union[str, bytes],
        path: str,
        append: bool = False,
        newline: Optional[bool] = None
    ) -> Node:
        """
        Write text to a file, creating it if needed.

        Args:
            text: Content to store
            path: Target file
            append: Add to the existing content instead of replacing it
            newline: Append a trailing ``\\n``; ``None`` follows
                ``filesystem.trailing_newline``

        Returns:
            The written file

        Raises:
            IsADirectoryError: If the path names a directory
        """
        if not path:
            raise MissingOperandError('write')

        if newline is None:
            newline = self._config.filesystem.trailing_newline

        data = text if isinstance(text, bytes) else text.encode('utf-8')
        if newline:
            data += b'\n'

        location = self._resolver.locate(path, self._cursor)
        node = location.node
        if node is not None and node.is_directory:
            raise IsADirectoryError(path)

        if node is None:
            node = self._tree.create_node(location.name, FileType.REGULAR)
            self._tree.attach(location.parent, node)

        node.write(data, append=append)

        self._logger.debug(
            "Wrote file",
            context={'path': self._tree.path_of(node), 'bytes': len(data), 'append': append}
        )
        return node

    # Removal

    @operation
    def rm(self, path: str, recursive: bool = False) -> None:
        """
        Remove a file or directory.

        Args:
            path: Node to remove
            recursive: Allow removing a directory that has children

        Raises:
            CannotRemoveRootError: If the path names the root
            DirectoryNotEmptyError: If the directory has children and
                ``recursive`` is off
        """
        if not path:
            raise MissingOperandError('rm')

        node = self._resolver.resolve(path, self._cursor)
        if node is self._tree.root:
            raise CannotRemoveRootError(path)

        if node.is_directory and node.children and not recursive:
            raise DirectoryNotEmptyError(path)

        self._remove(node)

    @operation
    def rmdir(self, path: str) -> None:
        """
        Remove an empty directory.

        Raises:
            CannotRemoveRootError: If the path names the root
            NotADirectoryError: If the path names a file
            DirectoryNotEmptyError: If the directory has children
        """
        if not path:
            raise MissingOperandError('rmdir')

        node = self._resolver.resolve(path, self._cursor)
        if node is self._tree.root:
            raise CannotRemoveRootError(path)
        if not node.is_directory:
            raise NotADirectoryError(path)
        if node.children:
            raise DirectoryNotEmptyError(path)

        self._remove(node)

    def _remove(self, node: Node) -> None:
        parent = node.parent
        removed_path = self._tree.path_of(node)
        cwd_inside = self._tree.is_ancestor(node, self._cursor.cwd)
        previous = self._cursor.previous
        previous_inside = previous is not None and self._tree.is_ancestor(node, previous)

        self._tree.detach(node)

        # The cursor must never point into a detached subtree
        if cwd_inside:
            self._cursor.cwd = parent
        if previous_inside:
            self._cursor.previous = None

        self._logger.debug(
            "Removed node",
            context={'path': removed_path, 'type': node.file_type.name}
        )

    # Copy and move

    def _destination(self, source: Node, dest: str) -> Tuple[Node, str, Optional[Node]]:
        """
        Work out where a copy or move of ``source`` to ``dest`` lands.

        An existing directory receives the source under its own name;
        anything else names the new entry directly.

        Returns:
            (parent directory, entry name, node currently holding that name)
        """
        try:
            target = self._resolver.resolve(dest, self._cursor)
        except NotFoundError:
            target = None

        if target is not None and target.is_directory:
            parent, name = target, source.name
        elif target is not None:
            parent, name = target.parent, target.name
        else:
            location = self._resolver.locate(dest, self._cursor)
            parent, name = location.parent, location.name

        return parent, name, parent.get_child(name)

    def _check_overwrite(self, source: Node, existing: Node) -> None:
        if (
            self._config.filesystem.overwrite_files
            and source.is_regular_file
            and existing.is_regular_file
        ):
            return
        raise AlreadyExistsError(self._tree.path_of(existing))

    @operation
    def cp(self, src: str, dest: str, recursive: bool = False) -> Node:
        """
        Copy a file or, with ``recursive``, a whole directory tree.

        The copy shares nothing with the source: new nodes, independent
        content, fresh timestamps, the same permission bits.

        Returns:
            The node that now holds the copied data

        Raises:
            OmittingDirectoryError: For a directory without ``recursive``
            AlreadyExistsError: If the destination name is taken
            InvalidDestinationError: If the destination lies inside the source
        """
        if not src or not dest:
            raise MissingOperandError('cp')

        source = self._resolver.resolve(src, self._cursor)
        if source.is_directory and not recursive:
            raise OmittingDirectoryError(src)

        parent, name, existing = self._destination(source, dest)

        if existing is source or self._tree.is_ancestor(source, parent):
            raise InvalidDestinationError(src, destination=dest)

        if existing is not None:
            self._check_overwrite(source, existing)
            existing.write(source.read())
            self._logger.debug(
                "Overwrote file",
                context={'source': self._tree.path_of(source), 'destination': self._tree.path_of(existing)}
            )
            return existing

        copy = self._tree.clone(source, name)
        self._tree.attach(parent, copy)

        self._logger.debug(
            "Copied node",
            context={'source': self._tree.path_of(source), 'destination': self._tree.path_of(copy)}
        )
        return copy

    @operation
    def mv(self, src: str, dest: str) -> Node:
        """
        Move or rename a node. The node and all its descendants are
        re-parented; nothing is copied.

        Returns:
            The moved node

        Raises:
            CannotRemoveRootError: If the source is the root
            AlreadyExistsError: If the destination name is taken
            InvalidDestinationError: If the destination lies inside the source
        """
        if not src or not dest:
            raise MissingOperandError('mv')

        source = self._resolver.resolve(src, self._cursor)
        if source is self._tree.root:
            raise CannotRemoveRootError(src)

        parent, name, existing = self._destination(source, dest)

        if existing is source or self._tree.is_ancestor(source, parent):
            raise InvalidDestinationError(src, destination=dest)

        if existing is not None:
            self._check_overwrite(source, existing)
            self._tree.detach(existing)

        old_path = self._tree.path_of(source)
        self._tree.detach(source)
        source.name = name
        source.ctime = time.time()
        self._tree.attach(parent, source)

        self._logger.debug(
            "Moved node",
            context={'source': old_path, 'destination': self._tree.path_of(source)}
        )
        return source

    # Reading

    @operation
    def cat(self, path: str) -> bytes:
        """
        Return a file's content verbatim.

        Raises:
            IsADirectoryError: If the path names a directory
        """
        if not path:
            raise MissingOperandError('cat')

        node = self._resolver.resolve(path, self._cursor)
        if node.is_directory:
            raise IsADirectoryError(path)
        return node.read()

    @operation
    def readdir(self, path: Optional[str] = None, show_hidden: bool = False) -> List[Node]:
        """
        Children of a directory, sorted by name.

        Raises:
            NotADirectoryError: If the path names a file
        """
        node = self._resolver.resolve(path or '', self._cursor)
        if not node.is_directory:
            raise NotADirectoryError(path or '.')

        return [
            child for child in node.list_children()
            if show_hidden or not child.name.startswith('.')
        ]

    @operation
    def ls(
        self,
        path: Optional[str] = None,
        show_hidden: bool = False,
        long_format: bool = False
    ) -> List[str]:
        """
        List a directory, or a single file.

        Args:
            path: Target (default: current directory)
            show_hidden: Include names starting with ``.``
            long_format: One ``ls -l`` style line per entry

        Returns:
            Entry names (or long lines) sorted by name
        """
        node = self._resolver.resolve(path or '', self._cursor)
        entries = [node] if node.is_regular_file else self.readdir(path, show_hidden)

        if not long_format:
            return [entry.name for entry in entries]

        size_width = max((len(str(entry.size)) for entry in entries), default=1)
        return [self.format_long(entry, size_width) for entry in entries]

    def format_long(self, node: Node, size_width: int = 0) -> str:
        """
        Render one ``ls -l`` line:
        ``<type+perm> <links> <owner> <group> <size> <Mon> <DD> <HH:MM> <name>``.
        """
        fs_config = self._config.filesystem
        if node.is_directory:
            links = 2 + sum(1 for child in node.children.values() if child.is_directory)
        else:
            links = 1
        mtime = time.strftime('%b %d %H:%M', time.localtime(node.mtime))
        return (
            f"{node.mode_string()} {links} {fs_config.owner} {fs_config.group} "
            f"{node.size:>{size_width}} {mtime} {node.name}"
        )

    @operation
    def get_stats(self) -> dict[str, Any]:
        """Get filesystem statistics."""
        stats = self._tree.count()
        stats['cwd'] = self._tree.path_of(self._cursor.cwd)
        return stats
