"""
Path Resolver Module

Maps path strings to nodes of the tree. Understands absolute and
relative paths, ``.``, ``..``, ``~`` (the home directory), ``-`` (the
previous directory) and repeated or trailing slashes.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Optional, List, Tuple

from .node import Node
from .tree import TreeStore
from memfs.exceptions import (
    NotFoundError,
    NotADirectoryError,
    NoPreviousDirectoryError,
)


ROOT = 'root'
HOME = 'home'
CWD = 'cwd'


@dataclass
class ParsedPath:
    """A path split into where it starts and the segments that follow."""
    anchor: str
    components: List[str]


@dataclass
class Cursor:
    """The working-directory pair of a session."""
    cwd: Node
    previous: Optional[Node] = None


@dataclass
class Location:
    """
    Where a path points for a verb that may create it.

    ``node`` is the existing node or ``None``; ``parent`` is the directory
    that holds (or would hold) an entry called ``name``.
    """
    parent: Optional[Node]
    name: str
    node: Optional[Node]


class PathResolver:
    """
    Resolves filesystem paths against a cursor.

    Resolution is read-only: it never changes the tree or the cursor,
    and relative paths always start from the cursor's *current* ``cwd``.

    Example:
        >>> resolver = PathResolver(tree, home_path='/home/user')
        >>> resolver.resolve('//home///user//', cursor) is resolver.home()
        True
    """

    def __init__(self, tree: TreeStore, home_path: str = '/home/user'):
        self._tree = tree
        self._home_path = home_path

    @property
    def home_path(self) -> str:
        return self._home_path

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into its anchor and non-empty components.

        ``.`` and ``..`` are kept; they are interpreted while walking.
        """
        if path == '~' or path.startswith('~/'):
            anchor, rest = HOME, path[1:]
        elif path.startswith('/'):
            anchor, rest = ROOT, path
        else:
            anchor, rest = CWD, path

        return ParsedPath(anchor=anchor, components=[c for c in rest.split('/') if c])

    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """
        Split a path into its parent path and final segment.

        Trailing slashes are ignored; a bare name has an empty parent
        (the current directory).

        Example:
            >>> PathResolver.split('docs/notes/')
            ('docs', 'notes')
        """
        stripped = path.rstrip('/')
        if not stripped:
            return ('/', '') if path else ('', '')
        if '/' not in stripped:
            return ('', stripped)

        parent, name = stripped.rsplit('/', 1)
        return (parent or '/', name)

    def home(self) -> Node:
        """The home directory node."""
        return self.walk(self._tree.root, self.parse(self._home_path).components, self._home_path)

    def start_of(self, parsed: ParsedPath, cursor: Cursor) -> Node:
        """The node a parsed path is walked from."""
        if parsed.anchor == ROOT:
            return self._tree.root
        if parsed.anchor == HOME:
            return self.home()
        return cursor.cwd

    def resolve(self, path: str, cursor: Cursor) -> Node:
        """
        Resolve a path to a node.

        Args:
            path: Path to resolve
            cursor: Current and previous directory of the session

        Returns:
            The node the path names

        Raises:
            NotFoundError: If a segment does not exist
            NotADirectoryError: If traversal has to descend into a file
            NoPreviousDirectoryError: For ``-`` without a previous directory
        """
        if path == '':
            return cursor.cwd

        if path == '-':
            if cursor.previous is None:
                raise NoPreviousDirectoryError()
            return cursor.previous

        parsed = self.parse(path)
        return self.walk(self.start_of(parsed, cursor), parsed.components, path)

    def walk(self, start: Node, components: List[str], path: str) -> Node:
        """Follow ``components`` from ``start``."""
        current = start

        for component in components:
            if component == '.':
                continue

            if component == '..':
                if current.parent is not None:
                    current = current.parent
                continue

            if not current.is_directory:
                raise NotADirectoryError(path, component=current.name)

            child = current.get_child(component)
            if child is None:
                raise NotFoundError(path, component=component)
            current = child

        return current

    def locate(self, path: str, cursor: Cursor) -> Location:
        """
        Find where ``path`` points, whether or not it exists yet.

        Raises:
            NotFoundError: If the parent directory does not exist
            NotADirectoryError: If the parent is a file
        """
        try:
            node = self.resolve(path, cursor)
        except NotFoundError:
            parent_path, name = self.split(path)
            parent = self.resolve(parent_path, cursor)
            if not parent.is_directory:
                raise NotADirectoryError(path, component=parent.name)
            return Location(parent=parent, name=name, node=None)

        return Location(parent=node.parent, name=node.name, node=node)
