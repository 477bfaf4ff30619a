"""
Tree Store and Node Tests

Author: YSNRFD
Version: 1.0.0
"""

import unittest

from memfs.exceptions import AlreadyExistsError, CannotRemoveRootError, NotADirectoryError
from memfs.filesystem.node import Node, FileType
from memfs.filesystem.tree import TreeStore


class TestNode(unittest.TestCase):
    """Test node operations."""

    def test_write_and_read(self):
        """Test replacing and appending file content."""
        node = Node(name='f', file_type=FileType.REGULAR)

        written = node.write(b'Hello, World!')
        self.assertEqual(written, 13)
        self.assertEqual(node.read(), b'Hello, World!')
        self.assertEqual(node.size, 13)

        node.write(b'!!', append=True)
        self.assertEqual(node.read(), b'Hello, World!!!')
        self.assertEqual(node.size, 15)

    def test_directory_rejects_write(self):
        """Test directories have no content to write."""
        node = Node(name='d', file_type=FileType.DIRECTORY)
        with self.assertRaises(ValueError):
            node.write(b'x')
        self.assertEqual(node.read(), b'')

    def test_mode_string(self):
        """Test ls-style permission rendering."""
        self.assertEqual(Node(name='f', file_type=FileType.REGULAR, mode=0o644).mode_string(), '-rw-r--r--')
        self.assertEqual(Node(name='d', file_type=FileType.DIRECTORY, mode=0o755).mode_string(), 'drwxr-xr-x')

    def test_list_children_sorted(self):
        """Test children are listed by name."""
        directory = Node(name='d', file_type=FileType.DIRECTORY)
        for name in ('b', 'c', 'a'):
            directory.children[name] = Node(name=name, file_type=FileType.REGULAR)

        self.assertEqual([child.name for child in directory.list_children()], ['a', 'b', 'c'])


class TestTreeStore(unittest.TestCase):
    """Test structural primitives of the tree."""

    def setUp(self):
        self.tree = TreeStore()

    def _mkdir(self, parent, name):
        node = self.tree.create_node(name, FileType.DIRECTORY)
        self.tree.attach(parent, node)
        return node

    def _touch(self, parent, name, data=b''):
        node = self.tree.create_node(name, FileType.REGULAR)
        node.write(data)
        self.tree.attach(parent, node)
        return node

    def test_root(self):
        """Test the root is a parentless directory."""
        root = self.tree.root
        self.assertTrue(root.is_directory)
        self.assertIsNone(root.parent)
        self.assertEqual(self.tree.path_of(root), '/')

    def test_attach_sets_parent_and_path(self):
        """Test attach links child and parent."""
        home = self._mkdir(self.tree.root, 'home')
        user = self._mkdir(home, 'user')

        self.assertIs(user.parent, home)
        self.assertIs(home.get_child('user'), user)
        self.assertEqual(self.tree.path_of(user), '/home/user')

    def test_attach_duplicate_name(self):
        """Test sibling names are unique."""
        self._mkdir(self.tree.root, 'a')
        with self.assertRaises(AlreadyExistsError):
            self._mkdir(self.tree.root, 'a')

    def test_attach_under_file(self):
        """Test files cannot hold children."""
        f = self._touch(self.tree.root, 'f')
        with self.assertRaises(NotADirectoryError):
            self._touch(f, 'g')

    def test_detach(self):
        """Test a detached subtree leaves the tree with its descendants."""
        a = self._mkdir(self.tree.root, 'a')
        b = self._mkdir(a, 'b')

        self.tree.detach(a)

        self.assertIsNone(a.parent)
        self.assertNotIn('a', self.tree.root.children)
        self.assertIs(b.parent, a)
        self.assertFalse(self.tree.is_ancestor(self.tree.root, b))

    def test_detach_root(self):
        """Test the root cannot be detached."""
        with self.assertRaises(CannotRemoveRootError):
            self.tree.detach(self.tree.root)

    def test_is_ancestor(self):
        """Test ancestry checks include the node itself."""
        a = self._mkdir(self.tree.root, 'a')
        b = self._mkdir(a, 'b')

        self.assertTrue(TreeStore.is_ancestor(a, b))
        self.assertTrue(TreeStore.is_ancestor(b, b))
        self.assertFalse(TreeStore.is_ancestor(b, a))

    def test_walk_order(self):
        """Test walk is pre-order and sorted."""
        a = self._mkdir(self.tree.root, 'a')
        self._touch(a, 'y')
        self._touch(a, 'x')
        self._mkdir(self.tree.root, 'b')

        names = [node.name for node in self.tree.walk(self.tree.root)]
        self.assertEqual(names, ['/', 'a', 'x', 'y', 'b'])

    def test_clone_is_independent(self):
        """Test a cloned subtree shares no nodes or content."""
        src = self._mkdir(self.tree.root, 'src')
        original = self._touch(src, 'f', b'data')
        src.mode = 0o700

        copy = self.tree.clone(src, 'dst')

        self.assertEqual(copy.name, 'dst')
        self.assertIsNone(copy.parent)
        self.assertEqual(copy.mode, 0o700)
        copied = copy.get_child('f')
        self.assertIsNot(copied, original)
        self.assertIs(copied.parent, copy)
        self.assertEqual(copied.read(), b'data')

        original.write(b'changed')
        self.assertEqual(copied.read(), b'data')

    def test_clone_deep_hierarchy(self):
        """Test cloning a chain deeper than the recursion limit."""
        current = self.tree.root
        for _ in range(2000):
            current = self._mkdir(current, 'd')

        copy = self.tree.clone(self.tree.root.get_child('d'))
        self.assertEqual(self.tree.count(copy)['directories'], 2000)

    def test_count(self):
        """Test node and byte totals."""
        a = self._mkdir(self.tree.root, 'a')
        self._touch(a, 'f', b'12345')
        self._touch(self.tree.root, 'g', b'12')

        stats = self.tree.count()
        self.assertEqual(stats['directories'], 2)
        self.assertEqual(stats['files'], 2)
        self.assertEqual(stats['nodes'], 4)
        self.assertEqual(stats['bytes'], 7)


if __name__ == '__main__':
    unittest.main()
