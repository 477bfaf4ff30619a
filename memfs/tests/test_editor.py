"""
Line Editor Tests

Author: YSNRFD
Version: 1.0.0
"""

import io
import unittest

from memfs.exceptions import IsADirectoryError
from memfs.shell.editor import LineEditor
from memfs.tests import make_vfs


def scripted(*lines):
    """
    An input function that replays ``lines`` and then signals end of input.

    Exception classes among ``lines`` are raised in turn, the way a
    terminal raises KeyboardInterrupt on Ctrl-C.
    """
    remaining = list(lines)

    def read(prompt):
        if not remaining:
            raise EOFError
        line = remaining.pop(0)
        if isinstance(line, type) and issubclass(line, BaseException):
            raise line
        return line

    return read


class TestLineEditor(unittest.TestCase):
    """Test the line editor."""

    def setUp(self):
        self.vfs = make_vfs()
        self.output = io.StringIO()

    def _run(self, path, *lines):
        editor = LineEditor(self.vfs, path, input_func=scripted(*lines), output=self.output)
        editor.run()
        return editor

    def test_creates_file_and_saves(self):
        """Test a missing file is created and saved on :wq."""
        self._run('notes.txt', 'first', 'second', ':wq')
        self.assertEqual(self.vfs.cat('notes.txt'), b'first\nsecond\n')

    def test_loads_existing_lines(self):
        """Test existing content is split into lines."""
        self.vfs.write('one\ntwo', 'f')
        editor = LineEditor(self.vfs, 'f', input_func=scripted(), output=self.output)
        editor.load()
        self.assertEqual(editor.lines, ['one', 'two'])

    def test_insert_at_top(self):
        """Test i inserts before the first line."""
        self._run('f', 'second', 'i first', ':wq')
        self.assertEqual(self.vfs.cat('f'), b'first\nsecond\n')

    def test_append_after_line(self):
        """Test a inserts after the given line."""
        self._run('f', 'one', 'three', 'a 1 two', ':wq')
        self.assertEqual(self.vfs.cat('f'), b'one\ntwo\nthree\n')

    def test_edit_line(self):
        """Test e replaces a line."""
        self._run('f', 'one', 'e 1 uno', ':wq')
        self.assertEqual(self.vfs.cat('f'), b'uno\n')

    def test_delete_line(self):
        """Test d deletes a line."""
        self._run('f', 'one', 'two', 'd 1', ':wq')
        self.assertEqual(self.vfs.cat('f'), b'two\n')

    def test_invalid_line_number(self):
        """Test out-of-range and malformed line numbers."""
        editor = self._run('f', 'one', 'd 5', 'e x y', 'a 0 z', ':q')
        self.assertEqual(editor.lines, ['one'])
        self.assertEqual(self.output.getvalue().count('Invalid line number'), 3)

    def test_quit_discards(self):
        """Test :q leaves the file untouched."""
        self.vfs.write('keep', 'f')
        self._run('f', 'more', ':q')
        self.assertEqual(self.vfs.cat('f'), b'keep\n')

    def test_end_of_input_quits(self):
        """Test end of input quits without saving."""
        editor = self._run('f', 'unsaved')
        self.assertTrue(editor.modified)
        self.assertEqual(self.vfs.cat('f'), b'')

    def test_save_empty_buffer(self):
        """Test an empty buffer saves an empty file."""
        self.vfs.write('gone', 'f')
        self._run('f', 'd 1', ':w', ':q')
        self.assertEqual(self.vfs.cat('f'), b'')

    def test_single_empty_line_survives_reload(self):
        """Test a buffer holding one empty line reads back as one empty line."""
        self._run('f', '', ':wq')
        self.assertEqual(self.vfs.cat('f'), b'\n')

        editor = LineEditor(self.vfs, 'f', input_func=scripted(), output=self.output)
        editor.load()
        self.assertEqual(editor.lines, [''])

    def test_interrupt_quits_without_saving(self):
        """Test Ctrl-C leaves the editor and keeps the file as it was."""
        self.vfs.write('keep', 'f')
        editor = self._run('f', 'more', KeyboardInterrupt, 'never read', ':wq')

        self.assertEqual(editor.lines, ['keep', 'more'])
        self.assertEqual(self.vfs.cat('f'), b'keep\n')
        self.assertIn('^C\n', self.output.getvalue())

    def test_print_and_help(self):
        """Test p and :h output."""
        self._run('f', 'alpha', 'p', ':h', ':q')
        output = self.output.getvalue()
        self.assertIn('  1 | alpha', output)
        self.assertIn('Editor commands:', output)

    def test_unknown_colon_command(self):
        """Test unknown colon commands are reported."""
        self._run('f', ':x', ':q')
        self.assertIn('Unknown command: :x', self.output.getvalue())

    def test_directory(self):
        """Test editing a directory fails."""
        self.vfs.mkdir('d')
        with self.assertRaises(IsADirectoryError):
            self._run('d', ':q')


if __name__ == '__main__':
    unittest.main()
