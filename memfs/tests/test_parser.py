"""
Command Parser Tests

Author: YSNRFD
Version: 1.0.0
"""

import unittest

from memfs.exceptions import ParseError
from memfs.shell.parser import CommandParser


class TestCommandParser(unittest.TestCase):
    """Test command line parsing."""

    def setUp(self):
        self.parser = CommandParser()

    def test_parser(self):
        """Test command and arguments."""
        cmd = self.parser.parse('ls -la /home')
        self.assertEqual(cmd.command, 'ls')
        self.assertEqual(cmd.args, ['-la', '/home'])
        self.assertIsNone(cmd.redirection)

    def test_blank_and_comment(self):
        """Test blank lines and comments parse to nothing."""
        self.assertIsNone(self.parser.parse(''))
        self.assertIsNone(self.parser.parse('   '))
        self.assertIsNone(self.parser.parse('# a comment'))

    def test_quotes(self):
        """Test double and single quotes keep spaces."""
        cmd = self.parser.parse('echo "hello   world" \'single quoted\'')
        self.assertEqual(cmd.args, ['hello   world', 'single quoted'])

    def test_adjacent_quotes_join(self):
        """Test quoted and bare parts join into one word."""
        cmd = self.parser.parse('touch my"long file"name')
        self.assertEqual(cmd.args, ['mylong filename'])

    def test_empty_quoted_argument(self):
        """Test "" is an empty argument."""
        cmd = self.parser.parse('echo "" x')
        self.assertEqual(cmd.args, ['', 'x'])

    def test_escapes(self):
        """Test backslash escapes outside single quotes."""
        cmd = self.parser.parse(r'touch my\ file "say \"hi\""')
        self.assertEqual(cmd.args, ['my file', 'say "hi"'])

    def test_no_escapes_in_single_quotes(self):
        """Test single quotes are literal."""
        cmd = self.parser.parse(r"echo 'a\b'")
        self.assertEqual(cmd.args, ['a\\b'])

    def test_parser_with_redirection(self):
        """Test redirection parsing."""
        cmd = self.parser.parse('echo hello > output.txt')
        self.assertEqual(cmd.args, ['hello'])
        self.assertEqual(cmd.redirection.path, 'output.txt')
        self.assertFalse(cmd.redirection.append)

    def test_append_redirection_without_spaces(self):
        """Test >> needs no surrounding spaces."""
        cmd = self.parser.parse('echo hello>>log.txt')
        self.assertEqual(cmd.args, ['hello'])
        self.assertEqual(cmd.redirection.path, 'log.txt')
        self.assertTrue(cmd.redirection.append)

    def test_quoted_redirect_is_a_word(self):
        """Test a quoted > is an ordinary argument."""
        cmd = self.parser.parse('echo ">" x')
        self.assertEqual(cmd.args, ['>', 'x'])
        self.assertIsNone(cmd.redirection)

    def test_unclosed_quote(self):
        """Test an unclosed quote reports its position."""
        with self.assertRaises(ParseError) as ctx:
            self.parser.parse('echo "oops')
        self.assertEqual(ctx.exception.position, 5)

    def test_trailing_backslash(self):
        """Test a trailing backslash is an error."""
        with self.assertRaises(ParseError):
            self.parser.parse('echo oops\\')

    def test_missing_redirect_target(self):
        """Test > needs a target."""
        with self.assertRaises(ParseError):
            self.parser.parse('echo hi >')

    def test_double_redirect(self):
        """Test only one redirection is allowed."""
        with self.assertRaises(ParseError):
            self.parser.parse('echo hi > a > b')
        with self.assertRaises(ParseError):
            self.parser.parse('echo hi > > a')

    def test_redirect_without_command(self):
        """Test a redirection needs a command."""
        with self.assertRaises(ParseError):
            self.parser.parse('> a')

    def test_history(self):
        """Test history keeps commands but not comments."""
        self.parser.parse('pwd')
        self.parser.parse('# comment')
        self.parser.parse('ls')
        self.assertEqual(self.parser.get_history(), ['pwd', 'ls'])

        self.parser.clear_history()
        self.assertEqual(self.parser.get_history(), [])

    def test_history_is_bounded(self):
        """Test history drops the oldest lines."""
        parser = CommandParser(history_size=2)
        for line in ('one', 'two', 'three'):
            parser.parse(line)
        self.assertEqual(parser.get_history(), ['two', 'three'])


if __name__ == '__main__':
    unittest.main()
