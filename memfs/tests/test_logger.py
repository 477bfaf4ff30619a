"""
Logger Tests

Author: YSNRFD
Version: 1.0.0
"""

import logging
import os
import tempfile
import unittest

from memfs.logger import Logger, LogLevel, LogFormatter, get_logger
from memfs.tests import make_vfs


class TestLogger(unittest.TestCase):
    """Test the logging system."""

    def setUp(self):
        Logger.initialize(level=LogLevel.DEBUG, console_output=False)

    def tearDown(self):
        Logger.initialize(level=LogLevel.WARNING, console_output=False)

    def test_logger_creation(self):
        """Test logger creation and singleton."""
        log1 = Logger('test1')
        log2 = get_logger('test1')

        self.assertIs(log1, log2)  # Same subsystem = same instance
        self.assertEqual(log1.subsystem, 'test1')
        self.assertTrue(Logger.is_initialized())

    def test_log_levels(self):
        """Test log level ordering and lookup."""
        self.assertTrue(LogLevel.ERROR > LogLevel.INFO)
        self.assertTrue(LogLevel.DEBUG < LogLevel.WARNING)
        self.assertEqual(LogLevel.from_name('debug'), LogLevel.DEBUG)
        with self.assertRaises(ValueError):
            LogLevel.from_name('verbose')

    def test_session_logs_capture_context(self):
        """Test session logs keep the record and its context."""
        get_logger('test2').info("Hello", context={'answer': 42})

        logs = Logger.get_session_logs(subsystem='test2')
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0]['message'], 'Hello')
        self.assertEqual(logs[0]['level'], 'INFO')
        self.assertEqual(logs[0]['context'], {'answer': 42})

    def test_level_filtering(self):
        """Test records below the level are dropped."""
        Logger.initialize(level=LogLevel.WARNING, console_output=False)
        log = get_logger('test3')
        log.info("dropped")
        log.warning("kept")

        messages = [entry['message'] for entry in Logger.get_session_logs(subsystem='test3')]
        self.assertEqual(messages, ['kept'])

    def test_filesystem_logs_mutations(self):
        """Test the filesystem logs created directories."""
        vfs = make_vfs()
        vfs.mkdir('docs')

        logs = Logger.get_session_logs(level='DEBUG', subsystem='filesystem')
        created = [entry for entry in logs if entry['message'] == 'Created directory']
        self.assertEqual(created[-1]['context'], {'path': '/home/user/docs'})

    def test_log_file(self):
        """Test logging to a file creates its directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'logs', 'memfs.log')
            Logger.initialize(level=LogLevel.INFO, log_file=path, console_output=False)
            get_logger('test4').info("to file", context={'k': 'v'})
            # Release the file handler before the directory goes away
            Logger.initialize(level=LogLevel.WARNING, console_output=False)

            with open(path, encoding='utf-8') as f:
                line = f.read()

        self.assertIn('[test4] to file {k=v}', line)

    def test_formatter(self):
        """Test plain formatting with context."""
        record = logging.LogRecord('memfs.x', logging.ERROR, __file__, 1, 'failed', None, None)
        record.subsystem = 'x'
        record.context = {'path': '/a'}

        text = LogFormatter(use_colors=False).format(record)
        self.assertIn('ERROR', text)
        self.assertTrue(text.endswith('[x] failed {path=/a}'))


if __name__ == '__main__':
    unittest.main()
