"""
Entry Point Tests

Author: YSNRFD
Version: 1.0.0
"""

import io
import json
import os
import tempfile
import unittest
from unittest import mock

from memfs.core.config_loader import ConfigLoader
from memfs.logger import Logger, LogLevel
from memfs.main import main


class TestMain(unittest.TestCase):
    """Test the memfs command."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        ConfigLoader().reset()

    def tearDown(self):
        ConfigLoader().reset()
        Logger.initialize(level=LogLevel.WARNING, console_output=False)
        self.tmpdir.cleanup()

    def _file(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_script(self):
        """Test running a script prints its output."""
        script = self._file('session.txt', 'mkdir docs\ncd docs\npwd\n')
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main(['--script', script])
        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue(), '/home/user/docs\n')

    def test_script_with_config(self):
        """Test a config file and log level are applied."""
        config = self._file('memfs.json', json.dumps({
            'filesystem': {'home_path': '/users/alice'},
            'logging': {'console_output': False},
        }))
        script = self._file('session.txt', 'pwd\n')
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main(['--config', config, '--script', script, '--log-level', 'debug'])
        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue(), '/users/alice\n')

    def test_script_exit_code(self):
        """Test the exit code of the last command is returned."""
        script = self._file('session.txt', 'cat missing\n')
        with mock.patch('sys.stdout', new_callable=io.StringIO):
            self.assertEqual(main(['--script', script]), 1)

    def test_bad_config(self):
        """Test a broken config file is reported."""
        config = self._file('memfs.json', '{broken')
        with mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
            self.assertEqual(main(['--config', config]), 1)
        self.assertIn('Invalid JSON', stderr.getvalue())

    def test_missing_script(self):
        """Test an unreadable script is reported."""
        with mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
            self.assertEqual(main(['--script', os.path.join(self.tmpdir.name, 'nope')]), 1)
        self.assertIn('cannot read script', stderr.getvalue())


if __name__ == '__main__':
    unittest.main()
