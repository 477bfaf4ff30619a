"""
memfs Shell Module

The interactive command-line shell over the virtual filesystem.

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import Callable, Optional, TextIO

from .parser import CommandParser, ParsedCommand
from .builtins import BuiltinCommands, CommandResult, render_error
from memfs.core.subsystem import Subsystem, SubsystemState
from memfs.core.config_loader import Config, get_config
from memfs.exceptions import FileSystemException, ParseError
from memfs.filesystem.vfs import VirtualFileSystem


class Shell(Subsystem):
    """
    memfs Interactive Shell.

    Provides:
    - Command parsing
    - Built-in commands
    - Output redirection
    - Command history

    Input is read through ``input_func`` and everything the user sees
    goes to ``output``, so a session can be scripted in tests.

    Example:
        >>> shell = Shell(vfs)
        >>> shell.run()
    """

    def __init__(
        self,
        vfs: VirtualFileSystem,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None
    ):
        super().__init__('shell')
        self._vfs = vfs
        self._input = input_func
        self._output = output if output is not None else sys.stdout
        self._config: Config = vfs.config
        self._parser = CommandParser(history_size=self._config.shell.history_size)
        self._builtins = BuiltinCommands(self)
        self._exiting = False
        self._last_exit_code = 0

    def initialize(self) -> None:
        """Make sure the filesystem is ready."""
        if self._vfs.state == SubsystemState.CREATED:
            self._vfs.initialize()
        self.set_state(SubsystemState.INITIALIZED)

    @property
    def vfs(self) -> VirtualFileSystem:
        return self._vfs

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def input_func(self) -> Callable[[str], str]:
        return self._input

    @property
    def output(self) -> TextIO:
        return self._output

    @property
    def exiting(self) -> bool:
        return self._exiting

    @property
    def last_exit_code(self) -> int:
        return self._last_exit_code

    def run(self) -> int:
        """
        Run the interactive shell.

        This is the main REPL loop; it ends on ``exit`` or end of input.

        Returns:
            Exit code of the last command
        """
        if self.state == SubsystemState.CREATED:
            self.initialize()
        self.start()

        self._write(self._config.shell.welcome_message)

        while not self._exiting:
            try:
                line = self._input(self.get_prompt())
            except EOFError:
                self._output.write('\n')
                break
            except KeyboardInterrupt:
                self._write('^C')
                continue

            self.execute_line(line)

        self.stop()
        return self._last_exit_code

    def get_prompt(self) -> str:
        """Generate the shell prompt, ``user@host:cwd$ ``."""
        shell_config = self._config.shell
        cwd = self._vfs.pwd()
        home = self._vfs.home_path

        if cwd == home:
            cwd_display = '~'
        elif cwd.startswith(home + '/'):
            cwd_display = '~' + cwd[len(home):]
        else:
            cwd_display = cwd

        return f"{shell_config.user}@{shell_config.hostname}:{cwd_display}$ "

    def execute_line(self, line: str) -> int:
        """
        Execute a command line.

        Args:
            line: Command line string

        Returns:
            Exit code
        """
        try:
            cmd = self._parser.parse(line)
        except ParseError as e:
            self._logger.debug("Parse error", context=e.context)
            self._write(f"memfs: syntax error: {e.message}")
            self._last_exit_code = 2
            return 2

        if cmd is None:
            return 0

        result = self._builtins.execute(cmd.command, cmd.args)
        self._emit(cmd, result)

        if result.should_exit:
            self.request_exit()

        self._last_exit_code = result.exit_code
        return result.exit_code

    def _emit(self, cmd: ParsedCommand, result: CommandResult) -> None:
        """Send a command's output to the terminal or its redirection target."""
        if cmd.redirection is None:
            self._write(result.output)
        else:
            target = cmd.redirection
            try:
                self._vfs.write(result.output, target.path, append=target.append, newline=False)
            except FileSystemException as e:
                result.errors.append(render_error(cmd.command, e))
                result.exit_code = 1

        for error in result.errors:
            self._write(error)

    def _write(self, text: str) -> None:
        """Write to the terminal, terminating the text with a newline."""
        if not text:
            return
        if not text.endswith('\n'):
            text += '\n'
        self._output.write(text)
        self._output.flush()

    def request_exit(self) -> None:
        """Request the shell to exit."""
        self._exiting = True

    def run_script(self, script: str) -> int:
        """
        Run a script (multiple commands).

        Args:
            script: Script content

        Returns:
            Last exit code
        """
        if self.state == SubsystemState.CREATED:
            self.initialize()

        exit_code = 0

        for line in script.splitlines():
            line = line.strip()
            if line and not line.startswith('#'):
                exit_code = self.execute_line(line)
            if self._exiting:
                break

        return exit_code


def create_shell(
    config: Optional[Config] = None,
    input_func: Callable[[str], str] = input,
    output: Optional[TextIO] = None
) -> Shell:
    """Factory function to create a shell over a fresh filesystem."""
    vfs = VirtualFileSystem(config or get_config())
    vfs.initialize()
    shell = Shell(vfs, input_func=input_func, output=output)
    shell.initialize()
    return shell
