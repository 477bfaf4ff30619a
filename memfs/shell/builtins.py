"""
Shell Built-in Commands

Implements the commands of the memfs shell on top of the virtual
filesystem.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Set, Tuple

from memfs.exceptions import (
    FileSystemException,
    MissingOperandError,
    NotFoundError,
    ShellException,
    CommandNotFoundError,
    TooManyArgumentsError,
    InvalidOptionError,
)
from memfs.logger import get_logger
from .editor import LineEditor


HELP_TEXT = """memfs shell - Built-in Commands

Navigation:
  pwd                   Print working directory
  cd [dir]              Change directory (~ home, - previous)

Files and Directories:
  ls [-l] [-a] [path]   List directory contents
  mkdir [-p] dir...     Create directories
  rmdir dir...          Remove empty directories
  touch file...         Create empty files or update timestamps
  rm [-r] [-f] path...  Remove files or directories
  cp [-r] src dest      Copy a file or directory
  mv src dest           Move or rename
  cat file...           Display file contents
  echo [text...]        Print text (use > or >> to write a file)
  edit file             Edit a file with the line editor

Shell:
  history               Display command history
  clear                 Clear the screen
  help                  Display this help
  exit, quit            Exit the shell
"""

CLEAR_SEQUENCE = '\033[2J\033[H'


@dataclass
class CommandResult:
    """Outcome of one built-in command."""
    output: str = ''
    errors: List[str] = field(default_factory=list)
    exit_code: int = 0
    should_exit: bool = False

    @classmethod
    def failure(cls, message: str, exit_code: int = 1) -> 'CommandResult':
        return cls(errors=[message], exit_code=exit_code)


def render_error(command: str, error: Exception) -> str:
    """
    Render an exception as a Unix-style message,
    ``<cmd>: <operand>: <reason>``.
    """
    if isinstance(error, MissingOperandError):
        return error.message
    if isinstance(error, FileSystemException):
        if error.path:
            return f"{command}: {error.path}: {error.reason}"
        return f"{command}: {error.reason}"
    if isinstance(error, ShellException):
        return error.message
    return f"{command}: {error}"


def parse_flags(command: str, args: List[str], allowed: str) -> Tuple[Set[str], List[str]]:
    """
    Split ``args`` into single-letter flags and operands.

    Combined flags (``-la``) are expanded, a lone ``-`` is an operand
    and ``--`` ends flag parsing.

    Raises:
        InvalidOptionError: For a letter not in ``allowed``
    """
    flags: Set[str] = set()
    operands: List[str] = []
    parsing = True

    for arg in args:
        if parsing and arg == '--':
            parsing = False
        elif parsing and arg.startswith('-') and len(arg) > 1:
            for letter in arg[1:]:
                if letter not in allowed:
                    raise InvalidOptionError(command, letter)
                flags.add(letter)
        else:
            operands.append(arg)

    return flags, operands


class BuiltinCommands:
    """
    Built-in shell commands.

    Every handler takes the argument list and returns a
    ``CommandResult``; ``execute`` turns any exception into error text so
    a failing command never ends the session.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._logger = get_logger('builtins')
        self._commands: dict[str, Callable[[List[str]], CommandResult]] = {
            'pwd': self.cmd_pwd,
            'cd': self.cmd_cd,
            'ls': self.cmd_ls,
            'mkdir': self.cmd_mkdir,
            'rmdir': self.cmd_rmdir,
            'touch': self.cmd_touch,
            'rm': self.cmd_rm,
            'cp': self.cmd_cp,
            'mv': self.cmd_mv,
            'cat': self.cmd_cat,
            'echo': self.cmd_echo,
            'edit': self.cmd_edit,
            'history': self.cmd_history,
            'clear': self.cmd_clear,
            'help': self.cmd_help,
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
        }

    @property
    def vfs(self):
        return self._shell.vfs

    def get_commands(self) -> dict[str, Callable[[List[str]], CommandResult]]:
        """Get all built-in commands."""
        return dict(self._commands)

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: List[str]) -> CommandResult:
        """
        Execute a built-in command.

        Args:
            name: Command name
            args: Command arguments

        Returns:
            The command result; exit code 127 for an unknown command
        """
        cmd = self._commands.get(name)
        if cmd is None:
            return CommandResult.failure(render_error(name, CommandNotFoundError(name)), 127)

        try:
            return cmd(args)
        except InvalidOptionError as e:
            return CommandResult.failure(render_error(name, e), 2)
        except (FileSystemException, ShellException) as e:
            self._logger.debug(
                "Command failed",
                context={'command': name, 'error_code': e.error_code}
            )
            return CommandResult.failure(render_error(name, e))
        except Exception as e:
            self._logger.exception(f"Unexpected error in {name}", exc=e)
            return CommandResult.failure(render_error(name, e))

    def _each(self, name: str, operands: List[str], action: Callable[[str], Any]) -> CommandResult:
        """
        Run ``action`` per operand, carrying on past failures. String
        results are collected as output.
        """
        result = CommandResult()
        for operand in operands:
            try:
                output = action(operand)
                if isinstance(output, str):
                    result.output += output
            except FileSystemException as e:
                result.errors.append(render_error(name, e))
                result.exit_code = 1
        return result

    @staticmethod
    def _no_more_than(name: str, operands: List[str], limit: int) -> None:
        if len(operands) > limit:
            raise TooManyArgumentsError(name)

    # Command implementations

    def cmd_pwd(self, args: List[str]) -> CommandResult:
        """Print working directory."""
        _, operands = parse_flags('pwd', args, '')
        self._no_more_than('pwd', operands, 0)
        return CommandResult(output=self.vfs.pwd() + '\n')

    def cmd_cd(self, args: List[str]) -> CommandResult:
        """Change directory."""
        _, operands = parse_flags('cd', args, '')
        self._no_more_than('cd', operands, 1)
        self.vfs.cd(operands[0] if operands else '~')
        return CommandResult()

    def cmd_ls(self, args: List[str]) -> CommandResult:
        """List directory contents."""
        flags, operands = parse_flags('ls', args, 'la')
        long_format = 'l' in flags
        show_hidden = 'a' in flags
        targets = operands or ['']
        headers = len(targets) > 1
        sections: List[str] = []

        def list_one(path: str) -> None:
            lines = self.vfs.ls(path, show_hidden=show_hidden, long_format=long_format)
            text = ''.join(line + '\n' for line in lines)
            if headers and self.vfs.is_directory(path):
                text = f"{path}:\n{text}"
            sections.append(text)

        result = self._each('ls', targets, list_one)
        # Sections of a multi-target listing are separated by a blank line
        result.output = '\n'.join(sections)
        return result

    def cmd_mkdir(self, args: List[str]) -> CommandResult:
        """Create directories."""
        flags, operands = parse_flags('mkdir', args, 'p')
        if not operands:
            raise MissingOperandError('mkdir')
        parents = 'p' in flags
        return self._each('mkdir', operands, lambda path: self.vfs.mkdir(path, parents=parents))

    def cmd_rmdir(self, args: List[str]) -> CommandResult:
        """Remove empty directories."""
        _, operands = parse_flags('rmdir', args, '')
        if not operands:
            raise MissingOperandError('rmdir')
        return self._each('rmdir', operands, self.vfs.rmdir)

    def cmd_touch(self, args: List[str]) -> CommandResult:
        """Create empty files or update timestamps."""
        _, operands = parse_flags('touch', args, '')
        if not operands:
            raise MissingOperandError('touch')
        return self._each('touch', operands, self.vfs.touch)

    def cmd_rm(self, args: List[str]) -> CommandResult:
        """Remove files or directories."""
        flags, operands = parse_flags('rm', args, 'rRf')
        recursive = 'r' in flags or 'R' in flags
        force = 'f' in flags

        if not operands:
            if force:
                return CommandResult()
            raise MissingOperandError('rm')

        def remove(path: str) -> str:
            try:
                self.vfs.rm(path, recursive=recursive)
            except NotFoundError:
                if not force:
                    raise
            return ''

        return self._each('rm', operands, remove)

    def cmd_cp(self, args: List[str]) -> CommandResult:
        """Copy a file or directory."""
        flags, operands = parse_flags('cp', args, 'rR')
        if len(operands) < 2:
            raise MissingOperandError('cp')
        self._no_more_than('cp', operands, 2)
        self.vfs.cp(operands[0], operands[1], recursive='r' in flags or 'R' in flags)
        return CommandResult()

    def cmd_mv(self, args: List[str]) -> CommandResult:
        """Move or rename a file or directory."""
        _, operands = parse_flags('mv', args, '')
        if len(operands) < 2:
            raise MissingOperandError('mv')
        self._no_more_than('mv', operands, 2)
        self.vfs.mv(operands[0], operands[1])
        return CommandResult()

    def cmd_cat(self, args: List[str]) -> CommandResult:
        """Display file contents."""
        _, operands = parse_flags('cat', args, '')
        if not operands:
            raise MissingOperandError('cat')
        return self._each(
            'cat', operands,
            lambda path: self.vfs.cat(path).decode('utf-8', errors='replace')
        )

    def cmd_echo(self, args: List[str]) -> CommandResult:
        """Print arguments."""
        return CommandResult(output=' '.join(args) + '\n')

    def cmd_edit(self, args: List[str]) -> CommandResult:
        """Edit a file with the line editor."""
        _, operands = parse_flags('edit', args, '')
        if not operands:
            raise MissingOperandError('edit')
        self._no_more_than('edit', operands, 1)

        editor = LineEditor(
            self.vfs,
            operands[0],
            input_func=self._shell.input_func,
            output=self._shell.output
        )
        editor.run()
        return CommandResult()

    def cmd_history(self, args: List[str]) -> CommandResult:
        """Display command history."""
        self._no_more_than('history', args, 0)
        history = self._shell.parser.get_history()
        return CommandResult(output=''.join(
            f"{number:5d}  {line}\n" for number, line in enumerate(history, start=1)
        ))

    def cmd_clear(self, args: List[str]) -> CommandResult:
        """Clear the screen."""
        self._no_more_than('clear', args, 0)
        return CommandResult(output=CLEAR_SEQUENCE)

    def cmd_help(self, args: List[str]) -> CommandResult:
        """Display help information."""
        self._no_more_than('help', args, 0)
        return CommandResult(output=HELP_TEXT)

    def cmd_exit(self, args: List[str]) -> CommandResult:
        """Exit the shell."""
        self._no_more_than('exit', args, 0)
        return CommandResult(should_exit=True)
