"""
Line Editor Module

A small line-oriented text editor for files of the virtual filesystem.

Editor commands:
    <text>            Append a line
    i <text>          Insert a line at the top
    a <n> <text>      Insert a line after line n
    e <n> <text>      Replace line n
    d <n>             Delete line n
    p                 Print the buffer with line numbers
    :w                Save
    :q                Quit without saving
    :wq               Save and quit
    :h                Show this help

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import Callable, List, Optional, TextIO

from memfs.logger import get_logger


EDITOR_HELP = """Editor commands:
  <text>          Append a line
  i <text>        Insert a line at the top
  a <n> <text>    Insert a line after line n
  e <n> <text>    Replace line n
  d <n>           Delete line n
  p               Print the buffer
  :w              Save
  :q              Quit without saving
  :wq             Save and quit
  :h              Show this help"""


class LineEditor:
    """
    Line-based editor bound to one file.

    The file is created if it does not exist. Input comes from
    ``input_func`` so the editor can be driven without a terminal; end of
    input or an interrupt quits without saving.

    Example:
        >>> lines = iter(['first', 'i zeroth', ':wq'])
        >>> LineEditor(vfs, 'notes.txt', input_func=lambda _: next(lines)).run()
        >>> vfs.cat('notes.txt')
        b'zeroth\\nfirst\\n'
    """

    PROMPT = '> '

    def __init__(
        self,
        vfs,
        path: str,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None
    ):
        self._vfs = vfs
        self._path = path
        self._input = input_func
        self._output = output if output is not None else sys.stdout
        self._logger = get_logger('editor')
        self._lines: List[str] = []
        self._modified = False

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def modified(self) -> bool:
        return self._modified

    def load(self) -> None:
        """Open the file, creating it if missing, and fill the buffer."""
        self._vfs.touch(self._path)
        text = self._vfs.cat(self._path).decode('utf-8', errors='replace')
        if not text:
            self._lines = []
        else:
            # A lone newline is one empty line
            if text.endswith('\n'):
                text = text[:-1]
            self._lines = text.split('\n')
        self._modified = False

    def save(self) -> None:
        """Write the buffer back; an empty buffer saves an empty file."""
        text = '\n'.join(self._lines)
        self._vfs.write(text, self._path, newline=bool(self._lines))
        self._modified = False
        self._print(f"Saved {self._path} ({len(self._lines)} lines)")
        self._logger.debug("Saved buffer", context={'path': self._path, 'lines': len(self._lines)})

    def run(self) -> None:
        """Load the file and process commands until quit, interrupt or end of input."""
        self.load()
        self._print(f"--- Editing {self._path} (:h for help, :wq to save and quit) ---")

        while True:
            try:
                line = self._input(self.PROMPT)
            except EOFError:
                break
            except KeyboardInterrupt:
                self._print('^C')
                self._logger.debug("Edit interrupted", context={'path': self._path, 'modified': self._modified})
                break
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """
        Apply one editor command.

        Returns:
            False once the editor should quit
        """
        stripped = line.strip()

        if stripped.startswith(':'):
            return self._handle_colon(stripped)

        word, _, rest = stripped.partition(' ')

        if word == 'p' and not rest:
            self._print_buffer()
        elif word == 'i':
            self._lines.insert(0, rest)
            self._modified = True
        elif word in ('a', 'e', 'd'):
            self._handle_numbered(word, rest)
        else:
            self._lines.append(line)
            self._modified = True

        return True

    def _handle_colon(self, command: str) -> bool:
        if command == ':w':
            self.save()
        elif command == ':q':
            return False
        elif command == ':wq':
            self.save()
            return False
        elif command == ':h':
            self._print(EDITOR_HELP)
        else:
            self._print(f"Unknown command: {command}")
        return True

    def _handle_numbered(self, command: str, rest: str) -> None:
        number, _, text = rest.partition(' ')
        index = self._line_index(number)
        if index is None:
            self._print("Invalid line number")
            return

        if command == 'a':
            self._lines.insert(index + 1, text)
        elif command == 'e':
            self._lines[index] = text
        else:
            del self._lines[index]
        self._modified = True

    def _line_index(self, number: str) -> Optional[int]:
        """Zero-based index of a 1-based line number, or None if out of range."""
        try:
            value = int(number)
        except ValueError:
            return None
        if 1 <= value <= len(self._lines):
            return value - 1
        return None

    def _print_buffer(self) -> None:
        for number, text in enumerate(self._lines, start=1):
            self._print(f"{number:3d} | {text}")
        if not self._lines:
            self._print("(empty)")

    def _print(self, text: str) -> None:
        self._output.write(text + '\n')
