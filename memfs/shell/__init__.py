"""
memfs Shell Module

Provides the interactive command-line shell:
- Command parsing
- Built-in commands
- Output redirection
- Line editor
"""

from .parser import CommandParser, ParsedCommand, Redirection, Token, TokenType
from .builtins import BuiltinCommands, CommandResult
from .editor import LineEditor
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'Redirection',
    'Token',
    'TokenType',
    'BuiltinCommands',
    'CommandResult',
    'LineEditor',
    'Shell',
    'create_shell',
]
