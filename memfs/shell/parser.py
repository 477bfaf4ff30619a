"""
Command Parser Module

Parses shell command lines into structured format.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, List
from enum import Enum

from memfs.exceptions import ParseError


class TokenType(Enum):
    """Token types for command parsing."""
    WORD = "word"
    REDIRECT_OUT = "redirect_out"
    REDIRECT_APPEND = "redirect_append"


@dataclass
class Token:
    """A parsed token."""
    type: TokenType
    value: str
    position: int = 0


@dataclass
class Redirection:
    """An output redirection."""
    path: str
    append: bool = False


@dataclass
class ParsedCommand:
    """A parsed command line."""
    command: str
    args: List[str] = field(default_factory=list)
    redirection: Optional[Redirection] = None


class CommandParser:
    """
    Parses shell command lines.

    Handles:
    - Command and arguments
    - Output redirection (>, >>)
    - Single and double quoted strings
    - Backslash escapes (not inside single quotes)
    - Comments (lines starting with #)

    Example:
        >>> parser = CommandParser()
        >>> cmd = parser.parse('echo "hello world" > greeting.txt')
        >>> cmd.args, cmd.redirection.path
        (['hello world'], 'greeting.txt')
    """

    def __init__(self, history_size: int = 1000):
        self._history: List[str] = []
        self._history_size = history_size

    def parse(self, line: str) -> Optional[ParsedCommand]:
        """
        Parse a command line.

        Args:
            line: Command line string

        Returns:
            ParsedCommand or None if the line is blank or a comment

        Raises:
            ParseError: On unclosed quotes, a trailing backslash or a
                malformed redirection
        """
        line = line.strip()

        if not line or line.startswith('#'):
            return None

        self._remember(line)

        tokens = self._tokenize(line)

        if not tokens:
            return None

        return self._parse_tokens(tokens)

    def _remember(self, line: str) -> None:
        if self._history_size <= 0:
            return
        self._history.append(line)
        if len(self._history) > self._history_size:
            del self._history[:len(self._history) - self._history_size]

    def _tokenize(self, line: str) -> List[Token]:
        """Convert a line into tokens."""
        tokens = []
        current = ""
        # A quoted empty string still produces a word
        has_word = False
        start = 0
        in_quote = None
        quote_start = 0
        i = 0

        def flush() -> None:
            nonlocal current, has_word
            if has_word:
                tokens.append(Token(TokenType.WORD, current, start))
            current = ""
            has_word = False

        while i < len(line):
            char = line[i]

            # Single quotes take everything literally
            if in_quote == "'":
                if char == "'":
                    in_quote = None
                else:
                    current += char
                i += 1
                continue

            if char == '\\':
                if i + 1 >= len(line):
                    raise ParseError("trailing backslash", position=i)
                if not has_word:
                    start = i
                current += line[i + 1]
                has_word = True
                i += 2
                continue

            if in_quote == '"':
                if char == '"':
                    in_quote = None
                else:
                    current += char
                i += 1
                continue

            if char in ('"', "'"):
                if not has_word:
                    start = i
                in_quote = char
                quote_start = i
                has_word = True
                i += 1
                continue

            if char == '>':
                flush()
                if i + 1 < len(line) and line[i + 1] == '>':
                    tokens.append(Token(TokenType.REDIRECT_APPEND, '>>', i))
                    i += 2
                else:
                    tokens.append(Token(TokenType.REDIRECT_OUT, '>', i))
                    i += 1
                continue

            if char.isspace():
                flush()
                i += 1
                continue

            if not has_word:
                start = i
            current += char
            has_word = True
            i += 1

        if in_quote:
            raise ParseError(f"unclosed quote {in_quote}", position=quote_start)

        flush()
        return tokens

    def _parse_tokens(self, tokens: List[Token]) -> ParsedCommand:
        """Parse tokens into a command structure."""
        words = []
        redirection = None
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if token.type == TokenType.WORD:
                words.append(token.value)
                i += 1
                continue

            if redirection is not None:
                raise ParseError("only one output redirection is allowed", position=token.position)

            if i + 1 >= len(tokens) or tokens[i + 1].type != TokenType.WORD:
                raise ParseError(
                    f"syntax error near '{token.value}': missing redirection target",
                    position=token.position
                )

            redirection = Redirection(
                path=tokens[i + 1].value,
                append=token.type == TokenType.REDIRECT_APPEND
            )
            i += 2

        if not words:
            raise ParseError("missing command before redirection", position=tokens[0].position)

        return ParsedCommand(command=words[0], args=words[1:], redirection=redirection)

    def get_history(self) -> List[str]:
        """Get command history."""
        return list(self._history)

    def clear_history(self) -> None:
        """Clear command history."""
        self._history.clear()
