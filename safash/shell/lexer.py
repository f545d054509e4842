"""
Command Lexer Module

Splits a command line into words, quoted strings and variable
references, and resolves those tokens to their final string values.

Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping, Optional, List


QUOTE_CHARS = ('"', "'")
VARIABLE_SIGIL = '$'


class TokenType(Enum):
    """Token types produced by the lexer."""
    WORD = "word"
    QUOTED_STRING = "quoted_string"
    VARIABLE_REF = "variable_ref"


@dataclass(frozen=True)
class Token:
    """
    A classified fragment of the input line.

    ``value`` is the literal text for words and quoted strings (quotes
    stripped) and the variable name for variable references. ``start``
    and ``end`` delimit ``value`` within the original line.
    """
    type: TokenType
    value: str
    start: int
    end: int


class Lexer:
    """
    Lazy, single-pass tokenizer over one command line.

    Handles:
    - Whitespace separated words
    - Single and double quoted strings (no escapes)
    - ``$NAME`` variable references

    An unterminated quote runs to the end of the line. Once the input is
    exhausted the lexer keeps returning None.

    Example:
        >>> [t.value for t in Lexer('echo "hello world"')]
        ['echo', 'hello world']
    """

    def __init__(self, line: str):
        self._input = line
        self._pos = 0
        self._exhausted = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Optional[Token]:
        """
        Produce the next token.

        Returns:
            The next Token, or None once the line is exhausted
        """
        if self._exhausted:
            return None

        line = self._input
        length = len(line)
        pos = self._pos

        while pos < length and line[pos].isspace():
            pos += 1

        if pos >= length:
            self._pos = length
            self._exhausted = True
            return None

        char = line[pos]

        if char in QUOTE_CHARS:
            start = pos + 1
            end = line.find(char, start)
            if end == -1:
                end = length
                self._pos = length
            else:
                # Skip past the closing quote
                self._pos = end + 1
            return Token(TokenType.QUOTED_STRING, line[start:end], start, end)

        end = self._scan_word(pos)
        self._pos = end

        if char == VARIABLE_SIGIL:
            return Token(TokenType.VARIABLE_REF, line[pos + 1:end], pos + 1, end)

        return Token(TokenType.WORD, line[pos:end], pos, end)

    def _scan_word(self, pos: int) -> int:
        """Return the index of the first whitespace at or after pos."""
        line = self._input
        length = len(line)
        while pos < length and not line[pos].isspace():
            pos += 1
        return pos


def tokenize(line: str) -> Lexer:
    """Return a lazy token stream over line."""
    return Lexer(line)


def resolve_token(token: Token, environ: Mapping[str, str]) -> str:
    """
    Resolve a token to its string value.

    Args:
        token: Token to resolve
        environ: Environment used for variable references

    Returns:
        The literal text, or the variable's value ('' if unset)
    """
    if token.type == TokenType.VARIABLE_REF:
        return environ.get(token.value, '')
    return token.value


def resolve_line(line: str, environ: Mapping[str, str]) -> List[str]:
    """Tokenize line and resolve every token against environ."""
    return [resolve_token(token, environ) for token in Lexer(line)]
