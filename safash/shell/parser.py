"""
Command Parser Module

Turns a command line into a Command: the program name and its
resolved arguments.

Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .lexer import resolve_line


@dataclass(frozen=True)
class Command:
    """A parsed command line."""
    program: str
    args: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def argv(self) -> Tuple[str, ...]:
        return (self.program,) + self.args


def parse_command(line: str, environ: Mapping[str, str]) -> Optional[Command]:
    """
    Parse a command line.

    Variable references are resolved against environ at this point,
    so the values reflect the environment at execution time.

    Args:
        line: Command line string
        environ: Environment for variable resolution

    Returns:
        Command, or None if the line holds no tokens
    """
    words = resolve_line(line, environ)

    if not words:
        return None

    return Command(program=words[0], args=tuple(words[1:]))
