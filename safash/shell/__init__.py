"""
safash Shell Module

Provides the command-line interpreter:
- Command lexing and variable resolution
- Built-in commands
- Program lookup and execution
- The interactive loop
"""

from .lexer import Lexer, Token, TokenType, tokenize, resolve_token, resolve_line
from .parser import Command, parse_command
from .state import ShellState
from .status import (
    ExecutionOutcome,
    OutcomeKind,
    FailureStatus,
    ExitStatusClassifier,
    HostExitStatusClassifier,
    EmbeddedExitStatusClassifier,
    get_classifier,
)
from .builtins import BuiltinCommands
from .executor import CommandExecutor, build_search_path, default_path_separator
from .shell import Shell, create_shell

__all__ = [
    'Lexer',
    'Token',
    'TokenType',
    'tokenize',
    'resolve_token',
    'resolve_line',
    'Command',
    'parse_command',
    'ShellState',
    'ExecutionOutcome',
    'OutcomeKind',
    'FailureStatus',
    'ExitStatusClassifier',
    'HostExitStatusClassifier',
    'EmbeddedExitStatusClassifier',
    'get_classifier',
    'BuiltinCommands',
    'CommandExecutor',
    'build_search_path',
    'default_path_separator',
    'Shell',
    'create_shell',
]
