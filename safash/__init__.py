"""
safash - a minimal command-line interpreter

Reads a line, splits it into a program and its arguments (honoring
quotes and $VARIABLE substitution), then runs a builtin or spawns the
program found on the search path and waits for it.
"""

__version__ = "1.0.0"

from .shell.executor import CommandExecutor
from .shell.shell import Shell, create_shell
from .shell.state import ShellState
from .shell.status import ExecutionOutcome, OutcomeKind

__all__ = [
    'CommandExecutor',
    'Shell',
    'create_shell',
    'ShellState',
    'ExecutionOutcome',
    'OutcomeKind',
]
