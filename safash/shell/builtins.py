"""
Shell Built-in Commands

Commands executed in-process by the shell. A builtin shadows any
external program of the same name.

Version: 1.0.0
"""

import sys
from typing import Callable, List, Optional, Sequence

from safash.exceptions import BuiltinFailure
from safash.logger import get_logger
from .state import ShellState


BuiltinAction = Callable[[ShellState, Sequence[str]], None]

CLEAR_SCREEN = "\x1b[2J\x1b[H"


class BuiltinCommands:
    """
    Built-in shell commands.

    Every action takes the shell state and the argument list. Misuse is
    reported by raising BuiltinFailure; OS errors propagate as OSError.
    """

    def __init__(self):
        self._logger = get_logger('builtins')
        self._commands: dict[str, BuiltinAction] = {
            'exit': self.cmd_exit,
            'clear': self.cmd_clear,
            'cd': self.cmd_cd,
            'help': self.cmd_help,
        }

    def get_commands(self) -> dict[str, BuiltinAction]:
        """Get all built-in commands."""
        return self._commands

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def get(self, name: str) -> Optional[BuiltinAction]:
        """Look up the action for name."""
        return self._commands.get(name)

    # Command implementations

    def cmd_exit(self, state: ShellState, args: Sequence[str]) -> None:
        """Terminate the shell process."""
        code = 0
        if args:
            try:
                code = int(args[0])
            except ValueError:
                print(f"exit: {args[0]}: numeric argument required")
                raise BuiltinFailure('exit', "numeric argument required") from None

        self._logger.debug("Exiting", context={'code': code})
        raise SystemExit(code)

    def cmd_clear(self, state: ShellState, args: Sequence[str]) -> None:
        """Clear the terminal."""
        sys.stdout.write(CLEAR_SCREEN)
        sys.stdout.flush()

    def cmd_cd(self, state: ShellState, args: Sequence[str]) -> None:
        """Change the working directory."""
        if len(args) < 1:
            print("cd: Not enough arguments")
            raise BuiltinFailure('cd', "Not enough arguments")

        new_cwd = state.change_directory(args[0])
        self._logger.debug("Changed directory", context={'cwd': new_cwd})

    def cmd_help(self, state: ShellState, args: Sequence[str]) -> None:
        """Display help information."""
        lines: List[str] = [
            "",
            "Built-in commands:",
            "  cd <path>         Change directory",
            "  clear             Clear screen",
            "  exit [code]       Exit the shell",
            "  help              Display this help",
            "",
            "Anything else is run as a program found in your PATH, then in",
            "the current directory. Arguments are separated by whitespace;",
            "use \"double\" or 'single' quotes to keep spaces, and $NAME to",
            "substitute an environment variable.",
            "",
        ]
        print("\n".join(lines))
