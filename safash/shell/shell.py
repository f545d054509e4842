"""
safash Shell Module

The interactive read-execute loop.

Version: 1.0.0
"""

import sys
from typing import Optional, TextIO

from safash.core.config_loader import Config, get_config
from safash.logger import get_logger
from .executor import CommandExecutor
from .state import ShellState
from .status import ExecutionOutcome, ExitStatusClassifier, OutcomeKind, get_classifier


MAGENTA = "\x1b[35m"
RED = "\x1b[31m"
PINK = "\x1B[38;2;255;192;203m"
GREY = "\x1B[38;2;200;200;200m"
RESET = "\x1b[0m"


class Shell:
    """
    safash interactive shell.

    Provides:
    - Prompt showing the working directory and the last failure
    - Command execution through CommandExecutor
    - Banner for interactive sessions

    Example:
        >>> shell = create_shell()
        >>> shell.run()
    """

    def __init__(
        self,
        state: Optional[ShellState] = None,
        executor: Optional[CommandExecutor] = None,
        classifier: Optional[ExitStatusClassifier] = None,
        interactive: bool = False,
        config: Optional[Config] = None
    ):
        self._config = config or get_config()
        self._state = state or ShellState.from_environment()
        self._executor = executor or CommandExecutor(
            self._state,
            path_config=self._config.path,
            target=self._config.shell.target,
        )
        self._classifier = classifier or get_classifier(
            self._config.shell.target,
            self._config.status.known_statuses,
        )
        self._interactive = interactive
        self._logger = get_logger('shell')

    @property
    def state(self) -> ShellState:
        return self._state

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    @property
    def interactive(self) -> bool:
        return self._interactive

    def run(self, stdin: Optional[TextIO] = None) -> None:
        """
        Run the shell until end of input.

        The ``exit`` builtin ends the process directly by raising
        SystemExit, which is not caught here.
        """
        stdin = stdin or sys.stdin

        if self._interactive:
            self.print_banner()

        while True:
            try:
                sys.stdout.write(self.get_prompt())
                sys.stdout.flush()
                line = stdin.readline()
            except KeyboardInterrupt:
                print("^C")
                continue

            if not line:
                print()
                break

            self.execute_line(line)

    def execute_line(self, line: str, report: bool = True) -> ExecutionOutcome:
        """
        Execute a command line and record its outcome.

        I/O failures are reported to the user; non-zero exits and
        builtin failures only show up in the prompt.

        Args:
            line: Command line string
            report: Print I/O failures; callers that report failures
                themselves pass False

        Returns:
            The outcome of the command
        """
        outcome = self._executor.execute(line)

        if outcome.kind is OutcomeKind.IO_ERROR:
            self._logger.debug(f"Command failed: {outcome.error}", context={'line': line.strip()})
            if report:
                print(f"Shell: {outcome.error}")

        if outcome.success:
            self._state.last_failure = None
        else:
            self._state.last_failure = self._classifier.classify(outcome.error)

        return outcome

    def get_prompt(self) -> str:
        """Generate the shell prompt."""
        parts = [f"{MAGENTA}{self._state.cwd}{RESET} "]

        if self._state.last_failure is not None:
            parts.append(f"{RED}[{self._state.last_failure}]{RESET} ")

        parts.append(f"{self._config.shell.prompt_symbol} ")
        return "".join(parts)

    def print_banner(self) -> None:
        """Print the welcome banner."""
        shell_config = self._config.shell
        print(f"{PINK}{shell_config.product_name}")
        print("=" * len(shell_config.product_name))
        print(GREY, end="")
        for line in shell_config.welcome_lines:
            print(f"| {line}")
        print(RESET)


def create_shell(interactive: bool = False, state: Optional[ShellState] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(state=state, interactive=interactive)
