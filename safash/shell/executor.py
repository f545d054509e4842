"""
Command Executor Module

Runs one command line: builtins in-process, everything else as a
child process found through the search path.

Program lookup spawns each candidate in turn. A candidate that does
not exist, or is a directory, is skipped; any other spawn error ends
the search. If no directory yields a program the bare name is spawned
once so the operating system can resolve it.

Version: 1.0.0
"""

import os
import subprocess
from typing import List, Mapping, Optional, Sequence

from safash.core.config_loader import PathConfig, TARGET_SAFAOS, get_config
from safash.exceptions import ShellException, InfrastructuralError, NonZeroExit
from safash.logger import get_logger
from .builtins import BuiltinAction, BuiltinCommands
from .parser import Command, parse_command
from .state import ShellState
from .status import ExecutionOutcome


def default_path_separator(target: str) -> str:
    """Separator between entries of the PATH variable on target."""
    if target == TARGET_SAFAOS or os.name == 'nt':
        return ';'
    return ':'


def build_search_path(
    environ: Mapping[str, str],
    cwd: str,
    variable: str = 'PATH',
    separator: str = ':',
    include_cwd: bool = True
) -> List[str]:
    """
    Build the ordered list of directories to search for programs.

    Args:
        environ: Environment holding the path variable
        cwd: Working directory, appended as the last candidate
        variable: Name of the path variable
        separator: Separator between directories
        include_cwd: Whether to append cwd

    Returns:
        Directories in search order; empty entries are dropped
    """
    raw = environ.get(variable, '')
    directories = [d for d in raw.split(separator) if d]

    if include_cwd:
        directories.append(cwd)

    return directories


class CommandExecutor:
    """
    Executes command lines against a shell state.

    Provides:
    - Builtin dispatch
    - Search path lookup
    - Synchronous process execution

    Example:
        >>> executor = CommandExecutor(ShellState.from_environment())
        >>> executor.execute('ls -la').success
        True
    """

    def __init__(
        self,
        state: ShellState,
        builtins: Optional[BuiltinCommands] = None,
        path_config: Optional[PathConfig] = None,
        target: Optional[str] = None
    ):
        config = get_config()
        self._state = state
        self._builtins = builtins or BuiltinCommands()
        self._path_config = path_config or config.path
        self._target = target or config.shell.target
        self._logger = get_logger('executor')

    @property
    def state(self) -> ShellState:
        return self._state

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    def execute(self, line: str) -> ExecutionOutcome:
        """
        Execute a command line.

        Args:
            line: Command line string

        Returns:
            ExecutionOutcome describing what happened
        """
        try:
            self._execute_line(line)
        except ShellException as e:
            return ExecutionOutcome.from_error(e)
        return ExecutionOutcome.ok()

    def search_path(self) -> List[str]:
        """The directories a program is looked up in, in order."""
        separator = self._path_config.separator or default_path_separator(self._target)
        return build_search_path(
            self._state.environ,
            self._state.cwd,
            variable=self._path_config.variable,
            separator=separator,
            include_cwd=self._path_config.include_cwd,
        )

    def _execute_line(self, line: str) -> None:
        cmd = parse_command(line, self._state.environ)

        if cmd is None:
            return

        action = self._builtins.get(cmd.program)
        if action is not None:
            self._execute_builtin(cmd, action)
            return

        self._execute_program(cmd.program, cmd.args)

    def _execute_builtin(self, cmd: Command, action: BuiltinAction) -> None:
        """Execute a built-in command."""
        self._logger.debug(f"Running builtin {cmd.program}", context={'args': list(cmd.args)})
        try:
            action(self._state, list(cmd.args))
        except OSError as e:
            raise InfrastructuralError(
                f"{cmd.program}: {e}", cause=e, program=cmd.program
            ) from e

    def _execute_program(self, program: str, args: Sequence[str]) -> None:
        """Find program on the search path, run it and wait for it."""
        for directory in self.search_path():
            candidate = os.path.join(directory, program)
            self._logger.debug("Trying candidate", context={'path': candidate})

            try:
                process = self._spawn(candidate, args)
            except OSError as e:
                if self._is_missing(e, candidate):
                    continue
                self._logger.debug(f"Failed to spawn {candidate}: {e}")
                raise InfrastructuralError(
                    f"Failed to spawn {candidate}", cause=e, program=program
                ) from e

            self._wait(process, program)
            return

        self._logger.debug(f"{program} not found on search path, trying bare name")

        try:
            process = self._spawn(program, args)
        except OSError as e:
            self._logger.debug(f"Failed to spawn {program}: {e}")
            raise InfrastructuralError(
                f"Failed to spawn {program}", cause=e, program=program
            ) from e

        self._wait(process, program)

    def _spawn(self, executable: str, args: Sequence[str]) -> subprocess.Popen:
        return subprocess.Popen(
            [executable, *args],
            cwd=self._state.cwd,
            env=self._state.environ,
        )

    def _wait(self, process: subprocess.Popen, program: str) -> None:
        """Block until process exits, translating its status."""
        try:
            returncode = process.wait()
        except OSError as e:
            self._logger.debug(f"Failed to wait for {program}: {e}")
            raise InfrastructuralError(
                f"Failed to wait for {program}", cause=e, program=program
            ) from e

        if returncode != 0:
            raise NonZeroExit(returncode, program=program)

    @staticmethod
    def _is_missing(error: OSError, candidate: str) -> bool:
        """Whether a spawn error means "no program here, keep looking"."""
        if isinstance(error, (FileNotFoundError, NotADirectoryError, IsADirectoryError)):
            return True
        # Executing a directory reports EACCES on POSIX
        return isinstance(error, PermissionError) and os.path.isdir(candidate)
