"""
Shell State Module

The mutable state a shell session carries between command lines.

Version: 1.0.0
"""

import errno
import os
from dataclasses import dataclass, field
from typing import Optional

from .status import FailureStatus


@dataclass
class ShellState:
    """
    Session state handed explicitly to the executor and builtins.

    Attributes:
        cwd: Working directory for spawned programs and relative paths
        environ: Environment for variable lookup and for child processes
        last_failure: Status of the last command, None if it succeeded
    """
    cwd: str = field(default_factory=os.getcwd)
    environ: dict[str, str] = field(default_factory=dict)
    last_failure: Optional[FailureStatus] = None

    @classmethod
    def from_environment(cls) -> 'ShellState':
        """Seed state from the running process."""
        return cls(cwd=os.getcwd(), environ=dict(os.environ))

    def change_directory(self, path: str) -> str:
        """
        Make path the working directory.

        Args:
            path: Absolute path, or a path relative to the current cwd;
                a leading ~ expands to the session HOME

        Returns:
            The new absolute working directory

        Raises:
            FileNotFoundError: If the path does not exist
            NotADirectoryError: If the path is not a directory
        """
        home = self.environ.get('HOME')
        if home and (path == '~' or path.startswith('~/')):
            path = home + path[1:]
        target = os.path.normpath(os.path.join(self.cwd, path))

        if not os.path.exists(target):
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", target)
        if not os.path.isdir(target):
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", target)

        self.cwd = target
        self.environ['PWD'] = target
        return target

