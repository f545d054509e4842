"""
Execution Status Module

Outcome of executing one command line, and the classifiers that turn
a failure into the status shown in the prompt.

Two classifiers exist, one per target:
- host: every status is an opaque numeric code
- safaos: codes from the system's known status table display by name

Version: 1.0.0
"""

import errno
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from safash.core.config_loader import TARGET_HOST, TARGET_SAFAOS
from safash.exceptions import (
    ShellException,
    InfrastructuralError,
    NonZeroExit,
    BuiltinFailure,
)


# Largest status the embedded system's error table can describe
MAX_KNOWN_STATUS = 0xFFFF


class OutcomeKind(Enum):
    """Kinds of command outcome."""
    SUCCESS = "success"
    NON_ZERO_EXIT = "non_zero_exit"
    BUILTIN_FAILURE = "builtin_failure"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class ExecutionOutcome:
    """
    Result of executing one command line.

    Attributes:
        kind: What happened
        status: Exit status of the program for NON_ZERO_EXIT
        error: The exception behind any failure
    """
    kind: OutcomeKind
    status: Optional[int] = None
    error: Optional[ShellException] = None

    @property
    def success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def ok(cls) -> 'ExecutionOutcome':
        return cls(OutcomeKind.SUCCESS)

    @classmethod
    def from_error(cls, error: ShellException) -> 'ExecutionOutcome':
        """Wrap a shell exception in the matching outcome."""
        if isinstance(error, NonZeroExit):
            return cls(OutcomeKind.NON_ZERO_EXIT, status=error.status, error=error)
        if isinstance(error, BuiltinFailure):
            return cls(OutcomeKind.BUILTIN_FAILURE, error=error)
        return cls(OutcomeKind.IO_ERROR, error=error)


@dataclass(frozen=True)
class FailureStatus:
    """A failure as shown to the user: by name when known, else by code."""
    code: int
    name: Optional[str] = None

    @property
    def known(self) -> bool:
        return self.name is not None

    def __str__(self) -> str:
        return self.name if self.name is not None else str(self.code)


class ExitStatusClassifier(ABC):
    """Translates failed outcomes into a FailureStatus."""

    @abstractmethod
    def from_returncode(self, returncode: int) -> FailureStatus:
        """Classify the non-zero return code of a child process."""

    @abstractmethod
    def from_os_error(self, error: OSError) -> FailureStatus:
        """Classify an operating system error."""

    def classify(self, error: ShellException) -> FailureStatus:
        """
        Classify any shell failure.

        Args:
            error: The exception carried by a failed outcome

        Returns:
            FailureStatus for the prompt
        """
        if isinstance(error, NonZeroExit):
            return self.from_returncode(error.status)
        if isinstance(error, InfrastructuralError) and error.cause is not None:
            return self.from_os_error(error.cause)
        return FailureStatus(1)


class HostExitStatusClassifier(ExitStatusClassifier):
    """Classifier for a conventional host OS."""

    def from_returncode(self, returncode: int) -> FailureStatus:
        # Killed by a signal: there is no exit code to show
        if returncode < 0:
            return FailureStatus(1)
        return FailureStatus(returncode)

    def from_os_error(self, error: OSError) -> FailureStatus:
        return FailureStatus(1)


class EmbeddedExitStatusClassifier(ExitStatusClassifier):
    """
    Classifier for SafaOS.

    Programs on SafaOS exit with a code from the system error table.
    Codes found in ``known_statuses`` are shown by name.
    """

    def __init__(self, known_statuses: Optional[Mapping[int, str]] = None):
        self._known = dict(known_statuses or {})

    def from_returncode(self, returncode: int) -> FailureStatus:
        if returncode < 0:
            return FailureStatus(1)
        if returncode > MAX_KNOWN_STATUS:
            return FailureStatus(returncode)
        return FailureStatus(returncode, self._known.get(returncode))

    def from_os_error(self, error: OSError) -> FailureStatus:
        code = error.errno or 1
        return FailureStatus(code, errno.errorcode.get(code))


def get_classifier(
    target: str,
    known_statuses: Optional[Mapping[int, str]] = None
) -> ExitStatusClassifier:
    """
    Create the classifier for a target.

    Args:
        target: 'host' or 'safaos'
        known_statuses: Status table for the embedded target

    Raises:
        ValueError: For an unknown target
    """
    if target == TARGET_HOST:
        return HostExitStatusClassifier()
    if target == TARGET_SAFAOS:
        return EmbeddedExitStatusClassifier(known_statuses)
    raise ValueError(f"Unknown target: {target}")
