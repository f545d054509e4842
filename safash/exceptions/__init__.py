"""
safash Exception Hierarchy

All shell errors inherit from ShellException:

    ShellException (Base)
    ├── InfrastructuralError
    ├── NonZeroExit
    ├── BuiltinFailure
    └── ConfigurationError
"""

from .shell_exceptions import (
    ShellException,
    InfrastructuralError,
    NonZeroExit,
    BuiltinFailure,
    ConfigurationError,
)

__all__ = [
    'ShellException',
    'InfrastructuralError',
    'NonZeroExit',
    'BuiltinFailure',
    'ConfigurationError',
]
