"""
safash Core Module

Configuration shared by every part of the shell.
"""

from .config_loader import (
    Config,
    ConfigLoader,
    ShellConfig,
    PathConfig,
    StatusConfig,
    LoggingConfig,
    TARGET_HOST,
    TARGET_SAFAOS,
    get_config,
)

__all__ = [
    'Config',
    'ConfigLoader',
    'ShellConfig',
    'PathConfig',
    'StatusConfig',
    'LoggingConfig',
    'TARGET_HOST',
    'TARGET_SAFAOS',
    'get_config',
]
