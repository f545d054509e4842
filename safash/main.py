#!/usr/bin/env python3
"""
safash - a minimal command-line interpreter

This is the main entry point for safash.

Usage:
    safash [-i|--interactive] [-c <command>] [--help]

Startup sequence:
1. Load configuration (SAFASH_CONFIG, if set)
2. Initialize logging
3. Set SHELL for child processes
4. Run a single command, or the interactive loop

Version: 1.0.0
"""

import os
import sys
from typing import List, Optional

from safash.core.config_loader import Config, ConfigLoader, TARGET_SAFAOS
from safash.exceptions import ConfigurationError
from safash.logger import Logger, LogLevel, get_logger
from safash.shell.shell import Shell
from safash.shell.state import ShellState


SAFAOS_SHELL_PATH = "sys:/bin/safa"


def usage(program: str) -> str:
    return f"usage: {program} [-i|--interactive|-c [command]]"


def shell_path(config: Config) -> str:
    """The value SHELL is set to for spawned programs."""
    if config.shell.shell_path:
        return config.shell.shell_path
    if config.shell.target == TARGET_SAFAOS:
        return SAFAOS_SHELL_PATH
    return os.path.abspath(sys.argv[0])


def boot(config: Config) -> ShellState:
    """Initialize logging and build the session state."""
    Logger.initialize(
        level=LogLevel.from_name(config.logging.level),
        log_file=config.logging.log_file,
        use_colors=config.logging.use_colors,
        console_output=config.logging.console_output,
    )

    state = ShellState.from_environment()
    state.environ['SHELL'] = shell_path(config)

    get_logger('main').debug(
        "Shell started",
        context={'target': config.shell.target, 'SHELL': state.environ['SHELL']}
    )
    return state


def run_command(program: str, command: str, config: Config) -> int:
    """
    Execute a single command line and report failure.

    Returns:
        0 on success, otherwise the failure's status clamped to 1..255
    """
    shell = Shell(state=boot(config), config=config)
    outcome = shell.execute_line(command, report=False)

    if outcome.success:
        return 0

    print(f"{program}: {outcome.error}")
    code = shell.state.last_failure.code if shell.state.last_failure else 1
    return code if 0 < code < 256 else 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for safash.

    Args:
        argv: Command line, program name first (defaults to sys.argv)

    Returns:
        Process exit code
    """
    argv = list(sys.argv if argv is None else argv)
    program = argv[0] if argv else "safash"
    args = iter(argv[1:])

    try:
        config = ConfigLoader().load_from_environment()
    except ConfigurationError as e:
        print(f"{program}: {e}")
        return 1

    interactive = False

    for arg in args:
        if arg in ("-i", "--interactive"):
            interactive = True
        elif arg == "-c":
            command = next(args, None)
            if command is None:
                print(f"{program}: `-c` expected command")
                return 1
            return run_command(program, command, config)
        elif arg == "--help":
            print(usage(program))
            return 0
        else:
            print(f"{program}: unexpected argument `{arg}`")
            print(usage(program))
            return 1

    shell = Shell(state=boot(config), interactive=interactive, config=config)
    shell.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
