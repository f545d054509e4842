"""
safash Configuration Loader

Configuration management for the shell:
- JSON configuration file loading
- Validation of targets and log levels
- Default value handling
- Type-safe access to configuration values

Version: 1.0.0
"""

import json
import os
import sys
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, List

from safash.exceptions import ConfigurationError


TARGET_HOST = "host"
TARGET_SAFAOS = "safaos"
TARGETS = (TARGET_HOST, TARGET_SAFAOS)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SECTIONS = ("shell", "path", "status", "logging")

# Environment variable naming an optional JSON configuration file
CONFIG_ENV_VAR = "SAFASH_CONFIG"


def default_target() -> str:
    """Pick the target for the interpreter we are running on."""
    if sys.platform == TARGET_SAFAOS:
        return TARGET_SAFAOS
    return TARGET_HOST


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    target: str = field(default_factory=default_target)
    prompt_symbol: str = "#"
    shell_path: Optional[str] = None
    product_name: str = "SafaOS"
    welcome_lines: List[str] = field(default_factory=lambda: [
        "Welcome to SafaOS!",
        "you are currently in ram:/, a playground",
        "sys:/bin is available in your PATH check it out for some binaries",
        "the command `help` will provide a list of builtin commands and some terminal usage guide",
    ])


@dataclass
class PathConfig:
    """Program search path settings."""
    variable: str = "PATH"
    separator: Optional[str] = None
    include_cwd: bool = True


@dataclass
class StatusConfig:
    """Exit status classification settings."""
    known_statuses: dict[int, str] = field(default_factory=dict)


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the shell.
    """
    shell: ShellConfig = field(default_factory=ShellConfig)
    path: PathConfig = field(default_factory=PathConfig)
    status: StatusConfig = field(default_factory=StatusConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files, validating
    settings, and providing runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('safash.json')
        >>> print(config.path.variable)
        PATH
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the loaded configuration and fall back to defaults."""
        with cls._lock:
            cls._instance = None

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigurationError: If the file cannot be loaded, parsed or validated
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                path=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in configuration file: {e}",
                path=config_path
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {e}",
                path=config_path
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration root must be a JSON object",
                path=config_path
            )

        for section in SECTIONS:
            if section in data and not isinstance(data[section], dict):
                raise ConfigurationError(
                    f"Section {section!r} must be a JSON object",
                    path=config_path
                )

        self._config = self._parse_config(data, config_path)
        self._validate(self._config, config_path)
        self._loaded = True
        return self._config

    def load_from_environment(self) -> Config:
        """Load the file named by SAFASH_CONFIG, or keep the defaults."""
        config_path = os.environ.get(CONFIG_ENV_VAR)
        if config_path:
            return self.load(config_path)
        return self.config

    def _parse_config(self, data: dict[str, Any], config_path: str) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        if 'shell' in data:
            shell_data = data['shell']
            config.shell = ShellConfig(
                target=shell_data.get('target', config.shell.target),
                prompt_symbol=shell_data.get('prompt_symbol', config.shell.prompt_symbol),
                shell_path=shell_data.get('shell_path', config.shell.shell_path),
                product_name=shell_data.get('product_name', config.shell.product_name),
                welcome_lines=shell_data.get('welcome_lines', config.shell.welcome_lines),
            )

        if 'path' in data:
            path_data = data['path']
            config.path = PathConfig(
                variable=path_data.get('variable', config.path.variable),
                separator=path_data.get('separator', config.path.separator),
                include_cwd=path_data.get('include_cwd', config.path.include_cwd),
            )

        if 'status' in data:
            status_data = data['status']
            config.status = StatusConfig(
                known_statuses=self._parse_statuses(
                    status_data.get('known_statuses', {}), config_path
                ),
            )

        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
                use_colors=log_data.get('use_colors', config.logging.use_colors),
            )

        return config

    @staticmethod
    def _parse_statuses(known: Any, config_path: str) -> dict[int, str]:
        """Convert the status table; JSON object keys are always strings."""
        if not isinstance(known, dict):
            raise ConfigurationError(
                "status.known_statuses must be a JSON object",
                path=config_path
            )

        statuses: dict[int, str] = {}
        for code, name in known.items():
            try:
                statuses[int(code)] = name
            except ValueError:
                raise ConfigurationError(
                    f"Status code {code!r} is not an integer",
                    path=config_path
                ) from None
        return statuses

    @staticmethod
    def _validate(config: Config, config_path: str) -> None:
        expected = [
            ('shell.target', config.shell.target, str),
            ('shell.prompt_symbol', config.shell.prompt_symbol, str),
            ('shell.shell_path', config.shell.shell_path, (str, type(None))),
            ('shell.product_name', config.shell.product_name, str),
            ('shell.welcome_lines', config.shell.welcome_lines, list),
            ('path.variable', config.path.variable, str),
            ('path.separator', config.path.separator, (str, type(None))),
            ('path.include_cwd', config.path.include_cwd, bool),
            ('logging.level', config.logging.level, str),
            ('logging.log_file', config.logging.log_file, (str, type(None))),
            ('logging.console_output', config.logging.console_output, bool),
            ('logging.use_colors', config.logging.use_colors, bool),
        ]
        for key, value, types in expected:
            if not isinstance(value, types):
                raise ConfigurationError(
                    f"Invalid value {value!r} for {key}",
                    path=config_path
                )

        if not all(isinstance(line, str) for line in config.shell.welcome_lines):
            raise ConfigurationError("shell.welcome_lines must hold strings", path=config_path)
        if not all(isinstance(name, str) for name in config.status.known_statuses.values()):
            raise ConfigurationError("status.known_statuses names must be strings", path=config_path)

        if config.shell.target not in TARGETS:
            raise ConfigurationError(
                f"Unknown target {config.shell.target!r}, expected one of {', '.join(TARGETS)}",
                path=config_path
            )
        if config.logging.level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level {config.logging.level!r}",
                path=config_path
            )
        if config.path.separator == "":
            raise ConfigurationError("Path separator must not be empty", path=config_path)

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if not self._loaded:
            return Config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'path.variable')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        parts = key.split('.')
        obj: Any = self.config

        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj

        return dataclass_to_dict(self.config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    loader = ConfigLoader()
    return loader.config
