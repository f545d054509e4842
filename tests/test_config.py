"""
Configuration and Logging Tests

Run with: python -m pytest tests/test_config.py -v
"""

import json
import os
import tempfile
import unittest
from unittest import mock

from safash.core.config_loader import Config, ConfigLoader, CONFIG_ENV_VAR, get_config
from safash.exceptions import ConfigurationError
from safash.logger import Logger, LogLevel, get_logger


class TestConfig(unittest.TestCase):
    """Test the configuration system."""

    def setUp(self):
        ConfigLoader.reset()
        self._tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        ConfigLoader.reset()
        self._tmp.cleanup()

    def write_config(self, data):
        path = os.path.join(self._tmp.name, 'safash.json')
        with open(path, 'w', encoding='utf-8') as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)
        return path

    def test_default_config(self):
        config = Config()

        self.assertEqual(config.path.variable, "PATH")
        self.assertIsNone(config.path.separator)
        self.assertTrue(config.path.include_cwd)
        self.assertEqual(config.shell.prompt_symbol, "#")
        self.assertEqual(config.logging.level, "WARNING")

    def test_singleton(self):
        self.assertIs(ConfigLoader(), ConfigLoader())

    def test_load(self):
        path = self.write_config({
            'shell': {'target': 'safaos', 'prompt_symbol': '$'},
            'path': {'separator': ','},
            'status': {'known_statuses': {'2': 'NotFound'}},
            'logging': {'level': 'DEBUG'},
        })

        config = ConfigLoader().load(path)

        self.assertEqual(config.shell.target, 'safaos')
        self.assertEqual(config.shell.prompt_symbol, '$')
        self.assertEqual(config.path.separator, ',')
        self.assertEqual(config.path.variable, 'PATH')
        self.assertEqual(config.status.known_statuses, {2: 'NotFound'})
        self.assertIs(get_config(), config)

    def test_get_and_to_dict(self):
        loader = ConfigLoader()
        loader.load(self.write_config({'path': {'variable': 'SEARCH'}}))

        self.assertEqual(loader.get('path.variable'), 'SEARCH')
        self.assertEqual(loader.get('path.nothing', 'fallback'), 'fallback')
        self.assertEqual(loader.to_dict()['path']['variable'], 'SEARCH')

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            ConfigLoader().load(os.path.join(self._tmp.name, 'absent.json'))

    def test_invalid_json(self):
        with self.assertRaises(ConfigurationError):
            ConfigLoader().load(self.write_config("{not json"))

    def test_invalid_values(self):
        for data in (
            {'shell': {'target': 'amiga'}},
            {'logging': {'level': 'LOUD'}},
            {'path': {'separator': ''}},
            {'path': {'include_cwd': 'yes'}},
            {'status': {'known_statuses': {'abc': 'X'}}},
            {'status': {'known_statuses': {'2': 7}}},
            {'status': {'known_statuses': [2]}},
            {'logging': {'level': 5}},
            {'shell': {'welcome_lines': 'hello'}},
            {'shell': None},
            [1, 2, 3],
        ):
            with self.assertRaises(ConfigurationError):
                ConfigLoader().load(self.write_config(data))

    def test_load_from_environment(self):
        path = self.write_config({'shell': {'prompt_symbol': '>'}})

        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: path}):
            config = ConfigLoader().load_from_environment()

        self.assertEqual(config.shell.prompt_symbol, '>')

    def test_environment_without_config(self):
        with mock.patch.dict(os.environ):
            os.environ.pop(CONFIG_ENV_VAR, None)
            config = ConfigLoader().load_from_environment()

        self.assertEqual(config.shell.prompt_symbol, '#')


class TestLogger(unittest.TestCase):
    """Test the logging system."""

    def setUp(self):
        Logger.shutdown()

    def tearDown(self):
        Logger.shutdown()

    def test_logger_singleton(self):
        self.assertIs(Logger('executor'), get_logger('executor'))
        self.assertIsNot(Logger('executor'), Logger('shell'))

    def test_log_levels(self):
        self.assertTrue(LogLevel.ERROR > LogLevel.INFO)
        self.assertEqual(LogLevel.from_name('debug'), LogLevel.DEBUG)
        with self.assertRaises(ValueError):
            LogLevel.from_name('loud')

    def test_recent_logs(self):
        Logger.initialize(level=LogLevel.INFO, console_output=False)
        log = get_logger('executor')

        log.debug("hidden")
        log.info("visible", context={'path': '/bin/ls'})
        log.error("broken")

        logs = Logger.get_recent_logs(subsystem='executor')
        self.assertEqual([l['message'] for l in logs], ["visible", "broken"])
        self.assertEqual(logs[0]['context'], {'path': '/bin/ls'})
        self.assertEqual(len(Logger.get_recent_logs(level='ERROR')), 1)

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, 'logs', 'safash.log')
            Logger.initialize(level=LogLevel.DEBUG, log_file=log_file, console_output=False)
            get_logger('shell').warning("written to disk")
            Logger.shutdown()

            with open(log_file, encoding='utf-8') as f:
                content = f.read()

        self.assertIn("[shell] written to disk", content)
        self.assertIn("WARNING", content)

    def test_no_logs_before_initialize(self):
        self.assertEqual(Logger.get_recent_logs(), [])


if __name__ == '__main__':
    unittest.main()
