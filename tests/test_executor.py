"""
Command Executor Tests

Programs are temporary /bin/sh scripts, so most tests need a POSIX host.

Run with: python -m pytest tests/test_executor.py -v
"""

import os
import stat
import subprocess
import tempfile
import unittest
from unittest import mock

from safash.core.config_loader import PathConfig
from safash.exceptions import InfrastructuralError
from safash.shell.executor import CommandExecutor, build_search_path, default_path_separator
from safash.shell.state import ShellState
from safash.shell.status import OutcomeKind


def make_script(directory, name, body, executable=True):
    """Write a /bin/sh script and return its path."""
    path = os.path.join(directory, name)
    with open(path, 'w', encoding='utf-8') as f:
        f.write("#!/bin/sh\n" + body + "\n")
    mode = stat.S_IRUSR | stat.S_IWUSR
    if executable:
        mode |= stat.S_IXUSR
    os.chmod(path, mode)
    return path


def read(path):
    with open(path, encoding='utf-8') as f:
        return f.read().strip()


class TestSearchPath(unittest.TestCase):
    """Test building the search path."""

    def test_order_and_cwd_fallback(self):
        env = {'PATH': '/usr/local/bin:/usr/bin::/bin'}
        self.assertEqual(
            build_search_path(env, '/home/user'),
            ['/usr/local/bin', '/usr/bin', '/bin', '/home/user']
        )

    def test_without_cwd(self):
        self.assertEqual(build_search_path({'PATH': '/bin'}, '/tmp', include_cwd=False), ['/bin'])

    def test_missing_variable(self):
        self.assertEqual(build_search_path({}, '/tmp'), ['/tmp'])

    def test_custom_variable_and_separator(self):
        env = {'SEARCH': 'sys:/bin;ram:/bin'}
        self.assertEqual(
            build_search_path(env, 'ram:/', variable='SEARCH', separator=';'),
            ['sys:/bin', 'ram:/bin', 'ram:/']
        )

    def test_default_separator(self):
        self.assertEqual(default_path_separator('safaos'), ';')
        expected = ';' if os.name == 'nt' else ':'
        self.assertEqual(default_path_separator('host'), expected)


@unittest.skipIf(os.name == 'nt', "uses /bin/sh scripts")
class TestCommandExecutor(unittest.TestCase):
    """Test running builtins and programs."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = os.path.realpath(self._tmp.name)
        self.first = os.path.join(self.root, 'first')
        self.second = os.path.join(self.root, 'second')
        self.work = os.path.join(self.root, 'work')
        for directory in (self.first, self.second, self.work):
            os.mkdir(directory)
        self.marker = os.path.join(self.root, 'marker')

        self.state = ShellState(
            cwd=self.work,
            environ={
                'PATH': f"{self.first}:{self.second}",
                'MARKER': self.marker,
            },
        )
        self.executor = CommandExecutor(
            self.state,
            path_config=PathConfig(separator=':'),
            target='host',
        )

    def tearDown(self):
        self._tmp.cleanup()

    def spawned(self, popen):
        return [c.args[0][0] for c in popen.call_args_list]

    def test_blank_line_does_nothing(self):
        with mock.patch('safash.shell.executor.subprocess.Popen') as popen:
            for line in ("", "   ", "\t \n"):
                self.assertTrue(self.executor.execute(line).success)
        popen.assert_not_called()

    def test_program_in_second_directory(self):
        """Only the directory holding the program is spawned from."""
        make_script(self.second, 'foo', 'echo second > "$MARKER"')

        with mock.patch('safash.shell.executor.subprocess.Popen', wraps=subprocess.Popen) as popen:
            outcome = self.executor.execute("foo")

        self.assertTrue(outcome.success)
        self.assertEqual(read(self.marker), "second")
        self.assertEqual(
            self.spawned(popen),
            [os.path.join(self.first, 'foo'), os.path.join(self.second, 'foo')]
        )

    def test_first_match_wins(self):
        make_script(self.first, 'foo', 'echo first > "$MARKER"')
        make_script(self.second, 'foo', 'echo second > "$MARKER"')

        self.assertTrue(self.executor.execute("foo").success)
        self.assertEqual(read(self.marker), "first")

    def test_directory_candidate_is_skipped(self):
        os.mkdir(os.path.join(self.first, 'foo'))
        make_script(self.second, 'foo', 'echo second > "$MARKER"')

        self.assertTrue(self.executor.execute("foo").success)
        self.assertEqual(read(self.marker), "second")

    def test_working_directory_is_last_resort(self):
        make_script(self.work, 'local', 'echo local > "$MARKER"')

        self.assertTrue(self.executor.execute("local").success)
        self.assertEqual(read(self.marker), "local")

    def test_non_zero_exit(self):
        make_script(self.first, 'fails', 'exit 2')

        outcome = self.executor.execute("fails")

        self.assertEqual(outcome.kind, OutcomeKind.NON_ZERO_EXIT)
        self.assertEqual(outcome.status, 2)

    def test_arguments_and_variables(self):
        make_script(self.first, 'args', 'printf "%s|" "$@" > "$MARKER"')
        self.state.environ['WHO'] = 'world'

        outcome = self.executor.execute("args 'hello there' $WHO $NOBODY")

        self.assertTrue(outcome.success)
        self.assertEqual(read(self.marker), "hello there|world||")

    def test_variables_resolve_at_execution(self):
        make_script(self.first, 'args', 'echo "$1" > "$MARKER"')

        self.state.environ['VALUE'] = 'one'
        self.executor.execute("args $VALUE")
        self.assertEqual(read(self.marker), "one")

        self.state.environ['VALUE'] = 'two'
        self.executor.execute("args $VALUE")
        self.assertEqual(read(self.marker), "two")

    def test_child_runs_in_shell_cwd(self):
        make_script(self.first, 'where', 'pwd > "$MARKER"')

        self.assertTrue(self.executor.execute(f"cd {self.second}").success)
        self.assertTrue(self.executor.execute("where").success)

        self.assertEqual(os.path.realpath(read(self.marker)), self.second)

    def test_not_found_falls_back_to_bare_name(self):
        with mock.patch('safash.shell.executor.subprocess.Popen', wraps=subprocess.Popen) as popen:
            outcome = self.executor.execute("no-such-program")

        self.assertEqual(outcome.kind, OutcomeKind.IO_ERROR)
        self.assertIsInstance(outcome.error, InfrastructuralError)
        self.assertIsInstance(outcome.error.cause, FileNotFoundError)
        self.assertEqual(self.spawned(popen)[-1], "no-such-program")
        self.assertEqual(len(popen.call_args_list), 4)

    def test_unrunnable_candidate_is_fatal(self):
        make_script(self.first, 'foo', 'echo first > "$MARKER"', executable=False)
        make_script(self.second, 'foo', 'echo second > "$MARKER"')

        outcome = self.executor.execute("foo")

        self.assertEqual(outcome.kind, OutcomeKind.IO_ERROR)
        self.assertIsInstance(outcome.error.cause, PermissionError)
        self.assertFalse(os.path.exists(self.marker))

    def test_builtin_shadows_program(self):
        make_script(self.first, 'cd', 'echo external > "$MARKER"')

        with mock.patch('safash.shell.executor.subprocess.Popen') as popen:
            outcome = self.executor.execute(f"cd {self.second}")

        self.assertTrue(outcome.success)
        popen.assert_not_called()
        self.assertEqual(self.state.cwd, self.second)
        self.assertFalse(os.path.exists(self.marker))

    def test_builtin_failure(self):
        outcome = self.executor.execute("cd")
        self.assertEqual(outcome.kind, OutcomeKind.BUILTIN_FAILURE)

    def test_builtin_os_error(self):
        outcome = self.executor.execute("cd does-not-exist")

        self.assertEqual(outcome.kind, OutcomeKind.IO_ERROR)
        self.assertIsInstance(outcome.error.cause, FileNotFoundError)
        self.assertEqual(self.state.cwd, self.work)

    def test_search_path_is_not_cached(self):
        make_script(self.second, 'foo', 'echo second > "$MARKER"')
        self.assertTrue(self.executor.execute("foo").success)

        make_script(self.first, 'foo', 'echo first > "$MARKER"')
        self.assertTrue(self.executor.execute("foo").success)
        self.assertEqual(read(self.marker), "first")


if __name__ == '__main__':
    unittest.main()
