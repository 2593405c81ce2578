"""Tests for CLI error types and the CLIApp framework."""
from __future__ import annotations

import io
import unittest
from unittest.mock import patch

from core.cli_errors import (
    AlreadyExistsError,
    CLIError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigParseError,
    DialogError,
    ExitCode,
    LaunchError,
    MissingInputError,
    NotFoundError,
    UnsupportedError,
    UsageError,
    format_error,
    handle_error,
)
from core.cli_framework import CLIApp


class TestExitCodes(unittest.TestCase):
    """Test exit code definitions."""

    def test_exit_codes_are_integers(self):
        self.assertEqual(ExitCode.SUCCESS, 0)
        self.assertEqual(ExitCode.ERROR, 1)
        self.assertEqual(ExitCode.USAGE, 2)
        self.assertEqual(ExitCode.INTERRUPTED, 130)

    def test_error_types_have_correct_codes(self):
        self.assertEqual(UsageError("x").code, ExitCode.USAGE)
        self.assertEqual(MissingInputError("x").code, ExitCode.USAGE)
        self.assertEqual(UnsupportedError("x").code, ExitCode.USAGE)
        self.assertEqual(NotFoundError("x").code, ExitCode.NOT_FOUND)
        self.assertEqual(ConfigNotFoundError("x").code, ExitCode.NOT_FOUND)
        self.assertEqual(ConfigParseError("x").code, ExitCode.CONFIG_ERROR)
        self.assertEqual(AlreadyExistsError("x").code, ExitCode.ALREADY_EXISTS)
        self.assertEqual(ConfigIOError("x").code, ExitCode.IO_ERROR)
        self.assertEqual(LaunchError("x").code, ExitCode.LAUNCH_ERROR)
        self.assertEqual(DialogError("x").code, ExitCode.DIALOG_ERROR)

    def test_config_not_found_is_a_not_found(self):
        self.assertIsInstance(ConfigNotFoundError("x"), NotFoundError)


class TestHandleError(unittest.TestCase):
    """Test error handling."""

    def test_format_includes_hint(self):
        text = format_error(CLIError("Failed", hint="Try again"))
        self.assertEqual(text, "Error: Failed\nHint: Try again")

    def test_handle_cli_error_to_stderr(self):
        with patch("sys.stderr", new_callable=io.StringIO) as mock_stderr:
            code = handle_error(ConfigParseError("bad yaml"))
        self.assertEqual(code, ExitCode.CONFIG_ERROR)
        self.assertIn("Error: bad yaml", mock_stderr.getvalue())

    def test_handle_cli_error_with_reporter(self):
        seen = []
        code = handle_error(NotFoundError("missing", hint="look"), report=seen.append)
        self.assertEqual(code, ExitCode.NOT_FOUND)
        self.assertEqual(seen, ["Error: missing\nHint: look"])

    def test_handle_keyboard_interrupt(self):
        with patch("sys.stderr", new_callable=io.StringIO):
            code = handle_error(KeyboardInterrupt())
        self.assertEqual(code, ExitCode.INTERRUPTED)

    def test_handle_unexpected_error(self):
        seen = []
        code = handle_error(ValueError("boom"), report=seen.append)
        self.assertEqual(code, ExitCode.ERROR)
        self.assertEqual(seen, ["Error: boom"])


class TestCLIApp(unittest.TestCase):
    """Test the decorator-driven CLIApp."""

    def _app(self):
        app = CLIApp("demo", "Demo app", version="1.2.3")
        seen = {}

        @app.command("greet", help="Say hi")
        @app.argument("--name", default="world")
        @app.argument("--loud", action="store_true")
        def cmd_greet(args):
            seen["name"] = args.name
            seen["loud"] = args.loud
            return 0

        @app.command("fail")
        def cmd_fail(args):
            raise NotFoundError("nope")

        @app.command("report")
        def cmd_report(args):
            args._report = seen.setdefault("reported", []).append
            raise LaunchError("could not start")

        return app, seen

    def test_arguments_are_attached_in_declaration_order(self):
        app, _ = self._app()
        flags = [a.name_or_flags for a in app.commands["greet"].arguments]
        self.assertEqual(flags, [("--name",), ("--loud",)])

    def test_runs_command(self):
        app, seen = self._app()
        self.assertEqual(app.run(["greet", "--name", "bob", "--loud"]), 0)
        self.assertEqual(seen, {"name": "bob", "loud": True})

    def test_cli_error_maps_to_exit_code(self):
        app, _ = self._app()
        with patch("sys.stderr", new_callable=io.StringIO) as mock_stderr:
            code = app.run(["fail"])
        self.assertEqual(code, ExitCode.NOT_FOUND)
        self.assertIn("Error: nope", mock_stderr.getvalue())

    def test_errors_go_to_command_reporter(self):
        app, seen = self._app()
        code = app.run(["report"])
        self.assertEqual(code, ExitCode.LAUNCH_ERROR)
        self.assertEqual(seen["reported"], ["Error: could not start"])

    def test_no_command_prints_help(self):
        app, _ = self._app()
        with patch("sys.stdout", new_callable=io.StringIO) as mock_stdout:
            code = app.run([])
        self.assertEqual(code, ExitCode.USAGE)
        self.assertIn("Demo app", mock_stdout.getvalue())

    def test_version_flag(self):
        app, _ = self._app()
        with patch("sys.stdout", new_callable=io.StringIO) as mock_stdout:
            with self.assertRaises(SystemExit) as ctx:
                app.run(["--version"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("1.2.3", mock_stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
